"""Language code normalization and language-family helpers.

Stream language tags arrive in whatever form the muxer wrote them:
ISO 639-1 ("de"), ISO 639-2/T ("deu") or ISO 639-2/B ("ger"), in any case.
They are normalized once, at classification time, to lower-case ISO 639-2/B,
which is what Matroska and FFmpeg write. Family sets keep the raw variants
as well so that callers holding un-normalized codes still match.
"""

import logging

logger = logging.getLogger(__name__)

UNDEFINED = "und"

GERMAN_CODES: frozenset[str] = frozenset({"ger", "de", "deu"})
ENGLISH_CODES: frozenset[str] = frozenset({"eng", "en"})
JAPANESE = "jpn"

# ISO 639-1 (2-letter) to ISO 639-2/B, covering languages common in releases
_ISO_639_1_TO_639_2B: dict[str, str] = {
    "ar": "ara",  # Arabic
    "bg": "bul",  # Bulgarian
    "ca": "cat",  # Catalan
    "cs": "cze",  # Czech
    "da": "dan",  # Danish
    "de": "ger",  # German
    "el": "gre",  # Greek
    "en": "eng",  # English
    "es": "spa",  # Spanish
    "et": "est",  # Estonian
    "fa": "per",  # Persian
    "fi": "fin",  # Finnish
    "fr": "fre",  # French
    "he": "heb",  # Hebrew
    "hi": "hin",  # Hindi
    "hr": "hrv",  # Croatian
    "hu": "hun",  # Hungarian
    "id": "ind",  # Indonesian
    "is": "ice",  # Icelandic
    "it": "ita",  # Italian
    "ja": "jpn",  # Japanese
    "ko": "kor",  # Korean
    "lt": "lit",  # Lithuanian
    "lv": "lav",  # Latvian
    "ms": "may",  # Malay
    "nl": "dut",  # Dutch
    "no": "nor",  # Norwegian
    "pl": "pol",  # Polish
    "pt": "por",  # Portuguese
    "ro": "rum",  # Romanian
    "ru": "rus",  # Russian
    "sk": "slo",  # Slovak
    "sl": "slv",  # Slovenian
    "sr": "srp",  # Serbian
    "sv": "swe",  # Swedish
    "th": "tha",  # Thai
    "tr": "tur",  # Turkish
    "uk": "ukr",  # Ukrainian
    "vi": "vie",  # Vietnamese
    "zh": "chi",  # Chinese
}

# ISO 639-2/T codes that differ from their bibliographic form
_ISO_639_2T_TO_639_2B: dict[str, str] = {
    "ces": "cze",
    "deu": "ger",
    "ell": "gre",
    "fas": "per",
    "fra": "fre",
    "isl": "ice",
    "msa": "may",
    "nld": "dut",
    "ron": "rum",
    "slk": "slo",
    "zho": "chi",
}


def normalize_language(code: str | None, context: str | None = None) -> str:
    """Normalize a language tag to lower-case ISO 639-2/B.

    Args:
        code: Raw language tag, or None.
        context: Optional file path, used only in log messages.

    Returns:
        ISO 639-2/B code, "und" for missing tags, or the lower-cased input
        when the code is not recognized.

    Examples:
        >>> normalize_language("DE")
        'ger'
        >>> normalize_language("deu")
        'ger'
        >>> normalize_language(None)
        'und'
    """
    if code is None:
        return UNDEFINED
    value = code.strip().casefold()
    if not value:
        return UNDEFINED

    if len(value) == 2:
        mapped = _ISO_639_1_TO_639_2B.get(value)
        if mapped is None:
            logger.debug(
                "Unknown ISO 639-1 code %r%s, keeping as-is",
                value,
                f" in {context}" if context else "",
            )
            return value
        return mapped

    return _ISO_639_2T_TO_639_2B.get(value, value)


def is_german(language: str, codes: frozenset[str] = GERMAN_CODES) -> bool:
    """Return True if the language belongs to the German family."""
    return language in codes


def is_english(language: str, codes: frozenset[str] = ENGLISH_CODES) -> bool:
    """Return True if the language belongs to the English family."""
    return language in codes


def language_label(language: str) -> str:
    """Upper-case label used in track titles ("ger" -> "GER")."""
    return language.upper()
