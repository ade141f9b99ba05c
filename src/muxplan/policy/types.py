"""Frozen policy dataclasses consumed by the planner.

A MuxPolicy holds every tunable decision of the compiler: language
families, subtitle allow-lists, pan coefficients, the normalization chain,
bitrates, CRF tiers and title templates. Defaults reproduce the standard
German-first mux policy. Policy files are parsed by the pydantic models in
pydantic_models.py and converted into these dataclasses by loader.py.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from muxplan.language import ENGLISH_CODES, GERMAN_CODES


class OriginalAudioMode(str, Enum):
    """How original (non-generated) audio tracks are written."""

    COPY = "copy"  # stream copy every original track
    OPUS = "opus"  # re-encode to Opus, copying tracks that already are Opus


class PanLayout(str, Enum):
    """Source layouts the downmix planner knows how to fold to stereo."""

    QUAD = "4.0"
    SURROUND_51 = "5.1"
    SURROUND_71 = "7.1"


@dataclass(frozen=True)
class LanguagePolicy:
    """Language families used for default selection and sorting."""

    german: tuple[str, ...] = tuple(sorted(GERMAN_CODES))
    """German-family codes (score 1, preferred default audio)."""

    english: tuple[str, ...] = tuple(sorted(ENGLISH_CODES))
    """English-family codes (score 2)."""

    japanese: str = "jpn"
    """Default-audio language that triggers the subtitle fallback rule."""


@dataclass(frozen=True)
class SubtitlePolicy:
    """Subtitle filtering, deduplication and naming."""

    allowed_languages: tuple[str, ...] = (
        "eng",
        "en",
        "ger",
        "de",
        "deu",
        "jpn",
        "und",
    )
    excluded_title_keywords: tuple[str, ...] = ("commentary",)
    image_codecs: tuple[str, ...] = ("hdmv_pgs_subtitle",)
    text_codecs: tuple[str, ...] = ("subrip", "srt")
    sdh_keyword: str = "sdh"
    forced_title: str = "{lang} Forced"
    full_title: str = "{lang} Full"
    sdh_title: str = "{lang} SDH"


@dataclass(frozen=True)
class OpusBitrates:
    """Opus bitrates by channel count for re-encoded original audio."""

    mono: str = "96k"
    stereo: str = "160k"
    surround: str = "320k"  # 3-5 channels
    multichannel: str = "448k"  # 6+ channels

    def for_channels(self, channels: int) -> str:
        if channels == 1:
            return self.mono
        if channels <= 2:
            return self.stereo
        if channels <= 5:
            return self.surround
        return self.multichannel


@dataclass(frozen=True)
class AudioPolicy:
    """Handling of original audio tracks."""

    original_mode: OriginalAudioMode = OriginalAudioMode.COPY
    opus_encoder: str = "libopus"
    opus_bitrates: OpusBitrates = field(default_factory=OpusBitrates)
    title: str = "{lang} {layout}"


@dataclass(frozen=True)
class PanCoefficients:
    """Weights folding one source layout into stereo.

    Each output side takes its own front channel plus the shared center and
    LFE, plus the matching side and back channels. Zero weights are omitted
    from the rendered pan expression.
    """

    front: float
    center: float = 0.0
    lfe: float = 0.0
    side: float = 0.0
    back: float = 0.0


DEFAULT_PAN_COEFFICIENTS: Mapping[PanLayout, PanCoefficients] = MappingProxyType(
    {
        PanLayout.QUAD: PanCoefficients(front=0.9, side=0.35, back=0.35),
        PanLayout.SURROUND_51: PanCoefficients(
            front=1.0, center=1.0, lfe=0.75, side=0.6, back=0.6
        ),
        PanLayout.SURROUND_71: PanCoefficients(
            front=1.0, center=1.0, lfe=0.75, side=0.6, back=0.45
        ),
    }
)


@dataclass(frozen=True)
class NormalizationPolicy:
    """Stages applied after the pan stage, in a fixed order.

    compressor -> loudness -> equalizer -> highpass -> limiter. The
    compressor is optional; the limiter always closes the chain.
    """

    compressor: str | None = None
    loudness: str = "dynaudnorm=f=250:g=31:p=0.95:m=10"
    eq_frequency: int = 2000
    eq_width: float = 1.0
    eq_gain: float = 2.0
    highpass_frequency: int = 20
    limiter: float = 0.9


@dataclass(frozen=True)
class DownmixPolicy:
    """Surround-to-stereo synthesis."""

    enabled: bool = True
    pan: Mapping[PanLayout, PanCoefficients] = field(
        default_factory=lambda: DEFAULT_PAN_COEFFICIENTS
    )
    """Pan weights per layout, frozen to a read-only mapping on init."""

    renormalize: bool = True
    """Use `<` in pan expressions so ffmpeg renormalizes gains."""

    normalization: NormalizationPolicy = field(default_factory=NormalizationPolicy)
    codec: str = "libopus"
    bitrate: str = "192k"
    title: str = "{lang} Stereo"
    replaceable_titles: tuple[str, ...] = ("{lang} Stereo", "{lang}\u00a0Stereo")
    """Titles marking an existing stereo track as a previous downmix.

    The second form uses a non-breaking space, as written by older
    normalizer scripts.
    """

    def __post_init__(self) -> None:
        if not isinstance(self.pan, MappingProxyType):
            object.__setattr__(self, "pan", MappingProxyType(dict(self.pan)))


@dataclass(frozen=True)
class CrfTier:
    """Quality target for sources of at least min_pixels pixels."""

    name: str
    min_pixels: int
    crf: int
    hdr_crf: int


DEFAULT_CRF_TIERS: tuple[CrfTier, ...] = (
    CrfTier(name="uhd", min_pixels=5_000_000, crf=23, hdr_crf=21),
    CrfTier(name="hd", min_pixels=1_000_000, crf=22, hdr_crf=20),
    CrfTier(name="sd", min_pixels=0, crf=28, hdr_crf=28),
)


@dataclass(frozen=True)
class VideoPolicy:
    """Video encode parameter selection."""

    encoder: str = "libsvtav1"
    preset: str = "5"
    pixel_format: str = "yuv420p10le"
    container_format: str = "matroska"
    default_width: int = 1920
    default_height: int = 1080
    crf_tiers: tuple[CrfTier, ...] = DEFAULT_CRF_TIERS

    base_params: str = "tune=0:enable-overlays=1:scd=1"
    grain_uhd_min_pixels: int = 5_000_000
    sdr_film_grain: int = 12
    sdr_film_grain_uhd: int = 10
    hdr_params: str = "enable-qm=1"
    hdr_film_grain: int = 10
    hdr_film_grain_uhd: int = 8
    hdr_sharpen_filter: str | None = "cas=0.5"

    hdr_color_primaries: str = "bt2020"
    hdr_color_transfer: str = "smpte2084"
    hdr_color_space: str = "bt2020nc"
    hdr_chroma_location: str | None = "topleft"

    animation_crf_offset: int = 2
    animation_denoise_filter: str = "hqdn3d=1.5:1.5:3:3"
    animation_params: str = "enable-tf=0"
    animation_keywords: tuple[str, ...] = ("anime", "cartoon", "animation")


@dataclass(frozen=True)
class MuxPolicy:
    """Complete policy for one compile call."""

    languages: LanguagePolicy = field(default_factory=LanguagePolicy)
    subtitles: SubtitlePolicy = field(default_factory=SubtitlePolicy)
    audio: AudioPolicy = field(default_factory=AudioPolicy)
    downmix: DownmixPolicy = field(default_factory=DownmixPolicy)
    video: VideoPolicy = field(default_factory=VideoPolicy)
    strip_global_metadata: bool = True
    copy_chapters: bool = True


DEFAULT_POLICY = MuxPolicy()
