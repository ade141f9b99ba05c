"""Pydantic models for policy YAML parsing and validation.

These models validate the shape and value ranges of a policy file. They are
converted to the frozen dataclasses in types.py by loader.py; the planner
never sees a pydantic object.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from muxplan.language import normalize_language
from muxplan.policy.types import (
    DEFAULT_CRF_TIERS,
    DEFAULT_PAN_COEFFICIENTS,
    AudioPolicy,
    DownmixPolicy,
    NormalizationPolicy,
    OpusBitrates,
    OriginalAudioMode,
    PanLayout,
    SubtitlePolicy,
    VideoPolicy,
)

SUPPORTED_SCHEMA_VERSION = 1

_BITRATE_PATTERN = re.compile(r"^\d+(\.\d+)?[kKmM]?$")
# Characters that would split a filter chain or graph segment
_FILTER_SEPARATORS = (",", ";", "[", "]")


def _validate_bitrate(value: str) -> str:
    if not _BITRATE_PATTERN.match(value):
        raise ValueError(f"Invalid bitrate '{value}'. Expected e.g. '192k' or '1.5M'")
    return value


def _validate_template(value: str, **placeholders: str) -> str:
    if "{lang}" not in value:
        raise ValueError(f"Title template '{value}' must contain '{{lang}}'")
    try:
        value.format(lang="GER", **placeholders)
    except (KeyError, IndexError, ValueError) as e:
        raise ValueError(f"Invalid title template '{value}': {e}") from e
    return value


def _validate_single_filter(value: str | None) -> str | None:
    if value is None:
        return None
    if not value.strip():
        raise ValueError("Filter expression must not be empty")
    for separator in _FILTER_SEPARATORS:
        if separator in value:
            raise ValueError(
                f"Filter expression '{value}' must be a single filter "
                f"(found '{separator}')"
            )
    return value


def _expand_codes(values: list[str]) -> list[str]:
    """Lower-case codes, each followed by its ISO 639-2/B form.

    Stream languages are normalized at classification, so "de" or "deu"
    in a policy must also match a stream tagged "ger".
    """
    codes: dict[str, None] = {}
    for value in values:
        code = value.strip().casefold()
        if not code:
            raise ValueError("Language codes must not be empty")
        codes[code] = None
        codes[normalize_language(code)] = None
    return list(codes)


class LanguagePolicyModel(BaseModel):
    """Pydantic model for language families."""

    model_config = ConfigDict(extra="forbid")

    german: list[str] = Field(default_factory=lambda: ["de", "deu", "ger"])
    english: list[str] = Field(default_factory=lambda: ["en", "eng"])
    japanese: str = "jpn"

    @field_validator("german", "english")
    @classmethod
    def validate_codes(cls, v: list[str]) -> list[str]:
        """Lower-case and normalize language codes."""
        if not v:
            raise ValueError("Language family must list at least one code")
        return sorted(_expand_codes(v))

    @field_validator("japanese")
    @classmethod
    def validate_japanese(cls, v: str) -> str:
        """Normalize to ISO 639-2/B, the form stream languages take."""
        code = v.strip()
        if not code:
            raise ValueError("Language codes must not be empty")
        return normalize_language(code)


class SubtitlePolicyModel(BaseModel):
    """Pydantic model for subtitle filtering and naming."""

    model_config = ConfigDict(extra="forbid")

    allowed_languages: list[str] = Field(
        default_factory=lambda: list(SubtitlePolicy.allowed_languages)
    )
    excluded_title_keywords: list[str] = Field(
        default_factory=lambda: list(SubtitlePolicy.excluded_title_keywords)
    )
    image_codecs: list[str] = Field(
        default_factory=lambda: list(SubtitlePolicy.image_codecs)
    )
    text_codecs: list[str] = Field(
        default_factory=lambda: list(SubtitlePolicy.text_codecs)
    )
    sdh_keyword: str = SubtitlePolicy.sdh_keyword
    forced_title: str = SubtitlePolicy.forced_title
    full_title: str = SubtitlePolicy.full_title
    sdh_title: str = SubtitlePolicy.sdh_title

    @field_validator("allowed_languages")
    @classmethod
    def validate_allowed(cls, v: list[str]) -> list[str]:
        """Lower-case and normalize language codes."""
        return _expand_codes(v)

    @field_validator("excluded_title_keywords")
    @classmethod
    def validate_keywords(cls, v: list[str]) -> list[str]:
        """Keywords are matched case-insensitively."""
        return [k.casefold() for k in v if k.strip()]

    @field_validator("forced_title", "full_title", "sdh_title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate title template placeholders."""
        return _validate_template(v)

    @model_validator(mode="after")
    def validate_codec_sets(self) -> "SubtitlePolicyModel":
        """Image and text codec sets must not overlap."""
        overlap = set(self.image_codecs) & set(self.text_codecs)
        if overlap:
            raise ValueError(
                f"Codecs listed as both image and text: {', '.join(sorted(overlap))}"
            )
        return self


class OpusBitratesModel(BaseModel):
    """Pydantic model for Opus bitrates by channel count."""

    model_config = ConfigDict(extra="forbid")

    mono: str = OpusBitrates.mono
    stereo: str = OpusBitrates.stereo
    surround: str = OpusBitrates.surround
    multichannel: str = OpusBitrates.multichannel

    @field_validator("mono", "stereo", "surround", "multichannel")
    @classmethod
    def validate_bitrate(cls, v: str) -> str:
        """Validate bitrate format."""
        return _validate_bitrate(v)


class AudioPolicyModel(BaseModel):
    """Pydantic model for original audio handling."""

    model_config = ConfigDict(extra="forbid")

    original_mode: OriginalAudioMode = AudioPolicy.original_mode
    opus_encoder: str = AudioPolicy.opus_encoder
    opus_bitrates: OpusBitratesModel = Field(default_factory=OpusBitratesModel)
    title: str = AudioPolicy.title

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate title template placeholders."""
        return _validate_template(v, layout="5.1")


class PanCoefficientsModel(BaseModel):
    """Pydantic model for one layout's pan weights."""

    model_config = ConfigDict(extra="forbid")

    front: float = Field(ge=0.0, le=2.0)
    center: float = Field(default=0.0, ge=0.0, le=2.0)
    lfe: float = Field(default=0.0, ge=0.0, le=2.0)
    side: float = Field(default=0.0, ge=0.0, le=2.0)
    back: float = Field(default=0.0, ge=0.0, le=2.0)


class NormalizationModel(BaseModel):
    """Pydantic model for the post-pan processing chain."""

    model_config = ConfigDict(extra="forbid")

    compressor: str | None = NormalizationPolicy.compressor
    loudness: str = NormalizationPolicy.loudness
    eq_frequency: int = Field(default=NormalizationPolicy.eq_frequency, gt=0)
    eq_width: float = Field(default=NormalizationPolicy.eq_width, gt=0.0)
    eq_gain: float = Field(default=NormalizationPolicy.eq_gain, ge=-20.0, le=20.0)
    highpass_frequency: int = Field(
        default=NormalizationPolicy.highpass_frequency, gt=0
    )
    limiter: float = Field(default=NormalizationPolicy.limiter, gt=0.0, le=1.0)

    @field_validator("compressor", "loudness")
    @classmethod
    def validate_filter(cls, v: str | None) -> str | None:
        """Each stage must be a single filter."""
        return _validate_single_filter(v)


def _default_pan_models() -> dict[PanLayout, PanCoefficientsModel]:
    return {
        layout: PanCoefficientsModel(
            front=c.front, center=c.center, lfe=c.lfe, side=c.side, back=c.back
        )
        for layout, c in DEFAULT_PAN_COEFFICIENTS.items()
    }


class DownmixPolicyModel(BaseModel):
    """Pydantic model for stereo downmix synthesis."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = DownmixPolicy.enabled
    pan: dict[PanLayout, PanCoefficientsModel] = Field(
        default_factory=_default_pan_models
    )
    renormalize: bool = DownmixPolicy.renormalize
    normalization: NormalizationModel = Field(default_factory=NormalizationModel)
    codec: str = DownmixPolicy.codec
    bitrate: str = DownmixPolicy.bitrate
    title: str = DownmixPolicy.title
    replaceable_titles: list[str] = Field(
        default_factory=lambda: list(DownmixPolicy.replaceable_titles)
    )

    @field_validator("pan", mode="before")
    @classmethod
    def merge_pan_defaults(cls, v: object) -> object:
        """Layouts missing from the file keep their default weights."""
        if not isinstance(v, dict):
            return v
        merged: dict[str, object] = {
            layout.value: model.model_dump()
            for layout, model in _default_pan_models().items()
        }
        merged.update({str(k): value for k, value in v.items()})
        return merged

    @field_validator("bitrate")
    @classmethod
    def validate_bitrate(cls, v: str) -> str:
        """Validate bitrate format."""
        return _validate_bitrate(v)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Validate title template placeholders."""
        return _validate_template(v)

    @field_validator("replaceable_titles")
    @classmethod
    def validate_replaceable(cls, v: list[str]) -> list[str]:
        """Validate title template placeholders."""
        return [_validate_template(t) for t in v]


class CrfTierModel(BaseModel):
    """Pydantic model for one CRF tier."""

    model_config = ConfigDict(extra="forbid")

    name: str
    min_pixels: int = Field(ge=0)
    crf: int = Field(ge=0, le=63)
    hdr_crf: int = Field(ge=0, le=63)


class VideoPolicyModel(BaseModel):
    """Pydantic model for video encode parameter selection."""

    model_config = ConfigDict(extra="forbid")

    encoder: str = VideoPolicy.encoder
    preset: str = VideoPolicy.preset
    pixel_format: str = VideoPolicy.pixel_format
    container_format: str = VideoPolicy.container_format
    default_width: int = Field(default=VideoPolicy.default_width, gt=0)
    default_height: int = Field(default=VideoPolicy.default_height, gt=0)
    crf_tiers: list[CrfTierModel] = Field(
        default_factory=lambda: [
            CrfTierModel(
                name=t.name, min_pixels=t.min_pixels, crf=t.crf, hdr_crf=t.hdr_crf
            )
            for t in DEFAULT_CRF_TIERS
        ]
    )
    base_params: str = VideoPolicy.base_params
    grain_uhd_min_pixels: int = Field(default=VideoPolicy.grain_uhd_min_pixels, ge=0)
    sdr_film_grain: int = Field(default=VideoPolicy.sdr_film_grain, ge=0, le=50)
    sdr_film_grain_uhd: int = Field(
        default=VideoPolicy.sdr_film_grain_uhd, ge=0, le=50
    )
    hdr_params: str = VideoPolicy.hdr_params
    hdr_film_grain: int = Field(default=VideoPolicy.hdr_film_grain, ge=0, le=50)
    hdr_film_grain_uhd: int = Field(
        default=VideoPolicy.hdr_film_grain_uhd, ge=0, le=50
    )
    hdr_sharpen_filter: str | None = VideoPolicy.hdr_sharpen_filter
    hdr_color_primaries: str = VideoPolicy.hdr_color_primaries
    hdr_color_transfer: str = VideoPolicy.hdr_color_transfer
    hdr_color_space: str = VideoPolicy.hdr_color_space
    hdr_chroma_location: str | None = VideoPolicy.hdr_chroma_location
    animation_crf_offset: int = Field(
        default=VideoPolicy.animation_crf_offset, ge=-20, le=20
    )
    animation_denoise_filter: str = VideoPolicy.animation_denoise_filter
    animation_params: str = VideoPolicy.animation_params
    animation_keywords: list[str] = Field(
        default_factory=lambda: list(VideoPolicy.animation_keywords)
    )

    @field_validator("hdr_sharpen_filter", "animation_denoise_filter")
    @classmethod
    def validate_filter(cls, v: str | None) -> str | None:
        """Each filter must be a single filter."""
        return _validate_single_filter(v)

    @field_validator("animation_keywords")
    @classmethod
    def validate_keywords(cls, v: list[str]) -> list[str]:
        """Keywords are matched case-insensitively."""
        return [k.casefold() for k in v if k.strip()]

    @field_validator("crf_tiers")
    @classmethod
    def validate_tiers(cls, v: list[CrfTierModel]) -> list[CrfTierModel]:
        """Tiers are ordered coarsest-last and must cover every resolution."""
        if not v:
            raise ValueError("At least one CRF tier is required")
        tiers = sorted(v, key=lambda t: t.min_pixels, reverse=True)
        if tiers[-1].min_pixels != 0:
            raise ValueError("The lowest CRF tier must have min_pixels: 0")
        names = [t.name for t in tiers]
        if len(set(names)) != len(names):
            raise ValueError("CRF tier names must be unique")
        return tiers


class PolicyModel(BaseModel):
    """Pydantic model for a complete policy file."""

    model_config = ConfigDict(extra="forbid")

    schema_version: int = SUPPORTED_SCHEMA_VERSION
    languages: LanguagePolicyModel = Field(default_factory=LanguagePolicyModel)
    subtitles: SubtitlePolicyModel = Field(default_factory=SubtitlePolicyModel)
    audio: AudioPolicyModel = Field(default_factory=AudioPolicyModel)
    downmix: DownmixPolicyModel = Field(default_factory=DownmixPolicyModel)
    video: VideoPolicyModel = Field(default_factory=VideoPolicyModel)
    strip_global_metadata: bool = True
    copy_chapters: bool = True
