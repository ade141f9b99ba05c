"""Stereo downmix planning for multichannel audio.

Every 4.0, 5.1 or 7.1 source gets a generated stereo companion built from a
labelled filter chain:

    pan -> [compressor] -> loudness -> equalizer -> highpass -> limiter

Normalization runs after the pan stage and the limiter always closes the
chain. Channel counts without a pan layout (5, 7) are left untouched.

Key functions:
    layout_for_channels: Map a channel count to a supported pan layout
    build_pan_filter: Render the pan expression for a layout
    build_normalization_filters: Render the post-pan stages
    plan_downmix: Plan segments, generated entries and replacements
    plan_audio_entries: Merge original and generated tracks into entries
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from muxplan.domain.models import AudioStream
from muxplan.introspector.mappings import map_layout_label
from muxplan.language import language_label
from muxplan.planner.models import AudioPlanEntry, FilterGraphSegment
from muxplan.policy.types import (
    AudioPolicy,
    DownmixPolicy,
    NormalizationPolicy,
    PanCoefficients,
    PanLayout,
)

logger = logging.getLogger(__name__)

# Minimum channel count that triggers a downmix
DOWNMIX_MIN_CHANNELS = 4

GENERATED_LABEL = "aud_norm_{index}"


def layout_for_channels(channels: int) -> PanLayout | None:
    """Map a source channel count to its pan layout.

    4 -> 4.0, 6 -> 5.1, 8 or more -> 7.1. Anything else has no layout.
    """
    if channels == 4:
        return PanLayout.QUAD
    if channels == 6:
        return PanLayout.SURROUND_51
    if channels >= 8:
        return PanLayout.SURROUND_71
    return None


def _format_weight(weight: float) -> str:
    return f"{weight:g}"


def _pan_terms(coefficients: PanCoefficients, side: str) -> str:
    """Terms for one output side ("L" or "R"); zero weights are omitted."""
    terms = [
        (coefficients.front, f"F{side}"),
        (coefficients.center, "FC"),
        (coefficients.lfe, "LFE"),
        # Back and side channels are both listed so that 5.1(back) and
        # 5.1(side) sources fold the same way
        (coefficients.back, f"B{side}"),
        (coefficients.side, f"S{side}"),
    ]
    return "+".join(
        f"{_format_weight(weight)}*{channel}" for weight, channel in terms if weight > 0
    )


def build_pan_filter(coefficients: PanCoefficients, renormalize: bool = True) -> str:
    """Render a stereo pan filter.

    Args:
        coefficients: Weights for the source layout.
        renormalize: Use "<" so ffmpeg renormalizes the gains of each
            output channel; "=" keeps the weights as given.

    Returns:
        Filter expression, e.g. "pan=stereo|FL<0.9*FL+...|FR<0.9*FR+...".
    """
    op = "<" if renormalize else "="
    left = _pan_terms(coefficients, "L")
    right = _pan_terms(coefficients, "R")
    return f"pan=stereo|FL{op}{left}|FR{op}{right}"


def build_normalization_filters(policy: NormalizationPolicy) -> tuple[str, ...]:
    """Render the stages that follow the pan stage, limiter last."""
    filters: list[str] = []
    if policy.compressor:
        filters.append(policy.compressor)
    filters.append(policy.loudness)
    filters.append(
        f"equalizer=f={policy.eq_frequency}:t=q"
        f":w={_format_weight(policy.eq_width)}:g={_format_weight(policy.eq_gain)}"
    )
    filters.append(f"highpass=f={policy.highpass_frequency}")
    filters.append(f"alimiter=limit={_format_weight(policy.limiter)}")
    return tuple(filters)


def build_downmix_segment(
    stream: AudioStream,
    layout: PanLayout,
    policy: DownmixPolicy,
) -> FilterGraphSegment:
    """Build the filter graph segment producing the stereo companion."""
    pan = build_pan_filter(policy.pan[layout], renormalize=policy.renormalize)
    return FilterGraphSegment(
        input_label=f"[0:{stream.index}]",
        filters=(pan, *build_normalization_filters(policy.normalization)),
        output_label=f"[{GENERATED_LABEL.format(index=stream.index)}]",
    )


@dataclass(frozen=True)
class DownmixPlan:
    """Result of downmix planning for one file."""

    segments: tuple[FilterGraphSegment, ...]
    """One filter graph segment per downmixed source, in source order."""

    generated: Mapping[int, AudioPlanEntry]
    """Generated stereo entries keyed by source stream index."""

    replaced: tuple[int, ...]
    """Existing stereo tracks superseded by a generated one."""

    warnings: tuple[str, ...]

    replacement_sources: Mapping[int, int] = field(
        default_factory=lambda: MappingProxyType({})
    )
    """Replaced track index -> index of the source feeding its replacement."""

    @property
    def languages(self) -> frozenset[str]:
        """Languages receiving a generated stereo track."""
        return frozenset(entry.language for entry in self.generated.values())


def is_replaceable_stereo(
    stream: AudioStream,
    languages: frozenset[str],
    policy: DownmixPolicy,
) -> bool:
    """Check whether an existing track is an earlier generated stereo.

    The track must be 2-channel, its language must be receiving a new
    generated stereo and its title must equal one of the replaceable title
    templates rendered for that language.
    """
    if stream.channels != 2 or stream.language not in languages:
        return False
    label = language_label(stream.language)
    return any(
        stream.title == template.format(lang=label)
        for template in policy.replaceable_titles
    )


def _primary_sources(
    streams: Sequence[AudioStream], generated: Mapping[int, AudioPlanEntry]
) -> dict[str, int]:
    """Per language, the downmixed source with the most channels.

    The first source wins on equal channel counts.
    """
    best: dict[str, AudioStream] = {}
    for stream in streams:
        if stream.index not in generated:
            continue
        current = best.get(stream.language)
        if current is None or stream.channels > current.channels:
            best[stream.language] = stream
    return {language: stream.index for language, stream in best.items()}


def plan_downmix(
    streams: Sequence[AudioStream],
    policy: DownmixPolicy,
) -> DownmixPlan:
    """Plan stereo downmixes for every supported multichannel source.

    Existing stereo tracks recognized as earlier downmixes are replaced,
    including one flagged as the default audio. replacement_sources names
    the source that takes over the default flag of such a track.

    Args:
        streams: Audio streams in source order.
        policy: Downmix policy.

    Returns:
        DownmixPlan with segments, generated entries and replaced indices.
    """
    if not policy.enabled:
        return DownmixPlan(
            segments=(), generated=MappingProxyType({}), replaced=(), warnings=()
        )

    segments: list[FilterGraphSegment] = []
    generated: dict[int, AudioPlanEntry] = {}
    warnings: list[str] = []

    for stream in streams:
        if stream.channels < DOWNMIX_MIN_CHANNELS:
            continue

        layout = layout_for_channels(stream.channels)
        if layout is None or layout not in policy.pan:
            message = (
                f"Audio stream {stream.index}: no downmix layout for "
                f"{stream.channels} channels, keeping it untouched"
            )
            logger.warning(message)
            warnings.append(message)
            continue

        segment = build_downmix_segment(stream, layout, policy)
        segments.append(segment)
        generated[stream.index] = AudioPlanEntry(
            source_index=stream.index,
            is_generated=True,
            language=stream.language,
            channels=2,
            map_label=segment.output_label,
            title=policy.title.format(lang=language_label(stream.language)),
            is_default_candidate=False,
        )
        logger.info(
            "Audio stream %d: generating stereo from %s (%d channels)",
            stream.index,
            layout.value,
            stream.channels,
        )

    languages = frozenset(entry.language for entry in generated.values())
    primary = _primary_sources(streams, generated)
    replacement_sources: dict[int, int] = {}
    for stream in streams:
        if is_replaceable_stereo(stream, languages, policy):
            replacement_sources[stream.index] = primary[stream.language]
            logger.info("Replacing existing stereo track %d", stream.index)

    return DownmixPlan(
        segments=tuple(segments),
        generated=MappingProxyType(generated),
        replaced=tuple(replacement_sources),
        warnings=tuple(warnings),
        replacement_sources=MappingProxyType(replacement_sources),
    )


def audio_title(stream: AudioStream, policy: AudioPolicy) -> str:
    """Standardized title for an original track, e.g. "GER 5.1"."""
    return policy.title.format(
        lang=language_label(stream.language),
        layout=map_layout_label(stream.channels),
    )


def plan_audio_entries(
    streams: Sequence[AudioStream],
    downmix: DownmixPlan,
    default_audio_index: int,
    policy: AudioPolicy,
) -> list[AudioPlanEntry]:
    """Merge original tracks and generated stereo tracks in source order.

    A generated entry is placed directly before its source; replaced
    stereo tracks are left out.
    """
    replaced = frozenset(downmix.replaced)
    entries: list[AudioPlanEntry] = []
    for stream in streams:
        if stream.index in replaced:
            continue
        generated = downmix.generated.get(stream.index)
        if generated is not None:
            entries.append(generated)
        entries.append(
            AudioPlanEntry(
                source_index=stream.index,
                is_generated=False,
                language=stream.language,
                channels=stream.channels,
                map_label=f"0:{stream.index}",
                title=audio_title(stream, policy),
                is_default_candidate=stream.index == default_audio_index,
                codec_name=stream.codec_name,
            )
        )
    return entries
