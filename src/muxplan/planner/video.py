"""Video encode parameter selection.

Pure functions choosing the primary video stream, detecting HDR and
animation content, and deriving CRF, filters, encoder params and color
passthrough from them.

Functions in this module:
- select_primary_video_stream: Skip cover art, pick the real video
- detect_hdr_type: HDR10 / HLG from the transfer characteristic
- detect_animation: Path keyword heuristic
- select_crf_tier: Pixel-count tier lookup
- select_video_parameters: Build the VideoPlan
"""

import logging
from collections.abc import Sequence

from muxplan.domain.enums import HDRType
from muxplan.domain.models import VideoStream
from muxplan.planner.models import ColorMetadata, VideoPlan
from muxplan.policy.types import CrfTier, VideoPolicy

logger = logging.getLogger(__name__)

# Transfer characteristics as reported by ffprobe
HDR_TRANSFERS: dict[str, HDRType] = {
    "smpte2084": HDRType.HDR10,  # PQ
    "arib-std-b67": HDRType.HLG,
}

WILDCARD_VIDEO_MAP = "0:v"


def select_primary_video_stream(
    streams: Sequence[VideoStream],
) -> tuple[VideoStream | None, list[str]]:
    """Select the first video stream that is not an attached picture.

    Args:
        streams: Video streams in source order.

    Returns:
        Tuple of (primary_video_stream, list_of_warnings).
    """
    primary = next((s for s in streams if not s.is_attached_pic), None)
    if primary is None:
        return None, ["No video stream found, mapping all video with 0:v"]

    skipped = [s.index for s in streams if s.is_attached_pic]
    if skipped:
        logger.debug("Skipping cover art video streams %s", skipped)
    return primary, []


def detect_hdr_type(stream: VideoStream | None) -> HDRType:
    """Detect HDR from the color transfer characteristic.

    smpte2084 -> HDR10 (PQ), arib-std-b67 -> HLG, anything else -> NONE.
    """
    if stream is None or not stream.color_transfer:
        return HDRType.NONE
    return HDR_TRANSFERS.get(stream.color_transfer.casefold(), HDRType.NONE)


def detect_animation(path: str | None, keywords: Sequence[str]) -> bool:
    """Return True if the lower-cased path contains an animation keyword."""
    if not path:
        return False
    lowered = path.casefold()
    return any(keyword.casefold() in lowered for keyword in keywords)


def select_crf_tier(pixels: int, tiers: Sequence[CrfTier]) -> CrfTier:
    """Return the first tier whose min_pixels is at most the pixel count.

    Tiers are ordered from the largest min_pixels down; the last one is the
    catch-all.
    """
    for tier in tiers:
        if pixels >= tier.min_pixels:
            return tier
    return tiers[-1]


def _film_grain(is_hdr: bool, pixels: int, policy: VideoPolicy) -> int:
    uhd = pixels >= policy.grain_uhd_min_pixels
    if is_hdr:
        return policy.hdr_film_grain_uhd if uhd else policy.hdr_film_grain
    return policy.sdr_film_grain_uhd if uhd else policy.sdr_film_grain


def _join_params(*parts: str) -> str:
    return ":".join(p for p in parts if p)


def select_video_parameters(
    streams: Sequence[VideoStream],
    is_animation: bool,
    transcode_video: bool,
    policy: VideoPolicy,
) -> tuple[VideoPlan, list[str]]:
    """Choose mapping and encode parameters for the primary video stream.

    Animation adds the CRF offset and swaps filters and grain synthesis
    for a denoise filter; the two never combine. HDR sources get explicit
    color metadata so the encoder does not fall back to its defaults.

    Args:
        streams: Video streams in source order.
        is_animation: Content-type hint.
        transcode_video: False keeps the video stream as a copy.
        policy: Video policy.

    Returns:
        Tuple of (VideoPlan, list_of_warnings).
    """
    primary, warnings = select_primary_video_stream(streams)
    if primary is None:
        logger.warning("No video stream found, using wildcard video map")

    width = (primary.width if primary else None) or policy.default_width
    height = (primary.height if primary else None) or policy.default_height
    pixels = width * height

    hdr_type = detect_hdr_type(primary)
    is_hdr = hdr_type != HDRType.NONE
    map_spec = f"0:{primary.index}" if primary else WILDCARD_VIDEO_MAP
    source_index = primary.index if primary else None

    if not transcode_video:
        return (
            VideoPlan(
                source_index=source_index,
                map_spec=map_spec,
                codec="copy",
                is_hdr=is_hdr,
                hdr_type=hdr_type,
                is_animation=is_animation,
                container_format=policy.container_format,
                width=width,
                height=height,
            ),
            warnings,
        )

    tier = select_crf_tier(pixels, policy.crf_tiers)
    crf = tier.hdr_crf if is_hdr else tier.crf

    filters: tuple[str, ...] = ()
    color: ColorMetadata | None = None
    grain = _film_grain(is_hdr, pixels, policy)

    if is_hdr and primary is not None:
        color = ColorMetadata(
            primaries=primary.color_primaries or policy.hdr_color_primaries,
            transfer=primary.color_transfer or policy.hdr_color_transfer,
            space=primary.color_space or policy.hdr_color_space,
            chroma_location=policy.hdr_chroma_location,
        )
        params = _join_params(
            policy.base_params, policy.hdr_params, f"film-grain={grain}"
        )
        if policy.hdr_sharpen_filter and not is_animation:
            filters = (policy.hdr_sharpen_filter,)
    else:
        params = _join_params(policy.base_params, f"film-grain={grain}")

    if is_animation:
        crf += policy.animation_crf_offset
        # Denoise replaces sharpening and grain synthesis
        filters = (policy.animation_denoise_filter,)
        params = _join_params(policy.base_params, policy.animation_params)

    logger.info(
        "Video stream %s: %dx%d tier=%s hdr=%s animation=%s crf=%d",
        source_index,
        width,
        height,
        tier.name,
        hdr_type.value,
        is_animation,
        crf,
    )

    return (
        VideoPlan(
            source_index=source_index,
            map_spec=map_spec,
            codec=policy.encoder,
            crf=crf,
            preset=policy.preset,
            pixel_format=policy.pixel_format,
            filters=filters,
            encoder_params=params,
            color=color,
            is_hdr=is_hdr,
            hdr_type=hdr_type,
            is_animation=is_animation,
            tier=tier.name,
            container_format=policy.container_format,
            width=width,
            height=height,
        ),
        warnings,
    )
