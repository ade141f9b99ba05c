"""Policy file loading and validation.

This module loads YAML policy files, validates them with the pydantic
models in pydantic_models.py and converts them into the frozen MuxPolicy
dataclass tree used by the planner.
"""

import logging
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from muxplan.policy.exceptions import PolicyValidationError
from muxplan.policy.pydantic_models import SUPPORTED_SCHEMA_VERSION, PolicyModel
from muxplan.policy.types import (
    AudioPolicy,
    CrfTier,
    DownmixPolicy,
    LanguagePolicy,
    MuxPolicy,
    NormalizationPolicy,
    OpusBitrates,
    PanCoefficients,
    SubtitlePolicy,
    VideoPolicy,
)

logger = logging.getLogger(__name__)


def load_policy(policy_path: Path) -> MuxPolicy:
    """Load and validate a policy from a YAML file.

    Args:
        policy_path: Path to the YAML policy file.

    Returns:
        Validated MuxPolicy.

    Raises:
        PolicyValidationError: If the policy file is invalid.
        FileNotFoundError: If the policy file does not exist.
    """
    if not policy_path.exists():
        raise FileNotFoundError(f"Policy file not found: {policy_path}")

    try:
        with open(policy_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise PolicyValidationError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise PolicyValidationError("Policy file is empty")

    if not isinstance(data, dict):
        raise PolicyValidationError("Policy file must be a YAML mapping")

    policy = load_policy_from_dict(data)
    logger.debug("Loaded policy from %s", policy_path)
    return policy


def load_policy_from_dict(data: dict[str, Any]) -> MuxPolicy:
    """Load and validate a policy from a dictionary.

    Args:
        data: Dictionary containing policy configuration.

    Returns:
        Validated MuxPolicy.

    Raises:
        PolicyValidationError: If the policy data is invalid.
    """
    schema_version = data.get("schema_version")
    if schema_version != SUPPORTED_SCHEMA_VERSION:
        raise PolicyValidationError(
            f"Only schema_version {SUPPORTED_SCHEMA_VERSION} is supported, "
            f"got {schema_version}",
            field="schema_version",
        )

    try:
        model = PolicyModel.model_validate(data)
    except ValidationError as e:
        message, field = _format_validation_error(e)
        raise PolicyValidationError(message, field=field) from e

    return _convert_to_policy(model)


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    """Format a pydantic validation error into a user-friendly message."""
    errors = error.errors()
    if not errors:
        return f"Policy validation failed: {error}", None

    first_error = errors[0]
    loc = ".".join(str(x) for x in first_error.get("loc", []))
    msg = first_error.get("msg", str(error))
    if loc:
        return f"Policy validation failed: {loc}: {msg}", loc
    return f"Policy validation failed: {msg}", None


def _convert_to_policy(model: PolicyModel) -> MuxPolicy:
    """Convert a validated PolicyModel into frozen dataclasses."""
    languages = LanguagePolicy(
        german=tuple(model.languages.german),
        english=tuple(model.languages.english),
        japanese=model.languages.japanese,
    )

    sub = model.subtitles
    subtitles = SubtitlePolicy(
        allowed_languages=tuple(sub.allowed_languages),
        excluded_title_keywords=tuple(sub.excluded_title_keywords),
        image_codecs=tuple(sub.image_codecs),
        text_codecs=tuple(sub.text_codecs),
        sdh_keyword=sub.sdh_keyword.casefold(),
        forced_title=sub.forced_title,
        full_title=sub.full_title,
        sdh_title=sub.sdh_title,
    )

    aud = model.audio
    audio = AudioPolicy(
        original_mode=aud.original_mode,
        opus_encoder=aud.opus_encoder,
        opus_bitrates=OpusBitrates(**aud.opus_bitrates.model_dump()),
        title=aud.title,
    )

    dm = model.downmix
    downmix = DownmixPolicy(
        enabled=dm.enabled,
        pan={
            layout: PanCoefficients(**coefficients.model_dump())
            for layout, coefficients in dm.pan.items()
        },
        renormalize=dm.renormalize,
        normalization=NormalizationPolicy(**dm.normalization.model_dump()),
        codec=dm.codec,
        bitrate=dm.bitrate,
        title=dm.title,
        replaceable_titles=tuple(dm.replaceable_titles),
    )

    vid = model.video.model_dump(exclude={"crf_tiers", "animation_keywords"})
    video = VideoPolicy(
        **vid,
        crf_tiers=tuple(
            CrfTier(**tier.model_dump()) for tier in model.video.crf_tiers
        ),
        animation_keywords=tuple(model.video.animation_keywords),
    )

    return MuxPolicy(
        languages=languages,
        subtitles=subtitles,
        audio=audio,
        downmix=downmix,
        video=video,
        strip_global_metadata=model.strip_global_metadata,
        copy_chapters=model.copy_chapters,
    )


def _plain(value: Any) -> Any:
    if is_dataclass(value):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {_plain(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def policy_to_dict(policy: MuxPolicy) -> dict[str, Any]:
    """Convert a policy into a plain dict that load_policy_from_dict accepts.

    Enum keys and values become strings, mappings become dicts and tuples
    become lists so the result can be dumped as YAML or JSON.
    """
    data: dict[str, Any] = {"schema_version": SUPPORTED_SCHEMA_VERSION}
    data.update(_plain(policy))
    return data
