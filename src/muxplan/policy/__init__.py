"""Mux policy: tunable decisions of the plan compiler.

- MuxPolicy and its sections: frozen dataclasses consumed by the planner
- load_policy / load_policy_from_dict: YAML policy files (schema_version 1)
- DEFAULT_POLICY: the built-in German-first policy
"""

from muxplan.policy.exceptions import PolicyValidationError
from muxplan.policy.loader import load_policy, load_policy_from_dict, policy_to_dict
from muxplan.policy.types import (
    DEFAULT_CRF_TIERS,
    DEFAULT_PAN_COEFFICIENTS,
    DEFAULT_POLICY,
    AudioPolicy,
    CrfTier,
    DownmixPolicy,
    LanguagePolicy,
    MuxPolicy,
    NormalizationPolicy,
    OpusBitrates,
    OriginalAudioMode,
    PanCoefficients,
    PanLayout,
    SubtitlePolicy,
    VideoPolicy,
)

__all__ = [
    "AudioPolicy",
    "CrfTier",
    "DEFAULT_CRF_TIERS",
    "DEFAULT_PAN_COEFFICIENTS",
    "DEFAULT_POLICY",
    "DownmixPolicy",
    "LanguagePolicy",
    "MuxPolicy",
    "NormalizationPolicy",
    "OpusBitrates",
    "OriginalAudioMode",
    "PanCoefficients",
    "PanLayout",
    "PolicyValidationError",
    "SubtitlePolicy",
    "VideoPolicy",
    "load_policy",
    "load_policy_from_dict",
    "policy_to_dict",
]
