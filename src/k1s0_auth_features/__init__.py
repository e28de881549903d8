"""k1s0 auth-features library."""

from .context import EvaluationContext, Recency, client_context_from_payload
from .decisions import FeatureDecisions, FeatureKeys, GateDecision, GateReasons
from .exceptions import FeatureGateError, FeatureGateErrorCodes
from .gate import FeatureGate
from .loader import load, merge_overlay
from .logger import configure_logging, get_logger
from .models import (
    FeaturesConfig,
    IpProfilingSection,
    LastAccessTimeUpdatesSection,
    LogSection,
    SecurityHistorySection,
    SigninConfirmationSection,
    SigninUnblockSection,
)
from .sampler import COHORT_HEX_DIGITS, cohort_value, is_sampled

__all__ = [
    "COHORT_HEX_DIGITS",
    "EvaluationContext",
    "FeatureDecisions",
    "FeatureGate",
    "FeatureGateError",
    "FeatureGateErrorCodes",
    "FeatureKeys",
    "FeaturesConfig",
    "GateDecision",
    "GateReasons",
    "IpProfilingSection",
    "LastAccessTimeUpdatesSection",
    "LogSection",
    "Recency",
    "SecurityHistorySection",
    "SigninConfirmationSection",
    "SigninUnblockSection",
    "client_context_from_payload",
    "cohort_value",
    "is_sampled",
    "load",
    "configure_logging",
    "get_logger",
    "merge_overlay",
]
