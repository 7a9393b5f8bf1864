"""
アプリケーション層の公開API。
"""

from .observability import (
    MetricsRecorderProtocol,
    get_metrics_recorder,
    reset_observability,
    telemetry_span,
    use_metrics_recorder,
    use_telemetry_span,
)
from .status_policy import POLICIES, StatusOutcome, StatusPolicy, policy_for

__all__ = [
    "MetricsRecorderProtocol",
    "get_metrics_recorder",
    "reset_observability",
    "telemetry_span",
    "use_metrics_recorder",
    "use_telemetry_span",
    "POLICIES",
    "StatusOutcome",
    "StatusPolicy",
    "policy_for",
]
