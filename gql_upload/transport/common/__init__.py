from .execution import ExecutionHandle, ExecutionOutcome, ExecutionState, OutcomeKind
from .http_config import FALLBACK_HTTP_CONFIG, HttpConfig, HttpOptions, HttpOverrides

__all__ = [
    "ExecutionHandle",
    "ExecutionOutcome",
    "ExecutionState",
    "FALLBACK_HTTP_CONFIG",
    "HttpConfig",
    "HttpOptions",
    "HttpOverrides",
    "OutcomeKind",
]
