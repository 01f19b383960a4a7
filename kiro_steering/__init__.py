from kiro_steering.config import EngineConfig, load_config
from kiro_steering.engine import EngineSnapshot, ResolutionEngine
from kiro_steering.models import (
    ActivationRequest,
    ActivationResult,
    EngineState,
    EventKind,
)

__all__ = [
    "ActivationRequest",
    "ActivationResult",
    "EngineConfig",
    "EngineSnapshot",
    "EngineState",
    "EventKind",
    "ResolutionEngine",
    "load_config",
]
