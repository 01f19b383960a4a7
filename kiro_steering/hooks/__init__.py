from kiro_steering.hooks.models import ActionType, Hook, HookAction, HookTrigger, TriggerType
from kiro_steering.hooks.registry import HookRegistry

__all__ = [
    "ActionType",
    "Hook",
    "HookAction",
    "HookRegistry",
    "HookTrigger",
    "TriggerType",
]
