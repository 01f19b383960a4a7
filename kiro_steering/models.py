from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from kiro_steering.patterns import normalize_path

if TYPE_CHECKING:
    from kiro_steering.hooks.models import Hook
    from kiro_steering.rules.models import SteeringRule


class EventKind(str, Enum):
    EDITED = "edited"
    SAVED = "saved"
    CREATED = "created"
    DELETED = "deleted"


class EngineState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"
    RELOADING = "reloading"
    FAILED = "failed"


@dataclass(frozen=True)
class ActivationRequest:
    changed_path: str
    event_kind: EventKind

    @classmethod
    def of(cls, path: str, event_kind: EventKind | str) -> ActivationRequest:
        return cls(changed_path=normalize_path(path), event_kind=EventKind(event_kind))


@dataclass(frozen=True)
class ActivationResult:
    matched_rules: tuple[SteeringRule, ...] = ()
    matched_hooks: tuple[Hook, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.matched_rules and not self.matched_hooks

    def rule_ids(self) -> list[str]:
        return [rule.id for rule in self.matched_rules]

    def hook_ids(self) -> list[str]:
        return [hook.id for hook in self.matched_hooks]
