"""Hook data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from kiro_steering.models import EventKind
from kiro_steering.patterns import PatternSet


class TriggerType(str, Enum):
    FILE_EDITED = "fileEdited"
    FILE_SAVED = "fileSaved"
    FILE_CREATED = "fileCreated"
    FILE_DELETED = "fileDeleted"
    MANUAL = "manual"

    @property
    def event_kind(self) -> Optional[EventKind]:
        return TRIGGER_EVENTS.get(self)

    @property
    def is_file_trigger(self) -> bool:
        return self != TriggerType.MANUAL


TRIGGER_EVENTS = {
    TriggerType.FILE_EDITED: EventKind.EDITED,
    TriggerType.FILE_SAVED: EventKind.SAVED,
    TriggerType.FILE_CREATED: EventKind.CREATED,
    TriggerType.FILE_DELETED: EventKind.DELETED,
}

TRIGGER_ALIASES = {
    "userTriggered": TriggerType.MANUAL,
}


class ActionType(str, Enum):
    ASK_AGENT = "askAgent"
    RUN_COMMAND = "runCommand"


@dataclass(frozen=True)
class HookTrigger:
    type: TriggerType
    patterns: PatternSet = field(default_factory=PatternSet)

    def fires_on(self, path: str, event_kind: EventKind) -> bool:
        if self.type.event_kind != event_kind:
            return False
        return self.patterns.matches(path)


@dataclass(frozen=True)
class HookAction:
    type: ActionType
    template: str


@dataclass(frozen=True)
class Hook:
    id: str
    name: str
    description: str
    version: str
    enabled: bool
    trigger: HookTrigger
    action: HookAction
    source_path: Path

    @property
    def is_manual(self) -> bool:
        return self.trigger.type == TriggerType.MANUAL
