"""Steering rule data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from kiro_steering.patterns import PatternSet


class Inclusion(str, Enum):
    ALWAYS = "always"
    FILE_MATCH = "fileMatch"
    MANUAL = "manual"

    @classmethod
    def parse(cls, value: object) -> "Inclusion":
        text = str(value).strip().lower()
        for item in cls:
            if item.value.lower() == text:
                return item
        raise ValueError(f"unknown inclusion {value!r}")


@dataclass(frozen=True)
class SteeringRule:
    id: str
    description: str
    inclusion: Inclusion
    source_path: Path
    patterns: PatternSet = field(default_factory=PatternSet)
    content: str = ""

    def applies_to(self, path: str) -> bool:
        if self.inclusion == Inclusion.ALWAYS:
            return True
        if self.inclusion == Inclusion.FILE_MATCH:
            return self.patterns.matches(path)
        return False
