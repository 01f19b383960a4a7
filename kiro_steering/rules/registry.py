"""Registry of steering rules loaded from a steering directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from kiro_steering.constants import STEERING_SUFFIX
from kiro_steering.errors import ResolverError
from kiro_steering.rules.models import Inclusion, SteeringRule
from kiro_steering.rules.parser import parse_steering_file
from kiro_steering.utils import check_deadline, walk_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleRegistry:
    root: Path
    rules: tuple[SteeringRule, ...] = ()
    diagnostics: tuple[ResolverError, ...] = ()

    @classmethod
    def load_all(
        cls,
        root: Path,
        case_sensitive: bool = True,
        deadline: Optional[float] = None,
    ) -> "RuleRegistry":
        """Load every ``*.md`` steering file under ``root``.

        Files that fail to parse are left out and their errors collected in
        ``diagnostics``. Raises :class:`LoadIOError` only when the directory
        itself cannot be walked or the deadline passes.
        """
        paths = sorted(
            walk_files(root, STEERING_SUFFIX, deadline),
            key=lambda item: item.relative_to(root).as_posix(),
        )
        rules: list[SteeringRule] = []
        diagnostics: list[ResolverError] = []
        for path in paths:
            check_deadline(root, deadline)
            try:
                rules.append(parse_steering_file(path, root, case_sensitive=case_sensitive))
            except ResolverError as exc:
                logger.warning("Skipping steering file: %s", exc)
                diagnostics.append(exc)

        logger.debug(
            "Loaded %d steering rules from %s (%d skipped)",
            len(rules),
            root,
            len(diagnostics),
        )
        return cls(root=root, rules=tuple(rules), diagnostics=tuple(diagnostics))

    def __iter__(self) -> Iterator[SteeringRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def get(self, rule_id: str) -> SteeringRule | None:
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        return None

    def rules_for(self, path: str) -> list[SteeringRule]:
        return [rule for rule in self.rules if rule.applies_to(path)]

    def manual_rules(self) -> list[SteeringRule]:
        return [rule for rule in self.rules if rule.inclusion == Inclusion.MANUAL]
