"""Registry of hooks loaded from a hooks directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from kiro_steering.constants import HOOK_SUFFIX
from kiro_steering.errors import ResolverError
from kiro_steering.hooks.models import Hook
from kiro_steering.hooks.parser import parse_hook_file
from kiro_steering.models import EventKind
from kiro_steering.utils import check_deadline, walk_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HookRegistry:
    root: Path
    hooks: tuple[Hook, ...] = ()
    diagnostics: tuple[ResolverError, ...] = ()

    @classmethod
    def load_all(
        cls,
        root: Path,
        case_sensitive: bool = True,
        deadline: Optional[float] = None,
    ) -> "HookRegistry":
        paths = sorted(
            walk_files(root, HOOK_SUFFIX, deadline),
            key=lambda item: item.relative_to(root).as_posix(),
        )
        hooks: list[Hook] = []
        diagnostics: list[ResolverError] = []
        for path in paths:
            check_deadline(root, deadline)
            try:
                hooks.append(parse_hook_file(path, root, case_sensitive=case_sensitive))
            except ResolverError as exc:
                logger.warning("Skipping hook file: %s", exc)
                diagnostics.append(exc)

        logger.debug(
            "Loaded %d hooks from %s (%d skipped)", len(hooks), root, len(diagnostics)
        )
        return cls(root=root, hooks=tuple(hooks), diagnostics=tuple(diagnostics))

    def __iter__(self) -> Iterator[Hook]:
        return iter(self.hooks)

    def __len__(self) -> int:
        return len(self.hooks)

    def get(self, hook_id: str) -> Hook | None:
        for hook in self.hooks:
            if hook.id == hook_id:
                return hook
        return None

    def hooks_for(self, path: str, event_kind: EventKind) -> list[Hook]:
        return [
            hook
            for hook in self.hooks
            if hook.enabled and hook.trigger.fires_on(path, event_kind)
        ]

    def manual_hooks(self) -> list[Hook]:
        return [hook for hook in self.hooks if hook.enabled and hook.is_manual]
