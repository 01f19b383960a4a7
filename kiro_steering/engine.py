"""Resolution of steering rules and hooks for file events.

The engine holds one immutable :class:`EngineSnapshot` (a rule registry and
a hook registry loaded together). ``reload()`` builds a complete new
snapshot before publishing it with a single attribute assignment, so
``resolve()`` never needs a lock: it reads the reference once and works on
that snapshot for the rest of the call. Reloads are serialized among
themselves.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from kiro_steering.config import EngineConfig
from kiro_steering.errors import ResolverError
from kiro_steering.hooks.models import Hook
from kiro_steering.hooks.registry import HookRegistry
from kiro_steering.models import (
    ActivationRequest,
    ActivationResult,
    EngineState,
    EventKind,
)
from kiro_steering.rules.models import SteeringRule
from kiro_steering.rules.registry import RuleRegistry
from kiro_steering.utils import deadline_after

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSnapshot:
    rules: RuleRegistry
    hooks: HookRegistry

    @property
    def diagnostics(self) -> tuple[ResolverError, ...]:
        return self.rules.diagnostics + self.hooks.diagnostics

    def resolve(self, request: ActivationRequest) -> ActivationResult:
        return ActivationResult(
            matched_rules=tuple(self.rules.rules_for(request.changed_path)),
            matched_hooks=tuple(
                self.hooks.hooks_for(request.changed_path, request.event_kind)
            ),
        )


def load_snapshot(config: EngineConfig) -> EngineSnapshot:
    rules = RuleRegistry.load_all(
        config.steering_root,
        case_sensitive=config.case_sensitive,
        deadline=deadline_after(config.walk_timeout),
    )
    hooks = HookRegistry.load_all(
        config.hooks_root,
        case_sensitive=config.case_sensitive,
        deadline=deadline_after(config.walk_timeout),
    )
    return EngineSnapshot(rules=rules, hooks=hooks)


class ResolutionEngine:
    def __init__(self, config: EngineConfig) -> None:
        self.config = config
        self._snapshot: Optional[EngineSnapshot] = None
        self._state = EngineState.UNLOADED
        self._reload_lock = threading.Lock()

    @classmethod
    def load(cls, config: EngineConfig) -> "ResolutionEngine":
        engine = cls(config)
        engine.reload()
        return engine

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def snapshot(self) -> Optional[EngineSnapshot]:
        return self._snapshot

    def _set_state(self, state: EngineState) -> None:
        logger.debug("Engine state %s -> %s", self._state.value, state.value)
        self._state = state

    def reload(self) -> EngineSnapshot:
        """Load both registries and publish them as the current snapshot.

        Per-file problems end up in the snapshot's diagnostics. When either
        directory cannot be read, :class:`LoadIOError` is raised and the
        previous snapshot, if any, stays in force.
        """
        with self._reload_lock:
            had_snapshot = self._snapshot is not None
            self._set_state(EngineState.RELOADING if had_snapshot else EngineState.LOADING)
            try:
                snapshot = load_snapshot(self.config)
            except Exception as exc:
                logger.error("Reload failed, keeping previous registries: %s", exc)
                self._set_state(EngineState.READY if had_snapshot else EngineState.FAILED)
                raise

            self._snapshot = snapshot
            self._set_state(EngineState.READY)
            logger.debug(
                "Loaded %d rules and %d hooks with %d diagnostics",
                len(snapshot.rules),
                len(snapshot.hooks),
                len(snapshot.diagnostics),
            )
            return snapshot

    def resolve(self, request: ActivationRequest) -> ActivationResult:
        snapshot = self._snapshot
        if snapshot is None:
            return ActivationResult()
        return snapshot.resolve(request)

    def resolve_path(self, path: str, event_kind: EventKind | str) -> ActivationResult:
        return self.resolve(ActivationRequest.of(path, event_kind))

    def manual_rules(self) -> list[SteeringRule]:
        snapshot = self._snapshot
        if snapshot is None:
            return []
        return snapshot.rules.manual_rules()

    def manual_hooks(self) -> list[Hook]:
        snapshot = self._snapshot
        if snapshot is None:
            return []
        return snapshot.hooks.manual_hooks()

    def diagnostics(self) -> tuple[ResolverError, ...]:
        snapshot = self._snapshot
        if snapshot is None:
            return ()
        return snapshot.diagnostics
