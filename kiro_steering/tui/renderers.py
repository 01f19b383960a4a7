from typing import Optional

from rich.console import Console, RenderableType
from rich.markup import escape
from rich.panel import Panel

from kiro_steering.errors import ResolverError
from kiro_steering.hooks.models import Hook
from kiro_steering.models import ActivationRequest, ActivationResult
from kiro_steering.rules.models import SteeringRule
from kiro_steering.tui.enums import UIStyle
from kiro_steering.tui.tables import HooksTable, RequestTable, RulesTable


def _panel(
    title: str, body: RenderableType, style: str, subtitle: Optional[str] = None
) -> Panel:
    return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))


class ResolverConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_resolution(
        self, request: ActivationRequest, result: ActivationResult
    ) -> None:
        self.console.print(
            _panel(
                "activation",
                RequestTable.summary_block(
                    request,
                    rules=len(result.matched_rules),
                    hooks=len(result.matched_hooks),
                ),
                style=UIStyle.BLUE.value,
            )
        )
        if result.is_empty:
            self.console.print(
                _panel("activation", "No rules or hooks apply.", style=UIStyle.DIM.value)
            )
            return
        if result.matched_rules:
            self.render_rules(list(result.matched_rules), title="matched rules")
        if result.matched_hooks:
            self.render_hooks(list(result.matched_hooks), title="matched hooks")

    def render_rules(self, rules: list[SteeringRule], title: str = "steering rules") -> None:
        if not rules:
            self.console.print(
                _panel(title, "No steering rules found.", style=UIStyle.YELLOW.value)
            )
            return
        self.console.print(
            _panel(
                title,
                RulesTable.rules_table(rules),
                style=UIStyle.CYAN.value,
                subtitle=f"{len(rules)} loaded",
            )
        )

    def render_hooks(self, hooks: list[Hook], title: str = "hooks") -> None:
        if not hooks:
            self.console.print(_panel(title, "No hooks found.", style=UIStyle.YELLOW.value))
            return
        self.console.print(
            _panel(
                title,
                HooksTable.hooks_table(hooks),
                style=UIStyle.MAGENTA.value,
                subtitle=f"{len(hooks)} loaded",
            )
        )

    def render_diagnostics(self, diagnostics: tuple[ResolverError, ...]) -> None:
        if not diagnostics:
            self.console.print(
                _panel("diagnostics", "No problems found.", style=UIStyle.GREEN.value)
            )
            return
        text = "\n".join([f"- {escape(str(item))}" for item in diagnostics])
        self.console.print(
            _panel(
                "diagnostics",
                text,
                style=UIStyle.RED.value,
                subtitle=f"{len(diagnostics)} skipped",
            )
        )
