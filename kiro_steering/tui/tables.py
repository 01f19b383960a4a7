from rich.markup import escape
from rich.table import Column, Table

from kiro_steering.hooks.models import Hook
from kiro_steering.models import ActivationRequest
from kiro_steering.rules.models import SteeringRule
from kiro_steering.tui.enums import INCLUSION_STYLE, UIStyle


def _styled(value: str, style: str) -> str:
    return f"[{style}]{escape(value)}[/{style}]"


def _patterns_text(sources: tuple[str, ...]) -> str:
    return escape(", ".join(sources)) if sources else "-"


class RequestTable:
    @staticmethod
    def summary_block(request: ActivationRequest, rules: int, hooks: int) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Path", escape(request.changed_path))
        table.add_row("Event", request.event_kind.value)
        table.add_row("Rules", str(rules))
        table.add_row("Hooks", str(hooks))
        return table


class RulesTable:
    @staticmethod
    def rules_table(rules: list[SteeringRule]) -> Table:
        table = Table(
            Column(header="Rule", overflow="fold"),
            Column(header="Inclusion", width=10),
            Column(header="Patterns", overflow="fold"),
            Column(header="Description", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for rule in rules:
            style = INCLUSION_STYLE.get(rule.inclusion, UIStyle.WHITE.value)
            table.add_row(
                escape(rule.id),
                _styled(rule.inclusion.value, style),
                _patterns_text(rule.patterns.sources),
                escape(rule.description),
            )
        return table


class HooksTable:
    @staticmethod
    def hooks_table(hooks: list[Hook]) -> Table:
        table = Table(
            Column(header="Hook", overflow="fold"),
            Column(header="Enabled", width=8),
            Column(header="Trigger", width=12),
            Column(header="Patterns", overflow="fold"),
            Column(header="Action", width=10),
            expand=True,
            header_style="bold",
        )
        for hook in hooks:
            enabled = (
                _styled("yes", UIStyle.GREEN.value)
                if hook.enabled
                else _styled("no", UIStyle.DIM.value)
            )
            table.add_row(
                escape(hook.id),
                enabled,
                hook.trigger.type.value,
                _patterns_text(hook.trigger.patterns.sources),
                hook.action.type.value,
            )
        return table
