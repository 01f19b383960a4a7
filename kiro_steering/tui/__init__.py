from kiro_steering.tui.renderers import ResolverConsoleUI

__all__ = ["ResolverConsoleUI"]
