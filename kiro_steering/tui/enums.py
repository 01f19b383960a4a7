from enum import Enum

from kiro_steering.rules.models import Inclusion


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


INCLUSION_STYLE = {
    Inclusion.ALWAYS: UIStyle.GREEN.value,
    Inclusion.FILE_MATCH: UIStyle.CYAN.value,
    Inclusion.MANUAL: UIStyle.MAGENTA.value,
}
