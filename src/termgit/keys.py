"""按键定义

KeyEvent 由终端输入层产生；这里只定义组件匹配用的常量。
"""

from dataclasses import dataclass
from enum import Flag, auto


class KeyModifiers(Flag):
    NONE = 0
    SHIFT = auto()
    CONTROL = auto()
    ALT = auto()


@dataclass(frozen=True)
class KeyEvent:
    """单个按键

    Attributes:
        code: 可打印字符本身（如 "c"），或特殊键名（如 "enter"）
        modifiers: 修饰键
    """
    code: str
    modifiers: KeyModifiers = KeyModifiers.NONE

    @property
    def char(self) -> str | None:
        """可打印字符，特殊键返回 None"""
        if len(self.code) == 1 and self.code.isprintable():
            return self.code
        return None


def key(code: str) -> KeyEvent:
    return KeyEvent(code)


ENTER = "enter"
ESC = "esc"
BACKSPACE = "backspace"
UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"

FOCUS_WORKDIR = key("1")
FOCUS_STAGE = key("2")
FOCUS_RIGHT = key(RIGHT)
FOCUS_LEFT = key(LEFT)
STATUS_RESET_FILE = key("D")
STATUS_STAGE_FILE = key(ENTER)
EXIT_1 = key(ESC)
EXIT_2 = key("q")
EXIT_POPUP = key(ESC)
CLOSE_MSG = key(ENTER)
CONFIRM = key(ENTER)
OPEN_COMMIT = key("c")
MOVE_UP = key(UP)
MOVE_DOWN = key(DOWN)
