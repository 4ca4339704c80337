"""MsgComponent - 消息弹窗（显示 ShowMessage 事件）"""

from rich.console import RenderableType
from rich.panel import Panel
from rich.text import Text

from .. import keys
from ..config import MSG_TITLE
from ..keys import KeyEvent
from .base import CommandBlocking, CommandInfo, Component, visibility_blocking


class MsgComponent(Component):

    def __init__(self):
        self._msg = ""
        self._visible = False

    @property
    def msg(self) -> str:
        return self._msg

    def show_msg(self, msg: str) -> None:
        self._msg = msg
        self.show()

    def commands(self, out: list[CommandInfo], force_all: bool = False) -> CommandBlocking:
        out.append(CommandInfo("Close [enter]", True, self._visible))
        return visibility_blocking(self)

    def event(self, ev: KeyEvent) -> bool:
        if not self._visible:
            return False
        if ev in (keys.CLOSE_MSG, keys.EXIT_POPUP):
            self.hide()
        return True

    def draw(self) -> RenderableType | None:
        if not self._visible:
            return None
        return Panel(Text(self._msg, style="bright_red"), title=MSG_TITLE)
