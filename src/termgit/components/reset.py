"""ResetComponent - 重置文件确认弹窗

Enter 确认后丢弃该文件在工作区的改动并请求全局刷新，Esc 取消。
"""

from rich.console import RenderableType
from rich.panel import Panel
from rich.text import Text

from .. import keys
from ..config import RESET_TITLE
from ..events import EventQueue, NeedsUpdate, Update
from ..git import GitService
from ..keys import KeyEvent
from ..telemetry import get_logger
from .base import CommandBlocking, CommandInfo, Component, visibility_blocking

logger = get_logger(__name__)


class ResetComponent(Component):
    """重置确认弹窗"""

    def __init__(self, queue: EventQueue, git: GitService):
        self._queue = queue
        self._git = git
        self._path: str | None = None
        self._visible = False

    @property
    def path(self) -> str | None:
        return self._path

    def open_for_path(self, path: str) -> None:
        self._path = path
        self.show()

    def confirm(self) -> bool:
        """执行重置

        Returns:
            git 操作是否成功
        """
        path = self._path
        self._path = None
        self.hide()
        if path is None:
            return False

        ok = self._git.reset_workdir(path)
        logger.info(f"[Reset] {path}: {'ok' if ok else 'failed'}")
        if ok:
            self._queue.push(Update(NeedsUpdate.ALL))
        return ok

    def commands(self, out: list[CommandInfo], force_all: bool = False) -> CommandBlocking:
        out.append(CommandInfo("Confirm [enter]", True, self._visible))
        out.append(CommandInfo("Close [esc]", True, self._visible))
        return visibility_blocking(self)

    def event(self, ev: KeyEvent) -> bool:
        if not self._visible:
            return False
        if ev == keys.CONFIRM:
            self.confirm()
        elif ev == keys.EXIT_POPUP:
            self._path = None
            self.hide()
        return True

    def draw(self) -> RenderableType | None:
        if not self._visible:
            return None
        return Panel(
            Text(f"confirm file reset?\n\nThis will discard all changes in:\n{self._path}"),
            title=RESET_TITLE,
        )
