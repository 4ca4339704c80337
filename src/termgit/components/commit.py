"""CommitComponent - 提交消息输入弹窗

可见时消费所有按键：
- 可打印字符追加，Backspace 删除
- Enter（消息非空）执行提交
- Esc 关闭

提交被 commit-msg hook 拒绝时保持打开，显示 hook 改写后的消息。
"""

from rich.console import RenderableType
from rich.panel import Panel
from rich.text import Text

from .. import keys
from ..commit import CommitOrchestrator, CommitOutcome
from ..config import COMMIT_MSG_PLACEHOLDER, COMMIT_TITLE
from ..keys import KeyEvent
from ..telemetry import get_logger
from .base import CommandBlocking, CommandInfo, Component, visibility_blocking

logger = get_logger(__name__)


class CommitComponent(Component):
    """提交弹窗"""

    def __init__(self, orchestrator: CommitOrchestrator):
        self._orchestrator = orchestrator
        self._msg = ""
        self._visible = False
        self._stage_empty = True

    @property
    def msg(self) -> str:
        return self._msg

    @property
    def stage_empty(self) -> bool:
        return self._stage_empty

    def set_stage_empty(self, empty: bool) -> None:
        self._stage_empty = empty

    def set_msg(self, msg: str) -> None:
        self._msg = msg

    def can_commit(self) -> bool:
        return bool(self._msg)

    def commit(self) -> CommitOutcome:
        """执行提交并应用结果"""
        outcome = self._orchestrator.commit(self._msg)
        self._msg = outcome.message
        if outcome.committed:
            self.hide()
        else:
            logger.info("[CommitDialog] Commit aborted, keeping message")
        return outcome

    # === Component ===

    def commands(self, out: list[CommandInfo], force_all: bool = False) -> CommandBlocking:
        out.append(CommandInfo("Commit [c]", not self._stage_empty, not self._visible))
        out.append(CommandInfo("Commit [enter]", self.can_commit(), self._visible))
        out.append(CommandInfo("Close [esc]", True, self._visible))
        return visibility_blocking(self)

    def event(self, ev: KeyEvent) -> bool:
        if self._visible:
            if ev == keys.EXIT_POPUP:
                self.hide()
            elif ev.code == keys.ENTER:
                if self.can_commit():
                    self.commit()
            elif ev.code == keys.BACKSPACE:
                self._msg = self._msg[:-1]
            elif ev.char is not None:
                self._msg += ev.char
            return True

        if ev == keys.OPEN_COMMIT and not self._stage_empty:
            self.show()
            return True
        return False

    def draw(self) -> RenderableType | None:
        if not self._visible:
            return None
        if self._msg:
            body = Text(self._msg)
        else:
            body = Text(COMMIT_MSG_PLACEHOLDER, style="bright_black")
        return Panel(body, title=COMMIT_TITLE)
