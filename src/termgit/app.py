"""App - 组装组件并驱动单线程 tick

每个 tick：
1. 按键分发：可见弹窗优先（消息 → 重置 → 提交），其次聚焦面板，最后全局按键
2. drain 事件队列：Update 标志按并集合并，drain 结束后统一应用；
   ShowMessage / ConfirmResetFile 交给对应弹窗
3. 重新计算命令列表，交给渲染层绘制

所有状态只在 UI 线程中修改。
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from rich.console import Group, RenderableType
from rich.text import Text

from . import keys
from .commit import CommitOrchestrator
from .components import (
    ChangesComponent,
    CommandInfo,
    CommandBlocking,
    CommitComponent,
    Component,
    MsgComponent,
    ResetComponent,
)
from .config import STAGE_TITLE, WORKDIR_TITLE
from .events import (
    ConfirmResetFile,
    EventQueue,
    InternalEvent,
    NeedsUpdate,
    ShowMessage,
    Update,
)
from .git import GitCli, GitService, StatusType
from .keys import KeyEvent
from .telemetry import get_logger

logger = get_logger(__name__)


class Focus(Enum):
    WORKDIR = "workdir"
    STAGE = "stage"


@dataclass(frozen=True)
class DiffTarget:
    """当前需要显示 diff 的文件"""
    path: str
    is_stage: bool


class App:
    """应用根对象

    持有唯一的 EventQueue，并通过构造参数传给所有组件。

    使用示例:
        app = App("/path/to/repo")
        app.start()
        app.tick([keys.MOVE_DOWN, keys.STATUS_STAGE_FILE])
        console.print(app.draw())
    """

    def __init__(self, repo_path: str | Path = ".", git: GitService | None = None):
        self.repo_path = Path(repo_path)
        self.queue = EventQueue()
        self.git = git or GitCli(self.repo_path)

        self.orchestrator = CommitOrchestrator(self.repo_path, self.git, self.queue)
        self.commit = CommitComponent(self.orchestrator)
        self.msg = MsgComponent()
        self.reset = ResetComponent(self.queue, self.git)
        self.index_wd = ChangesComponent(WORKDIR_TITLE, True, True, self.queue, self.git)
        self.index = ChangesComponent(STAGE_TITLE, False, False, self.queue, self.git)

        self._focus = Focus.WORKDIR
        self._diff_target: DiffTarget | None = None
        self._commands: list[CommandInfo] = []
        self._messages: list[str] = []
        self._should_quit = False

    # === 属性 ===

    @property
    def focus(self) -> Focus:
        return self._focus

    @property
    def diff_target(self) -> DiffTarget | None:
        return self._diff_target

    @property
    def commands(self) -> list[CommandInfo]:
        return list(self._commands)

    @property
    def messages(self) -> list[str]:
        """已显示过的消息（按顺序）"""
        return list(self._messages)

    @property
    def should_quit(self) -> bool:
        return self._should_quit

    def focused_panel(self) -> ChangesComponent:
        return self.index_wd if self._focus == Focus.WORKDIR else self.index

    def _popups(self) -> list[Component]:
        return [self.msg, self.reset, self.commit]

    def _components(self) -> list[Component]:
        return [*self._popups(), self.index_wd, self.index]

    # === 生命周期 ===

    def start(self) -> None:
        """首次加载：请求全局刷新并立即处理"""
        logger.info(f"[App] Starting in {self.repo_path}")
        self.queue.push(Update(NeedsUpdate.ALL))
        self.process_queue()

    def tick(self, events: Iterable[KeyEvent] = ()) -> bool:
        """执行一个 UI tick

        Args:
            events: 本 tick 读到的按键

        Returns:
            是否需要重绘
        """
        handled = False
        for ev in events:
            handled = self.event(ev) or handled
        processed = self.process_queue()
        self.update_commands()
        return handled or processed > 0

    # === 按键分发 ===

    def event(self, ev: KeyEvent) -> bool:
        """分发单个按键

        Returns:
            是否被消费
        """
        for popup in self._popups():
            if popup.event(ev):
                return True

        if self.focused_panel().event(ev):
            return True

        if ev in (keys.FOCUS_WORKDIR, keys.FOCUS_LEFT):
            self.switch_focus(Focus.WORKDIR)
            return True
        if ev in (keys.FOCUS_STAGE, keys.FOCUS_RIGHT):
            self.switch_focus(Focus.STAGE)
            return True
        if ev in (keys.EXIT_1, keys.EXIT_2):
            self._should_quit = True
            return True
        return False

    def switch_focus(self, focus: Focus) -> None:
        if focus == self._focus:
            return
        self._focus = focus
        self.index_wd.focus_select(focus == Focus.WORKDIR)
        self.index.focus_select(focus == Focus.STAGE)
        self.queue.push(Update(NeedsUpdate.DIFF))

    # === 队列处理 ===

    def process_queue(self) -> int:
        """drain 事件队列（每 tick 一次）

        Returns:
            处理的事件数
        """
        needs_update = NeedsUpdate.NONE

        def handle(event: InternalEvent) -> None:
            nonlocal needs_update
            if isinstance(event, Update):
                needs_update |= event.flags
            elif isinstance(event, ShowMessage):
                self._messages.append(event.text)
                self.msg.show_msg(event.text)
            elif isinstance(event, ConfirmResetFile):
                self.reset.open_for_path(event.path)
            else:
                raise TypeError(f"Unknown internal event: {event!r}")

        processed = self.queue.drain(handle)
        if needs_update:
            self.update(needs_update)
        return processed

    def update(self, flags: NeedsUpdate) -> None:
        """按标志重新计算相关视图"""
        logger.debug(f"[App] Update {flags}")
        if NeedsUpdate.ALL in flags:
            self.update_status()
        if flags & (NeedsUpdate.ALL | NeedsUpdate.DIFF):
            self.update_diff()
        self.update_commands()

    def update_status(self) -> None:
        workdir = self.git.status(StatusType.WORKDIR)
        stage = self.git.status(StatusType.STAGE)
        self.index_wd.update(workdir)
        self.index.update(stage)
        self.commit.set_stage_empty(not stage)

    def update_diff(self) -> None:
        item = self.focused_panel().selection_item()
        if item is None:
            self._diff_target = None
            return
        self._diff_target = DiffTarget(item.path, is_stage=self._focus == Focus.STAGE)

    def update_commands(self) -> None:
        commands: list[CommandInfo] = []
        for component in self._components():
            if component.commands(commands) == CommandBlocking.BLOCKING:
                break
        self._commands = commands

    # === 绘制 ===

    def draw(self) -> RenderableType:
        """组合所有可见组件和命令栏"""
        parts: list[RenderableType] = [self.index_wd.draw(), self.index.draw()]
        for popup in reversed(self._popups()):
            renderable = popup.draw()
            if renderable is not None:
                parts.append(renderable)

        bar = Text()
        for cmd in self._commands:
            if cmd.available:
                bar.append(f"{cmd.name}  ", style="white" if cmd.enabled else "bright_black")
        parts.append(bar)
        return Group(*parts)
