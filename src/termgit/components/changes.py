"""ChangesComponent - 带选中项的改动列表面板

状态：
- items: 改动列表（每次刷新整体替换）
- selection: 可选的当前索引，存在时总是 < len(items)
- focused / show_selection: 未聚焦时可以隐藏选中标记

刷新规则：
- 内容相同的列表不改变选中项
- 列表变化后选中项收敛到 min(旧索引, 新长度 - 1)，空列表时为 None
"""

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from .. import keys
from ..config import METRICS_ENABLED
from ..events import ConfirmResetFile, EventQueue, NeedsUpdate, Update
from ..git import GitService, StatusItem
from ..keys import KeyEvent
from ..telemetry import get_logger, metrics
from .base import CommandBlocking, CommandInfo, Component

logger = get_logger(__name__)


class ChangesComponent(Component):
    """工作区/暂存区改动列表

    Attributes:
        title: 面板标题
        is_working_dir: True 表示工作区（Enter 暂存），False 表示暂存区（Enter 取消暂存）
    """

    def __init__(
        self,
        title: str,
        focus: bool,
        is_working_dir: bool,
        queue: EventQueue,
        git: GitService,
    ):
        self.title = title
        self.is_working_dir = is_working_dir
        self._queue = queue
        self._git = git

        self._items: list[StatusItem] = []
        self._selection: int | None = None
        self._focused = focus
        self._show_selection = focus

    # === 属性 ===

    @property
    def items(self) -> list[StatusItem]:
        return list(self._items)

    @property
    def selection(self) -> int | None:
        return self._selection

    @property
    def show_selection(self) -> bool:
        return self._show_selection

    def selection_item(self) -> StatusItem | None:
        """当前选中的条目"""
        if self._selection is None:
            return None
        return self._items[self._selection]

    def is_empty(self) -> bool:
        return not self._items

    # === 更新 ===

    def update(self, items: list[StatusItem]) -> bool:
        """用最新状态列表刷新

        Args:
            items: git 服务返回的完整列表

        Returns:
            列表是否发生变化
        """
        if items == self._items:
            return False

        self._items = list(items)
        old_selection = self._selection or 0
        if not self._items:
            self._selection = None
        else:
            self._selection = min(old_selection, len(self._items) - 1)

        logger.debug(
            f"[Changes:{self.title}] Updated: {len(self._items)} items, "
            f"selection={self._selection}"
        )
        return True

    def move_selection(self, delta: int) -> bool:
        """移动选中项，边界处收敛而非回绕

        Returns:
            列表为空时 False，否则 True（即使索引没变）
        """
        if not self._items:
            return False

        current = self._selection or 0
        self._selection = max(0, min(current + delta, len(self._items) - 1))
        self._queue.push(Update(NeedsUpdate.DIFF))
        return True

    def focus_select(self, focus: bool) -> None:
        """切换焦点并同步是否显示选中标记"""
        self.focus(focus)
        self._show_selection = focus

    # === 操作 ===

    def index_add_remove(self) -> bool:
        """暂存（工作区）或取消暂存（暂存区）选中文件

        Returns:
            git 操作是否成功
        """
        item = self.selection_item()
        if item is None:
            return False

        if self.is_working_dir:
            ok = self._git.stage_add(item.path)
            op = "stage"
        else:
            ok = self._git.reset_stage(item.path)
            op = "unstage"

        logger.info(f"[Changes:{self.title}] {op} {item.path}: {'ok' if ok else 'failed'}")
        if METRICS_ENABLED:
            metrics.inc("changes.index", {"op": op, "result": "ok" if ok else "fail"})
        return ok

    def dispatch_reset_workdir(self) -> bool:
        """请求确认重置选中文件"""
        item = self.selection_item()
        if item is None:
            return False
        self._queue.push(ConfirmResetFile(item.path))
        return True

    # === Component ===

    def commands(self, out: list[CommandInfo], force_all: bool = False) -> CommandBlocking:
        some_selection = self._selection is not None
        if self.is_working_dir:
            out.append(CommandInfo("Stage File [enter]", some_selection, self._focused))
            out.append(CommandInfo("Reset File [D]", some_selection, self._focused))
        else:
            out.append(CommandInfo("Unstage File [enter]", some_selection, self._focused))
        out.append(CommandInfo("Scroll [↑↓]", len(self._items) > 1, self._focused))
        return CommandBlocking.PASSING_ON

    def event(self, ev: KeyEvent) -> bool:
        if not self._focused:
            return False

        if ev == keys.STATUS_STAGE_FILE:
            if self.index_add_remove():
                self._queue.push(Update(NeedsUpdate.ALL))
            return True
        if ev == keys.STATUS_RESET_FILE:
            return self.is_working_dir and self.dispatch_reset_workdir()
        if ev == keys.MOVE_DOWN:
            return self.move_selection(1)
        if ev == keys.MOVE_UP:
            return self.move_selection(-1)
        return False

    def item_text(self, idx: int, item: StatusItem) -> Text:
        """单行文本：选中项带 "> " 前缀并加粗"""
        selected = self._show_selection and self._selection == idx
        prefix = "> " if selected else "  "
        style = Style(color=item.status.color, bold=selected)
        # 非 UTF-8 文件名以替换字符显示
        path = item.path.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
        return Text(f"{prefix}{path}", style=style)

    def draw(self) -> RenderableType:
        lines = [self.item_text(idx, item) for idx, item in enumerate(self._items)]
        border = "bright_white" if self._focused else "bright_black"
        return Panel(Group(*lines), title=self.title, border_style=border)
