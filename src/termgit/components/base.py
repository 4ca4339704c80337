"""Component 统一接口

所有面板/弹窗实现同一组能力：
- commands: 列出当前可用命令
- event: 处理按键，返回是否消费
- focus / visibility
- draw: 生成 rich 可渲染对象

设计原则：单层接口，具体组件直接实现，不做多层继承。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from rich.console import RenderableType

from ..keys import KeyEvent


class CommandBlocking(Enum):
    """命令收集是否到此为止"""
    BLOCKING = "blocking"  # 弹窗可见，后续组件的命令不再显示
    PASSING_ON = "passing_on"


@dataclass(frozen=True)
class CommandInfo:
    """组件提供的一条命令

    Attributes:
        name: 命令名（如 "Stage File [enter]"）
        enabled: 当前是否可执行
        available: 当前上下文是否显示
    """
    name: str
    enabled: bool
    available: bool


class Component(ABC):
    """组件接口"""

    _focused: bool = False
    _visible: bool = True

    @abstractmethod
    def commands(self, out: list[CommandInfo], force_all: bool = False) -> CommandBlocking:
        """追加可用命令到 out"""

    @abstractmethod
    def event(self, ev: KeyEvent) -> bool:
        """处理按键

        Returns:
            是否消费了该按键
        """

    @abstractmethod
    def draw(self) -> RenderableType | None:
        """生成可渲染对象，不可见时返回 None"""

    # === Focus ===

    def focused(self) -> bool:
        return self._focused

    def focus(self, focus: bool) -> None:
        self._focused = focus

    # === Visibility ===

    def is_visible(self) -> bool:
        return self._visible

    def hide(self) -> None:
        self._visible = False

    def show(self) -> None:
        self._visible = True


def visibility_blocking(component: Component) -> CommandBlocking:
    """弹窗可见时阻断后续命令收集"""
    if component.is_visible():
        return CommandBlocking.BLOCKING
    return CommandBlocking.PASSING_ON
