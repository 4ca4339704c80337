"""事件类型定义

包含：
- NeedsUpdate: 需要重新计算的视图标志集合（按位并合并）
- InternalEvent: 组件产生、由队列延迟处理的事件
  - Update: 刷新信号
  - ShowMessage: 用户可见的消息
  - ConfirmResetFile: 请求确认重置工作区文件
"""

from dataclasses import dataclass
from enum import Flag, auto


class NeedsUpdate(Flag):
    """需要刷新的视图

    多个信号在处理前按并集合并：
        NeedsUpdate.DIFF | NeedsUpdate.ALL
    """
    NONE = 0
    ALL = auto()
    DIFF = auto()
    COMMANDS = auto()


@dataclass(frozen=True)
class Update:
    """刷新信号"""
    flags: NeedsUpdate


@dataclass(frozen=True)
class ShowMessage:
    """显示消息（由消息弹窗处理）"""
    text: str


@dataclass(frozen=True)
class ConfirmResetFile:
    """请求确认重置文件（由重置弹窗处理）"""
    path: str


InternalEvent = Update | ShowMessage | ConfirmResetFile
