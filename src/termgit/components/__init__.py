"""组件模块

- base: Component 接口、CommandInfo、CommandBlocking
- changes: 改动列表面板
- commit: 提交弹窗
- msg: 消息弹窗
- reset: 重置确认弹窗
"""

from .base import CommandBlocking, CommandInfo, Component, visibility_blocking
from .changes import ChangesComponent
from .commit import CommitComponent
from .msg import MsgComponent
from .reset import ResetComponent

__all__ = [
    "CommandBlocking",
    "CommandInfo",
    "Component",
    "visibility_blocking",
    "ChangesComponent",
    "CommitComponent",
    "MsgComponent",
    "ResetComponent",
]
