"""事件模块

- types: NeedsUpdate, InternalEvent (Update, ShowMessage, ConfirmResetFile)
- queue: EventQueue
"""

from .types import (
    NeedsUpdate,
    Update,
    ShowMessage,
    ConfirmResetFile,
    InternalEvent,
)
from .queue import EventQueue

__all__ = [
    # Types
    "NeedsUpdate",
    "Update",
    "ShowMessage",
    "ConfirmResetFile",
    "InternalEvent",
    # Queue
    "EventQueue",
]
