"""Hook 模块

- types: HookResult, HookExecutionError
- runner: hook 可运行检测与执行
"""

from .types import HookResult, HookExecutionError
from .runner import (
    hook_path,
    hook_runnable,
    run_hook,
    run_commit_msg_hook,
    run_post_commit_hook,
)

__all__ = [
    # Types
    "HookResult",
    "HookExecutionError",
    # Runner
    "hook_path",
    "hook_runnable",
    "run_hook",
    "run_commit_msg_hook",
    "run_post_commit_hook",
]
