"""Hook 模块数据类型定义

包含：
- HookResult: hook 执行结果（Ok / NotOk）
- HookExecutionError: hook 无法执行（启动失败、临时文件 IO、非 UTF-8 输出）
"""

from dataclasses import dataclass


class HookExecutionError(RuntimeError):
    """Hook 无法执行

    与 HookResult.NotOk 不同：NotOk 表示 hook 运行并拒绝，
    此异常表示本次操作无法继续（进程无法启动、临时文件读写失败、
    输出不是合法 UTF-8）。
    """

    def __init__(self, hook: str, reason: str):
        super().__init__(f"{hook}: {reason}")
        self.hook = hook
        self.reason = reason


@dataclass(frozen=True)
class HookResult:
    """Hook 执行结果

    Attributes:
        diagnostic: 失败时的输出（stdout + stderr），成功时为 None
    """
    diagnostic: str | None = None

    @classmethod
    def ok(cls) -> "HookResult":
        return cls()

    @classmethod
    def not_ok(cls, diagnostic: str) -> "HookResult":
        return cls(diagnostic=diagnostic)

    @property
    def is_ok(self) -> bool:
        return self.diagnostic is None

    def __str__(self) -> str:
        if self.is_ok:
            return "Ok"
        return f"NotOk({self.diagnostic!r})"
