"""HookRunner - 执行仓库 git hook

职责：
- 判断 hook 是否可运行（存在且有可执行权限）
- commit-msg: 通过临时文件交换提交消息，hook 可改写消息
- post-commit: 无参数执行，仅分类结果

执行是同步阻塞的，没有超时或取消：hook 不退出则调用方一直等待。
"""

import os
import stat
import subprocess
import tempfile
from pathlib import Path

from ..config import HOOK_COMMIT_MSG, HOOK_MSG_FILE_PREFIX, HOOK_POST_COMMIT, METRICS_ENABLED
from ..telemetry import get_logger, metrics, truncate
from .types import HookExecutionError, HookResult

logger = get_logger(__name__)


def hook_path(repo_path: str | Path, hook: str) -> Path:
    """hook 的绝对路径"""
    return Path(repo_path).resolve() / hook


def hook_runnable(repo_path: str | Path, hook: str) -> bool:
    """hook 是否存在且可执行"""
    path = hook_path(repo_path, hook)
    try:
        mode = path.stat().st_mode
    except OSError:
        return False
    return stat.S_ISREG(mode) and bool(mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


def _hook_name(hook: str) -> str:
    return hook.rsplit("/", 1)[-1]


def _decode(hook: str, data: bytes, stream: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise HookExecutionError(hook, f"{stream} is not valid UTF-8: {e}") from e


def run_hook(repo_path: str | Path, hook: str, args: list[str]) -> HookResult:
    """执行 hook 并分类退出码

    工作目录为仓库根目录，退出码 0 为 Ok，否则 NotOk(stdout + stderr)。

    Raises:
        HookExecutionError: 进程无法启动或输出不是合法 UTF-8
    """
    name = _hook_name(hook)
    path = hook_path(repo_path, hook)
    logger.info(f"[Hook:{name}] Running {path}")

    try:
        proc = subprocess.run(
            [str(path), *args],
            cwd=Path(repo_path),
            capture_output=True,
        )
    except OSError as e:
        raise HookExecutionError(name, f"failed to spawn: {e}") from e

    if METRICS_ENABLED:
        metrics.inc("hooks.runs", {"hook": name})

    if proc.returncode == 0:
        logger.debug(f"[Hook:{name}] Ok")
        return HookResult.ok()

    out = _decode(name, proc.stdout, "stdout")
    err = _decode(name, proc.stderr, "stderr")
    diagnostic = f"{out}{err}"

    logger.warning(
        f"[Hook:{name}] Rejected (exit={proc.returncode}): {truncate(diagnostic)}"
    )
    if METRICS_ENABLED:
        metrics.inc("hooks.rejected", {"hook": name})
    return HookResult.not_ok(diagnostic)


def _skip(hook: str) -> HookResult:
    name = _hook_name(hook)
    logger.debug(f"[Hook:{name}] Not runnable, skipped")
    if METRICS_ENABLED:
        metrics.inc("hooks.skipped", {"hook": name})
    return HookResult.ok()


def run_commit_msg_hook(repo_path: str | Path, message: str) -> tuple[HookResult, str]:
    """执行 commit-msg hook

    消息写入新建的临时文件，路径作为唯一参数传给 hook。无论退出码如何，
    都重新读取文件作为新消息（hook 拒绝时也可能改写了消息）。
    临时文件在所有路径上都会被删除。

    Args:
        repo_path: 仓库根目录
        message: 当前提交消息

    Returns:
        (HookResult, 新消息)；hook 不可运行时返回 (Ok, 原消息)

    Raises:
        HookExecutionError: 进程无法启动、临时文件读写失败或非 UTF-8
    """
    if not hook_runnable(repo_path, HOOK_COMMIT_MSG):
        return _skip(HOOK_COMMIT_MSG), message

    name = _hook_name(HOOK_COMMIT_MSG)
    try:
        fd, msg_path = tempfile.mkstemp(prefix=HOOK_MSG_FILE_PREFIX, suffix=".txt")
    except OSError as e:
        raise HookExecutionError(name, f"failed to create message file: {e}") from e

    try:
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(message.encode("utf-8"))
        except OSError as e:
            raise HookExecutionError(name, f"failed to write message file: {e}") from e

        result = run_hook(repo_path, HOOK_COMMIT_MSG, [msg_path])

        try:
            data = Path(msg_path).read_bytes()
        except OSError as e:
            raise HookExecutionError(name, f"failed to read message file: {e}") from e
        new_message = _decode(name, data, "message file")
    finally:
        if os.path.exists(msg_path):
            os.unlink(msg_path)

    if new_message != message:
        logger.info(f"[Hook:{name}] Message rewritten by hook")
    return result, new_message


def run_post_commit_hook(repo_path: str | Path) -> HookResult:
    """执行 post-commit hook（无参数，不涉及消息）"""
    if not hook_runnable(repo_path, HOOK_POST_COMMIT):
        return _skip(HOOK_POST_COMMIT)
    return run_hook(repo_path, HOOK_POST_COMMIT, [])
