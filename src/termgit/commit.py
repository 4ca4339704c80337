"""CommitOrchestrator - hook 把关的提交流程

流程：
1. commit-msg hook：拒绝则中止，保留（可能被 hook 改写的）消息，通知用户
2. 创建提交（委托 GitService）
3. post-commit hook：拒绝不回滚，仅通知警告
4. 入队全局刷新 Update(ALL)

hook 无法执行（HookExecutionError）或提交失败（GitError）直接向上传播。
"""

from dataclasses import dataclass
from pathlib import Path

from .config import METRICS_ENABLED
from .events import EventQueue, NeedsUpdate, ShowMessage, Update
from .git import GitService
from .hooks import run_commit_msg_hook, run_post_commit_hook
from .telemetry import get_logger, metrics

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommitOutcome:
    """提交流程结果

    Attributes:
        committed: 是否创建了提交
        message: 调用方应保留的消息（成功时为空）
        commit_id: 新提交 id（未提交时为 None）
    """
    committed: bool
    message: str
    commit_id: str | None = None


class CommitOrchestrator:
    """按 commit-msg → commit → post-commit 顺序执行提交"""

    def __init__(self, repo_path: str | Path, git: GitService, queue: EventQueue):
        self._repo_path = Path(repo_path)
        self._git = git
        self._queue = queue

    def commit(self, message: str) -> CommitOutcome:
        """执行提交

        Args:
            message: 用户输入的提交消息

        Returns:
            CommitOutcome
        """
        result, message = run_commit_msg_hook(self._repo_path, message)
        if not result.is_ok:
            logger.error(f"[Commit] commit-msg hook error: {result.diagnostic}")
            if METRICS_ENABLED:
                metrics.inc("commit.aborted")
            self._queue.push(ShowMessage(f"commit-msg hook error:\n{result.diagnostic}"))
            return CommitOutcome(committed=False, message=message)

        commit_id = self._git.commit(message)
        if METRICS_ENABLED:
            metrics.inc("commit.created")

        result = run_post_commit_hook(self._repo_path)
        if not result.is_ok:
            logger.error(f"[Commit] post-commit hook error: {result.diagnostic}")
            self._queue.push(ShowMessage(f"post-commit hook error:\n{result.diagnostic}"))

        self._queue.push(Update(NeedsUpdate.ALL))
        return CommitOutcome(committed=True, message="", commit_id=commit_id)
