"""GitCli - 基于 git 命令行的 GitService 实现

提交使用底层命令（write-tree / commit-tree / update-ref），
不会触发仓库 hook：hook 由 HookRunner 单独执行。
"""

import subprocess
from pathlib import Path

from ..config import GIT_EXECUTABLE, GIT_TIMEOUT_SECONDS
from ..telemetry import get_logger
from .base import GitError, GitService, StatusItem, StatusItemType, StatusType

logger = get_logger(__name__)

_STATUS_CODES = {
    "M": StatusItemType.MODIFIED,
    "A": StatusItemType.NEW,
    "?": StatusItemType.NEW,
    "D": StatusItemType.DELETED,
    "R": StatusItemType.RENAMED,
    "C": StatusItemType.NEW,
    "T": StatusItemType.TYPECHANGE,
}


def parse_porcelain(output: str, kind: StatusType) -> list[StatusItem]:
    """解析 `git status --porcelain=v1 -z` 输出

    Args:
        output: 命令输出（NUL 分隔）
        kind: 取暂存区列（X）还是工作区列（Y）

    Returns:
        按 git 输出顺序的 StatusItem 列表
    """
    items: list[StatusItem] = []
    entries = output.split("\0")
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        if len(entry) < 4:
            continue
        x, y, path = entry[0], entry[1], entry[3:]
        if x in "RC":
            # 重命名/复制后跟原路径
            i += 1

        if x == "?" and y == "?":
            if kind == StatusType.WORKDIR:
                items.append(StatusItem(path, StatusItemType.NEW))
            continue
        if x == "!":
            continue

        code = x if kind == StatusType.STAGE else y
        if code == " ":
            continue
        items.append(StatusItem(path, _STATUS_CODES.get(code, StatusItemType.OTHER)))

    return items


class GitCli(GitService):
    """通过 subprocess 调用 git"""

    def __init__(self, repo_path: str | Path = "."):
        self._repo_path = Path(repo_path)

    @property
    def repo_path(self) -> Path:
        return self._repo_path

    def run(self, *args: str, input: str | None = None) -> str:
        """执行 git 命令

        Returns:
            stdout

        Raises:
            GitError: 命令失败或超时
        """
        # 路径一律按字面匹配，文件名中的 glob 字符不展开
        cmd = [GIT_EXECUTABLE, "--literal-pathspecs", *args]
        try:
            result = subprocess.run(
                cmd,
                cwd=self._repo_path,
                input=input,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="surrogateescape",
                check=True,
                timeout=GIT_TIMEOUT_SECONDS,
            )
        except subprocess.TimeoutExpired as e:
            raise GitError(f"git {' '.join(args)} timed out after {GIT_TIMEOUT_SECONDS}s") from e
        except subprocess.CalledProcessError as e:
            raise GitError(f"git {' '.join(args)} failed: {e.stderr.strip()}") from e
        except OSError as e:
            raise GitError(f"git {' '.join(args)} could not be started: {e}") from e
        except UnicodeError as e:
            raise GitError(f"git {' '.join(args)} produced undecodable output: {e}") from e
        return result.stdout

    def status(self, kind: StatusType) -> list[StatusItem]:
        output = self.run("status", "--porcelain=v1", "-z", "--untracked-files=all")
        return parse_porcelain(output, kind)

    def stage_add(self, path: str) -> bool:
        try:
            self.run("add", "--all", "--", path)
        except GitError as e:
            logger.warning(f"[Git] stage_add failed: {e}")
            return False
        return True

    def reset_stage(self, path: str) -> bool:
        try:
            if self._head() is None:
                # 尚无提交：直接从索引移除
                self.run("rm", "--cached", "-q", "--", path)
            else:
                self.run("reset", "-q", "HEAD", "--", path)
        except GitError as e:
            logger.warning(f"[Git] reset_stage failed: {e}")
            return False
        return True

    def reset_workdir(self, path: str) -> bool:
        try:
            tracked = self.run("ls-files", "-z", "--", path)
            if tracked:
                self.run("checkout", "--", path)
            else:
                (self._repo_path / path).unlink()
        except (GitError, OSError) as e:
            logger.warning(f"[Git] reset_workdir failed: {e}")
            return False
        return True

    def commit(self, message: str) -> str:
        tree = self.run("write-tree").strip()
        parent = self._head()
        args = ["commit-tree", tree]
        if parent:
            args += ["-p", parent]
        commit_id = self.run(*args, "-F", "-", input=message).strip()

        summary = message.splitlines()[0] if message else ""
        self.run("update-ref", "-m", f"commit: {summary}", "HEAD", commit_id)
        logger.info(f"[Git] Created commit {commit_id[:8]}")
        return commit_id

    def _head(self) -> str | None:
        try:
            return self.run("rev-parse", "--verify", "-q", "HEAD").strip() or None
        except GitError:
            return None
