"""Git 服务抽象接口

核心只通过此接口调用 git 引擎（暂存、提交、状态查询），
不关心其实现（CLI、libgit2 绑定、测试替身）。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class GitError(RuntimeError):
    """git 操作失败"""


class StatusType(Enum):
    """状态查询范围"""
    WORKDIR = "workdir"  # 工作区相对暂存区的改动
    STAGE = "stage"  # 暂存区相对 HEAD 的改动


class StatusItemType(Enum):
    """改动类型"""
    MODIFIED = "modified"
    NEW = "new"
    DELETED = "deleted"
    RENAMED = "renamed"
    TYPECHANGE = "typechange"
    OTHER = "other"

    @property
    def color(self) -> str:
        """列表中显示的颜色"""
        colors = {
            StatusItemType.MODIFIED: "bright_yellow",
            StatusItemType.NEW: "bright_green",
            StatusItemType.DELETED: "bright_red",
        }
        return colors.get(self, "white")


@dataclass(frozen=True)
class StatusItem:
    """状态列表中的一项

    frozen dataclass：列表比较按内容进行。
    """
    path: str
    status: StatusItemType = StatusItemType.MODIFIED


class GitService(ABC):
    """Git 引擎协作接口

    使用示例:
        git = GitCli("/path/to/repo")
        items = git.status(StatusType.WORKDIR)
        git.stage_add(items[0].path)
        git.commit("fix typo")
    """

    @abstractmethod
    def status(self, kind: StatusType) -> list[StatusItem]:
        """查询工作区或暂存区的改动列表

        Raises:
            GitError: 查询失败
        """

    @abstractmethod
    def stage_add(self, path: str) -> bool:
        """将路径加入暂存区"""

    @abstractmethod
    def reset_stage(self, path: str) -> bool:
        """将路径移出暂存区"""

    @abstractmethod
    def reset_workdir(self, path: str) -> bool:
        """丢弃路径在工作区的改动"""

    @abstractmethod
    def commit(self, message: str) -> str:
        """用暂存区内容创建提交（不运行任何 hook）

        Returns:
            新提交的 id

        Raises:
            GitError: 提交失败
        """
