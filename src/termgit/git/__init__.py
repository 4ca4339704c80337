"""Git 模块

- base: GitService 抽象接口与状态类型
- client: 基于 git 命令行的实现
"""

from .base import GitError, GitService, StatusItem, StatusItemType, StatusType
from .client import GitCli, parse_porcelain

__all__ = [
    "GitError",
    "GitService",
    "StatusItem",
    "StatusItemType",
    "StatusType",
    "GitCli",
    "parse_porcelain",
]
