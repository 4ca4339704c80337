"""Pytest 配置"""

import stat
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from termgit.git import GitService


@pytest.fixture
def repo(tmp_path) -> Path:
    """只有 .git/hooks 目录的仓库布局（hook 测试不需要真实仓库）"""
    (tmp_path / ".git" / "hooks").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def make_hook(repo):
    """在 repo 中写入 hook 脚本"""

    def _make(hook: str, script: str, executable: bool = True) -> Path:
        path = repo / hook
        path.write_text(script)
        mode = 0o755 if executable else 0o644
        path.chmod(mode)
        assert bool(path.stat().st_mode & stat.S_IXUSR) is executable
        return path

    return _make


@pytest.fixture
def git():
    """GitService 测试替身"""
    service = MagicMock(spec=GitService)
    service.status.return_value = []
    service.stage_add.return_value = True
    service.reset_stage.return_value = True
    service.reset_workdir.return_value = True
    service.commit.return_value = "0123456789abcdef"
    return service
