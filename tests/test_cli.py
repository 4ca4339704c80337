"""CLI 测试"""

import os
import shutil
import subprocess
import sys
from unittest.mock import patch

import pytest

from termgit.cli import build_parser, main
from termgit.git import GitError


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_parser_commit():
    args = build_parser().parse_args(["-C", "/repo", "commit", "-m", "msg"])
    assert args.repo == "/repo"
    assert args.command == "commit"
    assert args.message == "msg"


@pytest.mark.skipif(
    shutil.which("git") is None or sys.platform == "win32",
    reason="needs git and shell hooks",
)
class TestCliEndToEnd:
    """真实仓库上的端到端流程"""

    @pytest.fixture
    def repo(self, tmp_path, monkeypatch):
        for var in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
            monkeypatch.setenv(var, "termgit")
        for var in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
            monkeypatch.setenv(var, "termgit@example.com")
        subprocess.run(["git", "init", "-q"], cwd=tmp_path, check=True)
        (tmp_path / "a.txt").write_text("hello\n")
        subprocess.run(["git", "add", "a.txt"], cwd=tmp_path, check=True)
        return tmp_path

    def _write_hook(self, repo, name, script):
        hook = repo / ".git" / "hooks" / name
        hook.write_text(script)
        hook.chmod(0o755)

    def test_status(self, repo, capsys):
        assert main(["-C", str(repo), "status"]) == 0
        assert "a.txt" in capsys.readouterr().out

    def test_commit(self, repo, capsys):
        assert main(["-C", str(repo), "commit", "-m", "init"]) == 0
        assert "committed" in capsys.readouterr().out

    def test_commit_rejected(self, repo, capsys):
        self._write_hook(repo, "commit-msg", "#!/bin/sh\necho 'no ticket id'\nexit 1\n")

        assert main(["-C", str(repo), "commit", "-m", "init"]) == 1

        out = capsys.readouterr().out
        assert "no ticket id" in out
        assert "commit aborted" in out

    def test_nothing_staged(self, repo):
        subprocess.run(["git", "rm", "--cached", "-q", "a.txt"], cwd=repo, check=True)
        assert main(["-C", str(repo), "commit", "-m", "init"]) == 1

    def test_status_with_undecodable_filename(self, repo, capsys):
        """非 UTF-8 文件名不会导致崩溃"""
        try:
            (repo / os.fsdecode(b"caf\xe9.txt")).write_text("x\n")
        except (OSError, UnicodeError):
            pytest.skip("filesystem rejects non-UTF-8 names")

        assert main(["-C", str(repo), "status"]) == 0
        assert "caf" in capsys.readouterr().out


def test_git_failure_exits_with_2(tmp_path, capsys):
    with patch("termgit.git.client.GitCli.status", side_effect=GitError("bad output")):
        assert main(["-C", str(tmp_path), "status"]) == 2

    assert "bad output" in capsys.readouterr().err
