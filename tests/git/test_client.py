"""GitCli 测试"""

import os
import shutil
import subprocess
from unittest.mock import patch

import pytest

from termgit.git import GitCli, GitError, StatusItem, StatusItemType, StatusType, parse_porcelain


class TestParsePorcelain:
    """porcelain v1 -z 输出解析"""

    OUTPUT = "\0".join([
        "M  staged.py",
        " M modified.py",
        "MM both.py",
        "A  added.py",
        " D removed.py",
        "R  new_name.py",
        "old_name.py",
        "?? untracked.txt",
        "",
    ])

    def test_workdir(self):
        assert parse_porcelain(self.OUTPUT, StatusType.WORKDIR) == [
            StatusItem("modified.py", StatusItemType.MODIFIED),
            StatusItem("both.py", StatusItemType.MODIFIED),
            StatusItem("removed.py", StatusItemType.DELETED),
            StatusItem("untracked.txt", StatusItemType.NEW),
        ]

    def test_stage(self):
        assert parse_porcelain(self.OUTPUT, StatusType.STAGE) == [
            StatusItem("staged.py", StatusItemType.MODIFIED),
            StatusItem("both.py", StatusItemType.MODIFIED),
            StatusItem("added.py", StatusItemType.NEW),
            StatusItem("new_name.py", StatusItemType.RENAMED),
        ]

    def test_empty(self):
        assert parse_porcelain("", StatusType.WORKDIR) == []

    def test_path_with_spaces(self):
        assert parse_porcelain(" M dir/a file.txt\0", StatusType.WORKDIR) == [
            StatusItem("dir/a file.txt", StatusItemType.MODIFIED),
        ]

    def test_unknown_code(self):
        assert parse_porcelain("UU conflict.py\0", StatusType.STAGE) == [
            StatusItem("conflict.py", StatusItemType.OTHER),
        ]


class TestRun:
    """命令执行"""

    def test_failure_raises_git_error(self, tmp_path):
        client = GitCli(tmp_path)
        error = subprocess.CalledProcessError(128, ["git"], stderr="fatal: not a git repository\n")

        with patch("subprocess.run", side_effect=error):
            with pytest.raises(GitError, match="not a git repository"):
                client.run("status")

    def test_timeout_raises_git_error(self, tmp_path):
        client = GitCli(tmp_path)

        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired(["git"], 30)):
            with pytest.raises(GitError, match="timed out"):
                client.run("status")

    def test_undecodable_output_raises_git_error(self, tmp_path):
        client = GitCli(tmp_path)
        error = UnicodeDecodeError("utf-8", b"\xe9", 0, 1, "invalid continuation byte")

        with patch("subprocess.run", side_effect=error):
            with pytest.raises(GitError, match="undecodable"):
                client.run("status")

    def test_paths_are_literal(self, tmp_path):
        client = GitCli(tmp_path)

        with patch("subprocess.run") as run:
            client.run("add", "--", "a*.py")

        cmd = run.call_args.args[0]
        assert cmd[1] == "--literal-pathspecs"
        assert cmd[-1] == "a*.py"

    def test_staging_failure_returns_false(self, tmp_path):
        client = GitCli(tmp_path)

        with patch.object(client, "run", side_effect=GitError("boom")):
            assert client.stage_add("a.py") is False


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestRealRepository:
    """对真实仓库的集成测试"""

    @pytest.fixture
    def client(self, tmp_path, monkeypatch):
        for var in ("GIT_AUTHOR_NAME", "GIT_COMMITTER_NAME"):
            monkeypatch.setenv(var, "termgit")
        for var in ("GIT_AUTHOR_EMAIL", "GIT_COMMITTER_EMAIL"):
            monkeypatch.setenv(var, "termgit@example.com")
        subprocess.run(["git", "init", "-q"], cwd=tmp_path, check=True)
        return GitCli(tmp_path)

    def test_stage_commit_cycle(self, client, tmp_path):
        (tmp_path / "a.txt").write_text("hello\n")
        assert client.status(StatusType.WORKDIR) == [StatusItem("a.txt", StatusItemType.NEW)]

        assert client.stage_add("a.txt") is True
        assert client.status(StatusType.STAGE) == [StatusItem("a.txt", StatusItemType.NEW)]
        assert client.status(StatusType.WORKDIR) == []

        commit_id = client.commit("first\n\nbody\n")

        assert len(commit_id) >= 40
        assert client.status(StatusType.STAGE) == []
        assert client.run("log", "-1", "--format=%B").rstrip("\n") == "first\n\nbody"

    def test_unstage_before_first_commit(self, client, tmp_path):
        (tmp_path / "a.txt").write_text("hello\n")
        client.stage_add("a.txt")

        assert client.reset_stage("a.txt") is True
        assert client.status(StatusType.STAGE) == []

    def test_unstage_and_reset_after_commit(self, client, tmp_path):
        (tmp_path / "a.txt").write_text("hello\n")
        client.stage_add("a.txt")
        client.commit("init")

        (tmp_path / "a.txt").write_text("changed\n")
        client.stage_add("a.txt")
        assert client.reset_stage("a.txt") is True
        assert client.status(StatusType.WORKDIR) == [StatusItem("a.txt", StatusItemType.MODIFIED)]

        assert client.reset_workdir("a.txt") is True
        assert (tmp_path / "a.txt").read_text() == "hello\n"

    def test_reset_untracked_file_removes_it(self, client, tmp_path):
        (tmp_path / "a.txt").write_text("hello\n")

        assert client.reset_workdir("a.txt") is True
        assert not (tmp_path / "a.txt").exists()

    def test_commit_does_not_run_hooks(self, client, tmp_path):
        hook = tmp_path / ".git" / "hooks" / "post-commit"
        hook.write_text("#!/bin/sh\ntouch ran\n")
        hook.chmod(0o755)
        (tmp_path / "a.txt").write_text("hello\n")
        client.stage_add("a.txt")

        client.commit("init")

        assert not (tmp_path / "ran").exists()

    def test_reset_glob_named_file_leaves_others(self, client, tmp_path):
        """文件名中的 glob 字符只匹配自身"""
        (tmp_path / "ab.py").write_text("v1\n")
        client.stage_add("ab.py")
        client.commit("init")
        (tmp_path / "ab.py").write_text("local edits\n")
        (tmp_path / "a*.py").write_text("scratch\n")

        assert client.reset_workdir("a*.py") is True

        assert not (tmp_path / "a*.py").exists()
        assert (tmp_path / "ab.py").read_text() == "local edits\n"

    def test_stage_glob_named_file_only(self, client, tmp_path):
        (tmp_path / "ab.py").write_text("v1\n")
        (tmp_path / "a*.py").write_text("scratch\n")

        assert client.stage_add("a*.py") is True

        assert client.status(StatusType.STAGE) == [StatusItem("a*.py", StatusItemType.NEW)]

    def test_undecodable_filename_round_trips(self, client, tmp_path):
        """非 UTF-8 文件名可以列出并暂存"""
        name = os.fsdecode(b"caf\xe9.txt")
        try:
            (tmp_path / name).write_text("x\n")
        except (OSError, UnicodeError):
            pytest.skip("filesystem rejects non-UTF-8 names")

        assert client.status(StatusType.WORKDIR) == [StatusItem(name, StatusItemType.NEW)]
        assert client.stage_add(name) is True
        assert client.status(StatusType.STAGE) == [StatusItem(name, StatusItemType.NEW)]
