"""termgit 命令行入口

    termgit [-C PATH] status
    termgit [-C PATH] commit -m MSG
"""

import argparse
import sys

from rich.console import Console

from .app import App
from .events import NeedsUpdate
from .git import GitError
from .hooks import HookExecutionError
from .telemetry import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="termgit", description="Hook-aware git status/commit")
    parser.add_argument("-C", dest="repo", default=".", help="repository root (default: .)")
    parser.add_argument("--log-level", default=None, help="override TERMGIT_LOG_LEVEL")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("status", help="show working directory and staged changes")
    commit = sub.add_parser("commit", help="commit staged changes through repository hooks")
    commit.add_argument("-m", "--message", required=True, help="commit message")
    return parser


def cmd_status(app: App, console: Console) -> int:
    app.update(NeedsUpdate.ALL)
    console.print(app.index_wd.draw())
    console.print(app.index.draw())
    return 0


def cmd_commit(app: App, console: Console, message: str) -> int:
    app.update(NeedsUpdate.ALL)
    if app.commit.stage_empty:
        console.print("[yellow]nothing staged[/yellow]")
        return 1

    app.commit.set_msg(message)
    outcome = app.commit.commit()
    app.process_queue()

    for msg in app.messages:
        console.print(msg, style="red", markup=False)

    if not outcome.committed:
        console.print("commit aborted, message kept:", style="yellow")
        console.print(outcome.message, markup=False)
        return 1

    console.print(f"[green]committed[/green] {outcome.commit_id}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """入口函数"""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    console = Console()
    err_console = Console(stderr=True)
    app = App(args.repo)

    try:
        if args.command == "status":
            return cmd_status(app, console)
        return cmd_commit(app, console, args.message)
    except (HookExecutionError, GitError) as e:
        logger.error(f"[CLI] {args.command} failed: {e}")
        err_console.print(f"error: {e}", style="bold red", markup=False, highlight=False)
        return 2


if __name__ == "__main__":
    sys.exit(main())
