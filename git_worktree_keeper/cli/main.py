"""Console entry points for git-worktree-keeper."""

import os
import sys
from typing import Callable, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from git_worktree_keeper.cli.args import parse_cleanup_args, parse_spawn_args, split_create_args
from git_worktree_keeper.config import Config, env_flag
from git_worktree_keeper.constants import ENV_DEBUG, MergeMode
from git_worktree_keeper.exceptions import WorktreeKeeperError
from git_worktree_keeper.services.display_service import DisplayService
from git_worktree_keeper.services.launcher import SessionLauncher
from git_worktree_keeper.services.provisioner import WorkspaceProvisioner
from git_worktree_keeper.services.reconciler import ReconciliationEngine
from git_worktree_keeper.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def _run(action: Callable[[], int], display: DisplayService, debug: bool) -> int:
    """Run ``action`` and turn failures into a printed error and exit code 1."""
    try:
        return action()
    except KeyboardInterrupt:
        display.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except (WorktreeKeeperError, OSError, ValueError) as e:
        logger.debug(f"{type(e).__name__}: {e}")
        display.error(e)
        if debug:
            display.console.print_exception()
        return 1


def create_worktree(argv: Optional[Sequence[str]] = None) -> int:
    """create-worktree [branch-name] [-- assistant-args...] [assistant-flags...]"""
    if argv is None:
        argv = sys.argv[1:]
    branch, assistant_args = split_create_args(argv)
    display = DisplayService()

    def action() -> int:
        config = Config.from_env()
        setup_logging(verbose=config.verbose, debug=config.debug)
        launcher = SessionLauncher(config.assistant_command)

        provisioner = WorkspaceProvisioner(config, display=display)
        result = provisioner.provision(os.getcwd(), branch)

        display.starting_assistant(launcher.name)
        return launcher.launch(result.worktree_path, assistant_args)

    return _run(action, display, debug=env_flag(ENV_DEBUG))


def cleanup_worktree(argv: Optional[Sequence[str]] = None) -> int:
    """cleanup-worktree [--abort] [--keep-branch] [--leave-main]"""
    parsed_args = parse_cleanup_args(argv)
    display = DisplayService()

    def action() -> int:
        config = Config.from_env(
            verbose=parsed_args.verbose or None,
            debug=parsed_args.debug or None,
            delete_branch=False if parsed_args.keep_branch else None,
            merge_mode=MergeMode.LEAVE_MAIN_UNTOUCHED if parsed_args.leave_main else None,
        )
        log_file = setup_logging(verbose=config.verbose, debug=config.debug)
        if config.debug:
            display.print("[yellow]Debug mode enabled[/yellow]")
            if log_file:
                display.print(f"  log file: {escape(log_file)}", highlight=False)
            for key, value in config.to_dict().items():
                display.print(f"  {key}: {escape(str(value))}", highlight=False)

        engine = ReconciliationEngine(config, display=display)
        if parsed_args.abort:
            engine.abort(os.getcwd())
            return 0

        result = engine.reconcile(os.getcwd())
        return 0 if result.succeeded else 1

    return _run(action, display, debug=parsed_args.debug)


def spawn_worktree(argv: Optional[Sequence[str]] = None) -> int:
    """spawn-worktree [branch-name]: provision only and print the path on stdout."""
    parsed_args = parse_spawn_args(argv)
    # stdout carries only the worktree path
    display = DisplayService(Console(stderr=True))

    def action() -> int:
        config = Config.from_env(
            verbose=parsed_args.verbose or None,
            debug=parsed_args.debug or None,
        )
        setup_logging(verbose=config.verbose, debug=config.debug)

        provisioner = WorkspaceProvisioner(config, display=display)
        result = provisioner.provision(os.getcwd(), parsed_args.branch)
        print(result.worktree_path)
        return 0

    return _run(action, display, debug=parsed_args.debug)


if __name__ == "__main__":
    sys.exit(create_worktree())
