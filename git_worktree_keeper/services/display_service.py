"""Console output for provisioning and cleanup progress"""
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from git_worktree_keeper.constants import ABORT_HINT, CONFLICT_RECIPE, LOG_DISPLAY_LIMIT
from git_worktree_keeper.exceptions import WorktreeKeeperError
from git_worktree_keeper.models.worktree import ReconciliationOutcome, ReconciliationResult

console = Console()


class DisplayService:
    """Prints user-facing progress. User-provided text is markup-escaped."""

    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    def print(self, *args, **kwargs) -> None:
        self.console.print(*args, **kwargs)

    # Provisioning

    def generated_name(self, name: str) -> None:
        self.print(f"Generated branch name: [bold]{escape(name)}[/bold]")

    def copying_artifacts(self) -> None:
        self.print("\nCopying gitignored files to worktree...")

    def copied_entry(self, entry: str) -> None:
        self.print(f"  {escape(entry)}", highlight=False)

    def worktree_created(self, path: str) -> None:
        self.print(f"\n[green]Worktree created at:[/green] {escape(path)}")

    def starting_assistant(self, command: str) -> None:
        self.print(f"Starting {escape(command)}...\n")

    # Reconciliation

    def cleanup_summary(self, current_path: str, branch: str, main_path: str, main_branch: str) -> None:
        self.print(f"Current worktree: {escape(current_path)}")
        self.print(f"Current branch: [bold]{escape(branch)}[/bold]")
        self.print(f"Main worktree: {escape(main_path)}")
        self.print(f"Main branch: [bold]{escape(main_branch)}[/bold]")
        self.print()

    def no_commits_to_rebase(self, main_branch: str) -> None:
        self.print(f"No commits to rebase (branch is up to date with {escape(main_branch)})")

    def rebasing(self, count: int, main_branch: str) -> None:
        self.print(f"Rebasing {count} commit(s) onto {escape(main_branch)}...\n")

    def rebase_succeeded(self) -> None:
        self.print("\n[green]Rebase successful![/green]")

    def rebase_conflict(self, conflicted_files: List[str]) -> None:
        self.print()
        if conflicted_files:
            self.print(f"[yellow]Conflicted files ({len(conflicted_files)}):[/yellow]")
            for path in conflicted_files:
                self.print(f"  {escape(path)}", highlight=False)
            self.print()
        self.print("[yellow]Rebase has conflicts. Please resolve them:[/yellow]")
        for step in CONFLICT_RECIPE:
            self.print(escape(step), highlight=False)
        self.print()
        self.print(escape(ABORT_HINT), highlight=False)

    def commit_list(self, branch: str, commits: List[str], limit: int = LOG_DISPLAY_LIMIT) -> None:
        """Show at most ``limit`` commits, newest first."""
        self.print(f"\nCommits on {escape(branch)}:")
        if not commits:
            self.print("  (none)")
            return
        for line in commits[:limit]:
            self.print(f"  {escape(line)}", highlight=False)
        if len(commits) > limit:
            self.print(f"  [dim]... and {len(commits) - limit} more[/dim]")

    def switching_to_main(self) -> None:
        self.print("\nSwitching to main worktree...")

    def fast_forwarding(self, main_branch: str, branch: str) -> None:
        self.print(f"Fast-forwarding {escape(main_branch)} to {escape(branch)}...")

    def removing_worktree(self, path: str) -> None:
        self.print(f"Removing worktree at {escape(path)}...")

    def deleting_branch(self, branch: str) -> None:
        self.print(f"Deleting branch {escape(branch)}...")

    def branch_delete_failed(self, branch: str, error_msg: str) -> None:
        self.print(f"[yellow]Could not delete branch {escape(branch)}: {escape(error_msg)}[/yellow]")

    def cleanup_complete(self, result: ReconciliationResult) -> None:
        self.print("\n[green]Cleanup complete![/green]")
        if result.outcome is ReconciliationOutcome.CLEAN_FAST_FORWARD:
            self.print(f"Your changes are now on {escape(result.main_branch)}")
        else:
            self.print(
                f"{escape(result.main_branch)} was left untouched; "
                f"your commits are on branch {escape(result.branch)}"
            )
        self.print(f"Main worktree: {escape(result.main_path)}")

    def aborting(self) -> None:
        self.print("Aborting rebase...")

    def abort_complete(self) -> None:
        self.print("Rebase aborted. You can try cleanup-worktree again or continue working.")

    # Errors

    def error(self, exc: BaseException) -> None:
        """Print an error and any follow-up hints it carries."""
        self.print(f"[red]Error: {escape(str(exc))}[/red]")
        if isinstance(exc, WorktreeKeeperError):
            for hint in exc.hints:
                self.print(escape(hint), highlight=False)
