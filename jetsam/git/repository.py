"""Git repository abstraction.

Wraps exactly the git invocations the release workflow needs. Queries capture
output; mutations stream git's own output to the terminal so the operator sees
what happened; existence checks are silent probes.

Usage:
    repo = Repository(Path.cwd())

    match repo.current_branch():
        case Ok(branch):
            print(f"on {branch}")
        case Err(e):
            print(f"Error: {e.message}")

    if repo.tag_exists("v1.2.3"):
        print("already released")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from jetsam.core.errors import exit_status
from jetsam.core.result import Err, Ok, Result
from jetsam.platform.process import ProcessError
from jetsam.platform.process import run as run_process
from jetsam.platform.process import run_live, run_silent

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git sub-command that failed (e.g. "pull --rebase")
        message: Error message
        returncode: Exit status to propagate (1 when git never started)
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git checkout, operated on from its working directory.

    Attributes:
        path: Directory git commands run in
        remote: Name of the remote releases are pushed to
    """

    def __init__(self, path: Path, *, remote: str = "origin") -> None:
        self.path = path
        self.remote = remote

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def current_branch(self) -> Result[str, GitError]:
        """Name of the checked out branch (empty string on a detached HEAD)."""
        return self._query(["branch", "--show-current"]).map(str.strip)

    def modified_files(self) -> Result[list[str], GitError]:
        """Tracked files that differ from HEAD."""
        result = self._query(["diff-index", "--name-only", "--ignore-submodules", "HEAD", "--"])
        return result.map(lambda out: [ln for ln in out.splitlines() if ln.strip()])

    def commits_ahead(self, branch: str) -> Result[int, GitError]:
        """Count of commits in the symmetric difference with ``<remote>/<branch>``."""
        result = self._query(
            ["rev-list", f"HEAD...{self.remote}/{branch}", "--ignore-submodules", "--count"]
        )
        if isinstance(result, Err):
            return result
        try:
            return Ok(int(result.value.strip()))
        except ValueError:
            return Err(
                GitError(
                    command="rev-list",
                    message=f"unexpected commit count: {result.value!r}",
                )
            )

    # -------------------------------------------------------------------------
    # Probes (silent; success means "exists")
    # -------------------------------------------------------------------------

    def tag_exists(self, tag: str) -> bool:
        return self._probe(["rev-parse", "--verify", "--quiet", tag])

    def branch_exists(self, branch: str) -> bool:
        """True if a local branch with this name exists."""
        return self._probe(["show-branch", branch])

    def remote_branch_exists(self, branch: str) -> bool:
        """True if the remote-tracking branch ``remotes/<remote>/<branch>`` exists."""
        return self._probe(["show-branch", f"remotes/{self.remote}/{branch}"])

    # -------------------------------------------------------------------------
    # Mutations (output streamed to the terminal)
    # -------------------------------------------------------------------------

    def pull_rebase(self) -> Result[None, GitError]:
        return self._mutate(["pull", "--rebase"])

    def checkout(self, branch: str) -> Result[None, GitError]:
        return self._mutate(["checkout", branch])

    def create_branch(self, branch: str) -> Result[None, GitError]:
        """Create ``branch`` from HEAD and switch to it."""
        return self._mutate(["checkout", "-b", branch])

    def merge_no_ff(self, branch: str) -> Result[None, GitError]:
        """Merge ``branch`` into HEAD, always creating a merge commit."""
        return self._mutate(["merge", "--no-ff", "--no-edit", branch])

    def commit_paths(self, paths: list[str], message: str) -> Result[None, GitError]:
        """Commit only ``paths``, leaving anything else staged untouched."""
        return self._mutate(["commit", *paths, "-m", message])

    def tag(self, name: str) -> Result[None, GitError]:
        return self._mutate(["tag", name])

    def push(self) -> Result[None, GitError]:
        return self._mutate(["push"])

    def push_ref(self, ref: str) -> Result[None, GitError]:
        """Push a single ref (e.g. a tag) to the remote."""
        return self._mutate(["push", self.remote, ref])

    def push_upstream(self, branch: str) -> Result[None, GitError]:
        """Push a new branch and set it up to track the remote."""
        return self._mutate(["push", "--set-upstream", self.remote, branch])

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _query(self, args: list[str]) -> Result[str, GitError]:
        result = run_process(["git", *args], cwd=self.path)
        if isinstance(result, Err):
            return Err(_git_error(args, result.error))
        return result

    def _probe(self, args: list[str]) -> bool:
        result = run_silent(["git", *args], cwd=self.path)
        return isinstance(result, Ok) and result.value == 0

    def _mutate(self, args: list[str]) -> Result[None, GitError]:
        result = run_live(["git", *args], cwd=self.path)
        command = " ".join(args[:2])
        match result:
            case Err(e):
                return Err(_git_error(args, e))
            case Ok(0):
                return Ok(None)
            case Ok(status):
                return Err(
                    GitError(
                        command=command,
                        message=f"git {command} exited with status {status}",
                        returncode=exit_status(status),
                    )
                )


def _git_error(args: list[str], e: ProcessError) -> GitError:
    command = " ".join(args[:2])
    if not e.launched:
        return GitError(command=command, message=f"could not run git: {e.stderr}", returncode=1)
    return GitError(
        command=command,
        message=e.stderr.strip() or e.stdout.strip() or f"git {command} failed",
        returncode=exit_status(e.returncode),
    )
