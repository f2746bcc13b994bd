"""Release procedure for a ``release/vX.Y.Z`` branch.

The run is a straight pipeline of gated steps. Each step returns a
``Result``; the first ``Err`` ends the run and nothing is retried or rolled
back. Steps that mutate the repository are skipped in dry-run mode, while
every check and confirmation still happens, so an operator can rehearse the
whole gate sequence without touching git.

Steps, in order:

1. current branch must be a release branch
2. the version tag must not exist yet
3. no tracked file may differ from HEAD
4. no commits may differ from the remote branch
5. operator confirms the version
6. manifest version must match the branch (checked again after the pull)
7. rebase-pull the release branch (mutating)
8. changelog must have a heading for the version (optional)
9. pre-commit checks pass on the release branch
10. merge into trunk and re-run pre-commit checks (mutating)
11. push the merge and the version tag (mutating, confirmed)
12. optionally open the next release branch (mutating, confirmed)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from jetsam.core.config import JetsamConfig
from jetsam.core.result import Err, Ok, Result
from jetsam.git.repository import GitError, Repository
from jetsam.output.console import ConsoleProtocol, Style
from jetsam.platform.process import run_live
from jetsam.platform.prompt import confirm, get_input
from jetsam.services.release.errors import (
    ReleaseError,
    command_failed,
    declined,
    precondition,
)
from jetsam.services.release.manifest import (
    bump_manifest_version,
    check_changelog,
    check_manifest_version,
)
from jetsam.services.release.model import (
    DEFAULT_NEXT_RELEASE,
    NEXT_RELEASE_CHOICES,
    ReleaseBranch,
    ReleaseBump,
    parse_release_branch,
    release_branch_name,
    version_tag,
)
from jetsam.services.release.semver import next_version

Step = Callable[[ReleaseBranch], Result[None, ReleaseError]]


@dataclass(frozen=True, slots=True)
class ReleaseOptions:
    dry_run: bool = False
    ignore_changelog: bool = False


class ReleaseWorkflow:
    """Validate, merge, tag and push the current release branch."""

    def __init__(
        self,
        *,
        project_root: Path,
        config: JetsamConfig,
        console: ConsoleProtocol,
        options: ReleaseOptions,
    ) -> None:
        self._root = project_root
        self._config = config
        self._console = console
        self._options = options
        self._repo = Repository(project_root, remote=config.release.remote)

    @property
    def _trunk(self) -> str:
        return self._config.release.trunk

    @property
    def _remote(self) -> str:
        return self._config.release.remote

    @property
    def _reset_hint(self) -> str:
        return f'Issue "git reset --hard {self._remote}/{self._trunk}" to undo merge'

    def run(self) -> Result[str, ReleaseError]:
        """Run every step; returns the tag that was released."""
        branch = self._validate_branch()
        if isinstance(branch, Err):
            return branch
        release = branch.value

        steps: tuple[Step, ...] = (
            self._check_tag_unused,
            self._check_clean_checkout,
            self._check_up_to_date,
            self._confirm_release,
            self._check_manifest,
            self._sync_release_branch,
            self._check_manifest,
            self._check_changelog,
            self._pre_commit_on_release_branch,
            self._merge_into_trunk,
            self._push_release,
            self._provision_next_branch,
        )
        for step in steps:
            outcome = step(release)
            if isinstance(outcome, Err):
                return outcome

        self._console.success(f"Successfully created release {release.tag}")
        return Ok(release.tag)

    # -------------------------------------------------------------------------
    # Read-only gates
    # -------------------------------------------------------------------------

    def _validate_branch(self) -> Result[ReleaseBranch, ReleaseError]:
        current = self._repo.current_branch()
        if isinstance(current, Err) or not current.value:
            return Err(precondition("Failed to get the git branch name"))

        release = parse_release_branch(current.value)
        if release is None:
            return Err(
                precondition(
                    f'Branch "{current.value}" does not conform to the naming convention '
                    '"release/vX.Y.Z"'
                )
            )
        return Ok(release)

    def _check_tag_unused(self, release: ReleaseBranch) -> Result[None, ReleaseError]:
        if self._repo.tag_exists(release.tag):
            return Err(precondition(f'The release tag "{release.tag}" already exists'))
        return Ok(None)

    def _check_clean_checkout(self, release: ReleaseBranch) -> Result[None, ReleaseError]:
        modified = self._repo.modified_files()
        if isinstance(modified, Err):
            return Err(precondition("Failed to determine if the checkout is clean"))

        if modified.value:
            listing = "\n".join(f"  - {path}" for path in modified.value)
            return Err(
                precondition(
                    f"The checkout is not clean with at least one modified file:\n{listing}\n"
                )
            )
        return Ok(None)

    def _check_up_to_date(self, release: ReleaseBranch) -> Result[None, ReleaseError]:
        ahead = self._repo.commits_ahead(release.name)
        if isinstance(ahead, Err):
            return Err(
                precondition("Failed to determine if the local checkout is ahead of the origin")
            )

        if ahead.value != 0:
            return Err(
                precondition(f"The local branch is {ahead.value} commits ahead of the origin")
            )
        return Ok(None)

    def _confirm_release(self, release: ReleaseBranch) -> Result[None, ReleaseError]:
        return self._confirm(f'Do you wish to release version "{release.tag}"')

    def _check_manifest(self, release: ReleaseBranch) -> Result[None, ReleaseError]:
        return check_manifest_version(self._root / self._config.release.manifest, release.version)

    def _check_changelog(self, release: ReleaseBranch) -> Result[None, ReleaseError]:
        if self._options.ignore_changelog:
            return Ok(None)
        return check_changelog(self._root / self._config.release.changelog, release.version)

    def _pre_commit_on_release_branch(self, release: ReleaseBranch) -> Result[None, ReleaseError]:
        self._console.banner(f"Checking version {release.tag} passes pre-commit checks")
        return self._pre_commit(f"Pre-commit checks failed on {release.name}")

    # -------------------------------------------------------------------------
    # Mutating steps (skipped in dry-run)
    # -------------------------------------------------------------------------

    def _sync_release_branch(self, release: ReleaseBranch) -> Result[None, ReleaseError]:
        self._console.banner(f"Updating local branch {release.name} from {self._remote}")
        return self._git(
            self._repo.pull_rebase,
            "git pull --rebase",
            "Failed to update the local branch from the origin",
        )

    def _merge_into_trunk(self, release: ReleaseBranch) -> Result[None, ReleaseError]:
        trunk = self._trunk

        self._console.banner(f"Ensuring {trunk} is up to date")
        outcome = self._git(
            lambda: self._repo.checkout(trunk),
            f"git checkout {trunk}",
            f"Failed to change branch to {trunk}",
        )
        if isinstance(outcome, Err):
            return outcome

        outcome = self._git(
            self._repo.pull_rebase,
            "git pull --rebase",
            f"Failed to pull latest changes to {trunk} from {self._remote}",
        )
        if isinstance(outcome, Err):
            return outcome

        self._console.banner(f"Merging {release.name} into {trunk}")
        outcome = self._git(
            lambda: self._repo.merge_no_ff(release.name),
            f"git merge --no-ff --no-edit {release.name}",
            f"Failed to merge {release.name} into {trunk}",
            hint=self._reset_hint,
        )
        if isinstance(outcome, Err):
            return outcome

        if self._options.dry_run:
            return Ok(None)

        self._console.banner(f"Checking {trunk} passes pre-commit checks after merge")
        return self._pre_commit(
            f"Pre-commit checks failed on {trunk} after merge", hint=self._reset_hint
        )

    def _push_release(self, release: ReleaseBranch) -> Result[None, ReleaseError]:
        tag = release.tag

        outcome = self._confirm(f'Pushing release "{tag}" to {self._remote} ... continue')
        if isinstance(outcome, Err):
            return outcome

        self._console.banner(f"Pushing result of merging {tag} to the {self._remote}")
        outcome = self._git(
            self._repo.push,
            "git push",
            f"Failed to push the merge of {release.name} to {self._remote}",
            hint=self._reset_hint,
        )
        if isinstance(outcome, Err):
            return outcome

        outcome = self._confirm(f'Tagging release "{tag}" ... continue')
        if isinstance(outcome, Err):
            return outcome

        self._console.banner(f"Tagging release {tag}")
        outcome = self._git(
            lambda: self._repo.tag(tag),
            f"git tag {tag}",
            f'Failed to create local tag "{tag}"',
        )
        if isinstance(outcome, Err):
            return outcome

        return self._git(
            lambda: self._repo.push_ref(tag),
            f"git push {self._remote} {tag}",
            f'Failed to push local tag "{tag}" to {self._remote}',
        )

    def _provision_next_branch(self, release: ReleaseBranch) -> Result[None, ReleaseError]:
        self._console.banner("Creating branch for next release")
        answer = get_input(
            "What is the expected type of the next release",
            NEXT_RELEASE_CHOICES,
            DEFAULT_NEXT_RELEASE,
        )
        if answer == "none":
            return Ok(None)

        computed = next_version(
            version=release.version,
            bump=cast(ReleaseBump, answer),
            semver_cmd=self._config.tools.semver,
            project_root=self._root,
        )
        if isinstance(computed, Err):
            return computed
        next_num = computed.value
        next_tag = version_tag(next_num)
        new_branch = release_branch_name(next_num)

        if self._repo.branch_exists(new_branch):
            return Err(precondition(f'A branch for release "{next_tag}" already exists locally'))
        if self._repo.remote_branch_exists(new_branch):
            return Err(
                precondition(
                    f'A branch for release "{next_tag}" already exists on the {self._remote}'
                )
            )

        if self._options.dry_run:
            self._console.print(f"dry-run: would create {new_branch}", Style.DIM)
            return Ok(None)

        self._console.banner(f"Creating release branch for {next_tag}")
        outcome = self._git(
            lambda: self._repo.create_branch(new_branch),
            f"git checkout -b {new_branch}",
            f"Failed to create release branch {new_branch}",
        )
        if isinstance(outcome, Err):
            return outcome

        outcome = bump_manifest_version(
            project_root=self._root,
            package_manager=self._config.tools.package_manager,
            version=next_num,
        )
        if isinstance(outcome, Err):
            return outcome

        manifest = self._config.release.manifest
        outcome = self._git(
            lambda: self._repo.commit_paths([manifest], f"Bump version to {next_num}"),
            f"git commit {manifest}",
            f"Failed to commit version bump to {manifest}",
        )
        if isinstance(outcome, Err):
            return outcome

        outcome = self._confirm(f'Pushing new branch "{new_branch}" to {self._remote} ... continue')
        if isinstance(outcome, Err):
            return outcome

        return self._git(
            lambda: self._repo.push_upstream(new_branch),
            f"git push --set-upstream {self._remote} {new_branch}",
            f"Failed to push branch {new_branch} to {self._remote}",
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _confirm(self, question: str) -> Result[None, ReleaseError]:
        if not confirm(question):
            return Err(declined())
        return Ok(None)

    def _git(
        self,
        action: Callable[[], Result[None, GitError]],
        display: str,
        failure: str,
        *,
        hint: str | None = None,
    ) -> Result[None, ReleaseError]:
        if self._options.dry_run:
            self._console.print(f"dry-run: {display}", Style.DIM)
            return Ok(None)

        result = action()
        if isinstance(result, Err):
            return Err(command_failed(failure, returncode=result.error.returncode, hint=hint))
        return Ok(None)

    def _pre_commit(self, failure: str, *, hint: str | None = None) -> Result[None, ReleaseError]:
        tools = self._config.tools
        cmd = [tools.package_manager, tools.pre_commit_script]
        match run_live(cmd, cwd=self._root):
            case Ok(0):
                return Ok(None)
            case Ok(status):
                return Err(command_failed(failure, returncode=status, hint=hint))
            case Err(e):
                return Err(command_failed(f"{failure}: {e}", returncode=1, hint=hint))
