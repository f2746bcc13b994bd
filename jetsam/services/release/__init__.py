"""Release workflow for ``release/vX.Y.Z`` branches."""

from .errors import ReleaseError
from .model import ReleaseBranch, parse_release_branch
from .workflow import ReleaseOptions, ReleaseWorkflow

__all__ = [
    "ReleaseBranch",
    "ReleaseError",
    "ReleaseOptions",
    "ReleaseWorkflow",
    "parse_release_branch",
]
