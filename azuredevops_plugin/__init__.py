"""Azure DevOps REST plugin package."""

from .version import __version__  # noqa: F401
