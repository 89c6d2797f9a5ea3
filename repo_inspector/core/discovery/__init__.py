# repo_inspector/core/discovery/__init__.py
"""
File discovery for repo-inspector.

Walks a repository root without following symlinks, prunes excluded
directory and file names, and returns a deterministically sorted list of
root-relative posix paths.
"""
from .exclusions import DEFAULT_EXCLUSION_POLICY, ExclusionPolicy
from .walker import FilesystemWalker
from ..ports import SkippedDirectory

__all__ = ["DEFAULT_EXCLUSION_POLICY", "ExclusionPolicy", "FilesystemWalker", "SkippedDirectory"]
