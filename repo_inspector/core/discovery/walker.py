# repo_inspector/core/discovery/walker.py
import os
import stat
from typing import List, Optional

from repo_inspector.core.discovery.pattern_matching import is_excluded_by_spec
from repo_inspector.core.ports import DiscoveredEntry, DiscoveryOptions, DiscoveryPort, SkippedDirectory
from repo_inspector.exceptions import RootIsSymlinkError, RootNotDirectoryError
from repo_inspector.util import natural_sort_key, to_posix_relative_path

_link, _directory, _file = "link", "directory", "file"


def _validate_root(root: str) -> None:
    try:
        root_stat = os.lstat(root)
    except OSError as e:
        raise RootNotDirectoryError(f"root path '{root}' is not an accessible directory: {e}") from e
    if stat.S_ISLNK(root_stat.st_mode):
        raise RootIsSymlinkError(f"root path '{root}' is a symlink, which discovery does not follow.")
    if not stat.S_ISDIR(root_stat.st_mode):
        raise RootNotDirectoryError(f"root path '{root}' is not a directory.")


def _entry_kind(entry: os.DirEntry) -> Optional[str]:
    # link status is resolved before anything else so links are never followed.
    try:
        if entry.is_symlink():
            return _link
        if entry.is_dir(follow_symlinks=False):
            return _directory
        if entry.is_file(follow_symlinks=False):
            return _file
    except OSError:
        pass

    # indeterminate type: ask lstat directly.
    try:
        mode = os.lstat(entry.path).st_mode
    except OSError:
        return None
    if stat.S_ISLNK(mode):
        return _link
    if stat.S_ISDIR(mode):
        return _directory
    if stat.S_ISREG(mode):
        return _file
    return None


class FilesystemWalker(DiscoveryPort):
    """
    Iterative depth-first traversal over an explicit stack of absolute
    directory paths.

    - symlinks (files or directories) are skipped, never followed.
    - excluded directory names are pruned before their contents are listed.
    - a directory that cannot be opened is skipped with its whole subtree and
      recorded in `skipped_directories`; no exception reaches the caller.
    - output is sorted with `natural_sort_key`; visiting order carries no meaning.
    """

    def __init__(self) -> None:
        self.skipped_directories: List[SkippedDirectory] = []

    def discover(self, options: DiscoveryOptions) -> List[DiscoveredEntry]:
        root = os.path.abspath(options.root_abs_path)
        _validate_root(root)
        self.skipped_directories = []

        excluded_dirs = options.excluded_dir_names
        excluded_files = options.excluded_file_names
        exclude_spec = options.exclude_spec

        discovered: List[str] = []
        stack: List[str] = [root]

        while stack:
            dir_abs = stack.pop()
            try:
                with os.scandir(dir_abs) as dir_entries:
                    for entry in dir_entries:
                        kind = _entry_kind(entry)
                        if kind is None or kind == _link:
                            continue

                        rel_path = to_posix_relative_path(os.path.relpath(entry.path, root))
                        if kind == _directory:
                            if entry.name.lower() in excluded_dirs:
                                continue
                            if is_excluded_by_spec(exclude_spec, rel_path, is_dir=True):
                                continue
                            stack.append(entry.path)
                        else:
                            if entry.name.lower() in excluded_files:
                                continue
                            if is_excluded_by_spec(exclude_spec, rel_path, is_dir=False):
                                continue
                            discovered.append(rel_path)
            except OSError as e:
                self.skipped_directories.append(
                    SkippedDirectory(
                        relative_path=to_posix_relative_path(os.path.relpath(dir_abs, root)),
                        error=e.strerror or str(e),
                    )
                )
                continue

        discovered.sort(key=natural_sort_key)
        return [DiscoveredEntry(relative_path=p) for p in discovered]
