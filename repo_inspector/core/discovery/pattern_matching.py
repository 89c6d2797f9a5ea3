# repo_inspector/core/discovery/pattern_matching.py
from typing import List, Optional

import pathspec

from repo_inspector.exceptions import DiscoveryError


def compile_glob_patterns_to_spec(glob_patterns: List[str]) -> Optional[pathspec.PathSpec]:
    # compiles gitignore-style glob patterns into a pathspec object for matching.
    if not glob_patterns:
        return None
    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", glob_patterns)
    except Exception as e:
        raise DiscoveryError(f"error compiling glob patterns {glob_patterns}: {e}") from e


def is_excluded_by_spec(spec: Optional[pathspec.PathSpec], rel_posix_path: str, is_dir: bool) -> bool:
    # directories are matched with a trailing slash so "build/" style patterns apply.
    if spec is None:
        return False
    return spec.match_file(f"{rel_posix_path}/" if is_dir else rel_posix_path)
