import re
import unicodedata
from typing import Optional, Tuple

_duplicate_slashes = re.compile(r"/+")
_leading_dot_slash = re.compile(r"^(?:\./)+")
_collation_tokens = re.compile(r"(\d+)|(.)", re.DOTALL)

# icu root collation order for ascii whitespace, punctuation and symbols.
# all of these sort before digits, and digits sort before letters.
_punctuation_order = "\t\n\r _-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"
_punctuation_rank = {char: rank for rank, char in enumerate(_punctuation_order)}

# fence identifiers used by downstream markdown emitters.
_language_hints = {
    "ts": "ts", "tsx": "tsx",
    "js": "js", "mjs": "js", "cjs": "js",
    "json": "json", "jsonc": "json",
    "yml": "yaml", "yaml": "yaml",
    "md": "md", "mdx": "md",
    "html": "html", "xml": "xml",
    "css": "css", "scss": "scss", "sass": "sass",
    "py": "python", "toml": "toml", "sh": "bash",
}


def to_posix_relative_path(rel_path: str) -> str:
    # normalizes separators to "/", collapses repeats and drops any leading "./".
    replaced = _duplicate_slashes.sub("/", rel_path.replace("\\", "/"))
    return _leading_dot_slash.sub("", replaced)


def posix_basename(rel_path: str) -> str:
    return rel_path.rsplit("/", 1)[-1]


def printable_path(rel_path: str) -> str:
    # undecodable name bytes (surrogate-escaped by the os layer) become \xNN text.
    try:
        raw = rel_path.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return rel_path.encode("utf-8", "backslashreplace").decode("utf-8")
    return raw.decode("utf-8", "backslashreplace")


def _collation_element(char: str) -> Tuple[int, int, str]:
    rank = _punctuation_rank.get(char)
    if rank is not None:
        return (0, rank, "")
    if char.isalpha():
        base = "".join(c for c in unicodedata.normalize("NFKD", char) if not unicodedata.combining(c))
        return (2, 0, (base or char).casefold())
    # remaining symbols follow the ascii ones, by code point.
    return (0, len(_punctuation_order) + ord(char), "")


def natural_sort_key(rel_path: str) -> Tuple:
    """
    sort key approximating icu's "en" collation with numeric ordering on:
    punctuation < digits < letters, digit runs compared by value, letters
    compared without case or accents. so "config_loader.py" sorts before
    "config.py", "file2" before "file10", and "Readme" sits next to "readme".
    the trailing component breaks ties (lowercase first) so the ordering is total.
    """
    elements = []
    for match in _collation_tokens.finditer(rel_path):
        digits, char = match.groups()
        if digits is not None:
            elements.append((1, int(digits), ""))
        else:
            elements.append(_collation_element(char))
    return tuple(elements), rel_path.swapcase()


def get_language_hint(rel_path: str) -> Optional[str]:
    # best-effort hint from the file extension; none for unknown extensions.
    base = posix_basename(rel_path.lower())
    if "." not in base:
        return None
    return _language_hints.get(base.rsplit(".", 1)[1])
