# repo_inspector/core/binary.py
"""binary-content heuristic over a byte sample (nul bytes and ascii printable ratio)."""
from dataclasses import dataclass
from typing import Callable

ascii_printable_min = 0x20  # ' '
ascii_printable_max = 0x7E  # '~'
ascii_common_whitespace = frozenset((0x09, 0x0A, 0x0D))  # \t \n \r

DEFAULT_NON_PRINTABLE_THRESHOLD = 0.3
DEFAULT_TREAT_NUL_AS_BINARY = True

BinaryCheck = Callable[[bytes], bool]


@dataclass(frozen=True)
class BinaryHeuristicOptions:
    # any nul byte marks the sample binary without computing the ratio.
    treat_nul_as_binary: bool = DEFAULT_TREAT_NUL_AS_BINARY
    # ratio of non-printable bytes (0..1) above which the sample is binary.
    non_printable_threshold: float = DEFAULT_NON_PRINTABLE_THRESHOLD


def is_likely_binary(sample: bytes, options: BinaryHeuristicOptions = BinaryHeuristicOptions()) -> bool:
    if not sample:
        return False

    non_printable = 0
    for byte in sample:
        if options.treat_nul_as_binary and byte == 0x00:
            return True
        if not (ascii_printable_min <= byte <= ascii_printable_max or byte in ascii_common_whitespace):
            non_printable += 1

    return non_printable / len(sample) > options.non_printable_threshold


def make_binary_check(options: BinaryHeuristicOptions) -> BinaryCheck:
    # binds options into the one-argument callable the classification service expects.
    def binary_check(sample: bytes) -> bool:
        return is_likely_binary(sample, options)
    return binary_check
