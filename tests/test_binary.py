import pytest

from repo_inspector.core.binary import BinaryHeuristicOptions, is_likely_binary, make_binary_check


class TestIsLikelyBinary:
    def test_empty_sample_is_not_binary(self):
        assert is_likely_binary(b"") is False

    def test_nul_byte_is_binary_even_with_zero_ratio(self):
        assert is_likely_binary(b"plain text\x00more plain text") is True

    def test_tab_separated_text_is_not_binary(self):
        assert is_likely_binary(b"hello\tworld") is False

    def test_common_whitespace_counts_as_printable(self):
        assert is_likely_binary(b"line one\r\nline two\n\tindented\n") is False

    @pytest.mark.parametrize("sample, expected", [
        (b"\x01\x02\x03abcdefg", False),  # exactly 0.3: not strictly above
        (b"\x01\x02\x03\x04abcdef", True),  # 0.4
        (bytes(range(0x80, 0x100)), True),
    ])
    def test_ratio_must_strictly_exceed_threshold(self, sample, expected):
        assert is_likely_binary(sample) is expected

    def test_nul_ignored_when_disabled(self):
        options = BinaryHeuristicOptions(treat_nul_as_binary=False)
        assert is_likely_binary(b"0123456789\x00", options) is False

    def test_custom_threshold(self):
        options = BinaryHeuristicOptions(non_printable_threshold=0.05)
        assert is_likely_binary(b"\x7fabcdefghi", options) is True


def test_make_binary_check_binds_options():
    check = make_binary_check(BinaryHeuristicOptions(treat_nul_as_binary=False, non_printable_threshold=1.0))
    assert check(b"\x00\x00\x00") is False
    assert make_binary_check(BinaryHeuristicOptions())(b"\x00") is True
