import pytest

from conftest import create_project_structure
from repo_inspector.core.binary import is_likely_binary
from repo_inspector.core.classification import (
    ClassificationDecision,
    ClassificationService,
    FileCategory,
    OmitReason,
    omit_reason_for_error,
)
from repo_inspector.core.ports import FileStat, ReaderOptions, ReaderPort
from repo_inspector.core.reader import FilesystemReader
from repo_inspector.exceptions import ContentDecodeError, ContentReadError


class RecordingReader(ReaderPort):
    """In-memory reader that records which operations were called."""

    def __init__(self, files):
        self.files = files
        self.calls = []

    async def stat(self, rel_path, options):
        self.calls.append(("stat", rel_path))
        if rel_path not in self.files:
            raise ContentReadError(f"cannot stat '{rel_path}'")
        return FileStat(size_bytes=len(self.files[rel_path]))

    async def read_head(self, rel_path, n, options):
        self.calls.append(("read_head", rel_path))
        return self.files[rel_path][:n]

    async def read_text_normalized(self, rel_path, options):
        return self.files[rel_path].decode("utf-8")


OPTIONS = ReaderOptions(root_abs_path="/repo", max_bytes=204800)


@pytest.mark.asyncio
class TestStageOrder:
    async def test_oversized_file_is_omitted_regardless_of_content(self):
        reader = RecordingReader({"big.txt": b"a" * 204801})
        result = await ClassificationService().classify_one("big.txt", reader, OPTIONS, is_likely_binary)
        assert result.decision == ClassificationDecision.omit(OmitReason.SIZE_OVER_LIMIT)
        assert ("read_head", "big.txt") not in reader.calls

    async def test_file_at_limit_is_not_oversized(self):
        reader = RecordingReader({"edge.ts": b"a" * 204800})
        result = await ClassificationService().classify_one("edge.ts", reader, OPTIONS, is_likely_binary)
        assert result.decision.category is FileCategory.CODE

    async def test_size_check_fires_before_binary_check(self):
        reader = RecordingReader({"big.bin": b"\x00\xff" * 150000})
        result = await ClassificationService().classify_one("big.bin", reader, OPTIONS, is_likely_binary)
        assert result.decision.reason is OmitReason.SIZE_OVER_LIMIT

    async def test_binary_sample_is_omitted(self):
        reader = RecordingReader({"image.png": b"\x89PNG\r\n\x1a\n\x00\x00"})
        result = await ClassificationService().classify_one("image.png", reader, OPTIONS, is_likely_binary)
        assert result.decision == ClassificationDecision.omit(OmitReason.LIKELY_BINARY)

    async def test_head_sample_size_is_respected(self):
        seen = []
        reader = RecordingReader({"a.ts": b"x" * 10000})
        service = ClassificationService(head_sample_bytes=128)
        await service.classify_one("a.ts", reader, OPTIONS, lambda sample: seen.append(len(sample)) or False)
        assert seen == [128]

    async def test_service_max_bytes_overrides_reader_options(self):
        reader = RecordingReader({"a.ts": b"x" * 100})
        result = await ClassificationService(max_bytes=50).classify_one("a.ts", reader, OPTIONS, is_likely_binary)
        assert result.decision.reason is OmitReason.SIZE_OVER_LIMIT

    async def test_reader_errors_propagate(self):
        with pytest.raises(ContentReadError):
            await ClassificationService().classify_one("gone.ts", RecordingReader({}), OPTIONS, is_likely_binary)


@pytest.mark.asyncio
async def test_tab_separated_text_file_is_never_binary(project_dir):
    create_project_structure(project_dir, {"hello.txt": "hello\tworld"})
    options = ReaderOptions(root_abs_path=str(project_dir), max_bytes=204800)
    result = await ClassificationService().classify_one("hello.txt", FilesystemReader(), options, is_likely_binary)
    assert result.decision.reason is not OmitReason.LIKELY_BINARY
    assert result.decision.category is FileCategory.CODE


class TestNamingRules:
    @pytest.mark.parametrize("path, category, hint", [
        (".github/workflows/ci.yml", FileCategory.CONFIG, "yaml"),
        (".GitLab/ci/build.yml", FileCategory.CONFIG, "yaml"),
        ("src/main.ts", FileCategory.CODE, "ts"),
        ("package.json", FileCategory.CONFIG, "json"),
        ("services/api/tsconfig.json", FileCategory.CONFIG, "json"),
        ("Dockerfile", FileCategory.CONFIG, None),
        ("pyproject.toml", FileCategory.CONFIG, "toml"),
        ("docs/readme.md", FileCategory.CODE, "md"),
        ("bin/run", FileCategory.CODE, None),
    ])
    def test_classify_by_name(self, path, category, hint):
        decision = ClassificationService().classify_by_name(path)
        assert decision.category is category
        assert decision.language_hint == hint
        assert decision.reason is None


class TestDecisionInvariant:
    def test_omit_requires_reason(self):
        with pytest.raises(ValueError):
            ClassificationDecision(category=FileCategory.OMIT)

    def test_reason_only_allowed_for_omit(self):
        with pytest.raises(ValueError):
            ClassificationDecision(category=FileCategory.CODE, reason=OmitReason.READ_ERROR)

    def test_to_dict_leaves_out_absent_fields(self):
        assert ClassificationDecision.omit(OmitReason.LIKELY_BINARY).to_dict() == {
            "category": "omit", "reason": "LIKELY_BINARY",
        }
        assert ClassificationDecision(FileCategory.CODE, language_hint="ts").to_dict() == {
            "category": "code", "language_hint": "ts",
        }


@pytest.mark.parametrize("error, reason", [
    (ContentDecodeError("bad bytes"), OmitReason.UNKNOWN_ENCODING),
    (ContentReadError("gone"), OmitReason.READ_ERROR),
    (PermissionError("denied"), OmitReason.READ_ERROR),
    (RuntimeError("boom"), OmitReason.READ_ERROR),
])
def test_omit_reason_for_error(error, reason):
    assert omit_reason_for_error(error) is reason
