# repo_inspector/core/reader.py
"""
Filesystem implementation of ReaderPort.

Relative posix paths are normalized and joined onto the repository root;
blocking file calls run through aiofiles so classification tasks suspend only
at I/O.
"""
import os
import posixpath

import aiofiles
import aiofiles.os

from repo_inspector.core.ports import FileStat, ReaderOptions, ReaderPort
from repo_inspector.exceptions import ContentDecodeError, ContentReadError


class FilesystemReader(ReaderPort):
    def _resolve_abs(self, rel_path: str, options: ReaderOptions) -> str:
        normalized = posixpath.normpath(rel_path.replace("\\", "/"))
        if normalized == ".." or normalized.startswith("../") or posixpath.isabs(normalized):
            raise ContentReadError(f"path '{rel_path}' resolves outside the repository root")
        return os.path.join(options.root_abs_path, *normalized.split("/"))

    async def stat(self, rel_path: str, options: ReaderOptions) -> FileStat:
        abs_path = self._resolve_abs(rel_path, options)
        try:
            st = await aiofiles.os.stat(abs_path)
        except OSError as e:
            raise ContentReadError(f"cannot stat '{rel_path}': {e}") from e
        return FileStat(size_bytes=st.st_size)

    async def read_head(self, rel_path: str, n: int, options: ReaderOptions) -> bytes:
        abs_path = self._resolve_abs(rel_path, options)
        if n <= 0:
            return b""
        try:
            async with aiofiles.open(abs_path, "rb") as f_obj:
                chunks = []
                remaining = n
                # a single read may return short before eof; keep going until n or eof.
                while remaining > 0:
                    chunk = await f_obj.read(remaining)
                    if not chunk:
                        break
                    chunks.append(chunk)
                    remaining -= len(chunk)
        except OSError as e:
            raise ContentReadError(f"cannot read '{rel_path}': {e}") from e
        return b"".join(chunks)

    async def read_text_normalized(self, rel_path: str, options: ReaderOptions) -> str:
        abs_path = self._resolve_abs(rel_path, options)
        try:
            async with aiofiles.open(abs_path, "rb") as f_obj:
                content_bytes = await f_obj.read()
        except OSError as e:
            raise ContentReadError(f"cannot read '{rel_path}': {e}") from e
        try:
            text = content_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ContentDecodeError(f"'{rel_path}' is not valid utf-8: {e}") from e
        return text.replace("\r\n", "\n")
