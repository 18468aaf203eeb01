"""Helpers for multipart uploads."""

from __future__ import annotations

from os import SEEK_END

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool


def has_file(file: UploadFile | None) -> bool:
    """True when the form actually carried a file (browsers send empty parts)."""
    return file is not None and bool(file.filename)


async def get_upload_file_size(file: UploadFile) -> int:
    """Read size from the underlying file object without loading into memory."""

    def _get_size() -> int:
        stream = file.file
        original_pos = stream.tell()
        try:
            stream.seek(0, SEEK_END)
            return stream.tell()
        finally:
            stream.seek(original_pos)

    return await run_in_threadpool(_get_size)
