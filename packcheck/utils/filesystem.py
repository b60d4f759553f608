# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Filesystem helpers for packcheck.

Reads used by validators are async so the harness can suspend on them the
same way it suspends on tool invocations. Writes are atomic: a temp file in
the target directory renamed over the target, so a crash never leaves a
half-written package.json behind.
"""

import asyncio
import json
import tempfile
from pathlib import Path
from typing import Any


def read_text(file_path: Path, encoding: str = "utf-8") -> str:
    """
    Read a text file with proper error context.

    Raises:
        FileNotFoundError: If the path doesn't exist.
        IsADirectoryError: If the path is a directory.
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    if not file_path.is_file():
        raise IsADirectoryError(f"Expected a file, got a directory: {file_path}")
    return file_path.read_text(encoding=encoding)


async def read_text_async(file_path: Path, encoding: str = "utf-8") -> str:
    """read_text in a worker thread."""
    return await asyncio.to_thread(read_text, file_path, encoding)


async def read_bytes_async(file_path: Path) -> bytes:
    if not file_path.is_file():
        raise FileNotFoundError(f"File not found: {file_path}")
    return await asyncio.to_thread(file_path.read_bytes)


def atomic_write(target_path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Write content to a file atomically.

    The temp file lives in the same directory as the target so the final
    rename stays on one filesystem.

    Raises:
        OSError: If the write or rename fails.
    """
    target_path.parent.mkdir(parents=True, exist_ok=True)

    temp_fd = tempfile.NamedTemporaryFile(
        mode="w",
        encoding=encoding,
        dir=str(target_path.parent),
        prefix=".packcheck_tmp_",
        suffix=".tmp",
        delete=False,
    )
    temp_path = Path(temp_fd.name)

    try:
        temp_fd.write(content)
        temp_fd.flush()
        temp_fd.close()
        temp_path.replace(target_path)
    except BaseException:
        temp_fd.close()
        if temp_path.exists():
            temp_path.unlink()
        raise


def read_json(file_path: Path) -> Any:
    return json.loads(read_text(file_path))


def write_json(file_path: Path, data: Any) -> None:
    """Write JSON with a trailing newline, the way npm leaves package.json."""
    atomic_write(file_path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")
