"""Atomic output file writing."""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator


@contextmanager
def atomic_destination(dest: Path) -> Iterator[Path]:
    """Yield a temporary path beside `dest`; rename it into place on success.

    The temporary name keeps the destination's suffix so tools that infer the
    container from the extension (ffmpeg) see the right one. On any failure
    the temporary file is removed and `dest` is left untouched.
    """
    dest.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(
        dir=dest.parent, suffix=dest.suffix, prefix=".yt_media_"
    )
    os.close(fd)
    try:
        yield Path(tmp_path)
        os.replace(tmp_path, dest)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def write_stream(chunks: Iterable[bytes], dest: Path) -> int:
    """Write a byte stream to `dest` atomically. Returns the number of bytes written."""
    written = 0
    with atomic_destination(dest) as tmp:
        with open(tmp, "wb") as f:
            for chunk in chunks:
                f.write(chunk)
                written += len(chunk)
    return written
