"""Time offset formatting helpers."""

from __future__ import annotations


def format_offset(seconds: float) -> str:
    """Render an offset in seconds compactly: 10 -> "10", 12.5 -> "12.5".

    Integral floats drop their trailing ".0" so filenames and ffmpeg
    arguments look the same whether the caller sent 10 or 10.0.
    """
    if float(seconds).is_integer():
        return str(int(seconds))
    return repr(float(seconds))
