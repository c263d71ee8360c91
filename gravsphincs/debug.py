"""Text formatting of intermediate values for tracing."""

from __future__ import annotations

from collections.abc import Iterable

_MASK64 = 0xFFFFFFFFFFFFFFFF
_BYTES_PER_LINE = 32


def format_bytes(label: str, data: bytes) -> str:
    """Label, length and hex dump with 32 bytes per line, followed by a blank line."""
    data = bytes(data)
    lines = [
        data[i:i + _BYTES_PER_LINE].hex()
        for i in range(0, len(data), _BYTES_PER_LINE)
    ]
    return f"{label} ({len(data)}):\n" + "\n".join(lines) + "\n\n"


def format_ints(label: str, values: Iterable[int]) -> str:
    """Label, count and space-terminated integers, followed by a blank line."""
    items = list(values)
    body = "".join(f"{v} " for v in items)
    return f"{label} ({len(items)}):\n{body}\n\n"


def format_int(label: str, value: int) -> str:
    """Label and value as an unsigned 64-bit integer, followed by a blank line."""
    return f"{label}: {value & _MASK64}\n\n"