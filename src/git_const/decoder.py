"""Turns captured git stdout into a constant value."""
from __future__ import annotations

from .diagnostics import DecodeError, EmptyOutputError, compile_error


def decode_output(data: bytes) -> str:
    """Decode git stdout as UTF-8 and strip surrounding whitespace.

    Raises:
        DecodeError: If ``data`` is not valid UTF-8.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise compile_error(f"git output is not valid utf-8: {e}", DecodeError) from e
    return text.strip()


def decode_single_line(data: bytes) -> str:
    """Like :func:`decode_output`, but the value must be one non-empty line."""
    value = decode_output(data)
    if not value:
        raise compile_error("git printed no output", EmptyOutputError)
    if "\n" in value or "\r" in value:
        first = value.splitlines()[0]
        raise compile_error(f"git printed more than one line, starting with: {first}", DecodeError)
    return value
