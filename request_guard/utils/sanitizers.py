"""Sanitizers for untrusted text, nested payloads and upload file names.

None of these raise for hostile input; they return a cleaned value. The only
failure is a cyclic payload passed to ``sanitize_structure``, which is a
caller bug and raises ``ValueError``.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

# <script ...> up to the first </script>, whatever sits in between
_SCRIPT_BLOCK_RE = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>",
    re.IGNORECASE,
)
_TAG_RE = re.compile(r"<[^>]+>")
_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    "'": "&#39;",
    '"': "&quot;",
}
_ESCAPE_RE = re.compile(r"[<>'\"]")

_UNSAFE_FILENAME_CHARS_RE = re.compile(r"[^a-zA-Z0-9.-]")
_DOT_RUN_RE = re.compile(r"\.{2,}")
MAX_FILE_NAME_LENGTH = 255


def sanitize_text(text: str | None) -> str:
    """Strip markup from ``text`` and escape what is left.

    Script blocks are removed with their content, other tags are removed but
    their inner text kept, then ``< > ' "`` are turned into HTML entities and
    the result is trimmed. ``&`` is not escaped.

    Args:
        text: Untrusted input. ``None`` or empty yields ``""``.

    Returns:
        str: Text safe to embed in HTML body content.

    Examples:
        >>> sanitize_text("<script>alert(1)</script>hello")
        'hello'
        >>> sanitize_text(" <b>it's</b> ")
        'it&#39;s'
    """
    if not text:
        return ""

    text = _SCRIPT_BLOCK_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    text = _ESCAPE_RE.sub(lambda match: _ESCAPES[match.group(0)], text)
    return text.strip()


def sanitize_structure(value: Any) -> Any:
    """Recursively sanitize every string inside a JSON-like payload.

    Cases:
        - ``str``: passed through :func:`sanitize_text`.
        - ``Mapping``: rebuilt as a ``dict`` from its own items; string keys
          and all values are sanitized. When two keys sanitize to the same
          string the later item wins.
        - ``list`` / ``tuple``: same type, order and length.
        - anything else (numbers, booleans, ``None``, bytes): unchanged.

    Args:
        value: Payload to clean.

    Returns:
        A sanitized copy; the input is never mutated.

    Raises:
        ValueError: If the payload contains a reference cycle.
    """
    return _sanitize_value(value, set())


def _sanitize_value(value: Any, path: set[int]) -> Any:
    if isinstance(value, str):
        return sanitize_text(value)

    if isinstance(value, Mapping):
        with _visiting(value, path):
            return {
                (sanitize_text(key) if isinstance(key, str) else key): _sanitize_value(item, path)
                for key, item in value.items()
            }

    if isinstance(value, (list, tuple)):
        with _visiting(value, path):
            items = [_sanitize_value(item, path) for item in value]
            # namedtuples take their fields positionally
            if hasattr(value, "_fields"):
                return type(value)(*items)
            return type(value)(items)

    return value


@contextmanager
def _visiting(container: object, path: set[int]) -> Iterator[None]:
    # Only containers on the current branch count; shared siblings are fine.
    marker = id(container)
    if marker in path:
        raise ValueError("cannot sanitize a structure that contains a reference cycle")
    path.add(marker)
    try:
        yield
    finally:
        path.discard(marker)


def sanitize_file_name(name: str) -> str:
    """Make an uploaded file name safe to use as a storage key.

    Every character outside ``[A-Za-z0-9.-]`` becomes ``_``, runs of dots
    collapse to one (no ``..`` traversal) and the result is capped at 255
    characters.

    Examples:
        >>> sanitize_file_name("../../etc/passwd")
        '._._etc_passwd'
        >>> sanitize_file_name("my photo (1).png")
        'my_photo__1_.png'
    """
    name = _UNSAFE_FILENAME_CHARS_RE.sub("_", name)
    name = _DOT_RUN_RE.sub(".", name)
    return name[:MAX_FILE_NAME_LENGTH]
