"""Atomic file replacement shared by the cache, writer and index publisher."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def encode_json(obj: Any, **kwargs: Any) -> bytes:
    """Serialize *obj* as UTF-8 JSON with a trailing newline.

    Raises ``ValueError`` (``UnicodeEncodeError``) for text that has no
    UTF-8 form, such as a lone surrogate, before any file is touched.
    """
    return (json.dumps(obj, **kwargs) + "\n").encode("utf-8")


def write_atomic(path: Path, data: bytes) -> None:
    """Replace *path* with *data* via a temporary sibling and ``os.replace``.

    Readers see either the old file or the new one, never a partial
    write.  Raises ``OSError`` on failure; the temporary file is removed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
