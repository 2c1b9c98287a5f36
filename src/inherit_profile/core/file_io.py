"""File I/O utilities.

Single source of truth for the file access patterns used by the pipeline:
- Atomic text writes (temp file + fsync + rename)
- Tolerant text reads that treat a missing file as "no content"
- Directory management
"""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Callable, Optional, TextIO, Union


PathLike = Union[str, Path]


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory for ``path`` exists."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def _atomic_write(
    path: Path,
    write_fn: Callable[[TextIO], None],
    *,
    encoding: str = "utf-8",
) -> None:
    """Write to ``path`` atomically using a temp file + fsync + rename.

    - Parent directory is created if missing
    - Data is written to a temporary file in the same directory
    - File is fsync'd, then atomically replaced
    - Any leftover temp file is cleaned up on failure
    """
    path = Path(path)
    ensure_parent_dir(path)

    tmp_path: Optional[Path] = None
    try:
        # newline="" keeps the document's own line endings byte-identical.
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            newline="",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())

        os.replace(str(tmp_path), str(path))
    finally:
        if tmp_path is not None and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                pass


def read_text(path: PathLike) -> str:
    """Read a UTF-8 text file.

    - Missing files raise :class:`FileNotFoundError`
    - Other I/O errors are propagated to callers
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Text file not found: {path}")
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def read_text_or_none(path: PathLike) -> Optional[str]:
    """Read a UTF-8 text file, returning ``None`` when it does not exist."""
    try:
        return read_text(path)
    except FileNotFoundError:
        return None


def write_text(path: PathLike, content: str) -> None:
    """Atomically write UTF-8 text to ``path``."""
    target = Path(path)

    def _writer(f: TextIO) -> None:
        f.write(content)

    _atomic_write(target, _writer)


def ensure_directory(path: Path) -> Path:
    """Ensure directory exists, creating it if necessary.

    Raises:
        NotADirectoryError: If ``path`` exists but is not a directory
    """
    path = Path(path)
    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {path}")
        return path
    path.mkdir(parents=True, exist_ok=True)
    return path


__all__ = [
    "PathLike",
    "ensure_parent_dir",
    "read_text",
    "read_text_or_none",
    "write_text",
    "ensure_directory",
]
