"""
Deterministic derivative naming
"""
import posixpath
from typing import Optional


def _dimension(value: Optional[int]) -> str:
    return "" if value is None else str(value)


def derive(
    root: str,
    source_path: str,
    action: str,
    width: Optional[int],
    height: Optional[int],
) -> str:
    """
    Build the provisional derivative path for a source

    <root>/<source dir>/<action>/<width>x<height>/<source basename>

    The source dir is left out when the source sits at the top level.
    """
    dirname, basename = posixpath.split(source_path)
    target = root.rstrip("/") + "/" if root else ""
    if dirname not in ("", ".", "/"):
        target += dirname.lstrip("/") + "/"
    target += f"{action}/{_dimension(width)}x{_dimension(height)}/"
    return target + basename


def extension(path: str) -> str:
    """Nominal extension without the dot, as written in the path"""
    return posixpath.splitext(posixpath.basename(path))[1][1:]


def replace_extension(path: str, new_extension: str) -> str:
    stem, _ = posixpath.splitext(path)
    return f"{stem}.{new_extension}"
