from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Dict, Optional


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    yaml_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def lookup_source(source_map: Optional[Dict[str, Dict[str, int]]], yaml_path: Optional[str]) -> SourceLocation:
    # "" is a valid pointer: it denotes the document root
    if not source_map or yaml_path is None:
        return SourceLocation(yaml_path=yaml_path)

    entry = source_map.get(yaml_path)
    if not entry:
        return SourceLocation(yaml_path=yaml_path)

    return SourceLocation(
        yaml_path=yaml_path,
        line=entry.get("line"),
        column=entry.get("column"),
    )


def _format_file_path(path: Path) -> str:
    """Render ``path`` relative to YAML_VALIDATOR_SOURCE_ROOT when it is set."""
    env_root = os.environ.get("YAML_VALIDATOR_SOURCE_ROOT")
    if not env_root:
        return str(path)

    try:
        return str(path.resolve().relative_to(Path(env_root).resolve()))
    except ValueError:
        return str(path)


def format_file(loc: Optional[SourceLocation]) -> str:
    if not loc or loc.file_path is None:
        return ""
    return _format_file_path(loc.file_path)


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""

    if loc.line is not None and loc.column is not None:
        return f" (line {loc.line}, column {loc.column})"
    if loc.line is not None:
        return f" (line {loc.line})"
    return ""
