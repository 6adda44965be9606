from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, MutableMapping, Optional

from templ.core.errors import (
    DestMissingError,
    ExpandError,
    ExpansionError,
    SourceMissingError,
    WriteError,
)
from templ.core.expand.expand_entry import expand_entry
from templ.core.expand.walk import walk
from templ.core.model import DEST_PATH_VAR, ExpansionResult

logger = logging.getLogger(__name__)


def apply_template(
    template_root: str | Path,
    dest_root: str | Path,
    vars: MutableMapping[str, Any],
    *,
    on_entry: Optional[Callable[[str], None]] = None,
) -> list[str]:
    """Materialize the template under ``dest_root``.

    Fail-fast: the first expansion or write failure aborts, and whatever was
    written before it stays on disk. Existing files are overwritten.

    Returns the rendered relative paths in walk order.
    """
    template_root = Path(template_root)
    dest_root = Path(dest_root)

    if not template_root.exists():
        raise SourceMissingError(
            code="E_SOURCE_MISSING",
            message=f"template path does not exist: {template_root}",
            file=str(template_root),
        )
    if not dest_root.exists():
        raise DestMissingError(
            code="E_DEST_MISSING",
            message=f"dest path does not exist: {dest_root}",
            file=str(dest_root),
        )

    vars[DEST_PATH_VAR] = str(dest_root)

    written: list[str] = []
    for entry in walk(template_root):
        if not entry.rel_path:
            continue

        try:
            result = expand_entry(template_root, entry, vars)
        except ExpandError as e:
            raise ExpansionError(
                code="E_APPLY_EXPANSION",
                message=f"apply template: {e.message}",
                file=str(template_root),
                path=entry.rel_path,
            ) from e

        if on_entry is not None:
            on_entry(result.rel_path)

        _materialize(dest_root, result)
        written.append(result.rel_path)
        logger.info("applied %s -> %s", entry.rel_path, result.rel_path)

    logger.info("applied %d entries from %s to %s", len(written), template_root, dest_root)
    return written


def _materialize(dest_root: Path, result: ExpansionResult) -> None:
    target = _target_path(dest_root, result.rel_path)
    mode = result.entry.mode

    try:
        if result.content is None:
            target.mkdir(mode=mode, parents=True, exist_ok=True)
            os.chmod(target, mode)
        else:
            write_bytes(target, result.content, mode)
    except OSError as e:
        raise WriteError(
            code="E_APPLY_WRITE",
            message=f"apply template: {e}",
            file=str(dest_root),
            path=result.rel_path,
        ) from e


def _target_path(dest_root: Path, rel_path: str) -> Path:
    target = dest_root / rel_path.lstrip("/")
    root = dest_root.resolve()
    resolved = target.resolve()
    if resolved != root and root not in resolved.parents:
        raise WriteError(
            code="E_APPLY_WRITE",
            message=f"rendered path escapes the destination: {rel_path}",
            file=str(dest_root),
            path=rel_path,
        )
    return target


def write_bytes(path: Path, data: bytes, mode: int) -> None:
    """Replace ``path`` with ``data`` through a temporary file, then set ``mode``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(data)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
