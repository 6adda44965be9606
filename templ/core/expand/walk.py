from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Callable, Iterator

from templ.core.errors import WalkError
from templ.core.model import DEFINITION_FILE_NAME, Entry

logger = logging.getLogger(__name__)


def is_definition_file(path: Path) -> bool:
    return path.name.upper() == DEFINITION_FILE_NAME.upper()


def walk(root: str | Path) -> Iterator[Entry]:
    """Yield every entry under ``root`` in pre-order, root first.

    Siblings come in sorted name order. The definition file is skipped (and
    its subtree, should it be a directory). A missing root or an unreadable
    directory raises WalkError; an entry that cannot be stat'ed is still
    yielded, as a file.
    """
    root = Path(root)
    yield from _walk(root, root)


def walk_each(root: str | Path, visit: Callable[[Entry], None]) -> None:
    """Call ``visit`` for each walked entry; the first exception aborts."""
    for entry in walk(root):
        visit(entry)


def _walk(root: Path, path: Path) -> Iterator[Entry]:
    if is_definition_file(path):
        logger.debug("skipping definition file %s", path)
        return

    rel_path = "" if path == root else path.relative_to(root).as_posix()

    try:
        st = os.stat(path)
    except OSError as e:
        if path == root:
            raise WalkError(code="E_WALK", message=str(e), file=str(path)) from e
        # Dangling link or vanished entry: listed as a file so that reading
        # it fails for this entry alone.
        logger.debug("cannot stat %s: %s", path, e)
        yield Entry(path=path, rel_path=rel_path, is_dir=False, mode=0)
        return

    is_dir = stat.S_ISDIR(st.st_mode)
    yield Entry(path=path, rel_path=rel_path, is_dir=is_dir, mode=stat.S_IMODE(st.st_mode))

    # Symlinked directories are materialized but not descended into.
    if not is_dir or (path != root and path.is_symlink()):
        return

    try:
        names = sorted(os.listdir(path))
    except OSError as e:
        raise WalkError(code="E_WALK", message=str(e), file=str(path)) from e

    for name in names:
        yield from _walk(root, path / name)
