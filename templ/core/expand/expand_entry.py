from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from templ.core.errors import ContentPatternError, NamePatternError, RenderError
from templ.core.model import Entry, ExpansionResult
from templ.core.render.renderer import render

logger = logging.getLogger(__name__)


# Arbitrary bytes survive decode -> render -> encode unchanged.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def expand_entry(root: str | Path, entry: Entry, vars: Mapping[str, Any]) -> ExpansionResult:
    """Render one entry's relative path and, for files, its content.

    Pure apart from reading the file. DEST_PATH must already be in ``vars``.
    """
    root = Path(root)
    rel_path = entry.rel_path

    try:
        name = render(rel_path, vars, name=rel_path or ".")
    except RenderError as e:
        raise NamePatternError(
            code="E_NAME_PATTERN",
            message=f"parse name `{rel_path}`: {e.message}",
            file=str(root),
            path=rel_path,
            error=e,
        ) from e

    if entry.is_dir:
        logger.debug("expanded dir %r -> %r", rel_path, name)
        return ExpansionResult(rel_path=name, content=None, entry=entry)

    try:
        raw = entry.path.read_bytes()
    except OSError as e:
        raise ContentPatternError(
            code="E_CONTENT_PATTERN",
            message=f"read content `{rel_path}`: {e}",
            file=str(root),
            path=rel_path,
        ) from e

    try:
        text = render(raw.decode(_ENCODING, _ERRORS), vars, name=rel_path)
    except RenderError as e:
        raise ContentPatternError(
            code="E_CONTENT_PATTERN",
            message=f"parse content `{rel_path}`: {e.message}",
            file=str(root),
            path=rel_path,
            error=e,
        ) from e

    logger.debug("expanded file %r -> %r", rel_path, name)
    return ExpansionResult(rel_path=name, content=text.encode(_ENCODING, _ERRORS), entry=entry)
