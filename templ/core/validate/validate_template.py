from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, MutableMapping

from templ.core.errors import ExpandError, SourceMissingError
from templ.core.expand.expand_entry import expand_entry
from templ.core.expand.walk import walk
from templ.core.model import DEST_PATH_VAR, NO_VALUE, Diagnostic

logger = logging.getLogger(__name__)


# Validation needs no real destination.
VALIDATE_DEST_PATH = "."


def validate_template(template_root: str | Path, vars: MutableMapping[str, Any]) -> list[Diagnostic]:
    """Dry-run the expansion and report unresolved variables.

    Every entry is checked; diagnostics come back in walk order. Only a walk
    that cannot proceed (missing or unreadable root) raises.
    """
    template_root = Path(template_root)
    if not template_root.exists():
        raise SourceMissingError(
            code="E_SOURCE_MISSING",
            message=f"template path does not exist: {template_root}",
            file=str(template_root),
        )

    vars[DEST_PATH_VAR] = VALIDATE_DEST_PATH

    diagnostics: list[Diagnostic] = []
    for entry in walk(template_root):
        source = entry.rel_path or "."

        try:
            result = expand_entry(template_root, entry, vars)
        except ExpandError as e:
            diagnostics.append(
                Diagnostic(file=source, message=f"error {e.message}", code="E_EXPAND_FAILED")
            )
            continue

        if NO_VALUE in result.rel_path:
            diagnostics.append(
                Diagnostic(
                    file=source,
                    message=f"name contains {NO_VALUE} => {result.rel_path}",
                    code="E_UNRESOLVED_NAME",
                )
            )

        if result.content is not None:
            line = find_marker_line(result.content)
            if line is not None:
                diagnostics.append(
                    Diagnostic(
                        file=source,
                        message=f"contains {NO_VALUE} at line {line}",
                        code="E_UNRESOLVED_CONTENT",
                        line=line,
                    )
                )

    logger.info("validated %s: %d diagnostic(s)", template_root, len(diagnostics))
    return diagnostics


def find_marker_line(content: bytes) -> int | None:
    """1-based line of the first marker in ``content``, or None."""
    pos = content.find(NO_VALUE.encode("utf-8"))
    if pos == -1:
        return None
    return content.count(b"\n", 0, pos) + 1
