"""Variable overrides given with ``--vars-file``.

Values end up in the render context next to the definition's ``vars``, so
they are held to the same shape: template-identifier names mapping to
JSON-like values.
"""
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Callable

import yaml

from templ.core.errors import VarsLoadError
from templ.core.model import DEST_PATH_VAR


VAR_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_PARSERS: dict[str, tuple[str, Callable[[str], Any]]] = {
    ".yaml": ("YAML", yaml.safe_load),
    ".yml": ("YAML", yaml.safe_load),
    ".json": ("JSON", json.loads),
}

_SCALARS = (str, int, float, bool, type(None))


def load_vars_file(path: str) -> dict[str, Any]:
    p = Path(path)
    parser = _PARSERS.get(p.suffix.lower())
    if parser is None:
        raise VarsLoadError(
            code="E_VARS_FORMAT",
            message=f"vars file must end in {', '.join(sorted(_PARSERS))}",
            file=str(p),
        )
    if not p.is_file():
        raise VarsLoadError(code="E_VARS_NOT_FOUND", message="no such vars file", file=str(p))

    kind, parse = parser
    try:
        data = parse(p.read_text(encoding="utf-8"))
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise VarsLoadError(
            code="E_VARS_PARSE", message=f"invalid {kind}: {e}", file=str(p)
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise VarsLoadError(
            code="E_VARS_NOT_MAPPING",
            message=f"expected a mapping of variable names, got {type(data).__name__}",
            file=str(p),
        )

    for name, value in data.items():
        if not isinstance(name, str) or not VAR_NAME_RE.match(name):
            raise VarsLoadError(
                code="E_VARS_BAD_NAME",
                message=f"{name!r} is not a usable template variable name",
                file=str(p),
                path=str(name),
            )
        if name == DEST_PATH_VAR:
            raise VarsLoadError(
                code="E_VARS_RESERVED",
                message=f"{DEST_PATH_VAR} is set by templ itself",
                file=str(p),
                path=name,
            )
        _check_value(value, name, str(p))

    return data


def _check_value(value: Any, path: str, file: str) -> None:
    """Reject values YAML can produce but JSON cannot (dates, sets, binary)."""
    if isinstance(value, _SCALARS):
        return
    if isinstance(value, list):
        for i, item in enumerate(value):
            _check_value(item, f"{path}[{i}]", file)
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise VarsLoadError(
                    code="E_VARS_BAD_VALUE",
                    message=f"map keys must be strings, got {key!r}",
                    file=file,
                    path=path,
                )
            _check_value(item, f"{path}.{key}", file)
        return
    raise VarsLoadError(
        code="E_VARS_BAD_VALUE",
        message=f"unsupported value type {type(value).__name__}; quote it to keep it as text",
        file=file,
        path=path,
    )
