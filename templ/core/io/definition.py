from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from templ.core.errors import DefinitionLoadError
from templ.core.model import DEFINITION_FILE_NAME, TemplateDefinition


def definition_path(template_root: str | Path) -> Path:
    return Path(template_root) / DEFINITION_FILE_NAME


def load_definition(template_root: str | Path) -> TemplateDefinition:
    """Load ``template.json`` from a template root.

    A missing file is not an error: the template simply has no variables.
    """
    p = definition_path(template_root)
    if not p.exists():
        return TemplateDefinition()

    try:
        raw_text = p.read_text(encoding="utf-8")
    except Exception as e:  # pragma: no cover
        raise DefinitionLoadError(code="E_DEF_READ", message=str(e), file=str(p)) from e

    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise DefinitionLoadError(code="E_DEF_JSON_PARSE", message=str(e), file=str(p)) from e

    return parse_definition(data, file=str(p))


def parse_definition(data: Any, *, file: str | None = None) -> TemplateDefinition:
    if not isinstance(data, dict):
        raise DefinitionLoadError(
            code="E_DEF_INVALID",
            message="top-level document must be an object",
            file=file,
        )

    desc = data.get("desc", "")
    author = data.get("author", "")
    vars_ = data.get("vars", {})

    for key, value in (("desc", desc), ("author", author)):
        if value is not None and not isinstance(value, str):
            raise DefinitionLoadError(
                code="E_DEF_INVALID",
                message=f"{key} must be a string",
                file=file,
                path=key,
            )
    if vars_ is None:
        vars_ = {}
    if not isinstance(vars_, dict):
        raise DefinitionLoadError(
            code="E_DEF_INVALID",
            message="vars must be an object",
            file=file,
            path="vars",
        )

    return TemplateDefinition(description=desc or "", author=author or "", vars=dict(vars_))


def dump_definition(definition: TemplateDefinition) -> str:
    payload = {
        "desc": definition.description,
        "author": definition.author,
        "vars": definition.vars,
    }
    return json.dumps(payload, indent=4)


def save_definition(template_root: str | Path, definition: TemplateDefinition) -> Path:
    p = definition_path(template_root)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(dump_definition(definition), encoding="utf-8")
    return p
