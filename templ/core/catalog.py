from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from templ.core.errors import DefinitionLoadError
from templ.core.io.definition import load_definition
from templ.core.model import Template


@dataclass(frozen=True)
class TemplateSummary:
    template: Template
    error: Optional[DefinitionLoadError] = None

    @property
    def name(self) -> str:
        return self.template.name


def list_templates(home: str | Path) -> list[TemplateSummary]:
    """Every directory directly under ``home``, sorted by name.

    A template whose definition fails to load is still listed, with the error.
    """
    home = Path(home)
    if not home.is_dir():
        return []

    out: list[TemplateSummary] = []
    for p in sorted(home.iterdir(), key=lambda x: x.name):
        if p.is_symlink() or not p.is_dir():
            continue
        try:
            definition = load_definition(p)
        except DefinitionLoadError as e:
            out.append(TemplateSummary(template=Template(root=p), error=e))
            continue
        out.append(TemplateSummary(template=Template(root=p, definition=definition)))
    return out
