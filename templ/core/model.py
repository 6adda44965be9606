from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional


DEFINITION_FILE_NAME = "template.json"
DEST_PATH_VAR = "DEST_PATH"
NO_VALUE = "<no value>"


DiagnosticCode = Literal["E_EXPAND_FAILED", "E_UNRESOLVED_NAME", "E_UNRESOLVED_CONTENT"]


@dataclass
class TemplateDefinition:
    description: str = ""
    author: str = ""
    vars: dict[str, Any] = field(default_factory=dict)


@dataclass
class Template:
    root: Path
    definition: TemplateDefinition = field(default_factory=TemplateDefinition)

    @property
    def name(self) -> str:
        return self.root.name

    @property
    def definition_path(self) -> Path:
        return self.root / DEFINITION_FILE_NAME


@dataclass(frozen=True)
class Entry:
    path: Path
    rel_path: str  # posix separators, "" for the template root
    is_dir: bool
    mode: int  # permission bits only


@dataclass(frozen=True)
class ExpansionResult:
    rel_path: str
    content: Optional[bytes]
    entry: Entry


@dataclass(frozen=True)
class Diagnostic:
    file: str
    message: str
    code: DiagnosticCode
    line: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.file}: {self.code}: {self.message}"
