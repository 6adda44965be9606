from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TemplError(Exception):
    """Base error envelope. The CLI prints these rather than raw exceptions."""

    code: str
    message: str
    file: Optional[str] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        parts: list[str] = []
        if self.file:
            parts.append(self.file)
        if self.path:
            parts.append(self.path)
        loc = ":".join(parts) if parts else "<template>"
        return f"{loc}: {self.code}: {self.message}"


class RenderError(TemplError):
    pass


class RenderSyntaxError(RenderError):
    pass


class RenderEvaluationError(RenderError):
    pass


@dataclass(frozen=True)
class ExpandError(TemplError):
    # The render failure behind a pattern error; None for read failures.
    error: Optional[RenderError] = None


class NamePatternError(ExpandError):
    pass


class ContentPatternError(ExpandError):
    pass


class ApplyError(TemplError):
    pass


class SourceMissingError(ApplyError):
    pass


class DestMissingError(ApplyError):
    pass


class ExpansionError(ApplyError):
    pass


class WriteError(ApplyError):
    pass


class WalkError(TemplError):
    pass


class DefinitionLoadError(TemplError):
    pass


class VarsLoadError(TemplError):
    pass


class PromptValueError(TemplError):
    pass


class ScaffoldError(TemplError):
    pass


class ConfigError(TemplError):
    pass
