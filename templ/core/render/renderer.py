"""Jinja2 adapter used for both path names and file bodies.

Missing variables never fail a render. They come out as the literal
``<no value>`` marker, which the validator scans for afterwards.

Jinja's lexer rewrites every ``\\r\\n``/``\\r`` to ``\\n``. Carriage returns are
swapped for a whitespace placeholder before parsing and restored afterwards,
so only substitution changes the bytes of a file.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from jinja2 import ChainableUndefined, Environment, TemplateError, TemplateSyntaxError

from templ.core.errors import RenderEvaluationError, RenderSyntaxError
from templ.core.model import NO_VALUE

logger = logging.getLogger(__name__)


DEFAULT_TIME_LAYOUT = "%Y-%m-%d %H:%M:%S"

# Whitespace to str.strip and re's \s (so `{{-`/`-}}` still trim a CRLF),
# but not a line break to Jinja.
_CR_PLACEHOLDERS = ("\x1e", "\x1f", "\x1d", "\x1c", "\x85", "\u2028", "\u2029")

_EVAL_ERRORS = (TemplateError, TypeError, ValueError, ArithmeticError, LookupError)


class NoValueUndefined(ChainableUndefined):
    """Undefined that prints the marker and tolerates chained lookups."""

    __slots__ = ()

    def __str__(self) -> str:
        return NO_VALUE


def time(layout: str = DEFAULT_TIME_LAYOUT) -> str:
    """Current local time formatted with strftime."""
    return datetime.now().strftime(layout)


def build_environment() -> Environment:
    env = Environment(
        undefined=NoValueUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )
    env.globals["time"] = time
    return env


def _cr_placeholder(pattern: str) -> Optional[str]:
    if "\r" not in pattern:
        return None
    # None when every candidate already occurs; line endings then become "\n".
    return next((c for c in _CR_PLACEHOLDERS if c not in pattern), None)


def render(
    pattern: str,
    vars: Mapping[str, Any],
    *,
    name: Optional[str] = None,
    env: Optional[Environment] = None,
) -> str:
    """Render ``pattern`` with ``vars`` as the root context.

    Raises RenderSyntaxError when the pattern does not parse and
    RenderEvaluationError when evaluation fails.
    """
    if env is None:
        env = build_environment()

    cr = _cr_placeholder(pattern)
    source = pattern.replace("\r", cr) if cr else pattern

    try:
        compiled = env.from_string(source)
    except TemplateSyntaxError as e:
        raise RenderSyntaxError(
            code="E_RENDER_SYNTAX",
            message=f"line {e.lineno}: {e.message}",
            file=name,
        ) from e

    try:
        out = compiled.render(dict(vars))
    except _EVAL_ERRORS as e:
        raise RenderEvaluationError(
            code="E_RENDER_EVAL",
            message=f"{type(e).__name__}: {e}",
            file=name,
        ) from e

    if cr:
        out = out.replace(cr, "\r")

    logger.debug("rendered %s (%d chars)", name or "<pattern>", len(out))
    return out
