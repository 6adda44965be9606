from __future__ import annotations

from typing import Any, Callable, Mapping, MutableMapping

from templ.core.errors import PromptValueError


# Variables whose names start with this are asked for before apply.
PROMPT_PREFIX = "_"


def is_prompted(name: str) -> bool:
    return name.startswith(PROMPT_PREFIX)


def prompted_names(vars: Mapping[str, Any]) -> list[str]:
    return [k for k in vars if is_prompted(k)]


def type_label(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "list"
    if isinstance(value, dict):
        return "map"
    if value is None:
        return "null"
    return type(value).__name__


def coerce_prompted(name: str, current: Any, raw: str) -> Any:
    """Convert an answer to the type of the variable it replaces.

    Numbers are re-parsed as floats (an empty answer means 0); whole values
    come back as int so ``42`` renders as ``42``, not ``42.0``. Everything
    else becomes the stripped string.
    """
    val = raw.strip()
    if isinstance(current, (int, float)) and not isinstance(current, bool):
        if val == "":
            val = "0"
        try:
            number = float(val)
        except ValueError as e:
            raise PromptValueError(
                code="E_PROMPT_VALUE",
                message=f"re-defining var {name!r} to {val!r}: not a number",
                path=name,
            ) from e
        if number.is_integer():
            return int(number)
        return number
    return val


def resolve_prompted(
    vars: MutableMapping[str, Any],
    ask: Callable[[str, Any], str],
) -> MutableMapping[str, Any]:
    """Ask for every prompted variable and store the coerced answers in place."""
    for name in prompted_names(vars):
        vars[name] = coerce_prompted(name, vars[name], ask(name, vars[name]))
    return vars
