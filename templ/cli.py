from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from templ import __version__
from templ.core.apply.apply_template import apply_template
from templ.core.catalog import list_templates
from templ.core.config import HOME_ENV, resolve_home
from templ.core.errors import (
    ApplyError,
    ConfigError,
    DefinitionLoadError,
    DestMissingError,
    PromptValueError,
    ScaffoldError,
    TemplError,
    VarsLoadError,
    WalkError,
)
from templ.core.io.definition import load_definition
from templ.core.io.load_vars import load_vars_file
from templ.core.model import Diagnostic, Template
from templ.core.prompt.prompted import resolve_prompted, type_label
from templ.core.scaffold.generate import generate_template
from templ.core.validate.validate_template import validate_template

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()


USAGE = f"""\
set env ${HOME_ENV} as a template repository (storage).
then, templ gen {{your template name here}}
then, cd to where to apply the template
then, templ apply {{the template name}}"""


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"templ {__version__}")
        raise typer.Exit()


@app.callback(help=f"File templater.\n\n{USAGE}")
def _callback(
    ctx: typer.Context,
    home: str | None = typer.Option(
        None,
        "--home",
        envvar=HOME_ENV,
        help="Template storage directory (default: $HOME/.templ)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"home": home}


def _home(ctx: typer.Context) -> Path:
    explicit = (ctx.obj or {}).get("home")
    try:
        return resolve_home(explicit)
    except ConfigError as e:
        _print_errors([e])
        raise typer.Exit(code=1)


def _load_template(home: Path, name: str, vars_file: str | None = None) -> Template:
    root = home / name
    try:
        definition = load_definition(root)
        if vars_file:
            definition.vars.update(load_vars_file(vars_file))
    except (DefinitionLoadError, VarsLoadError) as e:
        _print_errors([e])
        raise typer.Exit(code=1)
    return Template(root=root, definition=definition)


@app.command("generate")
def generate(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Template name"),
) -> None:
    """Generate a sample template."""
    root = _home(ctx) / name
    typer.echo(f"generate `{root}`...")
    try:
        generate_template(root)
    except ScaffoldError as e:
        _print_errors([e])
        raise typer.Exit(code=1)


@app.command("check")
def check(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Template name"),
    vars_file: str | None = typer.Option(
        None, "--vars-file", help="YAML/JSON file with variable overrides"
    ),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Check a template for unresolved variables and pattern errors."""
    if format not in ("text", "json"):
        err = TemplError(
            code="E_CHECK_UNKNOWN_FORMAT",
            message=f"unknown format: {format} (choose one of: text, json)",
            path="format",
        )
        _print_errors([err])
        raise typer.Exit(code=2)

    template = _load_template(_home(ctx), name, vars_file)
    if format == "text":
        typer.echo(f"check `{template.root}`...")

    try:
        diagnostics = validate_template(template.root, template.definition.vars)
    except (ApplyError, WalkError) as e:
        _print_errors([e])
        raise typer.Exit(code=1)

    if format == "json":
        payload = {
            "tool": "templ",
            "command": "check",
            "template": name,
            "ok": not diagnostics,
            "diagnostic_count": len(diagnostics),
            "diagnostics": [_diagnostic_item(d) for d in diagnostics],
        }
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        raise typer.Exit(code=2 if diagnostics else 0)

    if not diagnostics:
        typer.echo("OK")
        return

    _print_diagnostics(diagnostics)
    raise typer.Exit(code=2)


@app.command("apply")
def apply(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Template name"),
    dest: str = typer.Argument(".", help="Destination directory (default: .)"),
    vars_file: str | None = typer.Option(
        None, "--vars-file", help="YAML/JSON file with variable overrides"
    ),
    no_input: bool = typer.Option(
        False, "--no-input", help="Do not prompt; keep the defined values of prompted variables"
    ),
) -> None:
    """Apply a template into a destination directory."""
    template = _load_template(_home(ctx), name, vars_file)
    target = Path(dest).resolve()
    typer.echo(f"apply `{template.root}`...")

    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        err = DestMissingError(
            code="E_DEST_CREATE", message=f"cannot create dest path: {e}", file=str(target)
        )
        _print_errors([err])
        raise typer.Exit(code=1)

    if not no_input:
        typer.echo()
        try:
            resolve_prompted(template.definition.vars, _ask)
        except PromptValueError as e:
            _print_errors([e])
            raise typer.Exit(code=2)
        typer.echo()

    try:
        apply_template(
            template.root,
            target,
            template.definition.vars,
            on_entry=lambda rel: typer.echo(f"  {rel}"),
        )
    except (ApplyError, WalkError) as e:
        _print_errors([e])
        raise typer.Exit(code=1)


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show variables"),
) -> None:
    """List templates."""
    summaries = list_templates(_home(ctx))
    if not summaries:
        typer.echo("No templates.")
        return

    table = Table(title="Templates")
    table.add_column("Name")
    table.add_column("Description")
    if verbose:
        table.add_column("Variables")

    for s in summaries:
        if s.error is not None:
            row = [escape(s.name), escape(f"failed to load definitions: {s.error}")]
            if verbose:
                row.append("")
            table.add_row(*row)
            continue

        definition = s.template.definition
        row = [escape(s.name), escape(definition.description)]
        if verbose:
            row.append(
                escape("\n".join(f"{k}: {type_label(v)}" for k, v in definition.vars.items()))
            )
        table.add_row(*row)

    console.print(table)


# Short aliases.
app.command("gen", hidden=True)(generate)
app.command("chk", hidden=True)(check)
app.command("test", hidden=True)(check)
app.command("ls", hidden=True)(list_cmd)


def _ask(name: str, current: Any) -> str:
    return typer.prompt(f"{name} ({type_label(current)})", default="", show_default=False)


def _diagnostic_item(d: Diagnostic) -> dict[str, Any]:
    return {"file": d.file, "code": d.code, "message": d.message, "line": d.line}


def _print_diagnostics(diagnostics: list[Diagnostic]) -> None:
    current: Optional[str] = None
    for d in diagnostics:
        if d.file != current:
            current = d.file
            typer.echo()
            typer.echo(current)
        typer.echo(f"  - {d.message}")


def _print_errors(errors: list[TemplError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.file or "", e.path or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="templ")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
