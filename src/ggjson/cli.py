from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from ggjson.api import read_file, transcode_file
from ggjson.config import deserialize_defaults, merge_payload, options_from_config, parse_alias_specs
from ggjson.exceptions import JsonConfigError
from ggjson.options import LogLevel, Options
from ggjson.resolver import lookup_qualified_type
from ggjson.runtime.json_io import dump_json_pretty

app = typer.Typer(add_completion=False)


def _echo_log(message: str, level: LogLevel) -> None:
    typer.echo(f"[{level}] {message}", err=True)


def _resolve_target(target: Optional[str]) -> object:
    if target is None:
        return None
    try:
        return lookup_qualified_type(target)
    except JsonConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--type") from exc


def _build_options(
    *,
    root: Path,
    config: Optional[Path],
    alias: Optional[List[str]],
    allow_fully_qualified_types: Optional[bool],
    verbose: bool,
    target_type: object = None,
) -> Options:
    defaults = deserialize_defaults(root=root, config_path=config)
    modules = None
    if isinstance(target_type, type) and not defaults.get("modules"):
        # Without configured modules, aliases come from the target's own module.
        modules = [target_type.__module__]
    try:
        extra_aliases = parse_alias_specs(alias)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--alias") from exc
    configured_aliases = defaults.get("aliases")
    merged_aliases = dict(configured_aliases) if isinstance(configured_aliases, dict) else {}
    merged_aliases.update(extra_aliases)
    payload = merge_payload(
        {
            "aliases": merged_aliases,
            "allow_fully_qualified_types": allow_fully_qualified_types,
            "modules": modules,
        },
        defaults,
    )
    try:
        return options_from_config(payload, log=_echo_log if verbose else None)
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid [deserialize] configuration: {exc}") from exc
    except JsonConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command("read")
def read(
    path: Path = typer.Argument(..., exists=True, dir_okay=False),
    target: Optional[str] = typer.Option(
        None, "--type", help="Target class as module:QualName."
    ),
    alias: Optional[List[str]] = typer.Option(
        None, "--alias", help="Alias in 'NAME=module:QualName' form (repeatable)."
    ),
    allow_fully_qualified_types: Optional[bool] = typer.Option(
        None, "--allow-fully-qualified-types/--no-allow-fully-qualified-types"
    ),
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Deserialize a JSON or XJSON file and print the result as JSON."""
    target_type = _resolve_target(target)
    options = _build_options(
        root=root,
        config=config,
        alias=alias,
        allow_fully_qualified_types=allow_fully_qualified_types,
        verbose=verbose,
        target_type=target_type,
    )
    try:
        value = read_file(path, target_type, options)
    except JsonConfigError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(dump_json_pretty(value, type_tag=options.effective_type_tag))


@app.command("transcode")
def transcode(
    path: Path = typer.Argument(..., exists=True, dir_okay=False),
    target: Optional[str] = typer.Option(
        None, "--type", help="Inject a type tag for this class (module:QualName)."
    ),
    root: Path = typer.Option(Path("."), "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
) -> None:
    """Print the canonical JSON text of an XJSON file."""
    options = _build_options(
        root=root,
        config=config,
        alias=None,
        allow_fully_qualified_types=None,
        verbose=False,
    )
    typer.echo(transcode_file(path, _resolve_target(target), options))
