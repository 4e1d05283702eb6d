# locator_resolver/cli.py
from __future__ import annotations

"""Command-line interface
------------------------
Inspect the selector registry and resolve locators without a browser:
list the registered kinds, show what a finder call would query, and
validate YAML selector files.
"""

import json
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click
import yaml
from cssselect import SelectorError as CssSelectorError

from locator_resolver.selectors.builtins import register_builtins
from locator_resolver.selectors.errors import SelectorError
from locator_resolver.selectors.loader import load_selectors_file, register_selectors
from locator_resolver.selectors.registry import SelectorRegistry, get_registry
from locator_resolver.selectors.resolver import LocatorResolver, ResolvedQuery, Sym
from locator_resolver.utils.config import get_settings
from locator_resolver.utils.logger import get_logger, set_log_level


# -------- helpers --------


def _echo_json(obj) -> None:
    click.echo(json.dumps(obj, indent=2, ensure_ascii=False, default=_jsonable))


def _jsonable(value: Any) -> Any:
    if isinstance(value, re.Pattern):
        return f"/{value.pattern}/"
    if isinstance(value, Path):
        return str(value)
    return repr(value)


def _parse_options(pairs: Tuple[str, ...]) -> Dict[str, Any]:
    """Turn `key=value` pairs into a mapping; values are read as YAML scalars/lists."""
    out: Dict[str, Any] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(f"expected key=value, got {pair!r}", param_hint="--option")
        key, raw = pair.split("=", 1)
        out[key.strip()] = yaml.safe_load(raw) if raw else ""
    return out


def _describe(query: ResolvedQuery) -> dict:
    return {
        "name": query.name,
        "locator": query.locator,
        "xpaths": list(query.xpaths),
        "xpath_options": dict(query.xpath_options),
        "filter_options": dict(query.filter_options),
    }


# -------- CLI root --------


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL from settings",
)
@click.option(
    "--selectors", "selectors_file",
    type=click.Path(dir_okay=False, exists=True),
    default=None,
    help="YAML file with extra selector definitions",
)
@click.version_option(package_name="locator-resolver")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str], selectors_file: Optional[str]):
    _ = get_settings()
    if log_level:
        set_log_level(log_level.upper())

    try:
        registry = get_registry()
    except (SelectorError, FileNotFoundError) as e:
        raise click.ClickException(f"cannot load SELECTORS_FILE: {e}")
    if selectors_file:
        registry = registry.copy()
        try:
            register_selectors(registry, load_selectors_file(selectors_file), source=selectors_file)
        except SelectorError as e:
            raise click.ClickException(str(e))
    ctx.obj = registry


# -------- commands --------


@cli.command("config")
def cmd_config():
    """Print effective configuration (after .env & env vars)."""
    s = get_settings()
    data = {k: (str(v) if isinstance(v, Path) else v) for k, v in s.model_dump().items()}
    _echo_json(data)


@cli.command("list")
@click.pass_obj
def cmd_list(registry):
    """List registered selectors in auto-detection order."""
    click.echo(f"{len(registry)} selector(s):\n")
    for definition in registry.all():
        parent = f" < {definition.parent}" if definition.parent else ""
        detect = "  [auto]" if definition.match is not None else ""
        keys = ", ".join(sorted(definition.filter_keys)) or "-"
        click.echo(f" - {definition.name}{parent}{detect}  filters: {keys}")


@cli.command("resolve")
@click.argument("args", nargs=-1, required=True)
@click.option("-o", "--option", "options", multiple=True, help="Finder option as key=value (repeatable)")
@click.option("--regex", is_flag=True, help="Treat the locator as a regular expression")
@click.option("--symbol", is_flag=True, help="Treat the locator as a symbolic identifier")
@click.option("--message", "with_message", is_flag=True, help="Also print the failure message")
@click.pass_obj
def cmd_resolve(registry, args: Tuple[str, ...], options: Tuple[str, ...], regex: bool, symbol: bool, with_message: bool):
    """
    Show the queries a finder call would run.

    Examples:
      locator-resolver resolve "div.article"
      locator-resolver resolve fillable_field Email -o with=a@b.c
      locator-resolver resolve --symbol main
    """
    if len(args) > 2:
        raise click.UsageError("expected [SELECTOR] LOCATOR")
    log = get_logger(__name__)

    *name, raw = args
    locator: Any = raw
    if regex:
        locator = re.compile(raw)
    elif symbol:
        locator = Sym(raw)

    call: List[Any] = [*name, locator]
    opts = _parse_options(options)
    if opts:
        call.append(opts)

    try:
        query = LocatorResolver(registry).normalize(*call)
    except (SelectorError, CssSelectorError) as e:
        log.debug(f"resolve failed: {e!r}")
        click.echo(f"ERR {e}")
        sys.exit(1)

    out = _describe(query)
    if with_message:
        out["failure_message"] = query.failure_message()
    _echo_json(out)


@cli.command("validate")
@click.argument("targets", nargs=-1, required=True, type=click.Path(dir_okay=False, exists=True))
def cmd_validate(targets: Tuple[str, ...]):
    """Validate YAML selector files and try registering them on top of the built-ins."""
    ok = True
    for target in targets:
        fp = Path(target).resolve()
        try:
            scratch = register_builtins(SelectorRegistry())
            definitions = register_selectors(scratch, load_selectors_file(fp), source=fp)
            names = ", ".join(d.name for d in definitions)
            click.echo(f"OK  {fp}  ->  {len(definitions)} selector(s): {names}")
        except SelectorError as e:
            ok = False
            click.echo(f"ERR {fp}  ->  {e}")

    sys.exit(0 if ok else 1)


def main() -> None:
    cli(prog_name="locator-resolver")


if __name__ == "__main__":
    main()
