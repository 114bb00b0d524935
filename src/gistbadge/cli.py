"""CLI entry point for gistbadge."""

from __future__ import annotations

import logging
import os
import re
import sys
from typing import Callable, Optional

import click

from gistbadge import __version__
from gistbadge.badge import BadgeError, render_content
from gistbadge.config import ConfigError, input_env_name, resolve_config
from gistbadge.content import build_content
from gistbadge.gist import GistClient, GistError
from gistbadge.models import INPUT_NAMES
from gistbadge.updater import update_badge

# Help text for every action input that is exposed as an option.
INPUT_HELP = {
    "gistID": "ID of the gist to write the badge to.",
    "auth": "Token with the 'gist' scope.",
    "label": "Left-hand badge text.",
    "message": "Right-hand badge text.",
    "color": "Message background color (name, hex, or CSS color).",
    "valColorRange": "Value mapped onto a red-to-green color.",
    "minColorRange": "Value that maps to red.",
    "maxColorRange": "Value that maps to green.",
    "invertColorRange": "Any non-empty value maps min to green and max to red.",
    "colorRangeSaturation": "Saturation of the range color in percent (default 100).",
    "colorRangeLightness": "Lightness of the range color in percent (default 40).",
    "labelColor": "Label background color.",
    "isError": "Endpoint 'isError' flag.",
    "namedLogo": "simple-icons logo name.",
    "logoSvg": "Custom SVG logo.",
    "logoColor": "Logo color.",
    "logoWidth": "Logo width in pixels.",
    "logoPosition": "Logo position.",
    "style": "Badge style: flat, flat-square, plastic, for-the-badge or social.",
    "cacheSeconds": "Cache lifetime requested from shields.io.",
    "filename": "Target file in the gist; '.svg' renders an image, anything else JSON.",
    "forceUpdate": "'true' writes the gist even when the content did not change.",
    "timeout": "HTTP timeout in seconds (default 10).",
    "apiUrl": "GitHub API base URL.",
}


def _option_name(input_name: str) -> str:
    if input_name == "gistID":
        return "--gist-id"
    return "--" + re.sub(r"(?<!^)(?=[A-Z])", "-", input_name).lower()


def input_options(names) -> Callable:
    """Add a string option per action input, e.g. ``--val-color-range``."""
    def decorator(fn: Callable) -> Callable:
        for name in reversed(list(names)):
            fn = click.option(
                _option_name(name),
                name,
                default=None,
                metavar="TEXT",
                help=f"{INPUT_HELP[name]} [env: {input_env_name(name)}]",
            )(fn)
        return fn
    return decorator


def _fail(message: str) -> None:
    """Report a failure the way the runner shows it, then exit 1."""
    if os.environ.get("GITHUB_ACTIONS"):
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        click.echo(f"::error::{escaped}")
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="gistbadge")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """gistbadge: publish shields.io badges to GitHub gists."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
    )


@cli.command()
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False),
              help="YAML file of action inputs.")
@click.option("--force", is_flag=True, help="Same as --force-update true.")
@input_options(INPUT_NAMES)
def update(config_path: Optional[str], force: bool, **inputs: Optional[str]) -> None:
    """Render the badge and write it to the gist if it changed."""
    if force:
        inputs["forceUpdate"] = "true"
    try:
        config = resolve_config(inputs, config_path)
        missing = [name for name in ("gistID", "auth", "filename")
                   if not getattr(config, INPUT_NAMES[name])]
        if missing:
            raise ConfigError(f"Input required and not supplied: {', '.join(missing)}")

        with GistClient(
            config.auth, config.gist_id, api_url=config.api_url, timeout=config.timeout,
        ) as client:
            result = update_badge(config, client)
    except (ConfigError, BadgeError, GistError) as e:
        _fail(str(e))

    if result.written:
        click.echo("Success!")


@cli.command()
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False),
              help="YAML file of action inputs.")
@click.option("--output", "-o", default=None, type=click.Path(dir_okay=False),
              help="Write the badge here instead of stdout.")
@input_options([n for n in INPUT_NAMES if n not in ("gistID", "auth", "forceUpdate", "timeout", "apiUrl")])
def render(config_path: Optional[str], output: Optional[str], **inputs: Optional[str]) -> None:
    """Render the badge locally without touching the gist."""
    try:
        config = resolve_config(inputs, config_path)
        filename = config.filename or output or "badge.json"
        content = render_content(build_content(config), filename)
    except (ConfigError, BadgeError) as e:
        _fail(str(e))

    if output:
        with open(output, "w") as f:
            f.write(content)
        click.echo(f"Badge written to {output}")
    else:
        click.echo(content)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
