"""Configuration loading: GitHub Actions inputs and YAML input files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

from gistbadge.models import INPUT_NAMES, BadgeConfig

TRUE_VALUES = {"true", "True", "TRUE"}
FALSE_VALUES = {"false", "False", "FALSE"}


class ConfigError(Exception):
    """Raised when an input is missing, malformed, or cannot be loaded."""


def input_env_name(name: str) -> str:
    """Environment variable the Actions runner uses for an input."""
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the stripped value of an action input, or "" when unset."""
    env = os.environ if environ is None else environ
    return env.get(input_env_name(name), "").strip()


def parse_bool(name: str, value: str) -> bool:
    """Parse a YAML 1.2 core schema boolean. Empty means False."""
    if value == "" or value in FALSE_VALUES:
        return False
    if value in TRUE_VALUES:
        return True
    raise ConfigError(
        f"Input '{name}' does not meet YAML 1.2 \"Core Schema\" specification: {value!r}. "
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


def get_boolean_input(name: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    return parse_bool(name, get_input(name, environ))


def parse_timeout(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigError(f"Input 'timeout' must be a number of seconds, got {value!r}") from None
    if timeout <= 0:
        raise ConfigError(f"Input 'timeout' must be positive, got {value!r}")
    return timeout


def load_config_file(path: str) -> Dict[str, str]:
    """Load action inputs from a YAML mapping.

    Args:
        path: Path to the YAML file.

    Returns:
        Input name to string value. Booleans become "true"/"false" so the
        result reads exactly like Actions inputs.

    Raises:
        ConfigError: If the file is missing, invalid YAML, not a mapping,
            or names an unknown input.
    """
    filepath = Path(path)
    if not filepath.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a YAML mapping, got {type(data).__name__}")

    inputs: Dict[str, str] = {}
    for key, value in data.items():
        if key not in INPUT_NAMES:
            raise ConfigError(
                f"Unknown input '{key}' in {path}. "
                f"Valid inputs: {', '.join(sorted(INPUT_NAMES))}"
            )
        if value is None:
            continue
        if isinstance(value, bool):
            inputs[key] = "true" if value else "false"
        else:
            inputs[key] = str(value).strip()
    return inputs


def resolve_config(
    overrides: Optional[Mapping[str, Optional[str]]] = None,
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BadgeConfig:
    """Merge all input sources into one BadgeConfig.

    Precedence: ``overrides`` (command-line options), then ``INPUT_*``
    environment variables, then the YAML file, then defaults. Empty
    strings count as unset at every level.
    """
    inputs: Dict[str, str] = {}
    if config_path:
        inputs.update(load_config_file(config_path))
    for name in INPUT_NAMES:
        value = get_input(name, environ)
        if value:
            inputs[name] = value
    for name, value in (overrides or {}).items():
        if name not in INPUT_NAMES:
            raise ConfigError(f"Unknown input '{name}'")
        if value:
            inputs[name] = value

    converted: Dict[str, object] = {k: v for k, v in inputs.items() if v != ""}
    converted["forceUpdate"] = parse_bool("forceUpdate", inputs.get("forceUpdate", ""))
    if inputs.get("timeout"):
        converted["timeout"] = parse_timeout(inputs["timeout"])
    return BadgeConfig.from_inputs(converted)
