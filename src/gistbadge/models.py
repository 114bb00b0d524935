"""Core data models for gistbadge."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

SCHEMA_VERSION = 1

# Action input name -> BadgeConfig attribute, in action.yml order.
INPUT_NAMES: Dict[str, str] = {
    "gistID": "gist_id",
    "auth": "auth",
    "label": "label",
    "message": "message",
    "color": "color",
    "valColorRange": "val_color_range",
    "minColorRange": "min_color_range",
    "maxColorRange": "max_color_range",
    "invertColorRange": "invert_color_range",
    "colorRangeSaturation": "color_range_saturation",
    "colorRangeLightness": "color_range_lightness",
    "labelColor": "label_color",
    "isError": "is_error",
    "namedLogo": "named_logo",
    "logoSvg": "logo_svg",
    "logoColor": "logo_color",
    "logoWidth": "logo_width",
    "logoPosition": "logo_position",
    "style": "style",
    "cacheSeconds": "cache_seconds",
    "filename": "filename",
    "forceUpdate": "force_update",
    "timeout": "timeout",
    "apiUrl": "api_url",
}


@dataclass
class BadgeConfig:
    """All inputs of one invocation. Unset inputs are empty strings."""
    gist_id: str = ""
    auth: str = ""
    label: str = ""
    message: str = ""
    color: str = ""
    val_color_range: str = ""
    min_color_range: str = ""
    max_color_range: str = ""
    invert_color_range: str = ""
    color_range_saturation: str = ""
    color_range_lightness: str = ""
    label_color: str = ""
    is_error: str = ""
    named_logo: str = ""
    logo_svg: str = ""
    logo_color: str = ""
    logo_width: str = ""
    logo_position: str = ""
    style: str = ""
    cache_seconds: str = ""
    filename: str = ""
    force_update: bool = False
    timeout: float = 10.0
    api_url: str = "https://api.github.com"

    @classmethod
    def from_inputs(cls, inputs: Mapping[str, Any]) -> "BadgeConfig":
        """Build a config from a mapping keyed by action input names.

        Values are taken as already converted; unknown names are ignored.
        """
        kwargs = {
            INPUT_NAMES[name]: value
            for name, value in inputs.items()
            if name in INPUT_NAMES and value is not None
        }
        return cls(**kwargs)


@dataclass
class ColorRange:
    """Numeric range used to derive a red-to-green message color."""
    min: float
    max: float
    value: float
    inverted: bool = False
    saturation: float = 100.0
    lightness: float = 40.0


@dataclass
class BadgeContent:
    """Shield-endpoint badge description.

    Optional members left as ``None`` are not serialized, so an unset field
    never shows up as ``null`` or ``""`` in the payload.
    """
    label: str
    message: str
    schema_version: int = SCHEMA_VERSION
    color: Optional[str] = None
    label_color: Optional[str] = None
    is_error: Optional[str] = None
    named_logo: Optional[str] = None
    logo_svg: Optional[str] = None
    logo_color: Optional[str] = None
    logo_width: Optional[int] = None
    logo_position: Optional[str] = None
    style: Optional[str] = None
    cache_seconds: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the endpoint payload with camelCase keys in schema order."""
        data: Dict[str, Any] = {}
        for name in _PAYLOAD_ORDER:
            value = getattr(self, name)
            if value is not None:
                data[_camel(name)] = value
        return data


_PAYLOAD_ORDER = (
    "schema_version",
    "label",
    "message",
    "color",
    "label_color",
    "is_error",
    "named_logo",
    "logo_svg",
    "logo_color",
    "logo_width",
    "logo_position",
    "style",
    "cache_seconds",
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass
class UpdateResult:
    """Outcome of one conditional gist update."""
    action: str  # skipped, created, updated, forced
    filename: str
    content: str
    previous_found: bool = False

    @property
    def written(self) -> bool:
        return self.action != "skipped"
