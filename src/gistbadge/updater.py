"""Conditional gist update: skip the write when the stored badge is unchanged."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from gistbadge.badge import render_content
from gistbadge.config import ConfigError
from gistbadge.content import build_content
from gistbadge.gist import GistError
from gistbadge.models import BadgeConfig, UpdateResult

logger = logging.getLogger(__name__)


class GistFiles(Protocol):
    """What the updater needs from a gist client."""

    def fetch_file(self, filename: str) -> Optional[str]: ...

    def update_file(self, filename: str, content: str) -> None: ...


def _fetch_previous(client: GistFiles, filename: str) -> Optional[str]:
    """Read the stored file. Read failures are logged and count as absent."""
    try:
        return client.fetch_file(filename)
    except GistError as e:
        logger.warning("%s", e)
        if e.body:
            logger.debug("%s", e.body)
        return None


def update_badge(config: BadgeConfig, client: GistFiles) -> UpdateResult:
    """Build, render and conditionally write the badge file.

    With ``force_update`` the gist is written without reading it first.
    Otherwise the stored file is fetched and the write is skipped when its
    content is identical to the new rendering.

    Raises:
        ConfigError: If ``filename`` is empty or an input is malformed.
        BadgeError: If the SVG cannot be rendered.
        GistError: If the write fails.
    """
    filename = config.filename
    if not filename:
        raise ConfigError("Input required and not supplied: filename")

    content = render_content(build_content(config), filename)

    if config.force_update:
        logger.info("Force update enabled, updating gist at %s.", filename)
        client.update_file(filename, content)
        return UpdateResult(action="forced", filename=filename, content=content)

    previous = _fetch_previous(client, filename)

    if previous is not None and previous == content:
        logger.info("Content did not change, not updating gist at %s.", filename)
        return UpdateResult(action="skipped", filename=filename, content=content, previous_found=True)

    if previous is not None:
        logger.info("Content changed, updating gist at %s.", filename)
        action = "updated"
    else:
        logger.info("Content didn't exist, creating gist at %s.", filename)
        action = "created"

    client.update_file(filename, content)
    return UpdateResult(
        action=action, filename=filename, content=content, previous_found=previous is not None,
    )
