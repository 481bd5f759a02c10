"""Canonical dataset loading.

The canonical dataset is read once per session, either from a local JSON
file or from an ``http(s)://`` URL.  Any failure is a ``LoadError``.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from pathlib import Path

from inkwell.content.models import ContentCollections
from inkwell.errors import LoadError
from pydantic import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_DATASET = "data/content.json"
FETCH_TIMEOUT = 15


def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def _read(location: str) -> str:
    if _is_url(location):
        req = urllib.request.Request(location, headers={"Accept": "application/json"})
        with urllib.request.urlopen(req, timeout=FETCH_TIMEOUT) as resp:
            return resp.read().decode("utf-8")
    return Path(location).read_text(encoding="utf-8")


def load_dataset(location: str | Path = DEFAULT_DATASET) -> ContentCollections:
    """Load and validate the canonical poems/quotes dataset.

    Args:
        location: Filesystem path or http(s) URL of the JSON document.

    Returns:
        The parsed collections.

    Raises:
        LoadError: If the document cannot be read, fetched, decoded or
            validated.
    """
    location = str(location)
    logger.debug("Loading canonical dataset from %s", location)
    try:
        raw = _read(location)
    except (OSError, urllib.error.URLError, UnicodeDecodeError) as exc:
        raise LoadError(f"Could not read content from {location}: {exc}") from exc
    try:
        return ContentCollections.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise LoadError(f"Malformed content in {location}: {exc}") from exc
