"""Locate tenant documents from command-line path arguments."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Union

from .document_parser import YAML_SUFFIXES

logger = logging.getLogger(__name__)

JSON_SUFFIX = ".json"


class DiscoveryError(ValueError):
    """Raised when a path argument cannot be turned into documents."""


def _is_document(path: Path, include_yaml: bool) -> bool:
    suffix = path.suffix.lower()
    return suffix == JSON_SUFFIX or (include_yaml and suffix in YAML_SUFFIXES)


def expand_path(path: Union[str, Path], *, include_yaml: bool = False) -> List[Path]:
    """Return the documents a single path argument refers to.

    A directory contributes its ``*.json`` files (and ``*.yaml``/``*.yml`` when
    ``include_yaml`` is set), non-recursively and sorted by name. A regular
    file is returned as-is when its extension is supported.

    Raises:
        DiscoveryError: If the path does not exist or has an unsupported extension.
    """

    target = Path(path)
    if not target.exists():
        raise DiscoveryError(f"No such file or directory: {target}")

    if target.is_dir():
        found = sorted(
            entry for entry in target.iterdir()
            if entry.is_file() and _is_document(entry, include_yaml)
        )
        logger.debug("Found %d document(s) under %s", len(found), target)
        return found

    if target.is_file():
        # Naming a YAML file explicitly is enough to opt in.
        if not _is_document(target, include_yaml=True):
            raise DiscoveryError(f"Unsupported file type for '{target}': expected a .json file")
        return [target]

    return []


def discover_documents(paths: Iterable[Union[str, Path]], *, include_yaml: bool = False) -> List[Path]:
    """Expand every path argument, keeping argument order.

    Raises:
        DiscoveryError: If any path is invalid or no documents were found.
    """

    documents: List[Path] = []
    for path in paths:
        documents.extend(expand_path(path, include_yaml=include_yaml))

    if not documents:
        raise DiscoveryError("No JSON files found.")
    return documents
