"""
Document parser for cert-policy-check.

This module provides a DocumentParser class that reads tenant documents from
disk or from strings. JSON documents are decoded with the standard library;
YAML documents use ruamel.yaml when available, falling back to PyYAML.

Parse failures are returned, not raised: the caller reports them as a
document error and carries on with the next document.
"""

import json
import logging
from io import StringIO
from pathlib import Path
from typing import Any, Optional, Tuple

from .schema import format_error

logger = logging.getLogger("cert_policy_check.document_parser")

YAML_SUFFIXES = (".yaml", ".yml")


class DocumentParser:
    """
    Tenant document parser with JSON and YAML support.

    The YAML backend is resolved once at construction: ruamel.yaml when
    preferred and installed, otherwise PyYAML.
    """

    def __init__(self, prefer_ruamel: bool = True) -> None:
        """
        Initialize the parser with YAML library preference.

        Args:
            prefer_ruamel: Whether to prefer ruamel.yaml for YAML documents
        """
        self.prefer_ruamel = prefer_ruamel
        self._yaml_loader = None
        self._use_ruamel = False

        if prefer_ruamel:
            self._init_ruamel()
        else:
            self._init_pyyaml()

    def _init_ruamel(self) -> None:
        """Initialize ruamel.yaml parser if available."""
        try:
            import ruamel.yaml
            self._yaml_loader = ruamel.yaml
            self._use_ruamel = True
            logger.debug("Using ruamel.yaml for YAML documents")
        except ImportError:
            logger.debug("ruamel.yaml not available, falling back to PyYAML")
            self._init_pyyaml()

    def _init_pyyaml(self) -> None:
        """Initialize PyYAML parser as fallback."""
        try:
            import yaml
            self._yaml_loader = yaml
            self._use_ruamel = False
            logger.debug("Using PyYAML for YAML documents")
        except ImportError as e:
            raise ImportError("Neither ruamel.yaml nor PyYAML is available. Install one of them to read YAML documents.") from e

    @staticmethod
    def format_name(path: str) -> str:
        """Return "YAML" for YAML file names and "JSON" otherwise."""
        return "YAML" if Path(path).suffix.lower() in YAML_SUFFIXES else "JSON"

    @staticmethod
    def read(path: str) -> str:
        """
        Return the UTF-8 text of the document at the given path.

        Raises:
            OSError: If the file cannot be opened or read
            UnicodeDecodeError: If the file is not valid UTF-8
        """
        return Path(path).read_text(encoding="utf-8")

    def load(self, path: str) -> Tuple[Optional[Any], Optional[str]]:
        """
        Read and parse the document at the given path.

        Args:
            path: Path to a .json, .yaml or .yml file

        Returns:
            Tuple of (data, error_message):
            - On success: (decoded_data, None)
            - On error: (None, error_message)
        """
        try:
            content = self.read(path)
        except (OSError, UnicodeDecodeError) as e:
            return None, f"Failed to read file '{Path(path).resolve()}': {e}"

        return self.loads(content, format_name=self.format_name(path))

    def loads(self, content: str, format_name: str = "JSON") -> Tuple[Optional[Any], Optional[str]]:
        """
        Parse a document from string content.

        Args:
            content: Document text
            format_name: "JSON" or "YAML"

        Returns:
            Tuple of (data, error_message) as for ``load``.
        """
        if format_name == "YAML":
            return self._loads_yaml(content)
        return self._loads_json(content)

    def _loads_json(self, content: str) -> Tuple[Optional[Any], Optional[str]]:
        """Load JSON using the standard library decoder."""
        try:
            return json.loads(content), None
        except json.JSONDecodeError as e:
            return None, format_error("JSON", str(e))

    def _loads_yaml(self, content: str) -> Tuple[Optional[Any], Optional[str]]:
        """Load YAML using the configured backend."""
        if self._use_ruamel:
            from ruamel.yaml.error import YAMLError

            try:
                # YAML instances are not thread-safe; one per document
                loader = self._yaml_loader.YAML(typ="safe", pure=True)  # type: ignore
                return loader.load(StringIO(content)), None
            except YAMLError as e:
                line = getattr(getattr(e, "problem_mark", None), "line", None)
                problem = getattr(e, "problem", None) or str(e)
                if line is not None:
                    return None, format_error("YAML", f"line {line + 1}: {problem}")
                return None, format_error("YAML", problem)

        import yaml

        try:
            return yaml.safe_load(StringIO(content)), None
        except yaml.YAMLError as e:
            return None, format_error("YAML", str(e))
