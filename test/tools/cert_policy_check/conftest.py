"""Shared pytest fixtures for cert_policy_check test suite."""

from __future__ import annotations

import copy
import json
import sys
import textwrap
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
import yaml

PROJECT_ROOT = Path(__file__).resolve().parents[3]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def build_site_group(**overrides: Any) -> Dict[str, Any]:
    """Return a known-good site group with overrides applied."""

    group: Dict[str, Any] = {
        "group_name": "g1",
        "sites": ["a.example.com"],
        "cert_mode": "",
        "cert_provider": "letsencrypt",
        "cert_type": "ec-256",
    }
    group.update(overrides)
    return group


def build_tenant(**overrides: Any) -> Dict[str, Any]:
    """Return a known-good tenant record with overrides applied."""

    tenant: Dict[str, Any] = {
        "tenant": "t1",
        "env": "prod",
        "site_groups": [build_site_group()],
    }
    tenant.update(overrides)
    return tenant


class DocumentFactory:
    """Helper for building and writing tenant documents in tests."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def build_valid(self) -> List[Dict[str, Any]]:
        """Return a known-good document with two tenants."""

        return [
            build_tenant(),
            build_tenant(
                tenant="t2",
                env="stage",
                site_groups=[
                    build_site_group(
                        group_name="wildcard",
                        sites=["corp.example.org", "eu.corp.example.org"],
                        cert_mode="*.corp.example.org",
                        cert_provider="google",
                        cert_type="4096",
                        cert_provider_creds={
                            "email": "ops@example.org",
                            "kid": "kid-123",
                            "hmac_key": "hmac-secret",
                        },
                    ),
                    build_site_group(
                        group_name="san",
                        sites=["shop.example.org", "www.example.org"],
                        cert_mode="san",
                        cert_provider="",
                        cert_type="",
                    ),
                ],
            ),
        ]

    def copy_valid(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self.build_valid())

    def write(self, *, name: str = "tenants.json", document: Optional[Any] = None) -> Path:
        """Write a document as JSON (or YAML for .yaml/.yml names) and return its path."""

        content = document if document is not None else self.build_valid()
        target = self.root / name
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8") as handle:
            if target.suffix in (".yaml", ".yml"):
                yaml.safe_dump(content, handle, sort_keys=False)
            else:
                json.dump(content, handle, indent=2)
        return target

    def write_text(self, text: str, *, name: str = "tenants.json") -> Path:
        """Write raw document text to disk and return the file path."""

        target = self.root / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
        return target


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the repository root path."""

    return PROJECT_ROOT


@pytest.fixture
def document_factory(tmp_path: Path) -> DocumentFactory:
    """Provide a DocumentFactory scoped to the temporary directory."""

    return DocumentFactory(tmp_path)
