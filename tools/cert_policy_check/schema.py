"""Schema definitions and decoding helpers for cert-policy-check.

Defines Pydantic models for tenant documents and validates raw decoded data
(lists and mappings from JSON or YAML) against them. Decoding is lenient:
every value of the wrong type is reported as a shape issue and replaced by its
empty default so the remaining records can still be validated.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, Iterable, List, Optional, Tuple

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictStr,
    TypeAdapter,
    ValidationError,
    field_validator,
)

logger = logging.getLogger(__name__)


def _none_to_empty_string(value: Any) -> Any:
    return "" if value is None else value


def _none_items_to(value: Any, default: Any) -> Any:
    """Replace null entries of a list so they decode to ``default``."""

    if value is None:
        return ()
    if isinstance(value, list):
        return [default() if item is None else item for item in value]
    return value


class CredentialBundle(BaseModel):
    """External-account binding credentials for a certificate authority."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    email: StrictStr = Field(default="", description="Account e-mail registered with the CA")
    kid: StrictStr = Field(default="", description="External account key identifier")
    hmac_key: StrictStr = Field(default="", description="External account HMAC key")

    @field_validator("email", "kid", "hmac_key", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return _none_to_empty_string(value)


class SiteGroup(BaseModel):
    """A named cluster of domains sharing one certificate-issuance policy."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    group_name: StrictStr = Field(default="", description="Site group name")
    sites: Tuple[StrictStr, ...] = Field(
        default=(), description="Domain names covered by the certificate, unique per tenant"
    )
    cert_mode: StrictStr = Field(
        default="", description="'san', 'classic', a wildcard domain like '*.example.com', or empty"
    )
    cert_provider: StrictStr = Field(default="", description="Certificate authority, empty for default")
    cert_type: StrictStr = Field(default="", description="Key type, empty for default")
    cert_provider_creds: Optional[CredentialBundle] = Field(
        default=None, description="External-account credentials, all fields or none"
    )

    @field_validator("group_name", "cert_mode", "cert_provider", "cert_type", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return _none_to_empty_string(value)

    @field_validator("sites", mode="before")
    @classmethod
    def _null_sites(cls, value: Any) -> Any:
        return _none_items_to(value, str)


class TenantRecord(BaseModel):
    """Top-level owner of one or more site groups."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    tenant: StrictStr = Field(default="", description="Tenant identifier")
    env: StrictStr = Field(default="", description="Environment tag")
    site_groups: Tuple[SiteGroup, ...] = Field(
        default=(), description="Site groups owned by the tenant"
    )

    @field_validator("tenant", "env", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return _none_to_empty_string(value)

    @field_validator("site_groups", mode="before")
    @classmethod
    def _null_site_groups(cls, value: Any) -> Any:
        return _none_items_to(value, dict)


_DOCUMENT_ADAPTER = TypeAdapter(
    Annotated[List[TenantRecord], BeforeValidator(lambda value: _none_items_to(value, dict))]
)


@dataclass(slots=True)
class DecodedDocument:
    """Tenant records decoded from raw data, plus shape problems found on the way."""

    records: List[TenantRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def load_document_schema() -> Dict[str, Any]:
    """Return the JSON schema describing a tenant document."""

    return _DOCUMENT_ADAPTER.json_schema()


def format_error(format_name: str, detail: str) -> str:
    """Return the message used for document-level decoding problems."""

    return f"Incorrect {format_name} format: {detail}"


def decode_document(data: Any, *, format_name: str = "JSON") -> DecodedDocument:
    """Validate raw decoded data against the tenant document schema.

    Values rejected by the schema are reported, blanked and the document is
    validated again, so one bad field does not hide the rest of the records.

    Args:
        data: Result of ``json.loads`` (or a YAML load) for one document.
        format_name: Label used in shape messages ("JSON" or "YAML").

    Returns:
        DecodedDocument with every record that could be built and one
        ``Incorrect <format> format`` message per rejected value.
    """

    decoded = DecodedDocument()
    if data is None:
        return decoded

    working = copy.deepcopy(data)
    while True:
        try:
            decoded.records = _DOCUMENT_ADAPTER.validate_python(working)
            break
        except ValidationError as exc:
            logger.debug("Document schema validation failed: %s", exc)
            issues = exc.errors()
            decoded.errors.extend(
                format_error(format_name, message) for message in _convert_validation_errors(issues)
            )
            # Stop when nothing can be blanked, e.g. the root is not a list.
            if not all(_discard(working, issue.get("loc", ())) for issue in issues):
                decoded.records = []
                break

    logger.debug(
        "Decoded %d tenant record(s), %d shape issue(s)", len(decoded.records), len(decoded.errors)
    )
    return decoded


def _convert_validation_errors(issues: Iterable[Dict[str, Any]]) -> Iterable[str]:
    for error in issues:
        path = _format_location(error.get("loc", ()))
        msg = error.get("msg", "Invalid value")
        yield f"value at '{path or 'root'}': {msg}"


def _format_location(location: Iterable[Any]) -> str:
    parts: List[str] = []
    for entry in location:
        if isinstance(entry, int):
            if not parts:
                parts.append(f"[{entry}]")
            else:
                parts[-1] = f"{parts[-1]}[{entry}]"
        else:
            parts.append(str(entry))
    return ".".join(parts)


def _discard(data: Any, location: Tuple[Any, ...]) -> bool:
    """Replace the value at ``location`` with None; return False if impossible."""

    if not location:
        return False
    parent = data
    try:
        for key in location[:-1]:
            parent = parent[key]
        parent[location[-1]] = None
    except (KeyError, IndexError, TypeError):
        return False
    return True
