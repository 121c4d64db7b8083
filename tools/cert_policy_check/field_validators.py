"""Field-level checks for site group settings.

Each check is a pure function over one field (or one site plus its group's
resolved cert mode). A passing value yields ``None``; a failing value yields a
``FieldViolation`` carrying the offending value, a description of what was
expected and the finished error message.

Functions:
    check_cert_mode(): ``cert_mode`` is empty, a fixed literal or a wildcard domain
    check_cert_provider(): ``cert_provider`` is empty or a known CA
    check_cert_type(): ``cert_type`` is empty or a known key type
    check_credentials(): ``cert_provider_creds`` is absent or fully populated
    check_site(): a site name is compatible with its group's cert mode
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .policy import (
    ALLOWED_CERT_MODES,
    ALLOWED_CERT_TYPES,
    ALLOWED_PROVIDERS,
    CERT_MODE_PATTERN,
    SIMPLE_SITE_PATTERN,
    CertModeRule,
    is_wildcard_mode,
)
from .schema import CredentialBundle

CERT_MODE_EXPECTED = (
    ", ".join(ALLOWED_CERT_MODES) + f", or regex '{CERT_MODE_PATTERN.pattern}'"
)
CERT_PROVIDER_EXPECTED = ", ".join(ALLOWED_PROVIDERS)
CERT_TYPE_EXPECTED = ", ".join(ALLOWED_CERT_TYPES)


@dataclass(frozen=True, slots=True)
class FieldViolation:
    """A single failed field check."""

    field: str
    value: str
    expected: str
    code: str
    message: str


def _enumerated_violation(field: str, value: str, expected: str, code: str) -> FieldViolation:
    return FieldViolation(
        field=field,
        value=value,
        expected=expected,
        code=code,
        message=f"Incorrect SG field '{field}' value: '{value}'. Value must be one of: {expected}",
    )


def _empty_or_member(value: str, allowed: Iterable[str]) -> bool:
    return value == "" or value in allowed


def check_cert_mode(cert_mode: str) -> Optional[FieldViolation]:
    if _empty_or_member(cert_mode, ALLOWED_CERT_MODES) or is_wildcard_mode(cert_mode):
        return None
    return _enumerated_violation("cert_mode", cert_mode, CERT_MODE_EXPECTED, "invalid-cert-mode")


def check_cert_provider(cert_provider: str) -> Optional[FieldViolation]:
    if _empty_or_member(cert_provider, ALLOWED_PROVIDERS):
        return None
    return _enumerated_violation(
        "cert_provider", cert_provider, CERT_PROVIDER_EXPECTED, "invalid-cert-provider"
    )


def check_cert_type(cert_type: str) -> Optional[FieldViolation]:
    if _empty_or_member(cert_type, ALLOWED_CERT_TYPES):
        return None
    return _enumerated_violation("cert_type", cert_type, CERT_TYPE_EXPECTED, "invalid-cert-type")


def credentials_complete(credentials: Optional[CredentialBundle]) -> bool:
    """Return True when the bundle is absent or every field is non-empty."""

    if credentials is None:
        return True
    return all((credentials.email, credentials.kid, credentials.hmac_key))


def check_credentials(credentials: Optional[CredentialBundle]) -> Optional[FieldViolation]:
    if credentials_complete(credentials):
        return None
    # Partial bundles are reported without saying which field is missing.
    return FieldViolation(
        field="cert_provider_creds",
        value="",
        expected="email, kid and hmac_key all set, or no credentials",
        code="credentials-format",
        message="Field 'cert_provider_creds' has incorrect format",
    )


def check_site(site: str, rule: CertModeRule) -> Optional[FieldViolation]:
    """Check one site against the cert mode resolved for its group."""

    if rule.accepts_site(site):
        return None
    return FieldViolation(
        field="sites",
        value=site,
        expected=rule.site_pattern.pattern,
        code="site-mode-mismatch",
        message=(
            f"Incorrect site field value: '{site}'. Value must correspond to site regex: "
            f"'{SIMPLE_SITE_PATTERN.pattern}' and cert_mode '{rule.mode}'"
        ),
    )
