"""Accepted values and matching patterns for certificate-policy fields.

Closed value sets for ``cert_mode``, ``cert_provider`` and ``cert_type`` and the
compiled regular expressions used to check cert modes and site names.

Constants:
    ALLOWED_CERT_MODES: Fixed literal cert modes
    ALLOWED_PROVIDERS: Certificate authorities accepted for ``cert_provider``
    ALLOWED_CERT_TYPES: Key types accepted for ``cert_type``
    CERT_MODE_PATTERN: Wildcard-domain cert mode (``*.example.com``)
    SIMPLE_SITE_PATTERN: Site accepted when the cert mode is not a wildcard

Functions:
    resolve_cert_mode(): Classify a cert mode into a ``CertModeRule``
    wildcard_site_pattern(): Site pattern derived from a wildcard cert mode

Note:
    Patterns are matched against the whole value with ``fullmatch`` and use
    ASCII character classes, so ``\\w`` never accepts non-ASCII letters.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

ALLOWED_CERT_MODES: Tuple[str, ...] = (
    "san",
    "classic",
)

ALLOWED_PROVIDERS: Tuple[str, ...] = (
    "letsencrypt",
    "buypass",
    "zerossl",
    "sslcom",
    "google",
    "google_test",
    "buypass_test",
    "letsencrypt_test",
)

ALLOWED_CERT_TYPES: Tuple[str, ...] = (
    "ec-256",
    "ec-384",
    "2048",
    "3072",
    "4096",
)

CERT_MODE_PATTERN: re.Pattern[str] = re.compile(r"^\*\.\S+\.\w+$", re.ASCII)
SIMPLE_SITE_PATTERN: re.Pattern[str] = re.compile(r"^\S+\.\w+$", re.ASCII)

_WILDCARD_PREFIX = "*."
_SITE_LABEL = r"([a-zA-Z0-9-]+\.)?"
_NEVER_MATCHES = re.compile(r"(?!)")


class CertModeKind(Enum):
    """Shape of a site group's cert mode."""

    DEFAULT = "default"
    FIXED_LITERAL = "fixed"
    WILDCARD_DOMAIN = "wildcard"


@dataclass(frozen=True, slots=True)
class CertModeRule:
    """Cert mode resolved once per site group, with the site pattern it implies."""

    mode: str
    kind: CertModeKind
    site_pattern: re.Pattern[str]

    def accepts_site(self, site: str) -> bool:
        return self.site_pattern.fullmatch(site) is not None


def is_wildcard_mode(cert_mode: str) -> bool:
    return CERT_MODE_PATTERN.fullmatch(cert_mode) is not None


@lru_cache(maxsize=256)
def wildcard_site_pattern(cert_mode: str) -> re.Pattern[str]:
    """Return the site pattern implied by a wildcard cert mode.

    ``*.corp.example.com`` accepts ``corp.example.com`` and exactly one extra
    leading label such as ``eu.corp.example.com``; deeper nesting is rejected.
    Only the dots of the suffix are escaped, any other character keeps its
    regex meaning. A suffix that does not compile yields a pattern that
    matches nothing, so every site is reported as a mismatch.

    Raises:
        ValueError: If ``cert_mode`` is not a wildcard cert mode.
    """

    if not is_wildcard_mode(cert_mode):
        raise ValueError(f"cert_mode '{cert_mode}' is not a wildcard domain")
    suffix = cert_mode[len(_WILDCARD_PREFIX):].replace(".", r"\.")
    try:
        return re.compile(f"^{_SITE_LABEL}{suffix}$", re.ASCII)
    except re.error as exc:
        logger.debug("Site pattern for cert_mode '%s' does not compile: %s", cert_mode, exc)
        return _NEVER_MATCHES


def resolve_cert_mode(cert_mode: Optional[str]) -> CertModeRule:
    """Classify ``cert_mode`` and pick the pattern its sites must match.

    Values that are neither a fixed literal nor a wildcard (including invalid
    ones) fall back to the simple site pattern; the cert mode itself is
    reported separately by the cert mode check.
    """

    mode = cert_mode or ""
    if is_wildcard_mode(mode):
        return CertModeRule(mode, CertModeKind.WILDCARD_DOMAIN, wildcard_site_pattern(mode))
    if mode in ALLOWED_CERT_MODES:
        return CertModeRule(mode, CertModeKind.FIXED_LITERAL, SIMPLE_SITE_PATTERN)
    return CertModeRule(mode, CertModeKind.DEFAULT, SIMPLE_SITE_PATTERN)
