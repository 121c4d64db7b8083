"""Site group validation for cert-policy-check.

Runs every field check over one site group and tracks sites already claimed by
other groups of the same tenant. Checks always run to completion: an empty
``sites`` list or a bad ``cert_mode`` never hides the remaining findings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from .field_validators import (
    FieldViolation,
    check_cert_mode,
    check_cert_provider,
    check_cert_type,
    check_credentials,
    check_site,
)
from .policy import resolve_cert_mode
from .schema import SiteGroup

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PolicyIssue:
    """Represents a single tenant document validation finding."""

    path: str
    message: str
    code: str = "policy"
    details: Optional[Dict[str, Any]] = None


def _from_violation(path: str, violation: FieldViolation) -> PolicyIssue:
    return PolicyIssue(
        path=path,
        message=violation.message,
        code=violation.code,
        details={
            "field": violation.field,
            "value": violation.value,
            "expected": violation.expected,
        },
    )


def validate_site_group(group: SiteGroup, seen_sites: Set[str], path: str) -> List[PolicyIssue]:
    """Validate one site group.

    Args:
        group: Site group to check.
        seen_sites: Sites already listed by this tenant; updated in place.
        path: Location of the group used in issue paths.

    Returns:
        Issues in check order: group name, sites, duplicates, cert mode,
        provider, key type, credentials, then per-site cert mode consistency.
    """

    issues: List[PolicyIssue] = []

    if not group.group_name:
        issues.append(
            PolicyIssue(
                path=f"{path}.group_name",
                message="SG field 'group_name' not found or empty",
                code="required-field",
                details={"field": "group_name"},
            )
        )

    if not group.sites:
        issues.append(
            PolicyIssue(
                path=f"{path}.sites",
                message="Field 'sites' not found or empty",
                code="required-field",
                details={"field": "sites"},
            )
        )

    for idx, site in enumerate(group.sites):
        if site in seen_sites:
            issues.append(
                PolicyIssue(
                    path=f"{path}.sites[{idx}]",
                    message=f"Duplicate found for site '{site}'",
                    code="duplicate-site",
                    details={"site": site},
                )
            )
        else:
            seen_sites.add(site)

    field_checks = (
        ("cert_mode", check_cert_mode(group.cert_mode)),
        ("cert_provider", check_cert_provider(group.cert_provider)),
        ("cert_type", check_cert_type(group.cert_type)),
        ("cert_provider_creds", check_credentials(group.cert_provider_creds)),
    )
    for field_name, violation in field_checks:
        if violation is not None:
            issues.append(_from_violation(f"{path}.{field_name}", violation))

    rule = resolve_cert_mode(group.cert_mode)
    for idx, site in enumerate(group.sites):
        violation = check_site(site, rule)
        if violation is not None:
            issues.append(_from_violation(f"{path}.sites[{idx}]", violation))

    logger.debug("Site group %s (%s mode): %d issue(s)", path, rule.kind.value, len(issues))
    return issues
