"""Tenant and document validation for cert-policy-check.

This module is the entry point of the validation engine. It walks the tenant
records of one decoded document, checks tenant-level required fields and
delegates each site group to ``validate_site_group`` with a duplicate-site set
shared across the tenant's groups.

Functions:
    validate_tenant(): Findings for one tenant record
    collect_issues(): Findings for a whole document, with paths and codes
    validate_document(): Ordered error messages for a whole document

Note:
    The engine never raises on bad data and never stops at the first failure.
    It keeps no state between calls, so documents can be validated in
    parallel as long as each call gets its own record sequence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Set

from .schema import TenantRecord
from .site_group_validator import PolicyIssue, validate_site_group

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PolicyValidationResult:
    """Aggregated findings for one document."""

    issues: List[PolicyIssue] = field(default_factory=list)

    @property
    def messages(self) -> List[str]:
        return [issue.message for issue in self.issues]

    @property
    def is_valid(self) -> bool:
        return not self.issues


def _required(path: str, field_name: str, message: str) -> PolicyIssue:
    return PolicyIssue(
        path=f"{path}.{field_name}",
        message=message,
        code="required-field",
        details={"field": field_name},
    )


def validate_tenant(record: TenantRecord, path: str = "[0]") -> List[PolicyIssue]:
    """Validate one tenant record and all of its site groups."""

    issues: List[PolicyIssue] = []

    if not record.tenant:
        issues.append(_required(path, "tenant", "Field 'tenant' not found or empty"))
    if not record.env:
        issues.append(_required(path, "env", "Field 'env' not found or empty"))
    if not record.site_groups:
        issues.append(_required(path, "site_groups", "Field 'site_groups' not found or empty"))
        return issues

    seen_sites: Set[str] = set()
    for idx, group in enumerate(record.site_groups):
        issues.extend(validate_site_group(group, seen_sites, f"{path}.site_groups[{idx}]"))

    return issues


def collect_issues(records: Sequence[TenantRecord]) -> PolicyValidationResult:
    """Validate every tenant record of a document in input order."""

    result = PolicyValidationResult()
    for idx, record in enumerate(records):
        result.issues.extend(validate_tenant(record, f"[{idx}]"))

    logger.debug("Validated %d tenant(s): %d issue(s)", len(records), len(result.issues))
    return result


def validate_document(records: Sequence[TenantRecord]) -> List[str]:
    """Return the ordered error messages for a document; empty means valid."""

    return collect_issues(records).messages
