"""
Cert Policy Check CLI Tool

A CLI tool for validating tenant certificate-provisioning documents. Each
document lists tenants, their site groups and the certificate settings of
each group; the tool reports every problem it finds in one pass.
"""

__version__ = "0.1.0"

from .document_parser import DocumentParser
from .schema import CredentialBundle, SiteGroup, TenantRecord, decode_document
from .tenant_validator import collect_issues, validate_document, validate_tenant
from .validator import DocumentValidator, ValidationMessage, ValidationResult

__all__ = [
    "CredentialBundle",
    "DocumentParser",
    "DocumentValidator",
    "SiteGroup",
    "TenantRecord",
    "ValidationMessage",
    "ValidationResult",
    "collect_issues",
    "decode_document",
    "validate_document",
    "validate_tenant",
]
