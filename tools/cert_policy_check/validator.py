"""
Document validation entry points.

This module ties the pieces of cert-policy-check together for one document on
disk: parse the file, decode the tenant records, run the validation engine and
collect every finding in a single ``ValidationResult``.

The validation of a document runs three passes, each appending to the same
result and none stopping the next:
1. Parse: JSON (or YAML) decoding; a failure leaves an empty record list
2. Decode: shape checks while building tenant records; bad values become defaults
3. Policy: tenant, site group and field rules from the validation engine

Classes:
    ValidationMessage: A single finding with path context and suggestion
    ValidationResult: All findings for one document
    DocumentValidator: Orchestrator for one or many documents

Note:
    Documents are independent, so ``validate_many`` may run them on a thread
    pool. Results always come back in the order the paths were given.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .document_parser import DocumentParser
from .schema import decode_document
from .suggestions import get_suggestion
from .tenant_validator import collect_issues

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ValidationMessage:
    """Represents a single validation message with document path context."""

    path: str
    message: str
    code: Optional[str] = None
    suggestion: Optional[str] = None


@dataclass(slots=True)
class ValidationResult:
    """Aggregated validation outcome for one document."""

    document: Optional[str] = None
    errors: List[ValidationMessage] = field(default_factory=list)
    tenant_count: int = 0

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> List[str]:
        return [error.message for error in self.errors]


class DocumentValidator:
    """Validate tenant documents on disk or already decoded."""

    def __init__(
        self,
        *,
        jobs: int = 1,
        parser: Optional[DocumentParser] = None,
    ) -> None:
        if jobs < 1:
            raise ValueError("jobs must be at least 1")
        self.jobs = jobs
        self.parser = parser or DocumentParser()
        self.logger = logger.getChild(self.__class__.__name__)

    def validate(self, document_path: Union[str, Path]) -> ValidationResult:
        """Validate a single document file."""

        document_path = Path(document_path)
        self.logger.debug("Starting validation for %s", document_path)

        try:
            content = self.parser.read(str(document_path))
        except (OSError, UnicodeDecodeError) as e:
            self.logger.debug("Reading failed: %s", e)
            result = ValidationResult(document=str(document_path))
            result.errors.append(
                ValidationMessage(
                    path="document",
                    message=f"Failed to read file '{document_path.resolve()}': {e}",
                    code="read-error",
                )
            )
            return result

        format_name = self.parser.format_name(str(document_path))
        data, error = self.parser.loads(content, format_name=format_name)
        result = self.validate_data(data, format_name=format_name)
        result.document = str(document_path)
        if error:
            self.logger.debug("Parsing failed: %s", error)
            result.errors.insert(0, ValidationMessage(path="document", message=error, code="parse-error"))
        return result

    def validate_data(self, data: Any, *, format_name: str = "JSON") -> ValidationResult:
        """Validate already decoded document data."""

        result = ValidationResult()

        decoded = decode_document(data, format_name=format_name)
        result.tenant_count = len(decoded.records)
        result.errors.extend(
            ValidationMessage(path="document", message=message, code="shape-error")
            for message in decoded.errors
        )

        policy_result = collect_issues(decoded.records)
        for issue in policy_result.issues:
            result.errors.append(
                ValidationMessage(
                    path=issue.path,
                    message=issue.message,
                    code=issue.code,
                    suggestion=get_suggestion(issue.code, issue.details),
                )
            )

        return result

    def validate_many(self, document_paths: Iterable[Union[str, Path]]) -> List[ValidationResult]:
        """Validate several documents, preserving input order."""

        paths = list(document_paths)
        if self.jobs == 1 or len(paths) < 2:
            return [self.validate(path) for path in paths]

        self.logger.debug("Validating %d documents with %d workers", len(paths), self.jobs)
        with ThreadPoolExecutor(max_workers=self.jobs, thread_name_prefix="cert-policy-check") as pool:
            return list(pool.map(self.validate, paths))


def summarize(results: Iterable[ValidationResult]) -> Dict[str, int]:
    """Count documents, failed documents and errors across results."""

    summary = {"documents": 0, "failed": 0, "errors": 0}
    for result in results:
        summary["documents"] += 1
        summary["errors"] += len(result.errors)
        if not result.is_valid:
            summary["failed"] += 1
    return summary
