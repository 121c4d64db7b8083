"""Output formatting and structured error reporting for document validation.

This module renders the results of validating one or more tenant documents as
human-readable text or machine-readable JSON, and decides the process exit
code.

Text output prints one block per document:

    Config file examples/ok.json validation succeeded.
    Config file 'examples/bad.json' validation failed.
    Issues:
    - Field 'env' not found or empty
        Suggestion: Set 'env' to a non-empty string.

followed by a one-line summary. JSON output carries the same findings plus
their location paths and codes.

Exit Codes:
    - 0: Every document is valid
    - 1: At least one document has errors
"""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, List, Optional, TextIO

from .validator import ValidationResult, summarize


class ValidationReporter:
    """Handles structured output formatting for validation results."""

    def __init__(
        self,
        output_format: str = "text",
        output_file: Optional[TextIO] = None,
        show_suggestions: bool = True
    ) -> None:
        """
        Initialize the validation reporter.

        Args:
            output_format: Output format ('text' or 'json')
            output_file: Optional file to write output to (defaults to stdout)
            show_suggestions: Whether to include suggestions in output
        """
        self.output_format = output_format
        self.output_file = output_file or sys.stdout
        self.show_suggestions = show_suggestions
        self.results: List[ValidationResult] = []

    def add_validation_result(self, result: ValidationResult) -> None:
        """Add the outcome of validating one document."""
        self.results.append(result)

    def generate_report(self) -> str:
        """
        Generate the complete validation report.

        Returns:
            Formatted report string
        """
        if self.output_format == "json":
            return self._generate_json_report()
        else:
            return self._generate_text_report()

    def _generate_text_report(self) -> str:
        """Generate human-readable text report."""
        report_lines: List[str] = []

        for result in self.results:
            if result.is_valid:
                report_lines.append(f"Config file {result.document} validation succeeded.")
                continue

            report_lines.append(f"Config file '{result.document}' validation failed.")
            report_lines.append("Issues:")
            for error in result.errors:
                report_lines.append(f"- {error.message}")
                if self.show_suggestions and error.suggestion:
                    report_lines.append(f"    Suggestion: {error.suggestion}")

        report_lines.append("")
        report_lines.append(self.generate_summary())
        return "\n".join(report_lines)

    def _generate_json_report(self) -> str:
        """Generate machine-readable JSON report."""
        documents: List[Dict[str, Any]] = []
        for result in self.results:
            errors = []
            for error in result.errors:
                error_dict = {
                    "path": error.path,
                    "message": error.message,
                    "code": error.code,
                }
                if self.show_suggestions and error.suggestion:
                    error_dict["suggestion"] = error.suggestion
                errors.append(error_dict)

            documents.append(
                {
                    "document": result.document,
                    "status": "valid" if result.is_valid else "invalid",
                    "tenants": result.tenant_count,
                    "errors": errors,
                }
            )

        report_data = {
            "status": "invalid" if self.has_failures() else "valid",
            "summary": summarize(self.results),
            "exit_code": self.determine_exit_code(),
            "documents": documents,
        }

        return json.dumps(report_data, indent=2)

    def generate_summary(self) -> str:
        """Generate summary statistics string."""
        stats = summarize(self.results)

        def _plural(count: int, noun: str) -> str:
            suffix = "" if count == 1 else "s"
            return f"{count} {noun}{suffix}"

        if stats["failed"]:
            return (
                "Validation failed for "
                f"{stats['failed']} of {_plural(stats['documents'], 'document')} "
                f"with {_plural(stats['errors'], 'error')}."
            )
        return f"Validation passed for {_plural(stats['documents'], 'document')}."

    def has_failures(self) -> bool:
        """Return True if any document produced at least one error."""
        return any(not result.is_valid for result in self.results)

    def determine_exit_code(self) -> int:
        """
        Determine appropriate exit code based on results.

        Returns:
            Exit code: 0=all valid, 1=errors found
        """
        return 1 if self.has_failures() else 0

    def print_report(self) -> None:
        """Print the report to the configured output file."""
        report = self.generate_report()
        print(report, file=self.output_file)
