#!/usr/bin/env python3
"""
Test suite for cert-policy-check reporter functionality.

Tests cover the per-document text layout, the JSON report structure, the
summary line and exit code determination.
"""

import json
from io import StringIO

from tools.cert_policy_check.reporter import ValidationReporter
from tools.cert_policy_check.validator import ValidationMessage, ValidationResult


def _valid(document="ok.json"):
    return ValidationResult(document=document, tenant_count=1)


def _invalid(document="bad.json"):
    return ValidationResult(
        document=document,
        tenant_count=1,
        errors=[
            ValidationMessage(
                path="[0].env",
                message="Field 'env' not found or empty",
                code="required-field",
                suggestion="Set 'env' to a non-empty string.",
            ),
            ValidationMessage(path="document", message="Incorrect JSON format: oops", code="shape-error"),
        ],
    )


class TestTextReport:
    def test_success_line(self):
        reporter = ValidationReporter()
        reporter.add_validation_result(_valid())

        report = reporter.generate_report()

        assert "Config file ok.json validation succeeded." in report
        assert report.endswith("Validation passed for 1 document.")

    def test_failure_block_lists_every_issue(self):
        reporter = ValidationReporter()
        reporter.add_validation_result(_invalid())

        lines = reporter.generate_report().splitlines()

        assert lines[:5] == [
            "Config file 'bad.json' validation failed.",
            "Issues:",
            "- Field 'env' not found or empty",
            "    Suggestion: Set 'env' to a non-empty string.",
            "- Incorrect JSON format: oops",
        ]
        assert lines[-1] == "Validation failed for 1 of 1 document with 2 errors."

    def test_suggestions_can_be_hidden(self):
        reporter = ValidationReporter(show_suggestions=False)
        reporter.add_validation_result(_invalid())

        assert "Suggestion:" not in reporter.generate_report()

    def test_mixed_documents_summary(self):
        reporter = ValidationReporter()
        reporter.add_validation_result(_valid("a.json"))
        reporter.add_validation_result(_invalid("b.json"))
        reporter.add_validation_result(_valid("c.json"))

        assert reporter.generate_summary() == "Validation failed for 1 of 3 documents with 2 errors."


class TestJSONReport:
    def test_structure(self):
        reporter = ValidationReporter(output_format="json")
        reporter.add_validation_result(_valid())
        reporter.add_validation_result(_invalid())

        payload = json.loads(reporter.generate_report())

        assert payload["status"] == "invalid"
        assert payload["exit_code"] == 1
        assert payload["summary"] == {"documents": 2, "failed": 1, "errors": 2}
        assert [doc["status"] for doc in payload["documents"]] == ["valid", "invalid"]
        first_error = payload["documents"][1]["errors"][0]
        assert first_error["path"] == "[0].env"
        assert first_error["code"] == "required-field"
        assert first_error["suggestion"] == "Set 'env' to a non-empty string."
        assert "suggestion" not in payload["documents"][1]["errors"][1]

    def test_all_valid(self):
        reporter = ValidationReporter(output_format="json")
        reporter.add_validation_result(_valid())

        payload = json.loads(reporter.generate_report())

        assert payload["status"] == "valid"
        assert payload["exit_code"] == 0


class TestExitCodes:
    def test_no_results(self):
        assert ValidationReporter().determine_exit_code() == 0

    def test_errors_found(self):
        reporter = ValidationReporter()
        reporter.add_validation_result(_valid())
        reporter.add_validation_result(_invalid())

        assert reporter.has_failures()
        assert reporter.determine_exit_code() == 1


def test_print_report_writes_to_output_file():
    output = StringIO()
    reporter = ValidationReporter(output_file=output)
    reporter.add_validation_result(_valid())

    reporter.print_report()

    assert "validation succeeded" in output.getvalue()
