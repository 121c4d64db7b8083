"""
Unit tests for the tenant document parser.

Tests the DocumentParser class functionality including:
- Valid JSON and YAML parsing
- Parse errors reported with the parser's own message
- Read failures reported instead of raised
- Fallback to PyYAML when ruamel.yaml is not preferred
"""

from pathlib import Path

import pytest

from tools.cert_policy_check.document_parser import DocumentParser


class TestJSON:
    def test_loads_valid_json(self):
        parser = DocumentParser()

        data, error = parser.loads('[{"tenant": "t1", "env": "prod"}]')

        assert error is None
        assert data == [{"tenant": "t1", "env": "prod"}]

    def test_malformed_json_reports_decoder_message(self):
        parser = DocumentParser()

        data, error = parser.loads('[{"tenant": "t1",}]')

        assert data is None
        assert error.startswith("Incorrect JSON format: Expecting property name enclosed in double quotes")

    def test_load_from_file(self, tmp_path: Path):
        target = tmp_path / "tenants.json"
        target.write_text('[]', encoding="utf-8")

        data, error = DocumentParser().load(str(target))

        assert error is None
        assert data == []

    def test_missing_file_is_reported(self, tmp_path: Path):
        data, error = DocumentParser().load(str(tmp_path / "absent.json"))

        assert data is None
        assert error.startswith("Failed to read file")

    def test_read_raises_for_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            DocumentParser.read(str(tmp_path / "absent.json"))


class TestYAML:
    YAML_DOCUMENT = """
- tenant: t1
  env: prod
  site_groups:
    - group_name: g1
      sites:
        - a.example.com
"""

    def test_loads_yaml_with_ruamel(self):
        parser = DocumentParser()

        data, error = parser.loads(self.YAML_DOCUMENT, format_name="YAML")

        assert error is None
        assert data[0]["site_groups"][0]["sites"] == ["a.example.com"]

    def test_loads_yaml_with_pyyaml(self):
        parser = DocumentParser(prefer_ruamel=False)

        data, error = parser.loads(self.YAML_DOCUMENT, format_name="YAML")

        assert error is None
        assert data[0]["tenant"] == "t1"

    def test_malformed_yaml(self):
        for parser in (DocumentParser(), DocumentParser(prefer_ruamel=False)):
            data, error = parser.loads("- tenant: t1\n  env: [prod\n", format_name="YAML")

            assert data is None
            assert error.startswith("Incorrect YAML format: ")

    def test_format_name_follows_suffix(self):
        assert DocumentParser.format_name("a/b.yaml") == "YAML"
        assert DocumentParser.format_name("a/b.YML") == "YAML"
        assert DocumentParser.format_name("a/b.json") == "JSON"

    def test_load_yaml_file(self, tmp_path: Path):
        target = tmp_path / "tenants.yml"
        target.write_text(self.YAML_DOCUMENT, encoding="utf-8")

        data, error = DocumentParser().load(str(target))

        assert error is None
        assert data[0]["env"] == "prod"
