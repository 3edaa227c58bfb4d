"""
Tests for reading signature documents from files.
"""

import json

import pytest

from udfreg.parser.input.document_reader import read_document, read_signature_file
from udfreg.parser.shared.exceptions import DocumentShapeError, SignatureFileError
from udfreg.parser.signature_parser import SignatureScope


class TestReadDocument:
    """Tests for read_document."""

    def test_reads_json(self, tmp_path):
        """Test reading a JSON file."""
        path = tmp_path / "udfs.json"
        path.write_text(json.dumps({"udfSignatureMap": {}}))
        assert read_document(path) == {"udfSignatureMap": {}}

    def test_reads_yaml(self, tmp_path):
        """Test reading a YAML file."""
        path = tmp_path / "udfs.yaml"
        path.write_text(
            "udfSignatureMap:\n"
            "  my_func:\n"
            "    - outputType: varchar\n"
            "      paramTypes: [varchar, 'map(varchar, bigint)']\n"
        )
        document = read_document(path)
        assert document["udfSignatureMap"]["my_func"][0]["paramTypes"][1] == "map(varchar, bigint)"

    def test_missing_file(self, tmp_path):
        """Test that a missing file is reported."""
        with pytest.raises(SignatureFileError, match="not found"):
            read_document(tmp_path / "missing.json")

    def test_directory(self, tmp_path):
        """Test that a directory is rejected."""
        with pytest.raises(SignatureFileError, match="is a directory"):
            read_document(tmp_path)

    def test_invalid_json(self, tmp_path):
        """Test that invalid JSON is reported."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(SignatureFileError, match="Unable to parse function signature JSON file"):
            read_document(path)

    def test_invalid_yaml(self, tmp_path):
        """Test that invalid YAML is reported."""
        path = tmp_path / "broken.yml"
        path.write_text("udfSignatureMap: [unclosed\n")
        with pytest.raises(SignatureFileError, match="Invalid YAML"):
            read_document(path)

    def test_empty_yaml(self, tmp_path):
        """Test that an empty YAML file is reported."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with pytest.raises(SignatureFileError, match="Empty YAML file"):
            read_document(path)

    def test_file_errors_are_shape_errors(self):
        """Test that SignatureFileError is catchable as DocumentShapeError."""
        assert issubclass(SignatureFileError, DocumentShapeError)


class TestReadSignatureFile:
    """Tests for read_signature_file."""

    def test_parses_dynamic_document(self, tmp_path):
        """Test reading and parsing in dynamic-library scope."""
        path = tmp_path / "udfs.json"
        path.write_text(
            json.dumps(
                {
                    "dynamicLibrariesUdfMap": {
                        "math": {
                            "custom_add": [
                                {
                                    "fileName": "custom_add",
                                    "outputType": "bigint",
                                    "paramTypes": ["bigint", "bigint"],
                                }
                            ]
                        }
                    }
                }
            )
        )
        result = read_signature_file(path, SignatureScope.DYNAMIC_LIBRARIES_UDF)
        item = result["custom_add"][0]
        assert item.sub_directory == "math"
        assert str(item.signature) == "(bigint,bigint) -> bigint"

    def test_non_string_sub_directory_key(self, tmp_path):
        """Test that a YAML integer sub-directory key is a shape error."""
        path = tmp_path / "udfs.yaml"
        path.write_text(
            "dynamicLibrariesUdfMap:\n"
            "  2024:\n"
            "    f:\n"
            "      - fileName: lib\n"
            "        outputType: bigint\n"
            "        paramTypes: [bigint]\n"
        )
        with pytest.raises(DocumentShapeError, match="The key for a sub-directory should be a string."):
            read_signature_file(path, SignatureScope.DYNAMIC_LIBRARIES_UDF)
