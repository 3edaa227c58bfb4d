"""
Signature document reader - loads signature files into signature maps.

Supports JSON files and, for hand-written configs, YAML files (.yaml, .yml).
Both decode to the same generic value tree before parsing.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from udfreg.parser.shared.constants import SUPPORTED_YAML_EXTENSIONS
from udfreg.parser.shared.exceptions import SignatureFileError
from udfreg.parser.signature_parser import SignatureScope, parse_signatures
from udfreg.typing.signature import SignatureMap

logger = logging.getLogger(__name__)


def read_document(file_path: str | Path) -> Any:
    """
    Read a signature file in full and decode it.

    Args:
        file_path: Path to a JSON or YAML signature file

    Returns:
        Decoded document value

    Raises:
        SignatureFileError: If the file is missing, unreadable or not valid JSON/YAML
    """
    path = Path(file_path)
    if not path.exists():
        raise SignatureFileError(f"Signature file not found: {path}")
    if path.is_dir():
        raise SignatureFileError(f"Signature file path is a directory: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SignatureFileError(f"Error reading signature file {path}: {e}") from e

    is_yaml = path.suffix.lower() in SUPPORTED_YAML_EXTENSIONS
    try:
        if is_yaml:
            document = yaml.safe_load(content)
            if document is None:
                raise SignatureFileError(f"Empty YAML file: {path}")
            return document
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise SignatureFileError(f"Unable to parse function signature JSON file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SignatureFileError(f"Invalid YAML in signature file {path}: {e}") from e


def read_signature_file(
    file_path: str | Path, scope: SignatureScope = SignatureScope.REMOTE_UDF
) -> SignatureMap:
    """
    Read and parse a signature file.

    Args:
        file_path: Path to the signature file
        scope: Document shape to expect

    Returns:
        Parsed signature map
    """
    logger.info(f"Processing config file located at: {file_path}")
    return parse_signatures(read_document(file_path), scope)
