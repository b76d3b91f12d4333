"""
JSON Schema Contract Validators

Validates JSON data against the formal contracts shipped with the package.
Uses the jsonschema library to check data against each schema.

Schemas (invocli/core/contracts/schema/):
- invoice_data.json — invoice data file (`invocli summary PATH`)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Loader of JSON Schema files.

    Finds schemas in the schema/ directory next to this module.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Cache of loaded schemas
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'invoice_data')

        Returns:
            Loaded schema as dict

        Raises:
            FileNotFoundError: If the schema file does not exist
            ValueError: If the file is not a valid JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Validate the schema itself (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Global loader instance
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Base class of contract validators.

    Wraps validation of data against one JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Validate data against the schema.

        Raises:
            ValidationError: If data does not satisfy the schema
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """True if data satisfies the schema (no exception)."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """
        Iterate over every validation error.

        Yields:
            ValidationError for each violation found
        """
        return self.validator.iter_errors(data)


class InvoiceDataValidator(ContractValidator):
    """Validator of the invoice_data contract."""

    def __init__(self):
        super().__init__("invoice_data")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_invoice_data(data: Dict[str, Any]) -> None:
    """
    Validate invoice data file contents.

    Args:
        data: Decoded JSON object

    Raises:
        ValidationError: If data does not satisfy the contract
    """
    InvoiceDataValidator().validate(data)
