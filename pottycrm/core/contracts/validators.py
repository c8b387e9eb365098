"""
JSON Schema Contract Validators

Validates request/provider payloads against the JSON Schema contracts bundled
with the package (Draft 2020-12), using the jsonschema library.

Schemas:
- products_payload.json: {"products": [...]} request body of quotes / orders
- payment_link_request.json: invoice payment link payload (integer cents)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import best_match


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Loader for JSON Schema files.

    Schemas live in the schema/ directory next to this module.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Loaded schemas by name
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Load a JSON Schema file.

        Args:
            schema_name: Schema name without extension (e.g. 'products_payload')

        Returns:
            Parsed schema

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

        # Meta-validation of the schema itself
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Base class for contract validators.

    Wraps a Draft 2020-12 validator for one schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Validate data against the schema.

        Raises:
            ValidationError: The most relevant violation, if any
        """
        error = best_match(self.validator.iter_errors(data))
        if error is not None:
            raise error

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def get_errors(self, data: Dict[str, Any]) -> list[ValidationError]:
        """All violations, ordered by path."""
        return sorted(self.validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])


class ProductsPayloadValidator(ContractValidator):
    """Validator for the products payload contract."""

    def __init__(self):
        super().__init__("products_payload")


class PaymentLinkRequestValidator(ContractValidator):
    """Validator for the payment link request contract."""

    def __init__(self):
        super().__init__("payment_link_request")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_products_payload(data: Dict[str, Any]) -> None:
    """
    Validate a {"products": [...]} request body.

    Raises:
        ValidationError: If the payload does not match the contract
    """
    ProductsPayloadValidator().validate(data)


def validate_payment_link_request(data: Dict[str, Any]) -> None:
    """
    Validate a payment link request.

    Raises:
        ValidationError: If the payload does not match the contract
    """
    PaymentLinkRequestValidator().validate(data)
