"""
Tests for the JSON Schema contracts

Checks:
1. Bundled schemas load and pass meta-validation
2. Valid payloads pass
3. Invalid payloads fail with a jsonschema.ValidationError
"""

import json

import pytest
from jsonschema import ValidationError

from pottycrm.core.contracts import (
    PaymentLinkRequestValidator,
    ProductsPayloadValidator,
    SchemaLoader,
    validate_payment_link_request,
    validate_products_payload,
)

# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Tests for SchemaLoader"""

    def test_bundled_schemas_load(self) -> None:
        loader = SchemaLoader()
        for name in ("products_payload", "payment_link_request"):
            schema = loader.load_schema(name)
            assert schema["$schema"].endswith("2020-12/schema")

    def test_schema_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("products_payload") is loader.load_schema("products_payload")

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path) -> None:
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "nope")

    def test_invalid_schema_rejected(self, tmp_path) -> None:
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema in broken.json"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# PRODUCTS PAYLOAD
# =============================================================================


class TestProductsPayload:
    """Tests for the products payload contract"""

    def test_valid(self) -> None:
        validate_products_payload(
            {
                "products": [
                    {"item": "Standard Unit", "quantity": 3, "rate": 65, "amount": "195.00"},
                    {"quantity": "1", "rate": "45.50", "usageType": "Event", "notes": "x"},
                ]
            }
        )

    def test_empty_products_valid(self) -> None:
        assert ProductsPayloadValidator().is_valid({"products": []})

    def test_missing_products(self) -> None:
        with pytest.raises(ValidationError):
            validate_products_payload({})

    def test_missing_and_blank_numbers_valid(self) -> None:
        """Empty form fields are priced as 0, so the contract lets them through"""
        validate_products_payload(
            {"products": [{"quantity": 1}, {"quantity": "", "rate": None, "amount": " "}]}
        )

    def test_non_object_item(self) -> None:
        with pytest.raises(ValidationError, match="is not of type 'object'"):
            validate_products_payload({"products": [42]})

    @pytest.mark.parametrize("bad", ["abc", "12abc", "1 2", True, [1]])
    def test_non_numeric_quantity(self, bad) -> None:
        assert not ProductsPayloadValidator().is_valid(
            {"products": [{"quantity": bad, "rate": 1}]}
        )

    def test_errors_sorted_by_path(self) -> None:
        errors = ProductsPayloadValidator().get_errors(
            {"products": [{"quantity": "x", "rate": 1}, 42]}
        )
        assert len(errors) == 2
        paths = [list(e.path) for e in errors]
        assert paths == sorted(paths, key=lambda p: [str(x) for x in p])


# =============================================================================
# PAYMENT LINK REQUEST
# =============================================================================


class TestPaymentLinkRequest:
    """Tests for the payment link request contract"""

    VALID = {
        "currency": "usd",
        "unit_amount": 26040,
        "quantity": 1,
        "product_name": "Invoice Payment",
        "customer_email": "billing@example.com",
        "metadata": {"sales_order_id": "so-1"},
    }

    def test_valid(self) -> None:
        validate_payment_link_request(dict(self.VALID))

    @pytest.mark.parametrize(
        "field, value",
        [
            ("unit_amount", 0),
            ("unit_amount", 10.5),
            ("unit_amount", "26040"),
            ("currency", "eur"),
            ("quantity", 2),
            ("product_name", ""),
            ("customer_email", "not-an-email"),
            ("metadata", {"count": 3}),
        ],
    )
    def test_invalid_field(self, field: str, value) -> None:
        payload = {**self.VALID, field: value}
        assert not PaymentLinkRequestValidator().is_valid(payload)
        with pytest.raises(ValidationError):
            validate_payment_link_request(payload)

    def test_unknown_field_rejected(self) -> None:
        assert not PaymentLinkRequestValidator().is_valid({**self.VALID, "amount": 260.4})
