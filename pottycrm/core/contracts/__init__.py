"""
Contract Validation Module

JSON Schema validation of request and payment-provider payloads.
"""

from .validators import (
    ContractValidator,
    PaymentLinkRequestValidator,
    ProductsPayloadValidator,
    SchemaLoader,
    validate_payment_link_request,
    validate_products_payload,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ProductsPayloadValidator",
    "PaymentLinkRequestValidator",
    # Functions
    "validate_products_payload",
    "validate_payment_link_request",
]
