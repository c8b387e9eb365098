"""
Errors raised by the calculation core.

There is one error kind for everything that can go wrong in a pure
calculation: malformed input, ceiling/overflow violations and cross-field
violations (e.g. refunded amount larger than the payment). Callers translate
it into their own convention (HTTP 400 in the API layer).
"""


class InvalidArgument(ValueError):
    """
    Invalid input or result of a money/numeric calculation.

    Subclasses ValueError so callers that already catch ValueError keep
    working. The message always names the offending value(s).
    """

    pass
