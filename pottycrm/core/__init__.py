"""
Core calculation layer, domain value shapes and contracts.

Independent of HTTP, persistence and rendering: callers pass primitive,
already-parsed request values in and get amounts back.
"""

from pottycrm.core.errors import InvalidArgument

__all__ = ["InvalidArgument"]
