"""
pottycrm — monetary calculation core of the porta-potty rental CRM.

Leads -> Quotes -> Sales Orders -> Job Orders -> Payments all price their
line items through pottycrm.core.math.
"""

__version__ = "0.1.0"
