"""
Contract Validation Module

JSON Schema validation of the data files invocli reads.
"""

from .validators import (
    ContractValidator,
    InvoiceDataValidator,
    SchemaLoader,
    validate_invoice_data,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "InvoiceDataValidator",
    # Functions
    "validate_invoice_data",
]
