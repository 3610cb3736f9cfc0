# Services module
from .invoice_api import (
    ClientState,
    IllegalStateError,
    InvoiceApiClient,
    InvoicePayload,
    InvoiceStatus,
    build_invoice_payload,
    extract_invoice_id,
)

__all__ = [
    "ClientState",
    "IllegalStateError",
    "InvoiceApiClient",
    "InvoicePayload",
    "InvoiceStatus",
    "build_invoice_payload",
    "extract_invoice_id",
]
