"""
InvoiceDesk — Small-business invoicing.

Clients, invoices, payment tracking and business statistics,
kept in plain files on your own machine.
"""

__version__ = "0.1.0"
__all__ = ["InvoiceDesk"]

from invoicedesk.desk import InvoiceDesk  # noqa: E402
