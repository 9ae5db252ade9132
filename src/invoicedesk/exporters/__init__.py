"""Exporters that render invoices and dashboards for people."""
from invoicedesk.exporters.markdown import render_dashboard_markdown, render_invoice_markdown

__all__ = ["render_dashboard_markdown", "render_invoice_markdown"]
