"""
Module: ledger_kernel.selectors.document_selector
Responsibility: Read-only queries for outstanding documents -- a user's
    sales invoices (receivables) and purchase bills (payables) -- returned as
    ``OutstandingDocument`` records for the aging engine.
Architecture position: Kernel > Selectors.

Status filtering is left to the aging engine so that the settled-status
rule lives in one place.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.domain.records import (
    OutstandingDocument,
    parse_invoice,
    parse_purchase_bill,
)
from ledger_kernel.logging_config import get_logger
from ledger_kernel.models.document import Invoice, PurchaseBill
from ledger_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.documents")


class DocumentSelector(BaseSelector[Invoice]):
    """Selector for receivables and payables, ordered by due date."""

    def __init__(self, session: Session):
        super().__init__(session)

    def fetch_receivables(self, user_id: str) -> list[OutstandingDocument]:
        query = (
            select(Invoice)
            .where(Invoice.user_id == user_id)
            .order_by(Invoice.due_date, Invoice.invoice_number, Invoice.id)
        )
        documents = [
            parse_invoice({
                "id": inv.id,
                "client_name": inv.client_name,
                "invoice_number": inv.invoice_number,
                "due_date": inv.due_date,
                "total_amount": inv.total_amount,
                "advance": inv.advance,
                "status": inv.status,
            })
            for inv in self.session.scalars(query)
        ]
        logger.debug(
            "receivables_fetched",
            extra={"user_id": user_id, "document_count": len(documents)},
        )
        return documents

    def fetch_payables(self, user_id: str) -> list[OutstandingDocument]:
        query = (
            select(PurchaseBill)
            .where(PurchaseBill.user_id == user_id)
            .order_by(PurchaseBill.due_date, PurchaseBill.bill_number, PurchaseBill.id)
        )
        documents = [
            parse_purchase_bill({
                "id": bill.id,
                "vendor_name": bill.vendor_name,
                "bill_number": bill.bill_number,
                "due_date": bill.due_date,
                "total_amount": bill.total_amount,
                "paid_amount": bill.paid_amount,
                "status": bill.status,
            })
            for bill in self.session.scalars(query)
        ]
        logger.debug(
            "payables_fetched",
            extra={"user_id": user_id, "document_count": len(documents)},
        )
        return documents
