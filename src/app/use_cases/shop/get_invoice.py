"""GetInvoice Use Case

Fetches the stored invoice document for an order without re-sending it.
"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice


class GetInvoice:
    """Use Case: Retrieve the issued invoice for an order"""

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, order_id: str) -> Result[Invoice]:
        try:
            invoice = await self.invoice_repo.get_by_order_id(order_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"No invoice issued for order {order_id}",
                        reason="Invoice does not exist",
                    )
                )
            return Return.ok(invoice)
        except Exception as e:
            return Return.err(
                Error(
                    code="GET_INVOICE_FAILED",
                    message="Failed to get invoice",
                    reason=str(e),
                )
            )
