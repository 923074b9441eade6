"""Invoice API Routes

FastAPI routes for issuing invoices and downloading issued documents.
"""

import base64
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response

from src.api.auth import require_api_key
from src.api.schemas.shop_request import IssueInvoiceRequestSchema
from src.app.use_cases.shop.dtos import IssueInvoiceCommandDTO, IssueInvoiceResponseDTO
from src.app.use_cases.shop.issue_invoice import IssueInvoice
from src.app.use_cases.shop.get_invoice import GetInvoice
from src.app.services.email_service import EmailService
from src.app.services.number_allocator import NumberAllocator
from src.app.services.pdf_service import PdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_email_service, get_pdf_service, get_unit_of_work
from src.api.error import ClientError

router = APIRouter(
    prefix="/invoices",
    tags=["Invoices"],
    dependencies=[Depends(require_api_key)],
)


@router.post(
    "",
    response_model=IssueInvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {
            "description": "Order not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "ORDER_NOT_FOUND",
                            "message": "Order with ID 3f2a9c1e not found"
                        }
                    }
                }
            }
        },
        409: {"description": "Concurrent issuance or number allocation conflict, safe to retry"},
        502: {"description": "PDF rendering or e-mail delivery failed"},
    }
)
async def issue_invoice(
    request: IssueInvoiceRequestSchema,
    http_request: Request,
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
    pdf_service: PdfService = Depends(get_pdf_service),
    email_service: EmailService = Depends(get_email_service),
):
    """
    Issue the invoice for an order and e-mail it.

    Idempotent per order: the first call allocates an invoice number and
    renders the PDF; later calls re-send the stored document with the
    same number (`reused: true`).

    **Returns:**
    - 200: Invoice issued or re-sent
    - 401: Missing or invalid API key
    - 404: Order not found
    - 409: Concurrent issuance or allocation conflict (retry)
    - 502: PDF rendering or e-mail delivery failed
    """
    command = IssueInvoiceCommandDTO(
        order_id=request.order_id,
        recipient_email=request.recipient_email,
    )

    use_case = IssueInvoice(
        uow,
        uow.orders,
        uow.invoices,
        uow.products,
        NumberAllocator(uow.counters),
        pdf_service,
        email_service,
        http_request.app.state.company,
        sequence=http_request.app.state.invoice_sequence,
    )
    result = await use_case.execute(command)

    if result.is_err():
        if result.error.code == "ORDER_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        if result.error.code in ("DUPLICATE_ISSUANCE", "ALLOCATION_CONFLICT"):
            raise ClientError(result.error, status_code=status.HTTP_409_CONFLICT)
        if result.error.code == "DOWNSTREAM_FAILURE":
            raise ClientError(result.error, status_code=status.HTTP_502_BAD_GATEWAY)
        raise ClientError(result.error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return result.value


@router.get(
    "/{order_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: {"description": "No invoice issued for the order"},
    }
)
async def download_invoice_pdf(
    order_id: str,
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
):
    """
    Download the issued invoice PDF for an order.

    **Returns:**
    - 200: PDF file as binary response
    - 404: No invoice issued yet
    """
    result = await GetInvoice(uow.invoices).execute(order_id)

    if result.is_err():
        if result.error.code == "INVOICE_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        raise ClientError(result.error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    invoice = result.value
    return Response(
        content=base64.b64decode(invoice.pdf_base64),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={invoice.invoice_number}.pdf"
        }
    )
