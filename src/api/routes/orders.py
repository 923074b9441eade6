"""Order API Routes

FastAPI routes for placing orders and sending confirmations.
"""

from fastapi import APIRouter, Depends, Request, status

from src.api.schemas.shop_request import CreateOrderRequestSchema
from src.app.use_cases.shop.dtos import (
    CreateOrderCommandDTO,
    CreateOrderResponseDTO,
    OrderItemCommandDTO,
    SendOrderConfirmationResponseDTO,
)
from src.app.use_cases.shop.create_order import CreateOrder
from src.app.use_cases.shop.send_order_confirmation import SendOrderConfirmation
from src.app.services.email_service import EmailService
from src.app.services.number_allocator import NumberAllocator
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_email_service, get_unit_of_work
from src.api.error import ClientError

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post(
    "",
    response_model=CreateOrderResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {
            "description": "Product not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "PRODUCT_NOT_FOUND",
                            "message": "Product not found: bbx-vertuo-2024"
                        }
                    }
                }
            }
        },
        409: {
            "description": "Order number allocation conflict, safe to retry",
        },
    }
)
async def create_order(
    request: CreateOrderRequestSchema,
    http_request: Request,
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
):
    """
    Place an order.

    Items are priced from the catalog at request time (active discounts
    applied), VAT is broken down per line and for shipping, and a
    zero-padded order number is allocated.

    **Returns:**
    - 201: Order created
    - 400: Invalid request parameters
    - 404: A product does not exist
    - 409: Number allocation conflict (retry)
    """
    command = CreateOrderCommandDTO(
        **request.model_dump(exclude={"items"}),
        items=[
            OrderItemCommandDTO(product_id=item.product_id, quantity=item.quantity)
            for item in request.items
        ],
    )

    use_case = CreateOrder(
        uow,
        uow.products,
        uow.orders,
        uow.profiles,
        NumberAllocator(uow.counters),
        sequence=http_request.app.state.order_sequence,
    )
    result = await use_case.execute(command)

    if result.is_err():
        if result.error.code == "PRODUCT_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        if result.error.code == "ALLOCATION_CONFLICT":
            raise ClientError(result.error, status_code=status.HTTP_409_CONFLICT)
        raise ClientError(result.error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return result.value


@router.post(
    "/{order_id}/confirmation",
    response_model=SendOrderConfirmationResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def send_order_confirmation(
    order_id: str,
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
    email_service: EmailService = Depends(get_email_service),
):
    """
    E-mail the order confirmation to the customer.

    **Returns:**
    - 200: Confirmation sent
    - 404: Order not found
    - 502: Mail delivery failed
    """
    use_case = SendOrderConfirmation(uow.orders, uow.products, email_service)
    result = await use_case.execute(order_id)

    if result.is_err():
        if result.error.code == "ORDER_NOT_FOUND":
            raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)
        if result.error.code == "DOWNSTREAM_FAILURE":
            raise ClientError(result.error, status_code=status.HTTP_502_BAD_GATEWAY)
        raise ClientError(result.error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return result.value
