import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers the tables on SQLModel.metadata
from src.adapter.services.email_service import create_email_service
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.speedy_service import SpeedyAddressService
from src.api.error import ClientError, client_error_handler, validation_error_handler
from src.api.routes import address, invoices, orders, products
from src.app.services.catalog_cache import ProductCatalogCache
from src.app.services.number_allocator import SequenceSpec
from src.app.use_cases.shop.dtos import CompanyInfoDTO

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.DB_AUTO_CREATE:
            async with app.state.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Padel shop API starting up...")
        yield
        await app.state.engine.dispose()
        logger.info("Padel shop API shut down")

    app = FastAPI(title="Padel Shop API", version="1.0.0", lifespan=lifespan)

    # Shared state, one instance per process
    engine = create_async_engine(config.DB_URI, echo=False, future=True)
    app.state.config = config
    app.state.engine = engine
    app.state.session_factory = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    app.state.catalog_cache = ProductCatalogCache(ttl_seconds=config.CATALOG_CACHE_TTL_SECONDS)
    app.state.pdf_service = ReportLabPdfService()
    app.state.email_service = create_email_service(
        config.EMAIL_BACKEND,
        host=config.SMTP_HOST,
        port=config.SMTP_PORT,
        username=config.SMTP_USER,
        password=config.SMTP_PASSWORD,
        use_ssl=config.SMTP_USE_SSL,
        from_name=config.EMAIL_FROM_NAME,
    )
    app.state.address_service = SpeedyAddressService(
        username=config.SPEEDY_USER,
        password=config.SPEEDY_PASSWORD,
        base_url=config.SPEEDY_API_URL,
        language=config.SPEEDY_LANGUAGE,
        timeout=config.SPEEDY_TIMEOUT_SECONDS,
    )
    app.state.company = CompanyInfoDTO(
        name=config.COMPANY_NAME,
        address=config.COMPANY_ADDRESS,
        city=config.COMPANY_CITY,
        vat_number=config.COMPANY_VAT_NUMBER,
    )
    app.state.order_sequence = SequenceSpec(
        name=config.ORDER_SEQUENCE_NAME,
        start_value=config.ORDER_SEQUENCE_START,
        width=config.ORDER_NUMBER_WIDTH,
    )
    app.state.invoice_sequence = SequenceSpec(
        name=config.INVOICE_SEQUENCE_NAME,
        start_value=config.INVOICE_SEQUENCE_START,
        width=config.INVOICE_NUMBER_WIDTH,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
            )
            return response

    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(orders.router, prefix=config.API_PREFIX)
    app.include_router(invoices.router, prefix=config.API_PREFIX)
    app.include_router(products.router, prefix=config.API_PREFIX)
    app.include_router(address.router, prefix=config.API_PREFIX)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
