from fastapi import Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.address_service import AddressLookupService
from src.app.services.catalog_cache import ProductCatalogCache
from src.app.services.email_service import EmailService
from src.app.services.pdf_service import PdfService


async def get_session(request: Request) -> AsyncSession:
    async with request.app.state.session_factory() as session:
        yield session


async def get_unit_of_work(session: AsyncSession = Depends(get_session)) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session)


def get_config(request: Request):
    return request.app.state.config


def get_catalog_cache(request: Request) -> ProductCatalogCache:
    return request.app.state.catalog_cache


def get_pdf_service(request: Request) -> PdfService:
    return request.app.state.pdf_service


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_address_service(request: Request) -> AddressLookupService:
    return request.app.state.address_service
