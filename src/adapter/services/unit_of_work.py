from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork
from src.adapter.repositories import (
    SqlAlchemyCounterRepository,
    SqlAlchemyCustomerProfileRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyProductRepository,
)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Transaction boundary over one AsyncSession

    The repositories share the session, so everything they write lands
    in the same commit (or is discarded by the same rollback).
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.products = SqlAlchemyProductRepository(session)
        self.orders = SqlAlchemyOrderRepository(session)
        self.invoices = SqlAlchemyInvoiceRepository(session)
        self.counters = SqlAlchemyCounterRepository(session)
        self.profiles = SqlAlchemyCustomerProfileRepository(session)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        # No-op after a successful commit
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
