"""SQLAlchemy implementation of CustomerProfileRepository"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.customer_profile_repository import CustomerProfileRepository
from src.domain.customer_profile import CustomerProfile


class SqlAlchemyCustomerProfileRepository(CustomerProfileRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_uid(self, user_uid: str) -> Optional[CustomerProfile]:
        statement = select(CustomerProfile).where(CustomerProfile.user_uid == user_uid)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def save(self, profile: CustomerProfile) -> CustomerProfile:
        self.session.add(profile)
        await self.session.flush()
        return profile
