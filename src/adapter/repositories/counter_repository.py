"""SQLAlchemy implementation of CounterRepository

Allocates sequence values with a row lock so concurrent callers are
serialized on the counter row.
"""

import logging
from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.counter_repository import CounterRepository
from src.domain.counter import Counter
from src.domain.exceptions import AllocationConflictError

logger = logging.getLogger(__name__)


class SqlAlchemyCounterRepository(CounterRepository):
    """
    SQLAlchemy implementation of CounterRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE
    - Lazily creates the counter row on first use
    - The increment becomes durable with the caller's commit
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def next_value(self, name: str, start_value: int) -> int:
        """
        Return the current value of a sequence and advance it by one

        Args:
            name: Sequence name
            start_value: Value returned when the counter row does not exist yet

        Returns:
            Allocated value

        Raises:
            AllocationConflictError: If the lock, insert or update failed
        """
        try:
            stmt = select(Counter).where(Counter.name == name).with_for_update()
            result = await self.session.execute(stmt)
            counter = result.scalar_one_or_none()

            if counter is None:
                value = start_value
                counter = Counter(name=name, current=start_value + 1)
            else:
                value = counter.current
                counter.current = value + 1
                counter.updated_at = datetime.utcnow()

            self.session.add(counter)
            await self.session.flush()
            return value
        except SQLAlchemyError as e:
            logger.warning(f"Counter '{name}' allocation aborted: {e}")
            raise AllocationConflictError(name, str(e)) from e
