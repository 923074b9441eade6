"""Customer Profile Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.customer_profile import CustomerProfile


class CustomerProfileRepository(ABC):
    """Repository interface for CustomerProfile persistence"""

    @abstractmethod
    async def get_by_user_uid(self, user_uid: str) -> Optional[CustomerProfile]:
        pass

    @abstractmethod
    async def save(self, profile: CustomerProfile) -> CustomerProfile:
        """Insert or update a profile"""
        pass
