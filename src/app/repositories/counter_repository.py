"""Counter Repository Interface

Defines the contract for atomic sequence allocation.
"""

from abc import ABC, abstractmethod


class CounterRepository(ABC):
    """
    Repository interface for named counters

    Implementations must make the read-increment-write indivisible
    (row lock or store transaction).
    """

    @abstractmethod
    async def next_value(self, name: str, start_value: int) -> int:
        """
        Return the current value of a sequence and advance it by one

        Args:
            name: Sequence name
            start_value: Value returned when the sequence does not exist yet

        Returns:
            Allocated value

        Raises:
            AllocationConflictError: If the underlying transaction aborted
        """
        pass
