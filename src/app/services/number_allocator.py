"""Number Allocator

Mints zero-padded, unique order and invoice numbers from named counters.
"""

import logging
from pydantic import BaseModel, Field
from src.app.repositories.counter_repository import CounterRepository

logger = logging.getLogger(__name__)


class SequenceSpec(BaseModel):
    """Numbering domain: counter name, first value and printed width"""

    name: str
    start_value: int = Field(..., ge=0)
    width: int = Field(..., ge=1)


ORDER_SEQUENCE = SequenceSpec(name="orders", start_value=1, width=7)
INVOICE_SEQUENCE = SequenceSpec(name="invoiceCounter", start_value=100000001, width=10)


class NumberAllocator:
    """
    Allocates the next number of a sequence

    Guarantees:
    - Every returned value is distinct (atomicity delegated to the counter store)
    - Numbers are not dense: a request failing after allocation leaves a gap
    - An aborted counter transaction consumes nothing and raises
      AllocationConflictError
    """

    def __init__(self, counter_repo: CounterRepository):
        self.counter_repo = counter_repo

    async def next(self, sequence_name: str, start_value: int, width: int) -> str:
        """
        Allocate the next value of a sequence

        Args:
            sequence_name: Counter name
            start_value: Value returned on first use of the counter
            width: Minimum length; shorter values are left-padded with zeros

        Returns:
            Zero-padded decimal string
        """
        value = await self.counter_repo.next_value(sequence_name, start_value)
        number = str(value).zfill(width)
        logger.debug(f"Allocated {number} from sequence '{sequence_name}'")
        return number

    async def next_for(self, sequence: SequenceSpec) -> str:
        return await self.next(sequence.name, sequence.start_value, sequence.width)
