"""Counter Domain Entity

Named monotonically increasing sequence used to mint order and
invoice numbers.
"""

from datetime import datetime
from sqlmodel import Field, Column
from sqlalchemy import BigInteger, String
from src.domain.base import BaseModel


class Counter(BaseModel, table=True):
    """
    Counter - Next value of a numbering sequence

    Domain Rules:
    - One row per sequence name
    - current is the next value to hand out
    - Mutated only through read-increment-write under a row lock
    """

    __tablename__ = "counters"

    name: str = Field(
        sa_column=Column(String(50), primary_key=True),
        description="Sequence name (e.g., 'orders', 'invoiceCounter')"
    )

    current: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Next value to allocate"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last allocation timestamp"
    )
