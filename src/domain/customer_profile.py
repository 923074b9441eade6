"""Customer Profile Domain Entity

Contact and delivery details remembered for a customer account.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field
from src.domain.base import BaseModel


class CustomerProfile(BaseModel, table=True):
    """
    Customer Profile - Last-used contact details per account

    Domain Rules:
    - One profile per user_uid
    - Refreshed from every order the customer places
    """

    __tablename__ = "customer_profiles"

    user_uid: str = Field(primary_key=True, description="Customer account identifier")
    email: str = Field(description="Customer e-mail")
    first_name: Optional[str] = Field(default=None)
    last_name: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    address: Optional[str] = Field(default=None)
    city: Optional[str] = Field(default=None)
    postal_code: Optional[str] = Field(default=None)
    preferred_payment: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
