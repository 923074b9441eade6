"""Shared base for SQLModel entities"""

import uuid
from sqlmodel import SQLModel


def generate_uuid() -> str:
    """Generate a document-style string identifier"""
    return uuid.uuid4().hex


class BaseModel(SQLModel):
    """Base class for all persisted domain entities"""
    pass
