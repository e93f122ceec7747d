"""
Declarative base and the common model columns.
"""
import uuid
from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import declarative_base
from weeklydiary.core.utils import utc_now

Base = declarative_base()


def new_id() -> str:
    return uuid.uuid4().hex


class BaseModel(Base):
    """Abstract model with an opaque string id and a creation timestamp."""
    __abstract__ = True

    id = Column(String(32), primary_key=True, default=new_id)
    created_at = Column(DateTime, default=utc_now, nullable=False)


class TimestampedModel(BaseModel):
    """Model that also tracks the time of its last modification."""
    __abstract__ = True

    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, nullable=False)
