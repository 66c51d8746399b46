"""
Day-Off Planner - SQLAlchemy ORM Models

The planner only needs a key-value table: settings and the saved-item
collection are each stored as one JSON text blob under a fixed key.
"""
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime
from ..database import Base


class KeyValueDB(Base):
    """One JSON-encoded payload per logical key."""
    __tablename__ = "kv_store"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
