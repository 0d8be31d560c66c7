from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, UniqueConstraint
from tunimind.database import Base


class StorageItem(Base):
    """One key/value pair of a client's local storage namespace."""
    __tablename__ = "storage_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    namespace = Column(String(128), nullable=False, index=True)
    key = Column(String(255), nullable=False)
    value = Column(Text, nullable=False)  # serialized JSON or a bare string
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("namespace", "key", name="uq_storage_namespace_key"),
    )
