from __future__ import annotations
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, DateTime, text
from typing import Optional

from .base import Base


class Order(Base):
    __tablename__ = 'orders'
    # Lifecycle status constants
    STATUS_NEW = 'NEW'
    STATUS_PACKED = 'PACKED'
    STATUS_DISPATCHED = 'DISPATCHED'
    STATUS_DELIVERED = 'DELIVERED'
    STATUS_CANCELLED = 'CANCELLED'
    ALL_STATUSES = (
        STATUS_NEW,
        STATUS_PACKED,
        STATUS_DISPATCHED,
        STATUS_DELIVERED,
        STATUS_CANCELLED
    )
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # Module scoping columns (see services.scope)
    module_type: Mapped[Optional[str]] = mapped_column(String(16), index=True)
    hub_id: Mapped[Optional[str]] = mapped_column(String(64), index=True)
    store_id: Mapped[Optional[str]] = mapped_column(String(64), index=True)
    customer_name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    total_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=STATUS_NEW)
    created_by: Mapped[Optional[str]] = mapped_column(String(64))
    updated_at: Mapped[str] = mapped_column(DateTime(timezone=True), server_default=text('CURRENT_TIMESTAMP'), server_onupdate=text('CURRENT_TIMESTAMP'))
