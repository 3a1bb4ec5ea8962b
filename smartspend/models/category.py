# smartspend/models/category.py
from __future__ import annotations

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, UniqueConstraint

from smartspend.models.user import Base

DEFAULT_EMOJI = "📝"


class CategoryRow(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    emoji = Column(String(10), default=DEFAULT_EMOJI, nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)
    # NULL owner = default category visible to everyone
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("name", "user_id", name="uq_categories_name_user"),
    )
