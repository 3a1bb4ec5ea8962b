# smartspend/models/expense.py
from __future__ import annotations

from datetime import datetime, date
from sqlalchemy import Column, Integer, String, Numeric, Date, ForeignKey, DateTime
from sqlalchemy.orm import relationship

from smartspend.models.user import Base


class ExpenseRow(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    # 4 digits, unique across ALL users, not per user
    unique_key = Column(String(10), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, default=date.today, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="expenses")
