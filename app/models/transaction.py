"""
SQLAlchemy model for product transactions.
"""
from sqlalchemy import Boolean, Column, Float, Integer, String, Text

from app.database import Base


class TransactionModel(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False, default=0.0)
    category = Column(String, nullable=False, index=True)
    date_of_sale = Column(String, nullable=False, index=True)  # YYYY-MM-DD..., kept as text
    sold = Column(Boolean, nullable=False)
