# backend/models/history.py
from sqlalchemy import Column, Integer, String, ForeignKey
from database import Base

# Append-only record of a single stock change.
# product_id is a plain reference: products are never deleted here,
# but nothing cascades if one disappears.
class HistoryEntry(Base):
    __tablename__ = "inventory_history"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey("products.id"), index=True)

    old_quantity = Column(Integer)
    new_quantity = Column(Integer)

    # ISO-8601 UTC, millisecond precision, "Z" suffix; sorts chronologically as text
    change_date = Column(String, index=True)

    user_info = Column(String, nullable=True)
