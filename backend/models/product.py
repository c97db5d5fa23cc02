# backend/models/product.py
from sqlalchemy import Column, Integer, String
from database import Base

# Model Product
# Pojedyncza pozycja magazynowa identyfikowana unikalną nazwą.
# Stan (stock) powinien być nieujemny, ale baza tego nie wymusza.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String, unique=True, nullable=False, index=True)

    unit = Column(String)
    category = Column(String, index=True)
    brand = Column(String)

    stock = Column(Integer, nullable=False)
    status = Column(String)

    # Opcjonalny URL zdjęcia produktu.
    image = Column(String, nullable=True)
