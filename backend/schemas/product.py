# backend/schemas/product.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


# SQLite INTEGER is a signed 64-bit value
STOCK_MIN = -2**63
STOCK_MAX = 2**63 - 1


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Shared base attributes for product entities
class ProductBase(ORMBase):
    name: str
    unit: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    stock: int
    status: Optional[str] = None
    image: Optional[str] = None


# Full replacement body for PUT - absent optional fields are written as NULL
class ProductUpdate(ProductBase):
    name: str = Field(..., min_length=1, description="Nazwa produktu")
    stock: int = Field(..., ge=STOCK_MIN, le=STOCK_MAX, description="Stan magazynowy")


# Full product representation including ID
class ProductOut(ProductBase):
    id: int


class MessageResponse(BaseModel):
    message: str


class ImportSummary(BaseModel):
    added: int = 0
    skipped: int = 0
