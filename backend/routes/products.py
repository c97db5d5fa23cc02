# backend/routes/products.py
import logging
import shutil
import uuid
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import settings
from database import SessionLocal, get_db
from models.history import HistoryEntry
from models.product import Product
import schemas.history as history_schemas
import schemas.product as product_schemas
from utils.csv_io import CSVParseError, export_products, import_products
from utils.history import record_stock_change

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])

UPDATE_FIELDS = ("name", "unit", "category", "brand", "stock", "status", "image")


def _upload_dir() -> Path:
    path = Path(settings.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


# =========================
# LISTA PRODUKTÓW
# =========================
@router.get("", response_model=List[product_schemas.ProductOut])
def list_products(
    category: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    query = db.query(Product)
    if category:
        query = query.filter(Product.category == category)
    return query.order_by(Product.id.asc()).all()


# =========================
# WYSZUKIWANIE PO NAZWIE
# =========================
@router.get("/search", response_model=List[product_schemas.ProductOut])
def search_products(
    name: str = Query(""),
    db: Session = Depends(get_db),
):
    return (db.query(Product)
            .filter(Product.name.ilike(f"%{name}%"))
            .order_by(Product.id.asc())
            .all())


# =========================
# EKSPORT CSV
# =========================
@router.get("/export")
def export_products_csv(db: Session = Depends(get_db)):
    products = db.query(Product).order_by(Product.id.asc()).all()
    return Response(
        content=export_products(products),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="products.csv"'},
    )


# =========================
# IMPORT CSV
# =========================
@router.post("/import", response_model=product_schemas.ImportSummary)
def import_products_csv(csvFile: Optional[UploadFile] = File(None)):
    if csvFile is None:
        raise HTTPException(status_code=400, detail='No file uploaded. Field name should be "csvFile".')

    save_path = _upload_dir() / f"{uuid.uuid4()}.csv"
    try:
        with open(save_path, "wb") as buffer:
            shutil.copyfileobj(csvFile.file, buffer)
        return import_products(save_path, session_factory=SessionLocal)
    except CSVParseError as e:
        logger.warning("CSV import rejected: %s", e)
        raise HTTPException(status_code=500, detail={"error": "Failed to parse CSV file", "details": str(e)})
    finally:
        csvFile.file.close()
        save_path.unlink(missing_ok=True)


# =========================
# AKTUALIZACJA PRODUKTU (PUT - Pełna)
# =========================
@router.put("/{product_id}", response_model=product_schemas.MessageResponse)
def update_product(
    product_id: int,
    updated_data: product_schemas.ProductUpdate,
    db: Session = Depends(get_db),
):
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        # Brak produktu nie jest błędem - UPDATE po prostu nic nie zmienia
        logger.info("Update of missing product %s ignored", product_id)
        return {"message": "Product updated successfully"}

    if product.stock != updated_data.stock:
        atomic = settings.ATOMIC_STOCK_HISTORY
        try:
            record_stock_change(
                db, product_id=product.id,
                old_quantity=product.stock, new_quantity=updated_data.stock,
                commit=not atomic,
            )
        except SQLAlchemyError as e:
            # Only reachable when the history row is committed separately
            db.rollback()
            logger.error("History write for product %s failed, updating anyway: %s", product_id, e)
            product = db.query(Product).filter(Product.id == product_id).first()

    data = updated_data.model_dump()
    for key in UPDATE_FIELDS:
        setattr(product, key, data.get(key))

    db.commit()
    return {"message": "Product updated successfully"}


# =========================
# HISTORIA STANÓW
# =========================
@router.get("/{product_id}/history", response_model=List[history_schemas.HistoryEntryOut])
def get_product_history(product_id: int, db: Session = Depends(get_db)):
    return (db.query(HistoryEntry)
            .filter(HistoryEntry.product_id == product_id)
            .order_by(HistoryEntry.change_date.desc(), HistoryEntry.id.desc())
            .all())
