# backend/utils/history.py
import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from models.history import HistoryEntry

logger = logging.getLogger(__name__)


def now_iso() -> str:
    """UTC timestamp in the same shape as JavaScript's Date.toISOString()."""
    ts = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return ts.replace("+00:00", "Z")


def record_stock_change(db: Session, *, product_id, old_quantity, new_quantity, commit=True, change_date=None):
    entry = HistoryEntry(
        product_id=product_id,
        old_quantity=old_quantity,
        new_quantity=new_quantity,
        change_date=change_date or now_iso(),
    )
    db.add(entry)
    if commit:
        db.commit()
    logger.info("Stock of product %s: %s -> %s", product_id, old_quantity, new_quantity)
    return entry
