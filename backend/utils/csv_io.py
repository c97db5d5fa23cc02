# backend/utils/csv_io.py
"""
CSV import / export of products.

Import reads the uploaded file in chunks (pandas) and hands every row with a
name to a bounded thread pool; each worker looks the name up and inserts the
product if it is new. The summary is built only after the file is exhausted
and every submitted row has finished.
"""
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, Optional

import pandas as pd
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from config import settings
from database import SessionLocal
from models.product import Product
from schemas.product import STOCK_MAX, STOCK_MIN, ImportSummary

logger = logging.getLogger(__name__)

EXPORT_FIELDS = ["id", "name", "unit", "category", "brand", "stock", "status", "image"]
OPTIONAL_FIELDS = ("unit", "category", "brand", "status", "image")

CHUNK_SIZE = 500

ADDED = "added"
SKIPPED = "skipped"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class CSVParseError(Exception):
    pass


# ---- PARSOWANIE WIERSZY ----
def _field(row: dict, key: str) -> Optional[str]:
    # "name" first, then "Name"; empty cells fall through
    for header in (key, key.capitalize()):
        value = row.get(header)
        if isinstance(value, str) and value:
            return value
    return None


def parse_stock(raw: Optional[str]) -> int:
    if not raw:
        return 0
    m = _LEADING_INT.match(raw)
    if not m:
        return 0
    value = int(m.group(1))
    # Poza zakresem INTEGER w SQLite - traktujemy jak nieczytelne
    return value if STOCK_MIN <= value <= STOCK_MAX else 0


def parse_row(row: dict) -> dict:
    fields = {key: _field(row, key) for key in OPTIONAL_FIELDS}
    fields["name"] = (_field(row, "name") or "").strip()
    fields["stock"] = parse_stock(_field(row, "stock"))
    return fields


def _iter_rows(path) -> Iterator[dict]:
    try:
        reader = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
            # Trailing delimiters must not turn the first column into an index
            index_col=False,
            chunksize=CHUNK_SIZE,
        )
    except pd.errors.EmptyDataError:
        # Zero-byte upload: nothing to import
        return

    with reader:
        for chunk in reader:
            yield from chunk.to_dict(orient="records")


# ---- IMPORT ----
def _import_row(session_factory, fields: dict) -> Optional[str]:
    db = session_factory()
    try:
        existing = db.query(Product.id).filter(Product.name == fields["name"]).first()
        if existing:
            return SKIPPED

        db.add(Product(**fields))
        db.commit()
        return ADDED
    except IntegrityError:
        # Same name committed by another row in the meantime
        db.rollback()
        logger.info("Product %r already exists, skipping", fields["name"])
        return SKIPPED
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Import of product %r failed: %s", fields["name"], e)
        return None
    finally:
        db.close()


def import_products(path, session_factory=None, workers: Optional[int] = None) -> ImportSummary:
    """Create products from the CSV file at `path`.

    Existing names are never overwritten. Raises CSVParseError when the file
    cannot be parsed; rows submitted before the error are still committed.
    """
    session_factory = session_factory or SessionLocal
    summary = ImportSummary()
    futures = []

    try:
        with ThreadPoolExecutor(max_workers=workers or settings.IMPORT_WORKERS) as pool:
            for row in _iter_rows(path):
                fields = parse_row(row)
                if not fields["name"]:
                    summary.skipped += 1
                    continue
                futures.append(pool.submit(_import_row, session_factory, fields))
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise CSVParseError(str(e)) from e

    for future in futures:
        outcome = future.result()
        if outcome == ADDED:
            summary.added += 1
        elif outcome == SKIPPED:
            summary.skipped += 1

    logger.info("CSV import finished: added=%s skipped=%s", summary.added, summary.skipped)
    return summary


# ---- EXPORT ----
def escape_csv(value) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    s = str(value)
    if any(ch in s for ch in ',"\r\n'):
        return '"' + s.replace('"', '""') + '"'
    return s


def export_products(products: Iterable[Product]) -> str:
    rows = [{f: getattr(p, f) for f in EXPORT_FIELDS} for p in products]
    df = pd.DataFrame.from_records(rows, columns=EXPORT_FIELDS)
    lines = [",".join(EXPORT_FIELDS)]
    for record in df.itertuples(index=False, name=None):
        lines.append(",".join(escape_csv(v) for v in record))
    return "\n".join(lines) + "\n"
