# tests/conftest.py
import os
import shutil
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# point settings at a temp dir before config/database are imported
_tmp_dir = tempfile.mkdtemp(prefix="test_inventory_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp_dir, 'inventory_test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_tmp_dir, "uploads")

from database import Base, SessionLocal, engine, init_db  # noqa: E402
from main import app  # noqa: E402
from models.product import Product  # noqa: E402


def pytest_sessionfinish(session, exitstatus):
    engine.dispose()
    shutil.rmtree(_tmp_dir, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_db():
    """Fresh tables for every test."""
    init_db()
    try:
        yield
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def upload_dir() -> Path:
    return Path(os.environ["UPLOAD_DIR"])


@pytest.fixture
def client(reset_db):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(reset_db):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_product(db):
    """
    Insert a product directly and return it.
    Usage: p = make_product("Hammer", stock=10, category="tools")
    """
    def _fn(name, stock=0, **fields):
        product = Product(name=name, stock=stock, **fields)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product
    return _fn


@pytest.fixture
def csv_upload():
    """
    Build the multipart payload for /api/products/import.
    Usage: client.post("/api/products/import", files=csv_upload("name,stock\\nA,1\\n"))
    """
    def _fn(text, filename="products.csv"):
        data = text.encode("utf-8") if isinstance(text, str) else text
        return {"csvFile": (filename, data, "text/csv")}
    return _fn
