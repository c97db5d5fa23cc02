# backend/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from config import settings

# 1. Adres bazy z konfiguracji (domyślnie lokalny plik SQLite)
SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# 2. SQLAlchemy wymaga postgresql:// zamiast postgres://
if SQLALCHEMY_DATABASE_URL and SQLALCHEMY_DATABASE_URL.startswith("postgres://"):
    SQLALCHEMY_DATABASE_URL = SQLALCHEMY_DATABASE_URL.replace("postgres://", "postgresql://", 1)

# 3. Konfiguracja zależna od bazy
if "sqlite" in SQLALCHEMY_DATABASE_URL:
    # Sesje importu CSV działają w wątkach roboczych
    connect_args = {"check_same_thread": False}
else:
    connect_args = {}

engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    # Rejestracja modeli w metadata przed create_all
    import models.product  # noqa: F401
    import models.history  # noqa: F401
    Base.metadata.create_all(bind=engine)

def close_db():
    engine.dispose()
