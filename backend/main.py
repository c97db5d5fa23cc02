# backend/main.py
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from config import settings
from database import init_db, close_db
from routes.products import router as products_router
from utils.errors import add_error_handlers

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tabele tworzone przy starcie, jeśli nie istnieją
    init_db()
    logger.info("Inventory API started, database: %s", settings.DATABASE_URL)
    yield
    close_db()
    logger.info("Inventory API stopped")


app = FastAPI(title="Inventory API", version="1.0.0", lifespan=lifespan)

# CORS Configuration
origins = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.FRONTEND_URL:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_error_handlers(app)

# Rejestracja routerów
app.include_router(products_router)

@app.get("/")
def read_root():
    return {"message": "Inventory API is running"}
