# backend/main.py
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

load_dotenv()

from config import settings
from database import init_db
from utils.exception_handlers import register_exception_handlers
from utils.rate_limit import limiter

# Import routerów
from routes.auth import router as auth_router
from routes.products import router as products_router
from routes.cart import router as cart_router
from routes.orders import router as orders_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Inicjalizacja bazy (tabele + dane demo)
init_db(seed=settings.SEED_DEMO_DATA)

app = FastAPI(title="Nexus Store API", version="1.0.0")

# Obrazki produktów - upewniamy się, że katalog istnieje
images_dir = Path(settings.STATIC_DIR) / "images"
images_dir.mkdir(parents=True, exist_ok=True)
app.mount("/images", StaticFiles(directory=str(images_dir)), name="images")

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Limiter na endpointy logowania i rejestracji
app.state.limiter = limiter
register_exception_handlers(app)

# Rejestracja routerów
app.include_router(auth_router)
app.include_router(products_router)
app.include_router(cart_router)
app.include_router(orders_router)

logger.info("Nexus Store API ready, database %s", settings.DATABASE_URL.split("@")[-1])

@app.get("/")
def read_root():
    return {"message": "Nexus Store API is running"}
