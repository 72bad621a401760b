import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookati.core.config import settings
from bookati.routers.slots import router as slots_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Bookati Slots API")

# Comma-separated list, e.g.:
# CORS_ORIGINS="http://localhost:5173,https://app.bookati.com"
allow_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]

# Safe fallback for local dev if env var not set
if not allow_origins:
  allow_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
  ]

app.add_middleware(
  CORSMiddleware,
  allow_origins=allow_origins,
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)

app.include_router(slots_router, prefix="/slots", tags=["slots"])

logger.info(f"Bookati Slots API configured (slot horizon {settings.slot_horizon_days} days)")

@app.get("/health")
def health():
  return {"status": "ok"}
