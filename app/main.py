import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.database import init_db
from app.api.calendar import router as calendar_router
from app.api.collections import router as collections_router
from app.api.notes import router as notes_router
from app.api.reports import router as reports_router
from app.api.search import router as search_router
from app.api.settings import router as settings_router
from app.api.tools import router as tools_router
from app.api.workflows import router as workflows_router

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
)
logger = logging.getLogger(__name__)

# ── FastAPI app ──────────────────────────────────────────────────────────────
app = FastAPI(
    title="Search Bookmarks API",
    version="1.0.0",
)

# ── CORS ─────────────────────────────────────────────────────────────────────
origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
if "http://localhost:3000" not in origins:
    origins.append("http://localhost:3000")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(search_router)
app.include_router(collections_router)
app.include_router(tools_router)
app.include_router(notes_router)
app.include_router(calendar_router)
app.include_router(reports_router)
app.include_router(workflows_router)
app.include_router(settings_router)


# ── Startup ──────────────────────────────────────────────────────────────────
@app.on_event("startup")
def on_startup():
    logger.info("Creating database tables...")
    init_db()
    logger.info("Search Bookmarks API is ready.")


# ── Health check ─────────────────────────────────────────────────────────────
@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "search-bookmarks"}
