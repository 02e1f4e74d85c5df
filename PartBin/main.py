import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from PartBin import __version__
from PartBin.handlers.exception_handlers import register_exception_handlers
from PartBin.models.models import create_db_and_tables
from PartBin.routers import component_routes, export_routes, import_routes
from PartBin.utils.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up...")
    create_db_and_tables()
    logger.info("Database ready")

    yield  # App continues running

    logger.info("Shutting down...")


app = FastAPI(
    title="PartBin",
    description="Electronics parts inventory with native export and marketplace order import.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

register_exception_handlers(app)

cors_origins_list = [origin.strip() for origin in settings.cors_origins.split(",")]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

app.include_router(component_routes.router, prefix="/api")
app.include_router(import_routes.router, prefix="/api/import")
app.include_router(export_routes.router, prefix="/api/export")


@app.get("/")
async def root():
    return {"message": "Welcome to PartBin API", "version": __version__}


if __name__ == "__main__":
    uvicorn.run("PartBin.main:app", host="0.0.0.0", port=8080, reload=True)
