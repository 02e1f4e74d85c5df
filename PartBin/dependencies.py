"""
FastAPI dependency functions for service injection.

Services are created per request from get_engine(), which tests override
with an in-memory engine.
"""

from typing import Generator

from fastapi import Depends
from sqlalchemy import Engine

from PartBin.models.models import engine as global_engine
from PartBin.services.component_service import ComponentService
from PartBin.services.export_service import ExportService
from PartBin.utils.config import ImportSettings, get_settings


def get_engine() -> Engine:
    """
    Get the database engine for the current request.

    This can be overridden in tests to provide a test engine.
    """
    return global_engine


def get_component_service(engine: Engine = Depends(get_engine)) -> Generator[ComponentService, None, None]:
    yield ComponentService(engine_override=engine)


def get_export_service(engine: Engine = Depends(get_engine)) -> Generator[ExportService, None, None]:
    yield ExportService(engine_override=engine)


def get_import_settings() -> ImportSettings:
    return get_settings()
