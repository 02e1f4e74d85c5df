"""
Shared test configuration.

Every test that touches the database gets its own in-memory SQLite engine, so
the application database is never used.
"""

import io
from typing import List

import pandas as pd
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from PartBin.dependencies import get_engine
from PartBin.main import app
from PartBin.services.component_service import ComponentService
from PartBin.services.export_service import ExportService


NATIVE_HEADERS = ["ID", "Name", "Description", "Category", "Quantity", "Location", "Min Stock Level", "Specifications"]

MARKETPLACE_HEADERS = ["序号", "商品编号", "品牌", "厂家型号", "封装", "商品名称", "订购数量（修改后）"]


def make_workbook(rows: List[List[object]]) -> bytes:
    """Write rows to the first sheet of an in-memory .xlsx workbook."""
    buffer = io.BytesIO()
    pd.DataFrame(rows).to_excel(buffer, index=False, header=False, engine="openpyxl")
    return buffer.getvalue()


@pytest.fixture(name="test_engine")
def test_engine_fixture():
    """Create a test database engine"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="test_session")
def test_session_fixture(test_engine):
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="component_service")
def component_service_fixture(test_engine):
    return ComponentService(engine_override=test_engine)


@pytest.fixture(name="export_service")
def export_service_fixture(test_engine):
    return ExportService(engine_override=test_engine)


@pytest.fixture(name="test_client")
def test_client_fixture(test_engine):
    """Create a test client whose services use the test engine"""
    app.dependency_overrides[get_engine] = lambda: test_engine

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()
