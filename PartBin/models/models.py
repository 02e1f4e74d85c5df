"""
Core Models Module

Database engine configuration. Domain models live in their own modules and
are imported here so they register with SQLModel metadata.
"""

from sqlalchemy import create_engine
from sqlmodel import SQLModel

from .component_models import *

from PartBin.utils.config import get_settings

sqlite_url = get_settings().database_url

engine = create_engine(
    sqlite_url,
    echo=False,
    connect_args={"check_same_thread": False},
)


# Create tables if they don't exist
def create_db_and_tables():
    SQLModel.metadata.create_all(engine)
