"""
Component Models Module

Contains the ComponentModel table, the closed set of component categories and
the per-category specification models.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any, Type

from pydantic import BaseModel, ConfigDict
from sqlmodel import SQLModel, Field, Column, JSON


class ComponentCategory(str, Enum):
    RESISTORS = "Resistors"
    CAPACITORS = "Capacitors"
    INTEGRATED_CIRCUITS = "Integrated Circuits"
    TRANSISTORS = "Transistors"
    DIODES = "Diodes"
    CONNECTORS = "Connectors"
    INDUCTORS = "Inductors"
    SWITCHES = "Switches"
    SENSORS = "Sensors"
    OTHER = "Other"

    @classmethod
    def from_label(cls, label: str) -> Optional["ComponentCategory"]:
        """Return the category whose value equals label exactly, or None."""
        for category in cls:
            if category.value == label:
                return category
        return None


# === SPECIFICATIONS ===
# One model per category. Attribute declaration order is the order attributes
# are extracted in, and therefore the order they serialize in.


class BaseSpecs(BaseModel):
    """Sparse, display-formatted specification values (e.g. "10nF", "±5%")."""

    model_config = ConfigDict(frozen=True, extra="allow")

    package: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        return {key: value for key, value in self.model_dump(exclude_none=True).items() if value != ""}


class CapacitorSpecs(BaseSpecs):
    capacitance: Optional[str] = None
    tolerance: Optional[str] = None
    voltage: Optional[str] = None


class ResistorSpecs(BaseSpecs):
    resistance: Optional[str] = None
    tolerance: Optional[str] = None
    power: Optional[str] = None


class IntegratedCircuitSpecs(BaseSpecs):
    model: Optional[str] = None
    voltage: Optional[str] = None


class TransistorSpecs(BaseSpecs):
    type: Optional[str] = None
    voltage: Optional[str] = None
    current: Optional[str] = None


class DiodeSpecs(BaseSpecs):
    type: Optional[str] = None
    voltage: Optional[str] = None
    current: Optional[str] = None


class ConnectorSpecs(BaseSpecs):
    type: Optional[str] = None
    pins: Optional[str] = None
    pitch: Optional[str] = None
    current: Optional[str] = None


class InductorSpecs(BaseSpecs):
    inductance: Optional[str] = None
    tolerance: Optional[str] = None
    current: Optional[str] = None


class GenericSpecs(BaseSpecs):
    """Switches, sensors and uncategorized parts only carry a package."""


SPECS_BY_CATEGORY: Dict[ComponentCategory, Type[BaseSpecs]] = {
    ComponentCategory.CAPACITORS: CapacitorSpecs,
    ComponentCategory.RESISTORS: ResistorSpecs,
    ComponentCategory.INTEGRATED_CIRCUITS: IntegratedCircuitSpecs,
    ComponentCategory.TRANSISTORS: TransistorSpecs,
    ComponentCategory.DIODES: DiodeSpecs,
    ComponentCategory.CONNECTORS: ConnectorSpecs,
    ComponentCategory.INDUCTORS: InductorSpecs,
}


def specs_class_for(category: ComponentCategory) -> Type[BaseSpecs]:
    return SPECS_BY_CATEGORY.get(category, GenericSpecs)


def build_specs(category: ComponentCategory, values: Dict[str, Any]) -> Optional[BaseSpecs]:
    """
    Build the specs variant for a category from a plain mapping.

    Values are stringified; blank values are dropped. Returns None when no
    attribute survives, never an empty specs object.
    """
    cleaned = {
        str(key): str(value) for key, value in (values or {}).items() if value is not None and str(value) != ""
    }
    if not cleaned:
        return None
    return specs_class_for(category).model_validate(cleaned)


# === STORED COMPONENT ===


class ComponentModel(SQLModel, table=True):
    """
    A component held in inventory.

    Specifications are stored flat (attribute -> display string), exactly as
    the order import engine produces them.
    """

    id: Optional[str] = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str = Field(index=True)
    category: str = Field(default=ComponentCategory.OTHER.value, index=True)
    quantity: int = Field(default=0, ge=0)
    location: str = ""
    description: str = ""
    min_stock_level: int = Field(default=10, ge=0)
    specifications: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_stock_level

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format"""
        base_dict = self.model_dump()
        if self.created_at:
            base_dict["created_at"] = self.created_at.isoformat()
        if self.updated_at:
            base_dict["updated_at"] = self.updated_at.isoformat()
        return base_dict
