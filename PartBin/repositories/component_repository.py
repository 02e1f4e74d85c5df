import logging
from datetime import datetime
from typing import Optional, List, Dict, Any

from sqlalchemy import or_
from sqlmodel import Session, select

from PartBin.models.component_models import ComponentModel
from PartBin.repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)

# Category filter value meaning "every category"
ALL_CATEGORIES = "All Categories"

UPDATABLE_FIELDS = ("name", "category", "quantity", "location", "description", "min_stock_level", "specifications")


class ComponentRepository(BaseRepository[ComponentModel]):
    """Record store for inventory components."""

    def __init__(self):
        super().__init__(ComponentModel)

    def create_component(self, session: Session, data: Dict[str, Any]) -> ComponentModel:
        component = ComponentModel(**{key: value for key, value in data.items() if key != "id"})
        self.create(session, component)
        logger.debug(f"Created component {component.id} ({component.name})")
        return component

    def update_component(self, session: Session, component_id: str, updates: Dict[str, Any]) -> Optional[ComponentModel]:
        """
        Apply a partial update. Keys outside the component's editable fields
        are ignored. Returns None when the component does not exist.
        """
        component = self.get_by_id(session, component_id)
        if component is None:
            return None

        for key, value in updates.items():
            if key in UPDATABLE_FIELDS:
                setattr(component, key, value)
        component.updated_at = datetime.utcnow()
        return self.update(session, component)

    def list_components(
        self, session: Session, search: Optional[str] = None, category: Optional[str] = None
    ) -> List[ComponentModel]:
        """
        Components filtered by category first, then by a case-insensitive
        search over name, description, category and location.
        """
        query = select(ComponentModel)
        if category and category != ALL_CATEGORIES:
            query = query.where(ComponentModel.category == category)
        if search:
            term = f"%{search}%"
            query = query.where(
                or_(
                    ComponentModel.name.ilike(term),
                    ComponentModel.description.ilike(term),
                    ComponentModel.category.ilike(term),
                    ComponentModel.location.ilike(term),
                )
            )
        return list(session.exec(query.order_by(ComponentModel.created_at)).all())

    def get_by_category(self, session: Session, category: str) -> List[ComponentModel]:
        return self.list_components(session, category=category)

    def get_low_stock(self, session: Session) -> List[ComponentModel]:
        """Components at or below their minimum stock level."""
        query = select(ComponentModel).where(ComponentModel.quantity <= ComponentModel.min_stock_level)
        return list(session.exec(query.order_by(ComponentModel.created_at)).all())
