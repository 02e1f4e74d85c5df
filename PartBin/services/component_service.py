import logging
from typing import Any, Dict, List, Optional, Sequence

from PartBin.exceptions import ComponentNotFoundError
from PartBin.models.component_models import ComponentCategory, ComponentModel, build_specs
from PartBin.models.import_models import ImportResult, NormalizedComponent, identity_key
from PartBin.repositories.component_repository import ComponentRepository
from PartBin.schemas.component_schemas import ComponentStats, ImportSummary, MergeSummary
from PartBin.services.base_service import BaseService, ServiceResponse

logger = logging.getLogger(__name__)


def normalize_specifications(category: str, specifications: Optional[Dict[str, Any]]) -> Optional[Dict[str, str]]:
    """Store specifications in the attribute order of the category's specs model."""
    if not specifications:
        return None
    specs = build_specs(ComponentCategory.from_label(category) or ComponentCategory.OTHER, specifications)
    return specs.to_dict() if specs is not None else None


def stored_identity_key(component: ComponentModel) -> str:
    return identity_key(
        component.name,
        component.category,
        component.description,
        component.location,
        component.min_stock_level,
        component.specifications,
    )


class ComponentService(BaseService):
    """
    Inventory operations over the component store, plus persistence of
    order import results.
    """

    def __init__(self, engine_override=None):
        super().__init__(engine_override)
        self.component_repo = ComponentRepository()
        self.entity_name = "Component"

    def get_all_components(
        self, search: Optional[str] = None, category: Optional[str] = None
    ) -> ServiceResponse[List[Dict[str, Any]]]:
        try:
            with self.get_session() as session:
                components = self.component_repo.list_components(session, search=search, category=category)
                return self.success_response(
                    f"Retrieved {len(components)} components", [component.to_dict() for component in components]
                )
        except Exception as e:
            return self.handle_exception(e, f"list {self.entity_name}s")

    def get_component(self, component_id: str) -> ServiceResponse[Dict[str, Any]]:
        try:
            self.log_operation("get", self.entity_name, component_id)
            with self.get_session() as session:
                component = self.component_repo.get_by_id(session, component_id)
                if component is None:
                    raise ComponentNotFoundError(f"{self.entity_name} not found", component_id=component_id)
                return self.success_response(f"{self.entity_name} retrieved successfully", component.to_dict())
        except Exception as e:
            return self.handle_exception(e, f"get {self.entity_name}")

    def get_components_by_category(self, category: str) -> ServiceResponse[List[Dict[str, Any]]]:
        try:
            with self.get_session() as session:
                components = self.component_repo.get_by_category(session, category)
                return self.success_response(
                    f"Retrieved {len(components)} components in {category}",
                    [component.to_dict() for component in components],
                )
        except Exception as e:
            return self.handle_exception(e, f"list {self.entity_name}s by category")

    def get_low_stock_components(self) -> ServiceResponse[List[Dict[str, Any]]]:
        try:
            with self.get_session() as session:
                components = self.component_repo.get_low_stock(session)
                return self.success_response(
                    f"{len(components)} components at or below minimum stock",
                    [component.to_dict() for component in components],
                )
        except Exception as e:
            return self.handle_exception(e, "list low stock components")

    def create_component(self, data: Dict[str, Any]) -> ServiceResponse[Dict[str, Any]]:
        try:
            self.validate_required_fields(data, ["name"])
            self.log_operation("create", self.entity_name)
            data = dict(data)
            data["specifications"] = normalize_specifications(data.get("category", ""), data.get("specifications"))
            with self.get_session() as session:
                component = self.component_repo.create_component(session, data)
                return self.success_response(f"{self.entity_name} '{component.name}' created", component.to_dict())
        except Exception as e:
            return self.handle_exception(e, f"create {self.entity_name}")

    def update_component(self, component_id: str, updates: Dict[str, Any]) -> ServiceResponse[Dict[str, Any]]:
        try:
            self.log_operation("update", self.entity_name, component_id)
            with self.get_session() as session:
                existing = self.component_repo.get_by_id(session, component_id)
                if existing is None:
                    raise ComponentNotFoundError(f"{self.entity_name} not found", component_id=component_id)

                updates = dict(updates)
                if "specifications" in updates:
                    updates["specifications"] = normalize_specifications(
                        updates.get("category", existing.category), updates["specifications"]
                    )
                component = self.component_repo.update_component(session, component_id, updates)
                return self.success_response(f"{self.entity_name} '{component.name}' updated", component.to_dict())
        except Exception as e:
            return self.handle_exception(e, f"update {self.entity_name}")

    def delete_component(self, component_id: str) -> ServiceResponse[Dict[str, str]]:
        try:
            self.log_operation("delete", self.entity_name, component_id)
            with self.get_session() as session:
                if not self.component_repo.delete(session, component_id):
                    raise ComponentNotFoundError(f"{self.entity_name} not found", component_id=component_id)
                return self.success_response(
                    f"{self.entity_name} deleted successfully", {"id": component_id, "status": "deleted"}
                )
        except Exception as e:
            return self.handle_exception(e, f"delete {self.entity_name}")

    def get_stats(self) -> ServiceResponse[Dict[str, int]]:
        try:
            with self.get_session() as session:
                components = self.component_repo.get_all(session)
                stats = ComponentStats(
                    total_components=len(components),
                    total_quantity=sum(component.quantity for component in components),
                    categories=len({component.category for component in components}),
                    low_stock_count=sum(1 for component in components if component.is_low_stock),
                )
                return self.success_response("Inventory statistics computed", stats.model_dump())
        except Exception as e:
            return self.handle_exception(e, "compute stats")

    # === ORDER IMPORT ===

    def import_components(self, result: ImportResult) -> ServiceResponse[Dict[str, Any]]:
        """
        Store the records of an import.

        A record whose id names an existing component updates it, every other
        record is created. Each record is stored in its own transaction; a
        failing record is counted and logged and does not stop the batch.
        """
        self.log_operation("import", self.entity_name)
        created = updated = failed = 0

        for record in result.components:
            try:
                if self._store_record(record):
                    updated += 1
                else:
                    created += 1
            except Exception as e:
                failed += 1
                self.logger.warning(f"Failed to store imported component {record.name!r}: {e}")

        summary = ImportSummary(
            source_format=result.source_format.value,
            dialect=result.dialect.value if result.dialect else None,
            total_rows=result.total_rows,
            parsed_count=result.parsed_count,
            merged_count=result.merged_count,
            created_count=created,
            updated_count=updated,
            failed_count=failed,
            skipped_rows=len(result.diagnostics),
        )
        if created == 0 and updated == 0:
            return self.error_response("No components could be imported", [f"{failed} components failed"])
        return self.success_response(
            f"Imported {created + updated} components ({created} created, {updated} updated, {failed} failed)",
            summary.model_dump(),
        )

    def _store_record(self, record: NormalizedComponent) -> bool:
        """Returns True when an existing component was updated."""
        with self.get_session() as session:
            if record.id and self.component_repo.get_by_id(session, record.id) is not None:
                self.component_repo.update_component(session, record.id, record.to_store_dict())
                return True
            self.component_repo.create_component(session, record.to_store_dict())
            return False

    def merge_stored_duplicates(self) -> ServiceResponse[Dict[str, int]]:
        """
        Collapse stored components that only differ in quantity.

        The first component of each group (by creation order) keeps the summed
        quantity; the others are deleted.
        """
        try:
            self.log_operation("merge duplicates", self.entity_name)
            with self.get_session() as session:
                components = self.component_repo.list_components(session)
                groups: Dict[str, List[ComponentModel]] = {}
                for component in components:
                    groups.setdefault(stored_identity_key(component), []).append(component)

                merged_groups = removed = 0
                for members in groups.values():
                    if len(members) < 2:
                        continue
                    keeper = members[0]
                    total = sum(member.quantity for member in members)
                    self.component_repo.update_component(session, keeper.id, {"quantity": total})
                    for duplicate in members[1:]:
                        self.component_repo.delete(session, duplicate.id)
                    merged_groups += 1
                    removed += len(members) - 1
                    self.logger.debug(f"Merged {len(members)} copies of {keeper.name!r} into quantity {total}")

                summary = MergeSummary(
                    groups_merged=merged_groups,
                    components_removed=removed,
                    remaining_components=len(components) - removed,
                )
                return self.success_response(
                    f"Merged {merged_groups} duplicate groups, removed {removed} components", summary.model_dump()
                )
        except Exception as e:
            return self.handle_exception(e, "merge duplicate components")
