from PartBin.models.component_models import ComponentCategory
from PartBin.models.import_models import ImportResult, NormalizedComponent, SourceFormat, Dialect


def _create(service, **data):
    response = service.create_component(data)
    assert response.success, response.message
    return response.data


class TestComponentCrud:
    def test_create_and_get(self, component_service):
        created = _create(component_service, name="NE555DR", category="Integrated Circuits", quantity=4)

        fetched = component_service.get_component(created["id"])
        assert fetched.success
        assert fetched.data["name"] == "NE555DR"
        assert fetched.data["quantity"] == 4

    def test_create_requires_name(self, component_service):
        response = component_service.create_component({"name": "", "quantity": 1})

        assert not response.success
        assert response.message == "Missing required fields: name"

    def test_specifications_follow_category_order(self, component_service):
        created = _create(
            component_service,
            name="C1",
            category="Capacitors",
            specifications={"voltage": "50V", "capacitance": "10uF", "package": ""},
        )
        assert list(created["specifications"].items()) == [("capacitance", "10uF"), ("voltage", "50V")]

    def test_missing_component(self, component_service):
        for response in (
            component_service.get_component("missing"),
            component_service.update_component("missing", {"quantity": 1}),
            component_service.delete_component("missing"),
        ):
            assert not response.success
            assert response.message == "Component not found"

    def test_update_and_delete(self, component_service):
        created = _create(component_service, name="R1", category="Resistors", quantity=10)

        updated = component_service.update_component(created["id"], {"quantity": 25, "location": "Bin 4"})
        assert updated.success
        assert updated.data["quantity"] == 25
        assert updated.data["location"] == "Bin 4"

        deleted = component_service.delete_component(created["id"])
        assert deleted.data == {"id": created["id"], "status": "deleted"}
        assert component_service.get_all_components().data == []

    def test_stats_and_low_stock(self, component_service):
        _create(component_service, name="R1", category="Resistors", quantity=100, min_stock_level=10)
        _create(component_service, name="C1", category="Capacitors", quantity=2, min_stock_level=10)
        _create(component_service, name="C2", category="Capacitors", quantity=10, min_stock_level=10)

        stats = component_service.get_stats().data
        assert stats == {"total_components": 3, "total_quantity": 112, "categories": 2, "low_stock_count": 2}

        low = component_service.get_low_stock_components().data
        assert {c["name"] for c in low} == {"C1", "C2"}

        by_category = component_service.get_components_by_category("Capacitors").data
        assert {c["name"] for c in by_category} == {"C1", "C2"}


class TestImportComponents:
    def _result(self, *components):
        return ImportResult(
            source_format=SourceFormat.BINARY_SHEET,
            dialect=Dialect.NATIVE_EXPORT,
            total_rows=len(components),
            parsed_count=len(components),
            merged_count=len(components),
            components=list(components),
        )

    def test_creates_new_and_updates_existing(self, component_service):
        existing = _create(component_service, name="R1", category="Resistors", quantity=1)

        result = self._result(
            NormalizedComponent(id=existing["id"], name="R1", category=ComponentCategory.RESISTORS, quantity=50),
            NormalizedComponent(id="unknown-id", name="C1", category=ComponentCategory.CAPACITORS, quantity=7,
                                specifications={"capacitance": "100nF"}),
        )
        response = component_service.import_components(result)

        assert response.success
        assert response.data["created_count"] == 1
        assert response.data["updated_count"] == 1
        assert response.data["failed_count"] == 0
        assert response.data["dialect"] == "native_export"

        stored = {c["name"]: c for c in component_service.get_all_components().data}
        assert stored["R1"]["quantity"] == 50
        assert stored["C1"]["id"] != "unknown-id"
        assert stored["C1"]["specifications"] == {"capacitance": "100nF"}


class TestMergeStoredDuplicates:
    def test_merges_components_differing_only_in_quantity(self, component_service):
        for quantity in (3, 4, 5):
            _create(component_service, name="R1", category="Resistors", quantity=quantity, location="A1")
        _create(component_service, name="R1", category="Resistors", quantity=9, location="B2")

        response = component_service.merge_stored_duplicates()

        assert response.data == {"groups_merged": 1, "components_removed": 2, "remaining_components": 2}
        quantities = {c["location"]: c["quantity"] for c in component_service.get_all_components().data}
        assert quantities == {"A1": 12, "B2": 9}

    def test_nothing_to_merge(self, component_service):
        _create(component_service, name="R1", quantity=1)

        response = component_service.merge_stored_duplicates()

        assert response.data == {"groups_merged": 0, "components_removed": 0, "remaining_components": 1}
