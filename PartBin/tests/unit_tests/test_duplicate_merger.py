from PartBin.models.component_models import ComponentCategory
from PartBin.models.import_models import NormalizedComponent
from PartBin.services.order_import.duplicate_merger import merge_duplicates


def component(name="C25804", quantity=1, **overrides):
    values = {
        "name": name,
        "description": "UNI-ROYAL - 0603WAF1002T5E | 0603",
        "category": ComponentCategory.RESISTORS,
        "quantity": quantity,
        "min_stock_level": 5,
        "specifications": {"package": "0603", "resistance": "10kΩ"},
    }
    values.update(overrides)
    return NormalizedComponent(**values)


class TestMergeDuplicates:
    def test_identical_rows_sum_quantities(self):
        merged = merge_duplicates([component(quantity=3), component(quantity=7)])

        assert len(merged) == 1
        assert merged[0].quantity == 10
        assert merged[0].name == "C25804"

    def test_first_member_is_kept(self):
        merged = merge_duplicates([component(quantity=3, id="first"), component(quantity=7, id="second")])
        assert merged[0].id == "first"

    def test_any_differing_field_keeps_records_apart(self):
        records = [
            component(),
            component(location="B2"),
            component(min_stock_level=6),
            component(specifications={"package": "0402"}),
            component(description="other"),
        ]
        assert len(merge_duplicates(records)) == 5

    def test_groups_keep_first_seen_order(self):
        records = [component("A", 1), component("B", 2), component("A", 3), component("C", 4), component("B", 5)]
        merged = merge_duplicates(records)

        assert [record.name for record in merged] == ["A", "B", "C"]
        assert [record.quantity for record in merged] == [4, 7, 4]

    def test_quantity_is_conserved(self):
        records = [component(name, quantity) for name, quantity in [("A", 1), ("B", 0), ("A", 9), ("C", 12), ("A", 2)]]
        merged = merge_duplicates(records)
        assert sum(record.quantity for record in merged) == sum(record.quantity for record in records)

    def test_merge_is_idempotent(self):
        records = [component("A", 1), component("B", 2), component("A", 3)]
        once = merge_duplicates(records)
        assert merge_duplicates(once) == once

    def test_distinct_records_pass_through(self):
        records = [component("A", 1), component("B", 2)]
        assert merge_duplicates(records) == records

    def test_empty_input(self):
        assert merge_duplicates([]) == []
