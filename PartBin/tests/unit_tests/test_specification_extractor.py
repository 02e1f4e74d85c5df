from PartBin.models.component_models import (
    CapacitorSpecs,
    ComponentCategory,
    GenericSpecs,
    IntegratedCircuitSpecs,
    ResistorSpecs,
)
from PartBin.services.order_import.specification_extractor import extract_specifications


def specs_of(category, description="", package="", model=""):
    specs = extract_specifications(category, package, description, model)
    return specs.to_dict() if specs is not None else None


class TestCapacitors:
    def test_capacitance_tolerance_voltage(self):
        specs = extract_specifications(ComponentCategory.CAPACITORS, "", "10nF ±10% 50V X7R", "")

        assert isinstance(specs, CapacitorSpecs)
        assert specs.to_dict() == {"capacitance": "10nF", "tolerance": "±10%", "voltage": "50V"}

    def test_micro_sign_normalised(self):
        assert specs_of(ComponentCategory.CAPACITORS, "4.7µF 16V")["capacitance"] == "4.7uF"

    def test_voltage_must_not_run_into_a_word(self):
        assert "voltage" not in specs_of(ComponentCategory.CAPACITORS, "100nF 5Vdc")

    def test_first_voltage_wins(self):
        assert specs_of(ComponentCategory.CAPACITORS, "1uF 50V 100V")["voltage"] == "50V"

    def test_voltage_followed_by_chinese_text(self):
        assert specs_of(ComponentCategory.CAPACITORS, "50V电容") == {"voltage": "50V"}

    def test_full_width_digits_are_not_numbers(self):
        assert specs_of(ComponentCategory.CAPACITORS, "１０nF ５０V") is None


class TestResistors:
    def test_resistance_tolerance_power(self):
        specs = extract_specifications(ComponentCategory.RESISTORS, "", "10kΩ ±5% 1/4W", "")

        assert isinstance(specs, ResistorSpecs)
        assert specs.to_dict() == {"resistance": "10kΩ", "tolerance": "±5%", "power": "1/4W"}

    def test_ohm_spelled_out(self):
        assert specs_of(ComponentCategory.RESISTORS, "4.7kohm carbon film")["resistance"] == "4.7kΩ"
        assert specs_of(ComponentCategory.RESISTORS, "220 ohm")["resistance"] == "220Ω"


class TestOtherCategories:
    def test_integrated_circuit_model_and_voltage(self):
        specs = extract_specifications(ComponentCategory.INTEGRATED_CIRCUITS, "SOT-223", "3.3V LDO regulator", "AMS1117")

        assert isinstance(specs, IntegratedCircuitSpecs)
        assert specs.to_dict() == {"package": "SOT-223", "model": "AMS1117", "voltage": "3.3V"}

    def test_model_hint_ignored_outside_integrated_circuits(self):
        assert specs_of(ComponentCategory.RESISTORS, "", model="RC0603") is None

    def test_transistor(self):
        specs = specs_of(ComponentCategory.TRANSISTORS, "NPN 40V 200mA")
        assert specs == {"type": "NPN", "voltage": "40V", "current": "200mA"}

    def test_transistor_mosfet_type(self):
        assert specs_of(ComponentCategory.TRANSISTORS, "N-Channel 30V 5.8A")["type"] == "N-Channel MOSFET"
        assert specs_of(ComponentCategory.TRANSISTORS, "PMOS 20V")["type"] == "P-Channel MOSFET"

    def test_diode(self):
        assert specs_of(ComponentCategory.DIODES, "LED Red 2V 20mA") == {"type": "LED", "voltage": "2V", "current": "20mA"}

    def test_connector(self):
        specs = specs_of(ComponentCategory.CONNECTORS, "USB Type-C 16P 0.5mm")
        assert specs == {"type": "USB", "pins": "16", "pitch": "0.5mm"}

    def test_connector_chinese_keywords(self):
        specs = specs_of(ComponentCategory.CONNECTORS, "排针 40位 2.54mm")
        assert specs == {"type": "Header", "pins": "40", "pitch": "2.54mm"}

    def test_inductor(self):
        specs = specs_of(ComponentCategory.INDUCTORS, "10uH ±20% 1.5A")
        assert specs == {"inductance": "10uH", "tolerance": "±20%", "current": "1.5A"}

    def test_package_only_categories(self):
        specs = extract_specifications(ComponentCategory.SWITCHES, "SMD", "6x6mm tactile 12V", "")

        assert isinstance(specs, GenericSpecs)
        assert specs.to_dict() == {"package": "SMD"}


class TestAbsentSpecifications:
    def test_nothing_found_is_none(self):
        assert extract_specifications(ComponentCategory.CAPACITORS, "", "ceramic", "") is None

    def test_other_without_package_is_none(self):
        assert extract_specifications(ComponentCategory.OTHER, "", "5V 1A 10kΩ", "") is None
