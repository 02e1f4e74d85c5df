"""
Specification Extractor

Pulls category-specific attributes (capacitance, resistance, voltage, ...)
out of free-text part descriptions.

Each category owns an ordered tuple of attribute rules. A rule only fills an
attribute that is still empty, so when several rules target the same key
(transistor type keywords, for example) the first listed rule that matches
wins. Within one rule the first occurrence in the text wins: a description
carrying two voltage ratings keeps only the first one. Values are not checked
for unit consistency. Numbers are ASCII digits only.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from PartBin.models.component_models import BaseSpecs, ComponentCategory, build_specs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttributeRule:
    key: str
    pattern: re.Pattern
    render: Callable[[re.Match], str]


def _number_and_unit(match: re.Match) -> str:
    return match.group(1) + match.group(2).replace("µ", "u")


def _number_with(suffix: str) -> Callable[[re.Match], str]:
    return lambda match: match.group(1) + suffix


def _constant(value: str) -> Callable[[re.Match], str]:
    return lambda match: value


TOLERANCE = AttributeRule("tolerance", re.compile(r"±\s*([0-9]+)%"), lambda match: f"±{match.group(1)}%")
CURRENT = AttributeRule("current", re.compile(r"([0-9]+\.?[0-9]*)\s*(mA|A)"), lambda match: match.group(1) + match.group(2))
LOOSE_VOLTAGE = AttributeRule("voltage", re.compile(r"([0-9]+\.?[0-9]*)\s*V"), _number_with("V"))

CATEGORY_RULES: Dict[ComponentCategory, Tuple[AttributeRule, ...]] = {
    ComponentCategory.CAPACITORS: (
        AttributeRule("capacitance", re.compile(r"([0-9]+\.?[0-9]*)\s*(pF|nF|µF|uF|mF)", re.IGNORECASE), _number_and_unit),
        TOLERANCE,
        AttributeRule("voltage", re.compile(r"([0-9]+\.?[0-9]*)\s*V(?![A-Za-z0-9_])"), _number_with("V")),
    ),
    ComponentCategory.RESISTORS: (
        AttributeRule(
            "resistance",
            re.compile(r"([0-9]+\.?[0-9]*)\s*(Ω|ohm|kΩ|kohm|MΩ|Mohm)", re.IGNORECASE),
            lambda match: match.group(1) + re.sub(r"ohm", "Ω", match.group(2), flags=re.IGNORECASE),
        ),
        TOLERANCE,
        AttributeRule("power", re.compile(r"(1/[0-9]+W|[0-9]+/[0-9]+W|[0-9]+W)"), lambda match: match.group(1)),
    ),
    ComponentCategory.INTEGRATED_CIRCUITS: (LOOSE_VOLTAGE,),
    ComponentCategory.TRANSISTORS: (
        AttributeRule("type", re.compile(r"NPN", re.IGNORECASE), _constant("NPN")),
        AttributeRule("type", re.compile(r"PNP", re.IGNORECASE), _constant("PNP")),
        AttributeRule("type", re.compile(r"N-Channel|NMOS", re.IGNORECASE), _constant("N-Channel MOSFET")),
        AttributeRule("type", re.compile(r"P-Channel|PMOS", re.IGNORECASE), _constant("P-Channel MOSFET")),
        AttributeRule("voltage", re.compile(r"([0-9]+)\s*V"), _number_with("V")),
        CURRENT,
    ),
    ComponentCategory.DIODES: (
        AttributeRule("type", re.compile(r"Schottky|肖特基", re.IGNORECASE), _constant("Schottky")),
        AttributeRule("type", re.compile(r"Zener|稳压", re.IGNORECASE), _constant("Zener")),
        AttributeRule("type", re.compile(r"LED|发光", re.IGNORECASE), _constant("LED")),
        AttributeRule("type", re.compile(r"TVS", re.IGNORECASE), _constant("TVS")),
        LOOSE_VOLTAGE,
        CURRENT,
    ),
    ComponentCategory.CONNECTORS: (
        AttributeRule("type", re.compile(r"USB", re.IGNORECASE), _constant("USB")),
        AttributeRule("type", re.compile(r"Type-C", re.IGNORECASE), _constant("Type-C")),
        AttributeRule("type", re.compile(r"Type-A", re.IGNORECASE), _constant("Type-A")),
        AttributeRule("type", re.compile(r"Header|排针", re.IGNORECASE), _constant("Header")),
        AttributeRule("type", re.compile(r"Socket|排母", re.IGNORECASE), _constant("Socket")),
        AttributeRule("pins", re.compile(r"([0-9]+)\s*(pin|P|位|芯|脚)", re.IGNORECASE), lambda match: match.group(1)),
        AttributeRule("pitch", re.compile(r"([0-9]+\.?[0-9]*)\s*mm"), _number_with("mm")),
        CURRENT,
    ),
    ComponentCategory.INDUCTORS: (
        AttributeRule("inductance", re.compile(r"([0-9]+\.?[0-9]*)\s*(nH|uH|µH|mH)", re.IGNORECASE), _number_and_unit),
        TOLERANCE,
        CURRENT,
    ),
}


def extract_specifications(
    category: ComponentCategory,
    package_hint: str = "",
    description: str = "",
    model_hint: str = "",
) -> Optional[BaseSpecs]:
    """
    Build the specs for one part, or None when nothing was found.

    The package hint is kept for every category; the model hint is only used
    for integrated circuits.
    """
    values: Dict[str, str] = {}
    if package_hint:
        values["package"] = package_hint
    if category == ComponentCategory.INTEGRATED_CIRCUITS and model_hint:
        values["model"] = model_hint

    text = description or ""
    for rule in CATEGORY_RULES.get(category, ()):
        if rule.key in values:
            continue
        match = rule.pattern.search(text)
        if match:
            values[rule.key] = rule.render(match)

    if values:
        logger.debug(f"Extracted {category.value} specs: {values}")
    return build_specs(category, values)
