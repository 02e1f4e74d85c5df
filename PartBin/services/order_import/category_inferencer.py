"""
Category Inferencer

Maps a part number plus free-text description to a component category.
Rules are evaluated top to bottom and the first match wins, so their order
is part of the behaviour: a description mentioning both an LED and a
connector is a diode because the diode rule comes first.
"""

import re
from typing import Tuple

from PartBin.models.component_models import ComponentCategory

CATEGORY_RULES: Tuple[Tuple[re.Pattern, ComponentCategory], ...] = (
    (
        # "ic" only as a whole word, otherwise "ceramic" and "logic" match
        re.compile(r"atmega|stm32|esp32|pic|mcu|microcontroller|processor|\bic\b|芯片|单片机|sop|ssop|tssop|qfn|lqfp"),
        ComponentCategory.INTEGRATED_CIRCUITS,
    ),
    (
        re.compile(r"resistor|ohm|ω|电阻|[0-9]+r[0-9]+|[0-9]+k[0-9]+|[0-9]+m[0-9]+"),
        ComponentCategory.RESISTORS,
    ),
    (
        re.compile(r"capacitor|farad|µf|uf|pf|nf|电容|贴片电容|钽电容|电解电容"),
        ComponentCategory.CAPACITORS,
    ),
    (
        re.compile(r"transistor|mosfet|bjt|fet|晶体管|三极管|mos管|n-channel|p-channel|npn|pnp"),
        ComponentCategory.TRANSISTORS,
    ),
    (
        re.compile(r"diode|led|zener|schottky|tvs|esd|二极管|发光二极管|整流|稳压二极管|肖特基"),
        ComponentCategory.DIODES,
    ),
    (
        re.compile(r"connector|header|socket|plug|usb|type-c|type-a|hdmi|rj45|连接器|排针|排母|接插件|插座"),
        ComponentCategory.CONNECTORS,
    ),
    (
        re.compile(r"inductor|inductance|uh|nh|mh|电感|贴片电感"),
        ComponentCategory.INDUCTORS,
    ),
    (
        re.compile(r"sensor|temperature|humidity|pressure|accelerometer|gyro|传感器|温度|湿度|压力|加速度"),
        ComponentCategory.SENSORS,
    ),
    (
        re.compile(r"switch|button|key|开关|按键|轻触开关"),
        ComponentCategory.SWITCHES,
    ),
)


def infer_category(name: str, description: str) -> ComponentCategory:
    text = f"{name or ''} {description or ''}".lower()
    for pattern, category in CATEGORY_RULES:
        if pattern.search(text):
            return category
    return ComponentCategory.OTHER
