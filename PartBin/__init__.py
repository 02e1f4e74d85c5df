"""
PartBin - Electronics Parts Inventory with Order File Import
"""

__version__ = "1.0.0"
