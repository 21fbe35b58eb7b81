"""
Standard data libraries for the LEV design engine
"""

from .materials import STANDARD_MATERIALS, load_materials, load_materials_from_csv, get_material
from .excel_exporter import SystemExcelExporter

__all__ = [
    'STANDARD_MATERIALS',
    'load_materials',
    'load_materials_from_csv',
    'get_material',
    'SystemExcelExporter',
]
