"""
Conveyed material library for LEV duct sizing
"""
import logging
import os
from dataclasses import replace
from typing import Dict, Optional

import pandas as pd

from calculations.network_models import MaterialProperties

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = [
    'material_type', 'display_name', 'min_velocity_ms', 'max_velocity_ms',
    'default_flow_m3h', 'density_kg_m3',
]

# Recommended transport velocities for common extracted materials
STANDARD_MATERIALS: Dict[str, MaterialProperties] = {
    'wood-chips': MaterialProperties(
        key='wood-chips',
        display_name='Wood Chips/Dust',
        min_velocity=20.0,
        max_velocity=28.0,
        default_flow=500.0,
        density=0.65,
        description='Fine wood particles, shavings, and sawdust'
    ),
    'metal-dust': MaterialProperties(
        key='metal-dust',
        display_name='Metal Dust',
        min_velocity=18.0,
        max_velocity=25.0,
        default_flow=400.0,
        density=2.8,
        description='Metal grinding and machining particles'
    ),
    'welding-fumes': MaterialProperties(
        key='welding-fumes',
        display_name='Welding Fumes',
        min_velocity=10.0,
        max_velocity=15.0,
        default_flow=200.0,
        density=1.5,
        description='Welding and cutting fumes'
    ),
    'flour-sugar': MaterialProperties(
        key='flour-sugar',
        display_name='Flour/Sugar',
        min_velocity=23.0,
        max_velocity=30.0,
        default_flow=600.0,
        density=0.8,
        description='Fine food processing powders'
    ),
    'plastic-pellets': MaterialProperties(
        key='plastic-pellets',
        display_name='Plastic Pellets',
        min_velocity=15.0,
        max_velocity=23.0,
        default_flow=350.0,
        density=1.2,
        description='Plastic manufacturing particles'
    ),
    'general-dust': MaterialProperties(
        key='general-dust',
        display_name='General Dust',
        min_velocity=18.0,
        max_velocity=25.0,
        default_flow=400.0,
        density=1.0,
        description='General industrial dust and particles'
    ),
}


def load_materials_from_csv(csv_path: str) -> Dict[str, MaterialProperties]:
    """Load materials from a CSV file

    Returns:
        Dict[str, MaterialProperties]: Materials keyed by material_type

    Raises:
        ValueError: If a required column is missing

    Note:
        Rows with missing numbers or an invalid velocity band are skipped
    """
    df = pd.read_csv(csv_path)
    missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"Materials file {csv_path} is missing columns: {', '.join(missing)}")

    materials = {}
    for row_number, row in enumerate(df.itertuples(index=False), start=2):
        numbers = [row.min_velocity_ms, row.max_velocity_ms, row.default_flow_m3h, row.density_kg_m3]
        if pd.isna(row.material_type) or any(pd.isna(value) for value in numbers):
            logger.warning("Skipping incomplete material on line %d of %s", row_number, csv_path)
            continue

        key = str(row.material_type).strip()
        description = getattr(row, 'description', '')
        material = MaterialProperties(
            key=key,
            display_name=key if pd.isna(row.display_name) else str(row.display_name).strip(),
            min_velocity=float(row.min_velocity_ms),
            max_velocity=float(row.max_velocity_ms),
            default_flow=float(row.default_flow_m3h),
            density=float(row.density_kg_m3),
            description='' if pd.isna(description) else str(description),
        )
        try:
            material.validate()
        except ValueError as e:
            logger.warning("Skipping material on line %d of %s: %s", row_number, csv_path, e)
            continue
        materials[material.key] = material

    logger.info("Loaded %d materials from %s", len(materials), csv_path)
    return materials


def _standard_copy() -> Dict[str, MaterialProperties]:
    return {key: replace(material) for key, material in STANDARD_MATERIALS.items()}


def load_materials(csv_path: Optional[str] = None) -> Dict[str, MaterialProperties]:
    """Load the material catalog

    Uses csv_path, then the LEV_MATERIALS_CSV environment variable. Falls
    back to copies of STANDARD_MATERIALS when neither points at an existing
    file, so callers may edit the result freely.
    """
    path = csv_path or os.environ.get('LEV_MATERIALS_CSV')
    if not path:
        return _standard_copy()
    if not os.path.exists(path):
        logger.warning("Materials file not found at %s, using %d standard materials",
                       os.path.abspath(path), len(STANDARD_MATERIALS))
        return _standard_copy()
    return load_materials_from_csv(path)


def get_material(key: str, materials: Optional[Dict[str, MaterialProperties]] = None) -> Optional[MaterialProperties]:
    """Look up a material by key"""
    catalog = STANDARD_MATERIALS if materials is None else materials
    return catalog.get(key)
