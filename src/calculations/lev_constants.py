"""
LEV Calculation Constants - Centralized definition of all magic numbers
Used throughout the duct network calculation engine
"""

import math
from typing import Dict, List

# =============================================================================
# AIR PROPERTIES
# =============================================================================

# Fixed air properties used by the loss model. Project-level density,
# temperature and altitude are not threaded through here.
AIR_DENSITY_KG_M3: float = 1.2
AIR_DYNAMIC_VISCOSITY_PA_S: float = 1.8e-5

# Absolute roughness of galvanized steel duct (mm)
DEFAULT_ROUGHNESS_MM: float = 0.15

# Below this Reynolds number the laminar friction factor 64/Re applies
LAMINAR_REYNOLDS_LIMIT: float = 2300.0

# =============================================================================
# DUCT SIZES
# =============================================================================

# Standard circular duct diameters (mm), ascending
STANDARD_DUCT_DIAMETERS_MM: List[int] = [
    80, 100, 125, 150, 160, 180, 200, 224, 250, 300,
    315, 355, 400, 450, 500, 560, 600, 630, 710, 800,
]

# Main duct size reported when no material is selected
DEFAULT_MAIN_DUCT_MM: int = 200

# =============================================================================
# FITTING LOSS COEFFICIENTS
# =============================================================================

# Simplified K values; not derived per fitting geometry
BEND_BASE_K: float = 0.2
BEND_ANGLE_K: float = 0.3          # added per 90 degrees of turn
DEFAULT_BEND_ANGLE_DEG: float = 90.0

FITTING_LOSS_COEFFICIENTS: Dict[str, float] = {
    'tee': 0.4,         # through flow
    'reducer': 0.15,
    'expansion': 0.6,
}

# =============================================================================
# VALIDATION THRESHOLDS
# =============================================================================

# Fixed thresholds, independent of the selected material's velocity band
MIN_TRANSPORT_VELOCITY_MS: float = 10.0
MAX_TRANSPORT_VELOCITY_MS: float = 30.0
MIN_EXTRACTION_FLOW_M3H: float = 100.0

# =============================================================================
# FAN SELECTION
# =============================================================================

DEFAULT_FAN_EFFICIENCY_PERCENT: float = 75.0

# =============================================================================
# UNIT CONVERSION HELPERS
# =============================================================================

SECONDS_PER_HOUR: float = 3600.0
MM_PER_M: float = 1000.0


def m3h_to_m3s(flow_m3h: float) -> float:
    """Convert m³/h to m³/s"""
    return flow_m3h / SECONDS_PER_HOUR


def m3s_to_m3h(flow_m3s: float) -> float:
    """Convert m³/s to m³/h"""
    return flow_m3s * SECONDS_PER_HOUR


def mm_to_m(value_mm: float) -> float:
    """Convert millimetres to metres"""
    return value_mm / MM_PER_M


def m_to_mm(value_m: float) -> float:
    """Convert metres to millimetres"""
    return value_m * MM_PER_M


def circular_area_from_diameter(diameter_mm: float) -> float:
    """Calculate circular area from diameter in mm, return square metres"""
    radius_m = mm_to_m(diameter_mm) / 2.0
    return math.pi * radius_m * radius_m


def round_half_up(value: float) -> int:
    """Round to the nearest whole number, halves away from negative infinity"""
    return int(math.floor(value + 0.5))
