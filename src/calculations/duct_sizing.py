"""
Duct Sizing - Velocity/diameter relations for circular ducts

Q = A × V with A = π × (D/2)². Flow rates are m³/h, diameters mm,
velocities m/s. Computed diameters are snapped to the standard size table.
"""

import math

import numpy as np

from .lev_constants import (
    STANDARD_DUCT_DIAMETERS_MM, circular_area_from_diameter,
    m3h_to_m3s, m3s_to_m3h, m_to_mm
)


# Custom exceptions for the LEV engine
class LEVEngineError(Exception):
    """Base exception for LEV engine errors"""
    pass

class InvalidVelocity(LEVEngineError, ValueError):
    """Raised when a target velocity is zero or negative"""
    pass

class InvalidDiameter(LEVEngineError, ValueError):
    """Raised when a duct diameter is zero or negative"""
    pass


_STANDARD_SIZES = np.array(STANDARD_DUCT_DIAMETERS_MM, dtype=float)


def round_to_standard_size(diameter_mm: float) -> int:
    """
    Snap a diameter to the nearest standard duct size.

    Ties go to the smaller size (first minimal entry of the ascending table).
    Values beyond either end of the table snap to that end.
    """
    differences = np.abs(_STANDARD_SIZES - diameter_mm)
    return STANDARD_DUCT_DIAMETERS_MM[int(np.argmin(differences))]


def duct_diameter_from_flow_velocity(flow_rate_m3h: float, velocity_ms: float) -> int:
    """
    Calculate the standard duct diameter carrying a flow at a target velocity.

    Args:
        flow_rate_m3h: Volume flow (m³/h)
        velocity_ms: Target air velocity (m/s)

    Returns:
        Standard diameter (mm)

    Raises:
        InvalidVelocity: If velocity is zero or negative
    """
    if velocity_ms <= 0:
        raise InvalidVelocity(f"Velocity must be positive, got {velocity_ms} m/s")
    flow_m3s = m3h_to_m3s(flow_rate_m3h)
    diameter_m = math.sqrt((4 * flow_m3s) / (math.pi * velocity_ms))
    return round_to_standard_size(m_to_mm(diameter_m))


def velocity_from_flow_diameter(flow_rate_m3h: float, diameter_mm: float) -> float:
    """
    Calculate air velocity (m/s) for a flow through a circular duct.

    Raises:
        InvalidDiameter: If diameter is zero or negative
    """
    if diameter_mm <= 0:
        raise InvalidDiameter(f"Duct diameter must be positive, got {diameter_mm} mm")
    return m3h_to_m3s(flow_rate_m3h) / circular_area_from_diameter(diameter_mm)


def flow_from_diameter_velocity(diameter_mm: float, velocity_ms: float) -> float:
    """Volume flow (m³/h) carried by a duct at a given velocity"""
    return m3s_to_m3h(velocity_ms * circular_area_from_diameter(diameter_mm))
