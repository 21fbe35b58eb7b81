"""
Duct Pressure Loss Calculations

Implements:
1. Straight duct friction loss (Darcy-Weisbach with the Colebrook-White
   explicit approximation for the friction factor)
2. Fitting loss from a fixed loss coefficient times dynamic pressure

All results are whole Pascals.
"""

import math
from typing import Optional

from .duct_sizing import velocity_from_flow_diameter, InvalidDiameter
from .lev_constants import (
    AIR_DENSITY_KG_M3, AIR_DYNAMIC_VISCOSITY_PA_S, DEFAULT_ROUGHNESS_MM, LAMINAR_REYNOLDS_LIMIT,
    BEND_BASE_K, BEND_ANGLE_K, DEFAULT_BEND_ANGLE_DEG, FITTING_LOSS_COEFFICIENTS,
    mm_to_m, round_half_up
)
from .network_models import FITTING_KINDS


def dynamic_pressure(velocity_ms: float) -> float:
    """Dynamic pressure ρV²/2 (Pa)"""
    return AIR_DENSITY_KG_M3 * velocity_ms ** 2 / 2


def reynolds_number(velocity_ms: float, diameter_m: float) -> float:
    return velocity_ms * diameter_m * AIR_DENSITY_KG_M3 / AIR_DYNAMIC_VISCOSITY_PA_S


def friction_factor(reynolds: float, diameter_m: float,
                    roughness_mm: float = DEFAULT_ROUGHNESS_MM) -> float:
    """
    Darcy friction factor.

    Turbulent flow uses the explicit Colebrook-White approximation
    f = 0.25 / log10(ε/(3.7·D) + 5.74/Re^0.9)²; below Re 2300 the
    laminar f = 64/Re is used, where the approximation is undefined.

    Args:
        reynolds: Reynolds number (must be positive)
        diameter_m: Duct diameter in metres
        roughness_mm: Absolute wall roughness in mm
    """
    if reynolds < LAMINAR_REYNOLDS_LIMIT:
        return 64 / reynolds
    relative_term = mm_to_m(roughness_mm) / (3.7 * diameter_m)
    return 0.25 / math.log10(relative_term + 5.74 / reynolds ** 0.9) ** 2


def friction_loss(flow_rate_m3h: float, diameter_mm: float, length_m: float,
                  roughness_mm: float = DEFAULT_ROUGHNESS_MM) -> int:
    """
    Calculate friction pressure loss in a straight duct run.

    ΔP = f × (L/D) × ρV²/2

    Args:
        flow_rate_m3h: Volume flow through the duct (m³/h)
        diameter_mm: Duct diameter (mm)
        length_m: Run length (m)
        roughness_mm: Absolute wall roughness (mm)

    Returns:
        Pressure loss in whole Pa. Zero for no flow or no length.

    Raises:
        InvalidDiameter: If diameter is zero or negative
    """
    if diameter_mm <= 0:
        raise InvalidDiameter(f"Duct diameter must be positive, got {diameter_mm} mm")
    if flow_rate_m3h <= 0 or length_m <= 0:
        return 0

    velocity = velocity_from_flow_diameter(flow_rate_m3h, diameter_mm)
    diameter_m = mm_to_m(diameter_mm)
    f = friction_factor(reynolds_number(velocity, diameter_m), diameter_m, roughness_mm)
    return round_half_up(f * (length_m / diameter_m) * dynamic_pressure(velocity))


def fitting_loss_coefficient(fitting_kind: str, angle_degrees: Optional[float] = None) -> float:
    """
    Loss coefficient K for a fitting.

    Bends scale with turn angle (0.5 at 90°); the other kinds use fixed values.
    """
    if fitting_kind not in FITTING_KINDS:
        raise ValueError(f"Unknown fitting kind '{fitting_kind}'")
    if fitting_kind == 'bend':
        angle = angle_degrees or DEFAULT_BEND_ANGLE_DEG
        return BEND_BASE_K + (angle / 90) * BEND_ANGLE_K
    return FITTING_LOSS_COEFFICIENTS[fitting_kind]


def fitting_loss(flow_rate_m3h: float, diameter_mm: float, fitting_kind: str,
                 angle_degrees: Optional[float] = None) -> int:
    """
    Calculate pressure loss across a fitting.

    Args:
        flow_rate_m3h: Flow through the fitting (m³/h)
        diameter_mm: Fitting diameter (mm)
        fitting_kind: 'bend', 'tee', 'reducer' or 'expansion'
        angle_degrees: Bend angle, 90 when not given

    Returns:
        Pressure loss in whole Pa

    Raises:
        InvalidDiameter: If diameter is zero or negative
    """
    k = fitting_loss_coefficient(fitting_kind, angle_degrees)
    if diameter_mm <= 0:
        raise InvalidDiameter(f"Fitting diameter must be positive, got {diameter_mm} mm")
    if flow_rate_m3h <= 0:
        return 0
    velocity = velocity_from_flow_diameter(flow_rate_m3h, diameter_mm)
    return round_half_up(dynamic_pressure(velocity) * k)
