"""
LEV duct network calculation engine
"""

from .network_models import (
    Component, Connection, MaterialProperties, PressureLossRecord, SystemSnapshot,
    SystemCalculation, FanSelection, DuctSizing
)
from .duct_sizing import (
    LEVEngineError, InvalidVelocity, InvalidDiameter,
    round_to_standard_size, duct_diameter_from_flow_velocity,
    velocity_from_flow_diameter, flow_from_diameter_velocity
)
from .pressure_loss import friction_loss, fitting_loss, fitting_loss_coefficient
from .network_calculator import (
    system_pressure, size_main_duct, validate_system, downstream_components,
    connection_flow, total_extraction_flow, velocity_status
)
from .auto_sizer import auto_size_system
from .system_calculator import LEVSystemCalculator
from .result_types import CalculationResult, ResultStatus

__all__ = [
    # Data model
    'Component',
    'Connection',
    'MaterialProperties',
    'PressureLossRecord',
    'SystemSnapshot',
    'SystemCalculation',
    'FanSelection',
    'DuctSizing',
    # Errors
    'LEVEngineError',
    'InvalidVelocity',
    'InvalidDiameter',
    # Sizing
    'round_to_standard_size',
    'duct_diameter_from_flow_velocity',
    'velocity_from_flow_diameter',
    'flow_from_diameter_velocity',
    # Pressure loss
    'friction_loss',
    'fitting_loss',
    'fitting_loss_coefficient',
    # Network
    'system_pressure',
    'size_main_duct',
    'validate_system',
    'downstream_components',
    'connection_flow',
    'total_extraction_flow',
    'velocity_status',
    'auto_size_system',
    'LEVSystemCalculator',
    # Results
    'CalculationResult',
    'ResultStatus',
]
