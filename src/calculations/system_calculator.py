"""
LEV System Calculator - Full recalculation of a duct network snapshot

Combines flow totals, pressure aggregation, main duct sizing, validation and
the fan duty point into one SystemCalculation. Each call works only on the
snapshot it is given.
"""

from dataclasses import replace
from typing import Optional

import pandas as pd

from .auto_sizer import auto_size_system
from .debug_logger import debug_logger
from .duct_sizing import LEVEngineError
from .lev_constants import DEFAULT_MAIN_DUCT_MM, DEFAULT_FAN_EFFICIENCY_PERCENT
from .network_calculator import (
    system_pressure, size_main_duct, validate_system, total_extraction_flow, velocity_status
)
from .network_models import (
    SystemSnapshot, SystemCalculation, FanSelection, DuctSizing, MaterialProperties
)
from .result_types import CalculationResult

COMPONENT = 'SystemCalculator'

PRESSURE_LOSS_COLUMNS = ['element', 'type', 'loss_pa', 'velocity_ms', 'diameter_mm', 'velocity_status']


class LEVSystemCalculator:
    """Whole-network calculations for an LEV design"""

    def calculate(self, snapshot: SystemSnapshot) -> CalculationResult[SystemCalculation]:
        """
        Recalculate every derived value of a network.

        Args:
            snapshot: Components, connections and the selected material

        Returns:
            CalculationResult wrapping a SystemCalculation. Design warnings
            are copied onto the result. An engine error yields an error
            result holding the values computed before the failing step.
        """
        debug_logger.log_calculation_start(COMPONENT, 'recalculate',
                                           len(snapshot.components) + len(snapshot.connections))
        calculation = SystemCalculation()
        step = 'flow'
        try:
            calculation.total_flow = total_extraction_flow(snapshot.components)

            step = 'pressure'
            calculation.total_pressure, calculation.pressure_losses = system_pressure(
                snapshot.components, snapshot.connections
            )

            step = 'main_duct'
            if snapshot.material is not None:
                calculation.main_duct_size = size_main_duct(calculation.total_flow, snapshot.material)
            else:
                calculation.main_duct_size = DEFAULT_MAIN_DUCT_MM

            step = 'validation'
            calculation.warnings = validate_system(snapshot.components, snapshot.connections,
                                                   snapshot.materials)
        except LEVEngineError as e:
            debug_logger.error(COMPONENT, f"Recalculation failed at step '{step}'", e)
            debug_logger.log_calculation_end(COMPONENT, 'recalculate', False)
            return CalculationResult.error(f"Failed to recalculate system: {e}",
                                           partial=calculation, failed_step=step)

        total_flow = calculation.total_flow
        total_pressure = calculation.total_pressure
        main_duct = calculation.main_duct_size
        warnings = calculation.warnings
        calculation.fan_selection = FanSelection(
            required_flow=total_flow,
            required_pressure=total_pressure,
            recommended_fan=None,
            operating_point=(total_flow, total_pressure),
            efficiency=DEFAULT_FAN_EFFICIENCY_PERCENT,
        )
        calculation.duct_sizing = DuctSizing(
            main_duct=main_duct,
            branches={c.id: c.diameter for c in snapshot.connections},
            velocities={c.id: c.velocity for c in snapshot.connections},
        )

        debug_logger.log_calculation_end(COMPONENT, 'recalculate', True, {
            'total_flow_m3h': total_flow,
            'total_pa': total_pressure,
            'main_duct_mm': main_duct,
            'warning_count': len(warnings),
        })
        result = CalculationResult.success(calculation, warnings=warnings)
        if snapshot.material is not None:
            result.set_metadata('material', snapshot.material.key)
        return result

    def auto_size(self, snapshot: SystemSnapshot) -> SystemSnapshot:
        """
        Return a new snapshot with every duct and component auto-sized.

        Raises:
            ValueError: If the snapshot has no material selected
            InvalidVelocity: If the material's target velocity is not positive
        """
        if snapshot.material is None:
            raise ValueError("A material must be selected to auto-size the system")
        components, connections = auto_size_system(
            snapshot.components, snapshot.connections, snapshot.material
        )
        return replace(snapshot, components=components, connections=connections,
                       materials=dict(snapshot.materials))

    @staticmethod
    def create_pressure_loss_dataframe(calculation: SystemCalculation,
                                       material: Optional[MaterialProperties] = None) -> pd.DataFrame:
        """
        Tabulate the itemized pressure losses.

        Args:
            calculation: Result of calculate()
            material: Material used to classify each velocity

        Returns:
            DataFrame with one row per loss record
        """
        rows = [
            {
                'element': record.element_id,
                'type': record.loss_type,
                'loss_pa': record.loss,
                'velocity_ms': record.velocity,
                'diameter_mm': record.diameter,
                'velocity_status': velocity_status(record.velocity, material),
            }
            for record in calculation.pressure_losses
        ]
        return pd.DataFrame(rows, columns=PRESSURE_LOSS_COLUMNS)
