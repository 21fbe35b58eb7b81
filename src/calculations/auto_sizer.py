"""
Auto-sizing of every duct and component to a material's target velocity
"""

from dataclasses import replace
from typing import List, Sequence, Tuple

from .debug_logger import debug_logger
from .duct_sizing import (
    duct_diameter_from_flow_velocity, velocity_from_flow_diameter, InvalidVelocity
)
from .network_calculator import connection_flow
from .network_models import Component, Connection, MaterialProperties, EXTRACTION_POINT

COMPONENT = 'AutoSizer'


def auto_size_system(components: Sequence[Component], connections: Sequence[Connection],
                     material: MaterialProperties) -> Tuple[List[Component], List[Connection]]:
    """
    Resize the whole network to the midpoint of the material's velocity band.

    Each connection gets the standard diameter for its downstream flow and
    the velocity that diameter produces. Every component other than an
    extraction point gets the standard diameter for its own flow rate.
    Inputs are left untouched; new objects are returned.

    Raises:
        InvalidVelocity: If the material's midpoint velocity is not positive
    """
    target_velocity = material.target_velocity
    if target_velocity <= 0:
        raise InvalidVelocity(
            f"Material '{material.key}' target velocity must be positive, got {target_velocity} m/s"
        )
    debug_logger.log_calculation_start(COMPONENT, 'auto_size', len(components) + len(connections))

    sized_connections = []
    for connection in connections:
        flow = connection_flow(connection.id, components, connections)
        diameter = duct_diameter_from_flow_velocity(flow, target_velocity)
        velocity = velocity_from_flow_diameter(flow, diameter)
        sized_connections.append(replace(connection, diameter=diameter, velocity=velocity,
                                         points=list(connection.points)))
        debug_logger.log_element_processing(COMPONENT, 'connection', connection.id,
                                            velocity_ms=velocity, diameter_mm=diameter)

    sized_components = []
    for component in components:
        if component.kind == EXTRACTION_POINT:
            sized_components.append(replace(component))
            continue
        diameter = duct_diameter_from_flow_velocity(component.flow_rate, target_velocity)
        sized_components.append(replace(component, diameter=diameter))
        debug_logger.log_element_processing(COMPONENT, component.kind, component.id,
                                            diameter_mm=diameter)

    debug_logger.log_calculation_end(COMPONENT, 'auto_size', True, {
        'target_velocity_ms': target_velocity,
    })
    return sized_components, sized_connections
