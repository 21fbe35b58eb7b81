"""
Network aggregation over a flat component/connection snapshot

Downstream flow, total system pressure, main duct sizing and design warnings.
Traversal is recomputed on every call; nothing is cached between calls.
"""

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .debug_logger import debug_logger
from .duct_sizing import (
    duct_diameter_from_flow_velocity, velocity_from_flow_diameter,
    flow_from_diameter_velocity, InvalidDiameter
)
from .lev_constants import (
    MIN_TRANSPORT_VELOCITY_MS, MAX_TRANSPORT_VELOCITY_MS, MIN_EXTRACTION_FLOW_M3H,
    round_half_up
)
from .network_models import (
    Component, Connection, MaterialProperties, PressureLossRecord,
    EXTRACTION_POINT, FITTING_COMPONENT_KINDS, UNCONNECTED_EXEMPT_KINDS,
    FRICTION, FITTING
)
from .pressure_loss import friction_loss, fitting_loss

COMPONENT = 'NetworkCalculator'


def _outgoing_index(connections: Sequence[Connection]) -> Dict[str, List[str]]:
    """Map component id -> destination ids, in connection order"""
    outgoing: Dict[str, List[str]] = {}
    for connection in connections:
        outgoing.setdefault(connection.from_id, []).append(connection.to_id)
    return outgoing


def downstream_components(start_id: str, components: Sequence[Component],
                          connections: Sequence[Connection]) -> List[Component]:
    """
    Collect every component reachable from start_id along outgoing connections.

    Depth-first, pre-order, each id visited once. The start component is
    included. Ids with no matching component are walked through but not
    collected.
    """
    by_id = {component.id: component for component in components}
    outgoing = _outgoing_index(connections)

    visited = set()
    downstream = []
    stack = [start_id]
    while stack:
        current = stack.pop()
        if current in visited:
            continue
        visited.add(current)

        component = by_id.get(current)
        if component is not None:
            downstream.append(component)

        # Reverse so the first connection is explored first
        stack.extend(reversed(outgoing.get(current, [])))

    return downstream


def connection_flow(connection_id: str, components: Sequence[Component],
                    connections: Sequence[Connection]) -> float:
    """
    Flow (m³/h) attributed to a connection.

    Sum of the flow rates of all extraction points reachable from the
    connection's destination. Reconverging branches are counted once per
    reachable extraction point, not balanced. Unknown connection ids give 0.
    """
    connection = next((c for c in connections if c.id == connection_id), None)
    if connection is None:
        return 0.0

    return sum(
        component.flow_rate
        for component in downstream_components(connection.to_id, components, connections)
        if component.kind == EXTRACTION_POINT
    )


def total_extraction_flow(components: Sequence[Component]) -> float:
    """Sum of all extraction point flow rates (m³/h)"""
    return sum(c.flow_rate for c in components if c.kind == EXTRACTION_POINT)


def system_pressure(components: Sequence[Component],
                    connections: Sequence[Connection]) -> Tuple[int, List[PressureLossRecord]]:
    """
    Calculate total system pressure loss and its itemized contributions.

    Friction loss for each connection uses the flow implied by the velocity
    and diameter already stored on it, so results are only meaningful after
    a sizing pass has populated those fields.

    Returns:
        (total pressure in whole Pa, list of PressureLossRecord)
    """
    debug_logger.log_calculation_start(COMPONENT, 'system_pressure',
                                       len(components) + len(connections))
    component_ids = {component.id for component in components}
    losses: List[PressureLossRecord] = []
    total = 0.0

    for connection in connections:
        if connection.from_id not in component_ids or connection.to_id not in component_ids:
            debug_logger.warning(COMPONENT, "Skipping connection with dangling reference", {
                'element_id': connection.id,
                'from_id': connection.from_id,
                'to_id': connection.to_id,
            })
            continue

        try:
            flow = flow_from_diameter_velocity(connection.diameter, connection.velocity)
            loss = friction_loss(flow, connection.diameter, connection.length)
        except InvalidDiameter as e:
            debug_logger.warning(COMPONENT, f"Zero friction loss for duct {connection.id}: {e}")
            loss = 0

        losses.append(PressureLossRecord(
            element_id=connection.id,
            loss_type=FRICTION,
            loss=loss,
            velocity=connection.velocity,
            diameter=connection.diameter,
        ))
        debug_logger.log_element_processing(COMPONENT, FRICTION, connection.id, loss,
                                            connection.velocity, connection.diameter)
        total += loss

    for component in components:
        if component.kind not in FITTING_COMPONENT_KINDS:
            continue
        if component.diameter <= 0:
            debug_logger.warning(COMPONENT, f"Fitting {component.id} has no diameter, skipped")
            continue

        loss = fitting_loss(component.flow_rate, component.diameter, component.kind, component.angle)
        if loss > 0:
            velocity = velocity_from_flow_diameter(component.flow_rate, component.diameter)
            losses.append(PressureLossRecord(
                element_id=component.id,
                loss_type=FITTING,
                loss=loss,
                velocity=velocity,
                diameter=component.diameter,
            ))
            debug_logger.log_element_processing(COMPONENT, component.kind, component.id, loss,
                                                velocity, component.diameter)
            total += loss

    total_pressure = round_half_up(total)
    debug_logger.log_calculation_end(COMPONENT, 'system_pressure', True, {
        'total_pa': total_pressure,
        'record_count': len(losses),
    })
    return total_pressure, losses


def size_main_duct(total_flow_m3h: float, material: MaterialProperties) -> int:
    """Standard main duct diameter (mm) at the material's midpoint velocity"""
    return duct_diameter_from_flow_velocity(total_flow_m3h, material.target_velocity)


def velocity_status(velocity_ms: float, material: Optional[MaterialProperties]) -> str:
    """
    Position of a velocity relative to the material's recommended band.

    Returns 'low', 'high', 'optimal', or 'unknown' when no material is given.
    """
    if material is None:
        return 'unknown'
    if velocity_ms < material.min_velocity:
        return 'low'
    if velocity_ms > material.max_velocity:
        return 'high'
    return 'optimal'


def validate_system(components: Sequence[Component], connections: Sequence[Connection],
                    materials: Optional[Mapping[str, MaterialProperties]] = None) -> List[str]:
    """
    Produce human-readable design warnings.

    Velocity and flow thresholds are fixed and do not follow the selected
    material's band; ``materials`` is accepted for callers but not consulted.
    """
    warnings = []

    for connection in connections:
        if connection.velocity < MIN_TRANSPORT_VELOCITY_MS:
            warnings.append(
                f"Low velocity ({connection.velocity:.1f} m/s) in duct {connection.id} - risk of settling"
            )
        if connection.velocity > MAX_TRANSPORT_VELOCITY_MS:
            warnings.append(
                f"High velocity ({connection.velocity:.1f} m/s) in duct {connection.id} - excessive pressure loss"
            )

    for component in components:
        if component.kind == EXTRACTION_POINT and component.flow_rate < MIN_EXTRACTION_FLOW_M3H:
            warnings.append(
                f"Low flow rate ({component.flow_rate:g} m³/h) at {component.name} - may be insufficient"
            )

    connected_ids = set()
    for connection in connections:
        connected_ids.add(connection.from_id)
        connected_ids.add(connection.to_id)

    for component in components:
        if component.id not in connected_ids and component.kind not in UNCONNECTED_EXEMPT_KINDS:
            warnings.append(f"Component {component.name} is not connected to the system")

    debug_logger.log_validation_result(COMPONENT, warnings)
    return warnings
