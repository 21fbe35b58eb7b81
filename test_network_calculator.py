#!/usr/bin/env python3
"""
Tests for downstream traversal, system pressure aggregation and validation.
"""

import os
import sys

import pytest

# Add src directory to path
CURRENT_DIR = os.path.dirname(__file__)
SRC_DIR = os.path.join(CURRENT_DIR, 'src')
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from calculations.duct_sizing import velocity_from_flow_diameter, duct_diameter_from_flow_velocity
from calculations.network_calculator import (
    downstream_components, connection_flow, system_pressure, size_main_duct,
    validate_system, total_extraction_flow, velocity_status
)
from calculations.network_models import Component, Connection, MaterialProperties
from calculations.pressure_loss import friction_loss, fitting_loss


METAL_DUST = MaterialProperties(key='metal-dust', display_name='Metal Dust',
                                min_velocity=18.0, max_velocity=25.0)


def _ids(components):
    return [c.id for c in components]


def test_component_defaults_and_invariants():
    bend = Component(id='b1', kind='bend', flow_rate=500, diameter=150)
    assert bend.angle == 90
    assert bend.name == 'b1'
    assert Component(id='t1', kind='tee').angle is None
    with pytest.raises(ValueError):
        Component(id='x', kind='extraction-point', flow_rate=-1)
    with pytest.raises(ValueError):
        Component(id='x', kind='fan', diameter=-5)
    with pytest.raises(ValueError):
        Component(id='x', kind='hood')


def test_downstream_follows_outgoing_connections_only():
    components = [Component(id=i, kind='tee') for i in 'ABCD']
    connections = [
        Connection(id='c1', from_id='A', to_id='B'),
        Connection(id='c2', from_id='B', to_id='C'),
        Connection(id='c3', from_id='D', to_id='B'),
    ]
    assert _ids(downstream_components('A', components, connections)) == ['A', 'B', 'C']
    assert _ids(downstream_components('B', components, connections)) == ['B', 'C']
    assert _ids(downstream_components('C', components, connections)) == ['C']


def test_downstream_is_depth_first_in_connection_order():
    components = [Component(id=i, kind='tee') for i in 'ABCDE']
    connections = [
        Connection(id='c1', from_id='A', to_id='B'),
        Connection(id='c2', from_id='A', to_id='C'),
        Connection(id='c3', from_id='B', to_id='D'),
        Connection(id='c4', from_id='C', to_id='E'),
    ]
    assert _ids(downstream_components('A', components, connections)) == ['A', 'B', 'D', 'C', 'E']


def test_downstream_is_cycle_safe():
    components = [Component(id='A', kind='tee'), Component(id='B', kind='tee')]
    connections = [
        Connection(id='c1', from_id='A', to_id='B'),
        Connection(id='c2', from_id='B', to_id='A'),
    ]
    assert _ids(downstream_components('A', components, connections)) == ['A', 'B']

    loop = [Connection(id='self', from_id='A', to_id='A')]
    assert _ids(downstream_components('A', components, loop)) == ['A']


def test_downstream_skips_unknown_ids_but_walks_through_them():
    components = [Component(id='A', kind='tee'), Component(id='C', kind='tee')]
    connections = [
        Connection(id='c1', from_id='A', to_id='ghost'),
        Connection(id='c2', from_id='ghost', to_id='C'),
    ]
    assert _ids(downstream_components('A', components, connections)) == ['A', 'C']


def _fan_to_hoods():
    components = [
        Component(id='F', kind='fan', flow_rate=700),
        Component(id='J', kind='tee', flow_rate=700),
        Component(id='E1', kind='extraction-point', flow_rate=300, diameter=100),
        Component(id='E2', kind='extraction-point', flow_rate=400, diameter=100),
    ]
    connections = [
        Connection(id='main', from_id='F', to_id='J', length=10),
        Connection(id='b1', from_id='J', to_id='E1', length=4),
        Connection(id='b2', from_id='J', to_id='E2', length=6),
    ]
    return components, connections


def test_connection_flow_sums_reachable_extraction_points():
    components, connections = _fan_to_hoods()
    assert connection_flow('main', components, connections) == 700
    assert connection_flow('b1', components, connections) == 300
    assert connection_flow('b2', components, connections) == 400
    assert connection_flow('missing', components, connections) == 0


def test_connection_flow_toward_fan_is_zero():
    """Only extraction points downstream of the destination count."""
    components = [
        Component(id='E1', kind='extraction-point', flow_rate=300),
        Component(id='F', kind='fan'),
    ]
    connections = [Connection(id='c1', from_id='E1', to_id='F')]
    assert connection_flow('c1', components, connections) == 0


def test_connection_flow_double_counts_reconverging_paths():
    components = [
        Component(id='S', kind='tee'),
        Component(id='L', kind='tee'),
        Component(id='R', kind='tee'),
        Component(id='E', kind='extraction-point', flow_rate=250),
    ]
    connections = [
        Connection(id='in', from_id='X', to_id='S'),
        Connection(id='sl', from_id='S', to_id='L'),
        Connection(id='sr', from_id='S', to_id='R'),
        Connection(id='le', from_id='L', to_id='E'),
        Connection(id='re', from_id='R', to_id='E'),
    ]
    # E is reachable along both branches but visited once per traversal
    assert connection_flow('in', components, connections) == 250
    # Each branch is credited with the full flow; no split at S
    assert connection_flow('sl', components, connections) == 250
    assert connection_flow('sr', components, connections) == 250


def test_total_extraction_flow():
    components, _ = _fan_to_hoods()
    assert total_extraction_flow(components) == 700
    assert total_extraction_flow([]) == 0


def test_system_pressure_itemizes_friction_and_fittings():
    components = [
        Component(id='E1', kind='extraction-point', flow_rate=1000, diameter=200),
        Component(id='B1', kind='bend', flow_rate=1000, diameter=200),
        Component(id='T1', kind='tee', flow_rate=1000, diameter=200, name='Branch'),
        Component(id='F', kind='fan', flow_rate=1000, diameter=200),
    ]
    velocity = velocity_from_flow_diameter(1000, 200)
    connections = [
        Connection(id='c1', from_id='E1', to_id='B1', diameter=200, length=10, velocity=velocity),
        Connection(id='c2', from_id='B1', to_id='T1', diameter=200, length=5, velocity=velocity),
        Connection(id='c3', from_id='T1', to_id='F', diameter=200, length=3, velocity=velocity),
    ]

    total, records = system_pressure(components, connections)

    assert [r.element_id for r in records] == ['c1', 'c2', 'c3', 'B1', 'T1']
    assert [r.loss_type for r in records] == ['friction'] * 3 + ['fitting'] * 2
    assert records[0].loss == 49
    assert records[0].velocity == velocity
    assert records[0].diameter == 200
    assert records[1].loss == friction_loss(1000, 200, 5)
    assert records[3].loss == fitting_loss(1000, 200, 'bend') == 23
    assert records[4].loss == 19
    assert records[4].velocity == pytest.approx(velocity)
    assert total == sum(r.loss for r in records)


def test_system_pressure_uses_stored_velocity():
    """Without a sizing pass the stored velocity is 0 and friction is 0."""
    components = [Component(id='A', kind='extraction-point', flow_rate=500),
                  Component(id='B', kind='fan')]
    connections = [Connection(id='c1', from_id='A', to_id='B', diameter=150, length=20)]

    total, records = system_pressure(components, connections)

    assert total == 0
    assert len(records) == 1
    assert records[0].loss == 0


def test_system_pressure_degenerate_elements_do_not_abort():
    components = [
        Component(id='A', kind='extraction-point', flow_rate=500),
        Component(id='B', kind='bend', flow_rate=500, diameter=0),
        Component(id='T', kind='tee', flow_rate=0, diameter=150),
    ]
    connections = [
        Connection(id='zero', from_id='A', to_id='B', diameter=0, length=5, velocity=12),
        Connection(id='dangling', from_id='A', to_id='nowhere', diameter=150, length=5, velocity=20),
    ]

    total, records = system_pressure(components, connections)

    assert total == 0
    assert [(r.element_id, r.loss) for r in records] == [('zero', 0)]


def test_system_pressure_empty_network():
    assert system_pressure([], []) == (0, [])


def test_size_main_duct_end_to_end():
    """Two hoods (300 + 400 m³/h) into a fan, sized for metal dust at 21.5 m/s."""
    assert METAL_DUST.target_velocity == 21.5
    expected = duct_diameter_from_flow_velocity(700, 21.5)
    assert size_main_duct(700, METAL_DUST) == expected == 100


@pytest.mark.parametrize("velocity,expected", [
    (9.9, True),
    (10.0, False),
    (0.0, True),
])
def test_low_velocity_threshold(velocity, expected):
    connections = [Connection(id='d1', from_id='A', to_id='B', velocity=velocity)]
    warnings = validate_system([], connections, {})
    assert any('risk of settling' in w for w in warnings) is expected


@pytest.mark.parametrize("velocity,expected", [
    (30.1, True),
    (30.0, False),
    (20.0, False),
])
def test_high_velocity_threshold(velocity, expected):
    connections = [Connection(id='d1', from_id='A', to_id='B', velocity=velocity)]
    warnings = validate_system([], connections, {})
    assert any('excessive pressure loss' in w for w in warnings) is expected


def test_velocity_warning_text():
    connections = [Connection(id='d1', from_id='A', to_id='B', velocity=9.94)]
    assert validate_system([], connections) == [
        "Low velocity (9.9 m/s) in duct d1 - risk of settling"
    ]


def test_extraction_flow_threshold():
    components = [
        Component(id='E1', kind='extraction-point', flow_rate=99, name='Hood 1'),
        Component(id='E2', kind='extraction-point', flow_rate=100, name='Hood 2'),
        Component(id='F', kind='fan'),
    ]
    connections = [
        Connection(id='c1', from_id='E1', to_id='F', velocity=20),
        Connection(id='c2', from_id='E2', to_id='F', velocity=20),
    ]
    assert validate_system(components, connections, {}) == [
        "Low flow rate (99 m³/h) at Hood 1 - may be insufficient"
    ]


def test_unconnected_components_warn_except_fan_and_collector():
    components = [
        Component(id='A', kind='extraction-point', flow_rate=500),
        Component(id='B', kind='fan'),
        Component(id='C', kind='dust-collector'),
    ]
    assert validate_system(components, [], {}) == ["Component A is not connected to the system"]


def test_validation_ignores_material_band():
    """A velocity inside the fixed limits passes even if below the material band."""
    connections = [Connection(id='d1', from_id='A', to_id='B', velocity=12)]
    components = [Component(id='A', kind='tee'), Component(id='B', kind='fan')]
    assert validate_system(components, connections, {'metal-dust': METAL_DUST}) == []


def test_velocity_status():
    assert velocity_status(17.9, METAL_DUST) == 'low'
    assert velocity_status(18.0, METAL_DUST) == 'optimal'
    assert velocity_status(25.0, METAL_DUST) == 'optimal'
    assert velocity_status(25.1, METAL_DUST) == 'high'
    assert velocity_status(20.0, None) == 'unknown'
