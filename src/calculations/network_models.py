"""
Data structures for LEV duct networks

A network is a flat list of components (nodes) and connections (directed
duct runs). The engine reads these and returns new values; it never edits
the objects it is given.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .lev_constants import DEFAULT_BEND_ANGLE_DEG

# Component kinds placed on the canvas
EXTRACTION_POINT = 'extraction-point'
DUST_COLLECTOR = 'dust-collector'
FAN = 'fan'
BEND = 'bend'
REDUCER = 'reducer'
TEE = 'tee'
DAMPER = 'damper'

COMPONENT_KINDS: Tuple[str, ...] = (
    EXTRACTION_POINT, DUST_COLLECTOR, FAN, BEND, REDUCER, TEE, DAMPER
)

# Components that carry a fitting loss in the system pressure total
FITTING_COMPONENT_KINDS: Tuple[str, ...] = (BEND, TEE, REDUCER)

# Components that may legitimately sit outside the duct network
UNCONNECTED_EXEMPT_KINDS: Tuple[str, ...] = (DUST_COLLECTOR, FAN)

# Fitting kinds understood by the loss model
FITTING_KINDS: Tuple[str, ...] = ('bend', 'tee', 'reducer', 'expansion')

# Loss record kinds
FRICTION = 'friction'
FITTING = 'fitting'


@dataclass
class Component:
    """A node in the duct network"""
    id: str
    kind: str
    flow_rate: float = 0.0  # m³/h
    diameter: float = 0.0  # mm
    name: Optional[str] = None
    angle: Optional[float] = None  # degrees, bends only
    material: str = 'galvanized_steel'
    static_pressure: Optional[float] = None  # Pa override
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self):
        if self.kind not in COMPONENT_KINDS:
            raise ValueError(f"Unknown component kind '{self.kind}'")
        if self.flow_rate < 0:
            raise ValueError(f"Component {self.id} flow rate must be non-negative")
        if self.diameter < 0:
            raise ValueError(f"Component {self.id} diameter must be non-negative")
        if self.name is None:
            self.name = self.id
        if self.kind == BEND and self.angle is None:
            self.angle = DEFAULT_BEND_ANGLE_DEG


@dataclass
class Connection:
    """A directed duct run between two components"""
    id: str
    from_id: str
    to_id: str
    diameter: float = 0.0  # mm
    length: float = 0.0  # m
    # Derived by the engine; inputs only as left by a previous pass
    pressure_loss: float = 0.0  # Pa
    velocity: float = 0.0  # m/s
    points: List[Dict[str, float]] = field(default_factory=list)


@dataclass
class MaterialProperties:
    """Conveyed material and its recommended transport velocity band"""
    key: str
    display_name: str
    min_velocity: float  # m/s
    max_velocity: float  # m/s
    default_flow: float = 0.0  # m³/h
    density: float = 0.0  # kg/m³, informational
    description: str = ''

    @property
    def target_velocity(self) -> float:
        """Midpoint of the recommended band"""
        return (self.min_velocity + self.max_velocity) / 2

    def validate(self) -> None:
        if self.min_velocity <= 0 or self.max_velocity <= 0:
            raise ValueError(f"Material '{self.key}' velocities must be positive")
        if self.min_velocity >= self.max_velocity:
            raise ValueError(
                f"Material '{self.key}' minimum velocity ({self.min_velocity}) "
                f"must be below maximum ({self.max_velocity})"
            )


@dataclass
class PressureLossRecord:
    """One itemized contribution to the system pressure"""
    element_id: str
    loss_type: str  # 'friction' | 'fitting'
    loss: int  # Pa
    velocity: float  # m/s
    diameter: float  # mm


@dataclass
class SystemSnapshot:
    """Everything one recalculation needs"""
    components: List[Component] = field(default_factory=list)
    connections: List[Connection] = field(default_factory=list)
    material: Optional[MaterialProperties] = None
    materials: Dict[str, MaterialProperties] = field(default_factory=dict)


@dataclass
class FanSelection:
    """Fan duty point. Selection against fan curves is not performed."""
    required_flow: float = 0.0
    required_pressure: float = 0.0
    recommended_fan: Optional[Any] = None
    operating_point: Tuple[float, float] = (0.0, 0.0)
    efficiency: float = 0.0


@dataclass
class DuctSizing:
    main_duct: float = 0.0
    branches: Dict[str, float] = field(default_factory=dict)
    velocities: Dict[str, float] = field(default_factory=dict)


@dataclass
class SystemCalculation:
    """Derived values for a whole network"""
    total_flow: float = 0.0
    total_pressure: int = 0
    main_duct_size: float = 0.0
    warnings: List[str] = field(default_factory=list)
    pressure_losses: List[PressureLossRecord] = field(default_factory=list)
    fan_selection: FanSelection = field(default_factory=FanSelection)
    duct_sizing: DuctSizing = field(default_factory=DuctSizing)
