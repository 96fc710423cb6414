from pso_engine.algorithm.components.boundary import (
    BOUNDARY_POLICIES,
    AbsorbingBoundary,
    BoundaryPolicy,
    PeriodicBoundary,
    ReflectingBoundary,
)
from pso_engine.algorithm.components.inertia import ConstantInertia, InertiaSchedule, LinearDecreasingInertia
from pso_engine.algorithm.components.particle import Particle, Swarm
from pso_engine.algorithm.components.topology import GlobalBestTopology, RingTopology, Topology
