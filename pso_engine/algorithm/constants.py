"""Defaults and presets for the PSO engine."""


# ============= Defaults =============
# INERTIA_WEIGHT: constriction-factor value for phi = 4.1. Note it is shipped
#        next to c1 = c2 = 2.0 (phi = 4.0), which the constriction derivation does
#        not cover; the knobs are independent and both stay configurable.
SWARM_SIZE = 30
MAX_ITERATIONS = 1000
INERTIA_WEIGHT = 0.7298
COGNITIVE_COEFF = 2.0
SOCIAL_COEFF = 2.0
VELOCITY_CLAMP_FACTOR = 0.2
FITNESS_THRESHOLD = 1e-6
STAGNATION_ITERATIONS = 100

# Linear decreasing inertia endpoints.
W_MAX = 0.9
W_MIN = 0.4

# Ring (lbest) neighbourhood size: k/2 neighbours on each side.
RING_K = 2


# ============= Strategy names =============
INERTIA_SCHEDULES = ("constant", "linear")
TOPOLOGIES = ("gbest", "ring")
BOUNDARY_POLICIES = ("absorbing", "reflecting", "periodic")


# ============= Presets =============

# Quick smoke test: small swarm, short run.
QUICK_TEST = {
    'swarm_size': 10,
    'max_iterations': 100,
    'stagnation_iterations': 30,
}

# Reference defaults.
DEFAULT = {}

# Clerc-Kennedy constriction: chi = 0.7298 with c1 = c2 = 1.49618 (phi = 4.1).
CONSTRICTION = {
    'inertia_weight': 0.7298,
    'cognitive_coeff': 1.49618,
    'social_coeff': 1.49618,
}

# Broader early search: linear inertia 0.9 -> 0.4, ring neighbourhood.
EXPLORATIVE = {
    'swarm_size': 40,
    'inertia_schedule': 'linear',
    'cognitive_coeff': 1.5,
    'social_coeff': 1.5,
    'velocity_clamp_factor': 0.5,
    'topology': 'ring',
    'stagnation_iterations': 200,
}


PRESETS = {
    'QUICK_TEST': QUICK_TEST,
    'DEFAULT': DEFAULT,
    'CONSTRICTION': CONSTRICTION,
    'EXPLORATIVE': EXPLORATIVE,
}
