"""Error kinds raised by the PSO engine."""


class InvalidArgumentError(ValueError):
    """A precondition on an argument was violated (bad size, bounds, coefficient...)."""
