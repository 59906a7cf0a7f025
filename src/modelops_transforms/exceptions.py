"""Exceptions raised by transforms.

Both errors subclass ValueError. They signal programming-contract
violations (bad configuration or bad shapes), not recoverable runtime
conditions.
"""


class InvalidDimension(ValueError):
    """A declared size is not a positive integer.

    Raised eagerly at construction time.
    """


class DimensionMismatch(ValueError):
    """An input length or shape does not match what the transform expects.

    Raised before any computation, so rejected calls never write into
    caller-provided buffers.
    """
