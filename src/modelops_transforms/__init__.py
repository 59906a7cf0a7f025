"""modelops-transforms: bijective reparameterizations with log-Jacobians.

Maps unconstrained real vectors to intervals, unit vectors, correlation
Cholesky factors, and arrays / tuples / named tuples of those, for
gradient-based samplers that work in ℝⁿ.
"""

# Export the public API
from .api import *  # noqa: F403, F401
from .api import __all__, __version__  # noqa: F401
