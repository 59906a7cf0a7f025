"""Global constants for modelops-transforms.

This module centralizes defaults shared by the diagnostics and the CLI.
"""

import math

LOG2: float = math.log(2.0)

# Defaults for round-trip / Jacobian checks (overridable via pyproject.toml)
DEFAULT_TRIALS: int = 100
DEFAULT_SEED: int = 1
DEFAULT_RTOL: float = 1e-6

# Step size for central differences, scaled by max(1, |x|)
FINITE_DIFF_STEP: float = 1e-6

# Table read from pyproject.toml by the CLI
CONFIG_TABLE: str = "modelops-transforms"
