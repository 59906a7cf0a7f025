"""Configuration handling for the transforms CLI.

Reads defaults from the ``[tool.modelops-transforms]`` table of the
pyproject.toml in the working directory:

    [tool.modelops-transforms]
    trials = 200
    seed = 7
    rtol = 1e-7
"""

from pathlib import Path
from typing import Any, Dict, Optional
import tomllib

from ..constants import CONFIG_TABLE, DEFAULT_RTOL, DEFAULT_SEED, DEFAULT_TRIALS

DEFAULTS: Dict[str, Any] = {
    "trials": DEFAULT_TRIALS,
    "seed": DEFAULT_SEED,
    "rtol": DEFAULT_RTOL,
}


def read_pyproject(root: Optional[Path] = None) -> Dict[str, Any]:
    """Read the tool table from pyproject.toml.

    Args:
        root: Directory holding pyproject.toml (defaults to the cwd)

    Returns:
        The [tool.modelops-transforms] section, or empty dict if the file
        or the table is absent

    Raises:
        tomllib.TOMLDecodeError: If TOML is malformed
    """
    pyproject_path = (root or Path.cwd()) / "pyproject.toml"
    if not pyproject_path.exists():
        return {}

    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)

    return data.get("tool", {}).get(CONFIG_TABLE, {})


def load_check_config(root: Optional[Path] = None, **overrides: Any) -> Dict[str, Any]:
    """Resolve check settings: explicit overrides, then pyproject, then defaults.

    Raises:
        ValueError: If the table holds unknown keys
    """
    table = read_pyproject(root)
    unknown = set(table) - set(DEFAULTS)
    if unknown:
        raise ValueError(f"Unknown keys in [tool.{CONFIG_TABLE}]: {sorted(unknown)}")

    config = {**DEFAULTS, **table}
    config.update({k: v for k, v in overrides.items() if v is not None})
    return config
