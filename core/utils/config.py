"""
Configuration utility functions
"""

from pathlib import Path
from typing import Any

import yaml


def load_yaml(filepath: str) -> dict[str, Any]:
    """
    Load YAML file and return as dictionary

    Args:
        filepath: Path to YAML file (relative or absolute)

    Returns:
        Dictionary with YAML data (empty dict for an empty file)

    Raises:
        FileNotFoundError: If file doesn't exist
        yaml.YAMLError: If YAML is invalid

    Example:
        >>> config = load_yaml("config/providers/storage.yaml")
        >>> print(config['obs']['bucket'])
        cortex-chunks
    """
    path = Path(filepath)

    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {filepath}")

    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_yaml_safe(filepath: str) -> dict[str, Any]:
    """
    Load YAML file with fallback to empty dict if file doesn't exist or is invalid
    """
    try:
        return load_yaml(filepath)
    except (FileNotFoundError, yaml.YAMLError):
        return {}


def get_section(config: dict[str, Any], path: str) -> dict[str, Any]:
    """
    Walk a dotted path into nested YAML sections

    Missing or non-mapping sections resolve to an empty dict.

    Example:
        >>> get_section({"ruler": {"obs": {"bucket": "rules"}}}, "ruler.obs")
        {'bucket': 'rules'}
    """
    section: Any = config
    for part in (p for p in path.split(".") if p):
        if not isinstance(section, dict):
            return {}
        section = section.get(part, {})
    return section if isinstance(section, dict) else {}
