"""Persona management module.

Personas are stored as YAML files so they can be customized without
touching code. A persona file in the working directory overrides the
packaged preset with the same name.
"""

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import Persona

# Packaged persona presets
_PRESETS_DIR = Path(__file__).parent / "presets"

DEFAULT_PERSONA = "gosling"


def load_persona_file(path: Path) -> Persona:
    """Load a persona from a YAML file.

    Args:
        path: Path to the YAML persona definition

    Returns:
        Parsed persona

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a valid persona definition
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Persona file {path} must contain a mapping")

    try:
        return Persona.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid persona file {path}: {e}") from e


@lru_cache(maxsize=16)
def load_persona(name: str = DEFAULT_PERSONA) -> Persona:
    """Load a persona preset by name.

    Search order:
    1. Current working directory: ./personas/{name}.yaml
    2. Package presets directory: personachat/persona/presets/{name}.yaml

    Args:
        name: Persona name (without .yaml extension)

    Returns:
        Parsed persona

    Raises:
        ValueError: If no persona with that name exists
    """
    filename = f"{name.lower()}.yaml"

    local_path = Path.cwd() / "personas" / filename
    if local_path.exists():
        return load_persona_file(local_path)

    package_path = _PRESETS_DIR / filename
    if package_path.exists():
        return load_persona_file(package_path)

    raise ValueError(
        f"Unknown persona: {name}. "
        f"Available personas: {', '.join(list_personas())}"
    )


def list_personas() -> list[str]:
    """List the names of the packaged persona presets."""
    return sorted(path.stem for path in _PRESETS_DIR.glob("*.yaml"))


__all__ = [
    "DEFAULT_PERSONA",
    "Persona",
    "list_personas",
    "load_persona",
    "load_persona_file",
]
