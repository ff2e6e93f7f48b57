#!/usr/bin/env python3
"""
Built-in scenes and JSON scene templates.

A scene is a list of body specs (keyword arguments for Simulation.create_body)
plus optional settings overrides.

Template JSON (simcore/templates/*.json):
{
  "name": "Human-friendly scene name",
  "description": "Optional description",
  "settings": {"target_time_step": 60, "min_force": 0},   # optional
  "bodies": [
    {
      "name": "Earth",
      "mass": 5.972e24,
      "size": 6.371e6,
      "position": [0.0, 0.0, 0.0],
      "velocity": [0.0, 0.0, 0.0],
      "color": [40, 120, 255],
      "frozen": true
    }
  ]
}

Users can add their own JSON files into the templates folder and they'll be
picked up by list_templates().
"""
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .config import SimulationSettings
from .constants import (
    ASTRONOMICAL_UNIT,
    DEFAULT_BODY_COLOR,
    EARTH_MASS,
    EARTH_RADIUS,
    KILOMETER,
    MOON_MASS,
    MOON_RADIUS,
    SUN_MASS,
    SUN_RADIUS,
)
from .physics import circular_orbit_velocity
from .utils import try_float

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")


@dataclass
class Scene:
    name: str
    bodies: List[Dict[str, Any]]
    settings: Dict[str, Any] = field(default_factory=dict)
    description: str = ""

    def make_settings(self, base: Optional[SimulationSettings] = None) -> SimulationSettings:
        base = base if base is not None else SimulationSettings()
        if not self.settings:
            return base.copy()
        overrides = SimulationSettings.from_mapping(self.settings)
        changed = {k: v for k, v in vars(overrides).items() if k in self.settings}
        return base.copy(**changed)


def scene_earth_moon() -> Scene:
    """Earth, the Moon, and a small spacecraft in low Earth orbit."""
    return Scene(
        name="Earth and Moon",
        description="Frozen Earth with the Moon and a spacecraft",
        bodies=[
            dict(name="Earth", size=EARTH_RADIUS, mass=EARTH_MASS, color=(40, 120, 255), frozen=True),
            dict(name="Moon", size=MOON_RADIUS, mass=MOON_MASS, position=(-385000000, 0, 0),
                 velocity=(0, 1000, 0), color=(163, 163, 163)),
            dict(name="Spacecraft", size=10, mass=700, position=(0, -EARTH_RADIUS - 800 * KILOMETER, 0),
                 velocity=(-10356.8, -300, 200), color=(255, 255, 255)),
        ],
    )


def scene_sun_earth() -> Scene:
    """Earth on a circular orbit around a frozen Sun."""
    v = circular_orbit_velocity(SUN_MASS, ASTRONOMICAL_UNIT)
    return Scene(
        name="Sun and Earth",
        bodies=[
            dict(name="Sun", size=SUN_RADIUS, mass=SUN_MASS, color=(255, 204, 0), frozen=True),
            dict(name="Earth", size=EARTH_RADIUS, mass=EARTH_MASS, position=(ASTRONOMICAL_UNIT, 0, 0),
                 velocity=(0, v, 0), color=(40, 120, 255)),
        ],
        settings={"target_time_step": 3600},
    )


def scene_empty() -> Scene:
    return Scene(name="Empty", bodies=[])


BUILTIN_SCENES: Dict[str, Callable[[], Scene]] = {
    "earth_moon": scene_earth_moon,
    "sun_earth": scene_sun_earth,
    "empty": scene_empty,
}


def _read_json(path: str) -> Optional[dict]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Could not read template %s: %s", path, exc)
        return None


def _coerce_color(c) -> Tuple[int, int, int]:
    try:
        r, g, b = int(c[0]), int(c[1]), int(c[2])
    except (TypeError, ValueError, IndexError):
        return DEFAULT_BODY_COLOR
    return (max(0, min(255, r)), max(0, min(255, g)), max(0, min(255, b)))


def _coerce_vector(v) -> Tuple[float, float, float]:
    if v is None:
        return (0.0, 0.0, 0.0)
    values = [try_float(c) for c in v]
    if len(values) != 3 or any(c is None for c in values):
        raise ValueError(f"expected three numbers, got {v!r}")
    return (values[0], values[1], values[2])


def body_spec_from_json(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate one template body entry; raises ValueError or KeyError."""
    mass = try_float(data["mass"])
    if mass is None:
        raise ValueError(f"mass {data['mass']!r} is not a number")
    spec = dict(
        name=data.get("name"),
        mass=mass,
        position=_coerce_vector(data.get("position")),
        velocity=_coerce_vector(data.get("velocity")),
        color=_coerce_color(data.get("color", DEFAULT_BODY_COLOR)),
        frozen=bool(data.get("frozen", False)),
    )
    if "size" in data:
        size = try_float(data["size"])
        if size is None:
            raise ValueError(f"size {data['size']!r} is not a number")
        spec["size"] = size
    return spec


def list_templates() -> List[Tuple[str, str]]:
    """Return list of (file_name, display_name) for available templates."""
    items: List[Tuple[str, str]] = []
    if not os.path.isdir(TEMPLATES_DIR):
        return items
    for fn in sorted(os.listdir(TEMPLATES_DIR)):
        if not fn.lower().endswith(".json"):
            continue
        data = _read_json(os.path.join(TEMPLATES_DIR, fn)) or {}
        items.append((fn, data.get("name") or os.path.splitext(fn)[0]))
    return items


def load_template(path: str) -> Optional[Scene]:
    """
    Load a template JSON by file name (looked up in TEMPLATES_DIR) or path.

    Body entries that fail validation are skipped with a warning.
    """
    if not os.path.isabs(path) and not os.path.exists(path):
        path = os.path.join(TEMPLATES_DIR, path)
    data = _read_json(path)
    if data is None:
        return None
    bodies = []
    for i, entry in enumerate(data.get("bodies", [])):
        try:
            bodies.append(body_spec_from_json(entry))
        except (KeyError, ValueError, TypeError) as exc:
            logger.warning("Skipping body %d in %s: %s", i, path, exc)
    return Scene(
        name=data.get("name") or os.path.splitext(os.path.basename(path))[0],
        description=data.get("description", ""),
        bodies=bodies,
        settings=dict(data.get("settings") or {}),
    )


def get_scene(name: str) -> Scene:
    """Look up a built-in scene, falling back to a template file."""
    if name in BUILTIN_SCENES:
        return BUILTIN_SCENES[name]()
    scene = load_template(name)
    if scene is None:
        raise KeyError(f"Unknown scene {name!r}")
    return scene
