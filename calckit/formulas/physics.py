"""Physics formulas.

The "solve for one of N" formulas expect exactly N-1 populated fields and
answer with a diagnostic string otherwise.
"""

from typing import Optional, Union

from .helpers import fmt, round_to
from .registry import formula
from .snapshot import Snapshot

GRAVITY = 9.80665


def _populated(s: Snapshot, names: tuple[str, ...]) -> dict[str, float]:
    values: dict[str, Optional[float]] = {name: s.number_or_none(name) for name in names}
    return {name: value for name, value in values.items() if value is not None}


@formula("physics.ohms_law", reads=("voltage", "current", "resistance"))
def ohms_law(s: Snapshot, decimals: int = 4) -> str:
    """Solve V = I x R for whichever of the three values is left blank."""
    known = _populated(s, ("voltage", "current", "resistance"))
    if len(known) != 2:
        return "Enter exactly 2 values"
    if "voltage" not in known:
        return f"V = {fmt(known['current'] * known['resistance'], decimals)} V"
    if "current" not in known:
        if known["resistance"] == 0:
            return "Resistance cannot be zero"
        return f"I = {fmt(known['voltage'] / known['resistance'], decimals)} A"
    if known["current"] == 0:
        return "Current cannot be zero"
    return f"R = {fmt(known['voltage'] / known['current'], decimals)} Ω"


@formula("physics.speed_distance_time", reads=("distance", "time", "speed"))
def speed_distance_time(s: Snapshot, decimals: int = 4) -> str:
    """Solve distance = speed x time for the blank value (km, h, km/h)."""
    known = _populated(s, ("distance", "time", "speed"))
    if len(known) != 2:
        return "Enter exactly 2 values"
    if any(value < 0 for value in known.values()):
        return "Values cannot be negative"
    if "distance" not in known:
        return f"Distance = {fmt(known['speed'] * known['time'], decimals)} km"
    if "time" not in known:
        if known["speed"] == 0:
            return "Speed cannot be zero"
        return f"Time = {fmt(known['distance'] / known['speed'], decimals)} h"
    if known["time"] == 0:
        return "Time cannot be zero"
    return f"Speed = {fmt(known['distance'] / known['time'], decimals)} km/h"


@formula("physics.kinetic_energy", reads=("mass", "velocity"))
def kinetic_energy(s: Snapshot, decimals: int = 2) -> float:
    """Kinetic energy 1/2 m v^2 in joules."""
    mass, velocity = s.number("mass"), s.number("velocity")
    if mass < 0:
        return 0.0
    return round_to(0.5 * mass * velocity * velocity, decimals)


@formula("physics.potential_energy", reads=("mass", "height"))
def potential_energy(s: Snapshot, decimals: int = 2) -> float:
    """Gravitational potential energy m g h in joules."""
    mass = s.number("mass")
    if mass < 0:
        return 0.0
    return round_to(mass * GRAVITY * s.number("height"), decimals)


@formula("physics.density", reads=("mass", "volume"))
def density(s: Snapshot, decimals: int = 4) -> float:
    """Density as mass over volume."""
    mass, volume = s.number("mass"), s.number("volume")
    if volume <= 0 or mass < 0:
        return 0.0
    return round_to(mass / volume, decimals)


@formula("physics.force", reads=("mass", "acceleration"))
def force(s: Snapshot, decimals: int = 4) -> Union[float, str]:
    """Force F = m a in newtons."""
    mass = s.number("mass")
    if mass < 0:
        return "Mass cannot be negative"
    return round_to(mass * s.number("acceleration"), decimals)
