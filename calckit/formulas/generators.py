"""Random generators.

These formulas are registered with deterministic=False: hosts must call
them fresh on every evaluation and never cache or deduplicate results.
"""

import random
import secrets
import string

from .registry import formula
from .snapshot import Snapshot

MAX_DICE = 100
MAX_PASSWORD_LENGTH = 128
SYMBOLS = "!@#$%^&*()-_=+[]{};:,.?"


@formula("generators.random_integer", reads=("min", "max"), deterministic=False)
def random_integer(s: Snapshot) -> int:
    """Random whole number between min and max, inclusive."""
    low, high = s.integer("min", 1), s.integer("max", 100)
    if low > high:
        low, high = high, low
    return random.randint(low, high)


@formula("generators.dice_roll", reads=("dice", "sides"), deterministic=False)
def dice_roll(s: Snapshot) -> str:
    """Roll N dice with the given number of sides and report each roll and the total."""
    dice = min(max(s.integer("dice", 1), 1), MAX_DICE)
    sides = s.integer("sides", 6)
    if sides < 2:
        return "Dice need at least 2 sides"
    rolls = [random.randint(1, sides) for _ in range(dice)]
    if dice == 1:
        return str(rolls[0])
    return f"{', '.join(str(r) for r in rolls)} (total {sum(rolls)})"


@formula(
    "generators.password",
    reads=("length", "include_digits", "include_symbols"),
    deterministic=False,
)
def password(s: Snapshot) -> str:
    """Random password from letters plus optional digits and symbols."""
    length = min(max(s.integer("length", 16), 4), MAX_PASSWORD_LENGTH)
    alphabet = string.ascii_letters
    if s.flag("include_digits"):
        alphabet += string.digits
    if s.flag("include_symbols"):
        alphabet += SYMBOLS
    return "".join(secrets.choice(alphabet) for _ in range(length))
