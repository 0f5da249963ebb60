"""calckit - Declarative Calculator Definitions.

This package provides the calculator catalogue behind the website:
- Input field schemas (kinds, defaults, visibility conditions)
- Registered output formulas (pure functions of an input snapshot)
- An immutable registry of calculator definitions loaded from YAML
"""

__version__ = "0.1.0"
