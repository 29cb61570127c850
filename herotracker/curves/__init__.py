"""
Built-in progression curves.

Each module in this package defines one CurveDefinition subclass. Use
herotracker.core.curve_loader to look curves up by name.
"""

from .base import CurveDefinition
from .standard import StandardCurve, standard_table
from .legacy import LegacyCurve

__all__ = ['CurveDefinition', 'StandardCurve', 'LegacyCurve', 'standard_table']
