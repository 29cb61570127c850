"""
Curve loader for Hero Tracker.

Finds progression curves by name or reads them from JSON curve documents.

Supports two sources:
1. Built-in: CurveDefinition subclasses discovered in herotracker/curves/
2. File: a JSON curve document, validated against CURVE_SCHEMA
"""

import importlib
import inspect
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import jsonschema

from .progression import ProgressionTable, ProgressionTableError
from .result import Result, ErrorCode
from ..curves.base import CurveDefinition, cached_table

logger = logging.getLogger(__name__)

CURVE_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "tail_cost_per_level": {"type": "integer", "minimum": 1},
        "tiers": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "properties": {
                    "level": {"type": "integer", "minimum": 1},
                    "cumulative_xp_at_start": {"type": "integer", "minimum": 0},
                    "xp_to_next_level": {"type": "integer", "minimum": 1}
                },
                "required": ["level", "cumulative_xp_at_start", "xp_to_next_level"]
            }
        }
    },
    "required": ["tail_cost_per_level", "tiers"]
}


class CurveLoader:
    """
    Discovers built-in curves and loads curve documents.

    Example:
        loader = CurveLoader()
        loader.curve_names()                 # ['legacy', 'standard']
        result = loader.load('standard')
        if result:
            table = result.data
    """

    def __init__(self):
        self.curves_dir = Path(__file__).parent.parent / 'curves'
        self._curves: Optional[Dict[str, CurveDefinition]] = None

    def discover(self) -> Dict[str, CurveDefinition]:
        """
        Scan the curves package for CurveDefinition subclasses.

        Returns:
            Dict mapping curve name to curve instance
        """
        if self._curves is not None:
            return self._curves

        curves: Dict[str, CurveDefinition] = {}
        for item in sorted(self.curves_dir.glob('*.py')):
            if item.stem.startswith('_') or item.stem == 'base':
                continue

            for curve in self._import_curves(item.stem):
                if curve.name in curves:
                    logger.warning(f"Duplicate curve name '{curve.name}' in {item.name}, keeping the first")
                    continue
                curves[curve.name] = curve
                logger.debug(f"Discovered curve: {curve.name} v{curve.version}")

        self._curves = curves
        return curves

    def _import_curves(self, module_name: str) -> List[CurveDefinition]:
        """
        Import a curve module and instantiate every curve it defines.

        Args:
            module_name: Module file name without extension (e.g., 'standard')

        Returns:
            Curve instances defined in the module
        """
        try:
            mod = importlib.import_module(f'..curves.{module_name}', __package__)
        except ImportError as e:
            logger.warning(f"Failed to import curve module '{module_name}': {e}")
            return []

        found = []
        for attr_name in dir(mod):
            attr = getattr(mod, attr_name)
            # Only classes defined in this module, so re-exports are not counted twice
            if (inspect.isclass(attr) and
                    issubclass(attr, CurveDefinition) and
                    not inspect.isabstract(attr) and
                    attr.__module__ == mod.__name__):
                found.append(attr())
        return found

    def curve_names(self) -> List[str]:
        """Names of all built-in curves, sorted."""
        return sorted(self.discover())

    def get_curve(self, name: str) -> Optional[CurveDefinition]:
        return self.discover().get(name)

    def load(self, name_or_path: str) -> Result:
        """
        Load a progression table by curve name or from a JSON file.

        Anything ending in '.json' or naming an existing file is read as a
        curve document; everything else is looked up as a built-in curve.

        Args:
            name_or_path: Curve name (e.g., 'legacy') or path to a curve document

        Returns:
            Result with the ProgressionTable as data
        """
        path = Path(name_or_path)
        if name_or_path.endswith('.json') or path.is_file():
            return self.load_file(path)

        curve = self.get_curve(name_or_path)
        if curve is None:
            available = ', '.join(self.curve_names())
            return Result.fail(
                f"Unknown curve '{name_or_path}'. Available curves: {available}",
                ErrorCode.CURVE_NOT_FOUND
            )

        try:
            return Result.ok(cached_table(curve))
        except ProgressionTableError as e:
            logger.error(f"Built-in curve '{curve.name}' is invalid: {e}")
            return Result.fail(f"Curve '{curve.name}' is invalid: {e}", ErrorCode.INVALID_CURVE)

    def load_file(self, path: Path) -> Result:
        """
        Read and validate a JSON curve document.

        Args:
            path: Path to the document

        Returns:
            Result with the ProgressionTable as data
        """
        if not path.is_file():
            return Result.fail(f"Curve file not found: {path}", ErrorCode.FILE_NOT_FOUND)

        try:
            with open(path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Result.fail(f"Invalid JSON in {path}: {e}", ErrorCode.INVALID_JSON)
        except OSError as e:
            return Result.fail(f"Could not read curve file {path}: {e}", ErrorCode.FILE_READ_ERROR)

        result = parse_curve(document)
        if result.success:
            logger.info(f"Loaded curve '{result.data.name}' from {path}")
        return result


def parse_curve(document) -> Result:
    """
    Validate a curve document and build its table.

    Schema problems and inconsistent tier data are both reported as
    failed Results rather than raised.
    """
    try:
        jsonschema.validate(document, CURVE_SCHEMA)
    except jsonschema.ValidationError as e:
        return Result.fail(f"Curve document is invalid: {e.message}", ErrorCode.SCHEMA_VALIDATION_FAILED)

    try:
        return Result.ok(ProgressionTable.from_dict(document))
    except ProgressionTableError as e:
        return Result.fail(f"Curve document is inconsistent: {e}", ErrorCode.INVALID_CURVE)


_default_loader: Optional[CurveLoader] = None


def get_loader() -> CurveLoader:
    """Shared loader for the built-in curves."""
    global _default_loader
    if _default_loader is None:
        _default_loader = CurveLoader()
    return _default_loader


def load_curve(name_or_path: str) -> Result:
    """Load a progression table by name or path using the shared loader."""
    return get_loader().load(name_or_path)


def get_curve_names() -> List[str]:
    """Names of all built-in curves."""
    return get_loader().curve_names()


__all__ = ['CurveLoader', 'CURVE_SCHEMA', 'parse_curve', 'load_curve', 'get_curve_names', 'get_loader']
