"""
Wildcard and per-pool warning/critical thresholds.
"""
from types import MappingProxyType
from typing import Dict, Mapping, Tuple, Union, Iterable, Any

from ..core.value_objects.threshold import ThresholdPair, ThresholdRange
from ..core.exceptions.validation_exceptions import (
    InvalidThresholdCategoryError,
    ThresholdSpecError,
)

WILDCARD = '*'
WARNING = 'warning'
CRITICAL = 'critical'

CATEGORIES = ('capacity', 'frag', 'leaked', 'scrub', 'cksum_err', 'read_err', 'write_err')
POOL_METRIC_CATEGORIES = ('capacity', 'frag', 'leaked')
ERROR_CATEGORIES = ('cksum_err', 'read_err', 'write_err')

DEFAULT_THRESHOLDS: Dict[str, Tuple[Union[int, str], Union[int, str]]] = {
    'capacity': (70, 80),
    'frag': (50, 75),
    'leaked': (0, 0),
    'scrub': (35, 70),
    'cksum_err': (0, 10),
    'read_err': (0, 10),
    'write_err': (0, 10),
}

_SEVERITY_ALIASES = {
    'w': WARNING,
    'warn': WARNING,
    WARNING: WARNING,
    'c': CRITICAL,
    'crit': CRITICAL,
    CRITICAL: CRITICAL,
}


def _severity_key(severity: str) -> str:
    try:
        return _SEVERITY_ALIASES[severity.lower()]
    except KeyError:
        raise ThresholdSpecError(severity, "severity must be warning or critical")


def parse_threshold_spec(spec: str) -> Tuple[str, str, str]:
    """Split a `pool.category.value` override; the value keeps any further dots."""
    parts = spec.split('.', 2)
    if len(parts) != 3 or not all(parts):
        raise ThresholdSpecError(spec, "expected <pool.category.threshold>")
    pool, category, value = parts
    if category not in DEFAULT_THRESHOLDS:
        raise InvalidThresholdCategoryError(category)
    return pool, category, value


class ThresholdRegistry:
    """
    Read-only lookup of effective thresholds.

    Warning and critical are resolved independently: a pool override for one
    side does not hide the wildcard default of the other.
    """

    def __init__(self, entries: Mapping[str, Mapping[str, Mapping[str, ThresholdRange]]]):
        self._entries = MappingProxyType({
            pool: MappingProxyType({
                category: MappingProxyType(dict(sides))
                for category, sides in categories.items()
            })
            for pool, categories in entries.items()
        })
        missing = [c for c in CATEGORIES if c not in self._entries.get(WILDCARD, {})]
        if missing:
            raise InvalidThresholdCategoryError(','.join(missing))

    def _side(self, pool: str, category: str, severity: str) -> ThresholdRange:
        specific = self._entries.get(pool, {}).get(category, {})
        if severity in specific:
            return specific[severity]
        return self._entries[WILDCARD][category][severity]

    def resolve(self, pool: str, category: str) -> ThresholdPair:
        """Effective (warning, critical) pair for `pool` and `category`."""
        if category not in CATEGORIES:
            raise InvalidThresholdCategoryError(category)
        return ThresholdPair(
            warning=self._side(pool, category, WARNING),
            critical=self._side(pool, category, CRITICAL),
        )

    @classmethod
    def defaults(cls) -> 'ThresholdRegistry':
        return ThresholdRegistryBuilder().build()


class ThresholdRegistryBuilder:
    """Builder for collecting overrides before the registry is frozen."""

    def __init__(self):
        self._entries: Dict[str, Dict[str, Dict[str, ThresholdRange]]] = {
            WILDCARD: {
                category: {
                    WARNING: ThresholdRange.parse(warning),
                    CRITICAL: ThresholdRange.parse(critical),
                }
                for category, (warning, critical) in DEFAULT_THRESHOLDS.items()
            }
        }

    def with_override(self, pool: str, category: str, severity: str,
                      value: Union[str, int, float]) -> 'ThresholdRegistryBuilder':
        """Set one side of a pool's threshold; later calls win."""
        if category not in DEFAULT_THRESHOLDS:
            raise InvalidThresholdCategoryError(category)
        side = _severity_key(severity)
        self._entries.setdefault(pool, {}).setdefault(category, {})[side] = ThresholdRange.parse(value)
        return self

    def with_spec(self, spec: str, severity: str) -> 'ThresholdRegistryBuilder':
        """Apply a textual `pool.category.value` override."""
        pool, category, value = parse_threshold_spec(spec)
        return self.with_override(pool, category, severity, value)

    def with_warnings(self, specs: Iterable[str]) -> 'ThresholdRegistryBuilder':
        for spec in specs:
            self.with_spec(spec, WARNING)
        return self

    def with_criticals(self, specs: Iterable[str]) -> 'ThresholdRegistryBuilder':
        for spec in specs:
            self.with_spec(spec, CRITICAL)
        return self

    def with_mapping(self, thresholds: Mapping[str, Any]) -> 'ThresholdRegistryBuilder':
        """
        Apply nested overrides as loaded from a thresholds file:

            {pool: {category: {warning: value, critical: value}}}
        """
        for pool, categories in (thresholds or {}).items():
            if not isinstance(categories, Mapping):
                raise ThresholdSpecError(str(pool), "pool entry must be a mapping of categories")
            for category, sides in categories.items():
                if not isinstance(sides, Mapping):
                    raise ThresholdSpecError(f"{pool}.{category}", "category entry must map severities to values")
                for severity, value in sides.items():
                    self.with_override(str(pool), str(category), str(severity), value)
        return self

    def build(self) -> ThresholdRegistry:
        return ThresholdRegistry(self._entries)
