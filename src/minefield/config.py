"""
Board configuration.

Holds the validated ``BoardConfig`` the engine runs on, the preset
difficulty levels, and the lenient parser that turns user supplied query
parameters into a config by clamping bad values and collecting warnings.
"""
import logging
import re
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import parse_qs

from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)


# ============================================================================
# Limits
# ============================================================================

@dataclass(frozen=True)
class Limit:
    """Inclusive bounds for one numeric parameter."""

    minimum: int
    maximum: Optional[int] = None


@dataclass(frozen=True)
class BoardLimits:
    """Bounds accepted from user input."""

    width: Limit = Limit(5, 30)
    height: Limit = Limit(5, 24)
    mines: Limit = Limit(1)


LIMITS = BoardLimits()

MIN_SIDE = 5


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a board.

    Attributes:
        width: Number of columns (at least 5).
        height: Number of rows (at least 5).
        mines: Total mines to place; at least one cell must stay safe.
    """

    width: int = 10
    height: int = 10
    mines: int = 15

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < MIN_SIDE or self.height < MIN_SIDE:
            raise InvalidConfiguration(
                f"Board dimensions must be at least {MIN_SIDE}x{MIN_SIDE}"
            )
        if self.mines < 1:
            raise InvalidConfiguration("Board needs at least one mine")
        if self.mines > self.max_mines:
            raise InvalidConfiguration(f"Too many mines (max {self.max_mines})")

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        """Number of cells that must be revealed to win."""
        return self.total_cells - self.mines

    @property
    def max_mines(self) -> int:
        return self.total_cells - 1


DEFAULT_CONFIG = BoardConfig(10, 10, 15)

# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)

PRESETS = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Query Parameter Parsing
# ============================================================================

WIDTH_ALIASES = ("width", "w", "cols")
HEIGHT_ALIASES = ("height", "h", "rows")
MINES_ALIASES = ("mines", "m")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

ParamValue = Union[str, int, Sequence[str], None]


def _first_present(
    params: Mapping[str, ParamValue], names: Sequence[str]
) -> Tuple[bool, Optional[str]]:
    """Return the raw value of the first alias present in ``params``."""
    for name in names:
        if name in params:
            value = params[name]
            if isinstance(value, (list, tuple)):
                value = value[0] if value else ""
            return True, None if value is None else str(value)
    return False, None


def _parse_int(raw: Optional[str]) -> Optional[int]:
    """Parse a leading integer the way browsers parse ``parseInt``."""
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1))


def _parse_number(
    params: Mapping[str, ParamValue],
    names: Sequence[str],
    fallback: int,
    limit: Limit,
    label: str,
    warnings: List[str],
) -> int:
    provided, raw = _first_present(params, names)
    value = _parse_int(raw)
    if value is None:
        value = fallback
        if provided:
            warnings.append(f"Parameter '{label}' is invalid and was reset to {fallback}.")

    if value < limit.minimum:
        warnings.append(f"Parameter '{label}' was raised to {limit.minimum}.")
        value = limit.minimum

    if limit.maximum is not None and value > limit.maximum:
        warnings.append(f"Parameter '{label}' was lowered to {limit.maximum}.")
        value = limit.maximum

    return value


def parse_board_params(
    params: Mapping[str, ParamValue],
    defaults: BoardConfig = DEFAULT_CONFIG,
    limits: BoardLimits = LIMITS,
) -> Tuple[BoardConfig, List[str]]:
    """
    Build a config from loosely typed parameters, clamping bad values.

    Each dimension is looked up under several aliases (``width|w|cols``,
    ``height|h|rows``, ``mines|m``); the first alias present wins. Missing
    values use the defaults silently. Non-numeric values use the defaults
    with a warning. Out-of-range values are clamped to the limits with a
    warning. A mine count above ``width * height - 1`` is capped so that at
    least one safe cell remains.

    Args:
        params: Mapping of parameter name to value. Values may be strings,
            ints, or lists of strings as produced by ``parse_qs``.
        defaults: Fallback values.
        limits: Accepted ranges.

    Returns:
        Tuple of (valid config, list of warning messages).
    """
    warnings: List[str] = []

    width = _parse_number(
        params, WIDTH_ALIASES, defaults.width, limits.width, "width", warnings
    )
    height = _parse_number(
        params, HEIGHT_ALIASES, defaults.height, limits.height, "height", warnings
    )
    mines = _parse_number(
        params, MINES_ALIASES, defaults.mines, limits.mines, "mines", warnings
    )

    max_mines = max(limits.mines.minimum, width * height - 1)
    if mines > max_mines:
        warnings.append(
            f"Mine count was lowered to {max_mines} so that at least one safe cell remains."
        )
        mines = max_mines

    for message in warnings:
        logger.warning(message)

    return BoardConfig(width, height, mines), warnings


def parse_query_string(
    query: str,
    defaults: BoardConfig = DEFAULT_CONFIG,
    limits: BoardLimits = LIMITS,
) -> Tuple[BoardConfig, List[str]]:
    """Parse a raw ``width=10&mines=20`` query string into a config."""
    params = parse_qs(query.lstrip("?"), keep_blank_values=True)
    return parse_board_params(params, defaults, limits)
