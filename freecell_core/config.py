from __future__ import annotations

import logging
import os

from .seeds import check_seed

_TRUTHY = ('1', 'true', 'yes', 'on')


def env_flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).lower() in _TRUTHY


def debug_enabled() -> bool:
    """FREECELL_DEBUG=1 turns on debug logging for the engine."""
    return env_flag('FREECELL_DEBUG')


def default_seed() -> int:
    """Game number to start with when none is given (FREECELL_SEED, else game 1)."""
    raw = os.getenv('FREECELL_SEED', '1')
    try:
        return check_seed(int(raw))
    except ValueError:
        logging.getLogger(__name__).warning("ignoring bad FREECELL_SEED=%r", raw)
        return 1


def configure_logging() -> None:
    level = logging.DEBUG if debug_enabled() else logging.INFO
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
