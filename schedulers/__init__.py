from enum import Enum

from .binpack import Binpack
from .spread import Spread


class Strategy(Enum):
    BINPACK = "binpack"
    SPREAD = "spread"


def create_scheduler(strategy):
    """Create the scheduler for a Strategy member (or its string value)."""
    strategy = Strategy(strategy)
    if strategy is Strategy.BINPACK:
        return Binpack()
    elif strategy is Strategy.SPREAD:
        return Spread()
    raise ValueError(f"unhandled strategy: {strategy!r}")
