from .base import Scheduler


class Spread(Scheduler):
    """
    Spread placement strategy.

    The inverse of Binpack: each pod goes to the feasible node that keeps the
    most headroom after placement, using the same per-tier keys.

    Properties: Distributes load evenly and leaves slack on every node, at the
    cost of fragmenting free capacity so large pods fit less often.
    """

    name = "spread"

    def prefers(self, candidate, best):
        return candidate > best
