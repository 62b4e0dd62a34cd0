from .base import Scheduler


class Binpack(Scheduler):
    """
    Binpack placement strategy.

    Places each pod on the feasible node that would have the least headroom
    left afterwards, compared lexicographically on (remaining GPU, remaining
    CPU) for the GPU tier and (remaining CPU, remaining memory) for the
    standard tier.

    Properties: Concentrates load on as few nodes as possible, keeping whole
    nodes free for large pods. Busy nodes run hot.
    """

    name = "binpack"

    def prefers(self, candidate, best):
        return candidate < best
