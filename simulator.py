"""
Single-pass admission simulation for pod placement.

Implements sequential admission control:
- Pods are ordered by priority (then full name), independent of input order
- Each pod is placed against one shared working copy of the cluster, so later
  decisions see every allocation committed before them
- Placed or rejected pods are never revisited

The caller's cluster and pod list are never mutated. The simulator returns
one Decision per pod together with the final cluster snapshot.
"""
from pods import order_pods
from schedulers import create_scheduler

SCHEDULE_FORMAT_VERSION = 1


class Decision:
    def __init__(self, pod, node, reason):
        self.pod = pod
        self.node = node  # None when the pod stayed unscheduled
        self.reason = reason

    @property
    def scheduled(self):
        return self.node is not None

    def to_dict(self):
        return {"pod": self.pod.full_name, "node": self.node, "reason": self.reason}

    def __eq__(self, other):
        if not isinstance(other, Decision):
            return NotImplemented
        return (self.pod.full_name, self.pod.requests.as_tuple(), self.node, self.reason) == \
            (other.pod.full_name, other.pod.requests.as_tuple(), other.node, other.reason)

    def __repr__(self):
        return f"Decision({self.pod.full_name} -> {self.node or 'unscheduled'}: {self.reason})"


class Simulator:
    def __init__(self, cluster, pods, scheduler, debug=False):
        self.base_cluster = cluster
        self.pods = pods
        self.scheduler = scheduler
        self.debug = debug
        self.cluster = None  # working copy, created by run()
        self.step = 0
        self.decisions = []

    def log(self, msg):
        if self.debug:
            print(f"[pod {self.step}] {msg}")

    def run(self):
        """
        Run one scheduling pass.

        Returns:
            (decisions in admission order, final cluster snapshot)
        """
        # Fresh state so one simulator can be reused across passes
        self.cluster = self.base_cluster.clone()
        self.decisions = []
        self.step = 0

        for pod in order_pods(self.pods):
            self.step += 1
            idx, reason = self.scheduler.choose_node(self, pod)
            if idx < 0:
                self.decisions.append(Decision(pod, None, reason))
                self.log(f"{pod.full_name} UNSCHEDULED ({reason})")
                continue

            node = self.cluster.nodes[idx]
            node.allocate(pod.requests)
            self.decisions.append(Decision(pod, node.name, reason))
            self.log(f"{pod.full_name} -> {node.name} ({reason}, remaining={node.remaining})")

        return self.decisions, self.cluster


def run(base_cluster, pods, strategy, debug=False):
    """Schedule pods on a copy of base_cluster with the given Strategy."""
    return Simulator(base_cluster, pods, create_scheduler(strategy), debug=debug).run()


def export_schedule(decisions, cluster):
    """
    Serialize a pass for the downstream execution-time simulator.

    The shape is versioned by SCHEDULE_FORMAT_VERSION; bump it on any change.
    """
    return {
        "version": SCHEDULE_FORMAT_VERSION,
        "decisions": [d.to_dict() for d in decisions],
        "nodes": [node.to_dict() for node in cluster.nodes],
    }
