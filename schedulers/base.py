"""
Abstract base class for pod placement strategies.

All strategies share the same two-tier placement flow:
1. GPU pods may only land on GPU-capable nodes
2. CPU/memory-only pods prefer nodes without GPUs, falling back to GPU nodes

Within a tier every feasible node is scored by the resources it would have
left after the placement. Subclasses only decide which score wins
(Binpack: least headroom, Spread: most headroom).
"""
from abc import ABC, abstractmethod

REASON_GPU_NODE = "scheduled on GPU-capable node"
REASON_NO_GPU_NODES = "no GPU nodes available"
REASON_GPU_NODES_FULL = "GPU nodes lack free capacity for this pod"
REASON_STANDARD_NODE = "scheduled on standard node"
REASON_GPU_FALLBACK = "scheduled on GPU node (no standard nodes fit)"
REASON_NO_CAPACITY = "no nodes have sufficient free CPU/memory"

SCHEDULED_REASONS = (REASON_GPU_NODE, REASON_STANDARD_NODE, REASON_GPU_FALLBACK)
UNSCHEDULED_REASONS = (REASON_NO_GPU_NODES, REASON_GPU_NODES_FULL, REASON_NO_CAPACITY)


def gpu_tier_key(after):
    return (after.gpu, after.cpu)


def standard_tier_key(after):
    return (after.cpu, after.memory)


class Scheduler(ABC):
    name = None

    def choose_node(self, sim, pod):
        """
        Pick a node for pod on the simulator's working cluster.

        Args:
            sim: Simulator instance (provides the working cluster and log())
            pod: Pod to place

        Returns:
            (node index or -1, reason string)
        """
        cluster = sim.cluster
        req = pod.requests

        if req.gpu > 0:
            idx = self._pick(cluster, req, gpu_nodes=True, key=gpu_tier_key)
            if idx >= 0:
                return idx, REASON_GPU_NODE
            if not cluster.has_gpu_nodes():
                return -1, REASON_NO_GPU_NODES
            return -1, REASON_GPU_NODES_FULL

        # First pass: keep GPU nodes free for GPU work
        idx = self._pick(cluster, req, gpu_nodes=False, key=standard_tier_key)
        if idx >= 0:
            return idx, REASON_STANDARD_NODE

        # Second pass: allow GPU nodes if nothing else fits
        idx = self._pick(cluster, req, gpu_nodes=True, key=standard_tier_key)
        if idx >= 0:
            sim.log(f"{pod.full_name}: no standard node fits, falling back to GPU tier")
            return idx, REASON_GPU_FALLBACK

        return -1, REASON_NO_CAPACITY

    def _pick(self, cluster, req, gpu_nodes, key):
        best_idx = -1
        best_key = None
        for i, node in enumerate(cluster.nodes):
            if node.has_gpu != gpu_nodes or not node.can_schedule(req):
                continue
            candidate = key(node.remaining.minus(req))
            # Ties keep the earlier node
            if best_key is None or self.prefers(candidate, best_key):
                best_idx = i
                best_key = candidate
        return best_idx

    @abstractmethod
    def prefers(self, candidate, best):
        """
        Decide whether a candidate score strictly beats the current best.

        Args:
            candidate: (primary, secondary) remaining-after-placement key
            best: key of the best node seen so far

        Returns:
            True only if candidate should replace best
        """
        pass
