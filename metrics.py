"""
Placement metrics for strategy evaluation.

Implements:
1. Utilization: allocated / capacity per resource dimension (0-1)
2. Placement rate: share of pods that received a node (0-1, higher is better)
3. Active nodes: nodes carrying any allocation (lower means tighter packing)
4. Load imbalance: std-dev of per-node utilization (lower means more even)
"""
from collections import Counter

import numpy as np

DIMENSIONS = ("cpu", "memory", "gpu")


def utilization(cluster):
    """Cluster-wide allocated/capacity per dimension. 0.0 where capacity is 0."""
    capacity = cluster.total_capacity()
    allocated = cluster.total_allocated()
    result = {}
    for dim in DIMENSIONS:
        cap = getattr(capacity, dim)
        result[dim] = getattr(allocated, dim) / cap if cap > 0 else 0.0
    return result


def node_utilization(cluster, dimension="cpu"):
    """
    Per-node utilization for one dimension, in cluster order.

    Nodes without capacity in that dimension (e.g. GPU on a standard node)
    report 0.0.
    """
    if dimension not in DIMENSIONS:
        raise ValueError(f"unknown dimension: {dimension}")
    capacity = np.array([getattr(n.capacity, dimension) for n in cluster.nodes], dtype=float)
    allocated = np.array([getattr(n.allocated, dimension) for n in cluster.nodes], dtype=float)
    return np.divide(allocated, capacity, out=np.zeros_like(allocated), where=capacity > 0)


def placement_rate(decisions):
    if not decisions:
        return 0.0
    return sum(1 for d in decisions if d.scheduled) / len(decisions)


def active_nodes(cluster):
    return sum(1 for n in cluster.nodes if n.allocated.as_tuple() != (0, 0, 0))


def load_imbalance(cluster, dimension="cpu"):
    """Standard deviation of per-node utilization; 0.0 for an empty cluster."""
    values = node_utilization(cluster, dimension)
    if values.size == 0:
        return 0.0
    return float(np.std(values))


def reason_counts(decisions):
    return dict(Counter(d.reason for d in decisions))


def summarize(decisions, cluster):
    util = utilization(cluster)
    return {
        "pods": len(decisions),
        "scheduled": sum(1 for d in decisions if d.scheduled),
        "placement_rate": placement_rate(decisions),
        "cpu_util": util["cpu"],
        "memory_util": util["memory"],
        "gpu_util": util["gpu"],
        "active_nodes": active_nodes(cluster),
        "cpu_imbalance": load_imbalance(cluster, "cpu"),
        "reasons": reason_counts(decisions),
    }
