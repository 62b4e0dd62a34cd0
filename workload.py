"""
Cluster and workload loading for pod placement simulation.

Reads JSON definitions:
- Cluster: {"nodes": [{"name", "capacity": {...}, "allocated": {...}}]}
- Workload: {"pods": [{"name", "namespace", "priority", "resources": {...}}]}

Resource blocks use the keys cpuMilli, memoryMB and gpus; missing keys and a
missing "allocated" block default to zero.

Also generates seeded synthetic clusters and workloads so strategies can be
compared on identical inputs (same seed -> same cluster and pods).
"""
import json

import numpy as np

from cluster import WIRE_KEYS, Cluster, Node, Resource
from pods import Pod


class LoadError(ValueError):
    """Malformed or unreadable cluster/workload definition."""


def _read_json(path, what):
    try:
        with open(path, "r") as f:
            text = f.read()
    except OSError as err:
        raise LoadError(f"read {what} file: {err}") from err
    try:
        return json.loads(text)
    except json.JSONDecodeError as err:
        raise LoadError(f"parse {what} json: {err}") from err


def _parse_resource(data, where):
    if data is None:
        return Resource()
    if not isinstance(data, dict):
        raise LoadError(f"{where}: resources must be an object")
    for key in WIRE_KEYS:
        value = data.get(key, 0)
        # bool is an int subclass, but never a valid quantity
        if not isinstance(value, int) or isinstance(value, bool):
            raise LoadError(f"{where}: {key} must be an integer, got {value!r}")
    return Resource.from_dict(data)


def parse_cluster(data):
    if not isinstance(data, dict) or not isinstance(data.get("nodes"), list):
        raise LoadError("cluster definition needs a 'nodes' list")

    nodes = []
    seen = set()
    for i, entry in enumerate(data["nodes"]):
        name = entry.get("name") if isinstance(entry, dict) else None
        if not name:
            raise LoadError(f"node #{i}: missing name")
        if not isinstance(name, str):
            raise LoadError(f"node #{i}: name must be a string, got {name!r}")
        if name in seen:
            raise LoadError(f"node {name}: duplicate name")
        if "capacity" not in entry:
            raise LoadError(f"node {name}: missing capacity")
        seen.add(name)
        nodes.append(Node(
            name,
            _parse_resource(entry["capacity"], f"node {name} capacity"),
            _parse_resource(entry.get("allocated"), f"node {name} allocated"),
        ))
    return Cluster(nodes)


def parse_pods(data):
    if not isinstance(data, dict) or not isinstance(data.get("pods"), list):
        raise LoadError("workload definition needs a 'pods' list")

    pods = []
    for i, entry in enumerate(data["pods"]):
        name = entry.get("name") if isinstance(entry, dict) else None
        if not name:
            raise LoadError(f"pod #{i}: missing name")
        if not isinstance(name, str):
            raise LoadError(f"pod #{i}: name must be a string, got {name!r}")
        namespace = entry.get("namespace") or ""
        if not isinstance(namespace, str):
            raise LoadError(f"pod {name}: namespace must be a string, got {namespace!r}")
        priority = entry.get("priority", 0)
        if not isinstance(priority, int) or isinstance(priority, bool):
            raise LoadError(f"pod {name}: priority must be an integer, got {priority!r}")
        pods.append(Pod(
            name,
            _parse_resource(entry.get("resources"), f"pod {name} resources"),
            namespace=namespace,
            priority=priority,
        ))
    return pods


def load_cluster(path):
    """Read a cluster definition from a JSON file."""
    return parse_cluster(_read_json(path, "cluster"))


def load_pods(path):
    """Read a workload definition containing pods from a JSON file."""
    return parse_pods(_read_json(path, "workload"))


def generate_cluster(num_standard=4, num_gpu=2, seed=42):
    """
    Generate a synthetic cluster.

    Standard nodes get 4-16 cores and 4 GB per core; GPU nodes get 16-32
    cores, 8 GB per core and 1, 2, 4 or 8 GPUs. Standard nodes come first.
    """
    rng = np.random.default_rng(seed)
    nodes = []
    for i in range(num_standard):
        cores = int(rng.choice([4, 8, 16]))
        nodes.append(Node(f"cpu-{i}", Resource(cores * 1000, cores * 4096, 0)))
    for i in range(num_gpu):
        cores = int(rng.choice([16, 32]))
        gpus = int(rng.choice([1, 2, 4, 8], p=[0.2, 0.3, 0.3, 0.2]))
        nodes.append(Node(f"gpu-{i}", Resource(cores * 1000, cores * 8192, gpus)))
    return Cluster(nodes)


def generate_pods(
    num_pods=50,
    gpu_fraction=0.2,        # share of pods that request GPUs
    mean_cpu=1000,           # mean CPU request (milli)
    mem_per_cpu=2,           # MB of memory per milli-CPU requested
    priority_levels=3,       # priorities drawn from 0..priority_levels-1
    namespaces=("default", "batch", "serving"),
    seed=42
):
    """
    Generate a synthetic workload of pods.

    CPU requests are exponential around mean_cpu (rounded to 100m, at least
    100m); memory scales with CPU. GPU pods ask for 1, 2 or 4 GPUs.
    """
    rng = np.random.default_rng(seed)
    pods = []
    for i in range(num_pods):
        cpu = max(100, int(round(rng.exponential(mean_cpu) / 100.0)) * 100)
        memory = cpu * mem_per_cpu
        gpu = 0
        if rng.random() < gpu_fraction:
            gpu = int(rng.choice([1, 2, 4], p=[0.6, 0.3, 0.1]))
        pods.append(Pod(
            f"pod-{i}",
            Resource(cpu, memory, gpu),
            namespace=str(rng.choice(namespaces)),
            priority=int(rng.integers(0, priority_levels)),
        ))
    return pods
