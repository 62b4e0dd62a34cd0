"""
Cluster model with fixed-capacity nodes.

A cluster consists of an ordered list of nodes. Each node has:
- Capacity: CPU (milli-units), memory (MB) and GPU count, fixed at creation
- Allocated: cumulative requests committed by the scheduler

The cluster provides methods for:
- Checking whether a node can fit a request (all three dimensions)
- Committing allocations (caller checks feasibility first)
- Taking an independent snapshot so a scheduling pass can mutate it safely
"""

WIRE_KEYS = ("cpuMilli", "memoryMB", "gpus")


class Resource:
    """Schedulable quantities on a node or requested by a pod."""

    def __init__(self, cpu=0, memory=0, gpu=0):
        self.cpu = cpu
        self.memory = memory
        self.gpu = gpu

    def add(self, other):
        """Accumulate other into this resource in place."""
        self.cpu += other.cpu
        self.memory += other.memory
        self.gpu += other.gpu
        return self

    def minus(self, other):
        """Return the component-wise difference. Components may go negative."""
        return Resource(self.cpu - other.cpu,
                        self.memory - other.memory,
                        self.gpu - other.gpu)

    def fits(self, request):
        return (self.cpu >= request.cpu and
                self.memory >= request.memory and
                self.gpu >= request.gpu)

    def copy(self):
        return Resource(self.cpu, self.memory, self.gpu)

    def as_tuple(self):
        return (self.cpu, self.memory, self.gpu)

    def to_dict(self):
        return dict(zip(WIRE_KEYS, self.as_tuple()))

    @classmethod
    def from_dict(cls, data):
        """Build from a wire dict; absent keys default to zero."""
        data = data or {}
        return cls(*(data.get(key, 0) for key in WIRE_KEYS))

    def __eq__(self, other):
        if not isinstance(other, Resource):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __repr__(self):
        return f"Resource(cpu={self.cpu}m, memory={self.memory}MB, gpu={self.gpu})"


class Node:
    def __init__(self, name, capacity, allocated=None):
        self.name = name
        self.capacity = capacity
        self.allocated = allocated if allocated is not None else Resource()

    @property
    def remaining(self):
        return self.capacity.minus(self.allocated)

    @property
    def has_gpu(self):
        return self.capacity.gpu > 0

    def can_schedule(self, request):
        return self.remaining.fits(request)

    def allocate(self, request):
        """
        Consume resources on the node.

        The node does not enforce allocated <= capacity on its own; callers
        must check can_schedule() first. Violating that is a programming error.
        """
        assert self.can_schedule(request), \
            f"allocation of {request} exceeds remaining {self.remaining} on {self.name}"
        self.allocated.add(request)

    def clone(self):
        return Node(self.name, self.capacity.copy(), self.allocated.copy())

    def to_dict(self):
        return {
            "name": self.name,
            "capacity": self.capacity.to_dict(),
            "allocated": self.allocated.to_dict(),
        }

    def __repr__(self):
        return f"Node({self.name}, capacity={self.capacity}, allocated={self.allocated})"


class Cluster:
    def __init__(self, nodes=None):
        # Order matters: it is the final tie-break between equally scored nodes.
        self.nodes = list(nodes) if nodes is not None else []

    def clone(self):
        """Snapshot copy; nodes are value-copied so the original stays untouched."""
        return Cluster([node.clone() for node in self.nodes])

    def get(self, name):
        for node in self.nodes:
            if node.name == name:
                return node
        return None

    def has_gpu_nodes(self):
        return any(node.has_gpu for node in self.nodes)

    def total_capacity(self):
        total = Resource()
        for node in self.nodes:
            total.add(node.capacity)
        return total

    def total_allocated(self):
        total = Resource()
        for node in self.nodes:
            total.add(node.allocated)
        return total

    def to_dict(self):
        return {"nodes": [node.to_dict() for node in self.nodes]}

    def __len__(self):
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)

    def __repr__(self):
        return f"Cluster([{', '.join(node.name for node in self.nodes)}])"
