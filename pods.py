"""
Workload units (pods) submitted to the scheduler.

A pod carries a resource request and a priority. Higher priority pods are
admitted first; the namespaced full name breaks ties so that the admission
order never depends on how the caller happened to list the pods.
"""
from cluster import Resource


class Pod:
    def __init__(self, name, requests, namespace="", priority=0):
        self.name = name
        self.namespace = namespace or ""
        self.priority = priority
        self.requests = requests

    @property
    def full_name(self):
        """namespace/name when a namespace is set, otherwise just name."""
        if not self.namespace:
            return self.name
        return f"{self.namespace}/{self.name}"

    @property
    def wants_gpu(self):
        return self.requests.gpu > 0

    def copy(self):
        return Pod(self.name, self.requests.copy(), self.namespace, self.priority)

    def to_dict(self):
        data = {
            "name": self.name,
            "priority": self.priority,
            "resources": self.requests.to_dict(),
        }
        if self.namespace:
            data["namespace"] = self.namespace
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            name=data["name"],
            requests=Resource.from_dict(data.get("resources")),
            namespace=data.get("namespace", ""),
            priority=data.get("priority", 0),
        )

    def __repr__(self):
        return f"Pod({self.full_name}, priority={self.priority}, requests={self.requests})"


def admission_key(pod):
    # Request components make the order total when two pods share a full name.
    return (-pod.priority, pod.full_name) + pod.requests.as_tuple()


def order_pods(pods):
    """
    Return the admission order for pods without touching the caller's list.

    Descending priority, then ascending full name. Identical multisets of pods
    always produce the identical order.
    """
    return sorted(pods, key=admission_key)
