"""
Tests for loading and generating clusters and workloads.
"""
import json
from pathlib import Path

import pytest
from workload import (LoadError, generate_cluster, generate_pods, load_cluster, load_pods,
                      parse_cluster, parse_pods)

CONFIGS = Path(__file__).resolve().parent.parent / "configs"


def write_json(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data))
    return path


def test_load_example_configs():
    cluster = load_cluster(CONFIGS / "cluster.example.json")
    pods = load_pods(CONFIGS / "workload.example.json")

    assert [n.name for n in cluster.nodes] == ["node-a", "node-b", "node-c", "gpu-a", "gpu-b"]
    assert cluster.get("node-c").allocated.as_tuple() == (2000, 4096, 0)
    assert cluster.get("gpu-b").capacity.gpu == 4
    assert len(pods) == 8
    assert pods[0].full_name == "serving/api"
    assert pods[0].priority == 10


def test_cluster_defaults(tmp_path):
    path = write_json(tmp_path, "cluster.json", {"nodes": [
        {"name": "n1", "capacity": {"cpuMilli": 1000, "memoryMB": 2048}},
    ]})

    node = load_cluster(path).nodes[0]
    assert node.capacity.as_tuple() == (1000, 2048, 0)
    assert node.allocated.as_tuple() == (0, 0, 0)


def test_workload_defaults(tmp_path):
    path = write_json(tmp_path, "workload.json", {"pods": [{"name": "p", "resources": {"gpus": 1}}]})

    pod = load_pods(path)[0]
    assert pod.full_name == "p"
    assert pod.priority == 0
    assert pod.requests.as_tuple() == (0, 0, 1)


def test_missing_file_is_a_load_error(tmp_path):
    with pytest.raises(LoadError, match="read cluster file"):
        load_cluster(tmp_path / "nope.json")


def test_invalid_json_is_a_load_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(LoadError, match="parse workload json"):
        load_pods(path)


@pytest.mark.parametrize("data, message", [
    ({}, "'nodes' list"),
    ({"nodes": [{"capacity": {}}]}, "missing name"),
    ({"nodes": [{"name": "a"}]}, "missing capacity"),
    ({"nodes": [{"name": "a", "capacity": {}}, {"name": "a", "capacity": {}}]}, "duplicate"),
    ({"nodes": [{"name": "a", "capacity": {"cpuMilli": "4"}}]}, "cpuMilli must be an integer"),
    ({"nodes": [{"name": "a", "capacity": {"gpus": 1.5}}]}, "gpus must be an integer"),
    ({"nodes": [{"name": ["a"], "capacity": {}}]}, "name must be a string"),
    ({"nodes": [{"name": 7, "capacity": {}}]}, "name must be a string"),
])
def test_malformed_cluster(data, message):
    with pytest.raises(LoadError, match=message):
        parse_cluster(data)


@pytest.mark.parametrize("data, message", [
    ({"pod": []}, "'pods' list"),
    ({"pods": [{"resources": {}}]}, "missing name"),
    ({"pods": [{"name": "p", "priority": "high"}]}, "priority must be an integer"),
    ({"pods": [{"name": "p", "resources": [1, 2]}]}, "must be an object"),
    ({"pods": [{"name": "p", "resources": {"memoryMB": True}}]}, "memoryMB must be an integer"),
    ({"pods": [{"name": 5}, {"name": "a"}]}, "name must be a string"),
    ({"pods": [{"name": "p", "namespace": 3}]}, "namespace must be a string"),
])
def test_malformed_workload(data, message):
    with pytest.raises(LoadError, match=message):
        parse_pods(data)


def test_load_error_is_a_value_error():
    assert issubclass(LoadError, ValueError)


def test_generate_cluster_layout_and_reproducibility():
    cluster = generate_cluster(num_standard=3, num_gpu=2, seed=1)

    assert [n.name for n in cluster.nodes] == ["cpu-0", "cpu-1", "cpu-2", "gpu-0", "gpu-1"]
    assert not any(n.has_gpu for n in cluster.nodes[:3])
    assert all(n.has_gpu for n in cluster.nodes[3:])
    again = generate_cluster(num_standard=3, num_gpu=2, seed=1)
    assert [n.capacity for n in again.nodes] == [n.capacity for n in cluster.nodes]


def test_generate_pods_reproducible_and_bounded():
    pods = generate_pods(num_pods=40, gpu_fraction=0.5, priority_levels=3, seed=3)
    again = generate_pods(num_pods=40, gpu_fraction=0.5, priority_levels=3, seed=3)

    assert len(pods) == 40
    assert [p.to_dict() for p in pods] == [p.to_dict() for p in again]
    for pod in pods:
        assert pod.requests.cpu >= 100 and pod.requests.cpu % 100 == 0
        assert pod.requests.memory == pod.requests.cpu * 2
        assert pod.requests.gpu in (0, 1, 2, 4)
        assert 0 <= pod.priority < 3


def test_generate_pods_without_gpus():
    pods = generate_pods(num_pods=20, gpu_fraction=0.0, seed=5)
    assert all(p.requests.gpu == 0 for p in pods)
