"""
Pytest configuration and shared fixtures for scheduler tests.
"""
import pytest
from test_utils import create_test_cluster, create_test_pod


@pytest.fixture
def standard_cluster():
    """Two standard nodes with different headroom (A smaller than B)."""
    return create_test_cluster(("A", 1000, 1024), ("B", 2000, 2048))


@pytest.fixture
def mixed_cluster():
    """Two standard nodes followed by two GPU nodes."""
    return create_test_cluster(
        ("cpu-small", 2000, 4096),
        ("cpu-large", 8000, 16384),
        ("gpu-2", 16000, 32768, 2),
        ("gpu-4", 32000, 65536, 4),
    )


@pytest.fixture
def gpu_only_cluster():
    """A single GPU node and no standard nodes."""
    return create_test_cluster(("gpu-0", 8000, 16384, 1))


@pytest.fixture
def mixed_pods():
    """Pods across priorities, namespaces and tiers."""
    return [
        create_test_pod("etl", 3000, 6144, priority=0, namespace="batch"),
        create_test_pod("train", 4000, 8192, gpu=2, priority=5, namespace="ml"),
        create_test_pod("api", 1000, 2048, priority=10, namespace="serving"),
        create_test_pod("infer", 2000, 4096, gpu=1, priority=5, namespace="ml"),
        create_test_pod("cron", 500, 512),
        create_test_pod("huge", 64000, 4096, priority=1),
    ]
