"""
In-memory registry of scenarios and scheduling runs.

A registry is created explicitly by whoever serves runs (a script, a service,
a test) and closed when it is done; nothing lives in module globals.

- Scenarios: a cluster plus a pod list, stored as private copies
- Runs: the decisions, final cluster and metrics summary of one pass

Mutations of a stored run are serialized per run id, so at most one update
for a given run is in flight at any time. Reads return the stored record;
its annotations dict is replaced on every update, so a reader iterating an
old one never sees it change.
"""
import itertools
import threading

import metrics
from schedulers import Strategy
from simulator import run


class RunRecord:
    def __init__(self, run_id, strategy, decisions, cluster, summary, scenario_id=None):
        self.run_id = run_id
        self.scenario_id = scenario_id
        self.strategy = strategy
        self.decisions = decisions
        self.cluster = cluster
        self.summary = summary
        self.annotations = {}

    def __repr__(self):
        return f"RunRecord({self.run_id}, strategy={self.strategy.value}, scenario={self.scenario_id})"


class RunRegistry:
    def __init__(self, debug=False):
        self.debug = debug
        self._lock = threading.Lock()
        self._scenarios = {}
        self._runs = {}
        self._run_locks = {}
        self._ids = itertools.count(1)
        self._closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        with self._lock:
            self._closed = True
            self._scenarios.clear()
            self._runs.clear()
            self._run_locks.clear()

    def _check_open(self):
        if self._closed:
            raise RuntimeError("registry is closed")

    def _new_id(self, prefix):
        return f"{prefix}-{next(self._ids)}"

    def add_scenario(self, cluster, pods):
        with self._lock:
            self._check_open()
            scenario_id = self._new_id("sc")
            self._scenarios[scenario_id] = (cluster.clone(), [pod.copy() for pod in pods])
        return scenario_id

    def get_scenario(self, scenario_id):
        """Return copies of the stored (cluster, pods)."""
        with self._lock:
            self._check_open()
            if scenario_id not in self._scenarios:
                raise KeyError(f"scenario not found: {scenario_id}")
            cluster, pods = self._scenarios[scenario_id]
        return cluster.clone(), [pod.copy() for pod in pods]

    def create_run(self, strategy, scenario_id=None, cluster=None, pods=None):
        """
        Schedule a stored scenario, or an inline cluster + pods, and store the run.

        Exactly one of scenario_id or (cluster, pods) must be given.
        """
        strategy = Strategy(strategy)
        inline = cluster is not None or pods is not None
        if (scenario_id is None) == (not inline):
            raise ValueError("need exactly one of scenario_id or cluster+pods")
        if scenario_id is not None:
            cluster, pods = self.get_scenario(scenario_id)
        elif cluster is None or pods is None:
            raise ValueError("inline runs need both cluster and pods")
        else:
            pods = [pod.copy() for pod in pods]

        # The pass itself runs outside the registry lock
        decisions, final = run(cluster, pods, strategy, debug=self.debug)
        summary = metrics.summarize(decisions, final)

        with self._lock:
            self._check_open()
            run_id = self._new_id("run")
            record = RunRecord(run_id, strategy, decisions, final, summary, scenario_id)
            self._runs[run_id] = record
            self._run_locks[run_id] = threading.Lock()
        return record

    def get_run(self, run_id):
        with self._lock:
            self._check_open()
            if run_id not in self._runs:
                raise KeyError(f"run not found: {run_id}")
            return self._runs[run_id]

    def update_run(self, run_id, **fields):
        """Attach annotations (e.g. downstream timing results) to a stored run."""
        with self._lock:
            self._check_open()
            if run_id not in self._runs:
                raise KeyError(f"run not found: {run_id}")
            record = self._runs[run_id]
            run_lock = self._run_locks[run_id]
        # Readers may hold the old dict; never mutate it in place
        with run_lock:
            record.annotations = {**record.annotations, **fields}
        return record

    def list_runs(self):
        with self._lock:
            self._check_open()
            return list(self._runs)
