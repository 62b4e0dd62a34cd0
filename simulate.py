#!/usr/bin/env python3
"""
Run one scheduling pass from JSON definitions and print the decisions.

Usage:
    python simulate.py                                  # Example configs, binpack
    python simulate.py --strategy spread --state        # Also print node usage
    python simulate.py --export schedule.json           # Hand-off for timing simulation
    python simulate.py --help                           # Show options
"""
import argparse
import json
import sys

import metrics
from plot_results import plot_node_usage
from schedulers import Strategy
from simulator import export_schedule, run
from workload import LoadError, load_cluster, load_pods

DEFAULT_CLUSTER = "configs/cluster.example.json"
DEFAULT_WORKLOAD = "configs/workload.example.json"
DEFAULT_STRATEGY = Strategy.BINPACK.value


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Simulate pod placement on a cluster")
    parser.add_argument('--cluster', default=DEFAULT_CLUSTER,
                        help=f'Path to cluster JSON definition (default: {DEFAULT_CLUSTER})')
    parser.add_argument('--workload', default=DEFAULT_WORKLOAD,
                        help=f'Path to workload JSON definition (default: {DEFAULT_WORKLOAD})')
    parser.add_argument('--strategy', default=DEFAULT_STRATEGY,
                        choices=[s.value for s in Strategy],
                        help=f'Placement strategy (default: {DEFAULT_STRATEGY})')
    parser.add_argument('--state', action='store_true',
                        help='Print final node utilization after scheduling')
    parser.add_argument('--summary', action='store_true',
                        help='Print placement metrics')
    parser.add_argument('--export', metavar='PATH', default=None,
                        help='Write decisions and final cluster as JSON')
    parser.add_argument('--plot', metavar='PATH', default=None,
                        help='Save a per-node utilization chart')
    parser.add_argument('--debug', action='store_true',
                        help='Trace every placement')
    return parser.parse_args(argv)


def print_decisions(decisions, out=None):
    out = out or sys.stdout
    rows = [(d.pod.full_name, d.node or "unscheduled", d.reason) for d in decisions]
    pod_w = max([len("POD")] + [len(r[0]) for r in rows]) + 2
    node_w = max([len("NODE")] + [len(r[1]) for r in rows]) + 2
    print("POD".ljust(pod_w) + "NODE".ljust(node_w) + "REASON", file=out)
    for pod, node, reason in rows:
        print(pod.ljust(pod_w) + node.ljust(node_w) + reason, file=out)


def print_cluster(cluster, out=None):
    out = out or sys.stdout
    columns = ["CPU USED(m)", "CPU FREE(m)", "MEM USED(MB)", "MEM FREE(MB)", "GPU USED", "GPU FREE"]
    name_w = max([len("NODE")] + [len(n.name) for n in cluster.nodes]) + 2
    print("NODE".ljust(name_w) + "".join(c.rjust(14) for c in columns), file=out)
    for node in cluster.nodes:
        remain = node.remaining
        values = [node.allocated.cpu, remain.cpu,
                  node.allocated.memory, remain.memory,
                  node.allocated.gpu, remain.gpu]
        print(node.name.ljust(name_w) + "".join(str(v).rjust(14) for v in values), file=out)


def print_summary(summary, out=None):
    out = out or sys.stdout
    print(f"Scheduled pods:     {summary['scheduled']}/{summary['pods']} "
          f"({summary['placement_rate']:.1%})", file=out)
    print(f"CPU utilization:    {summary['cpu_util']:.1%}", file=out)
    print(f"Memory utilization: {summary['memory_util']:.1%}", file=out)
    print(f"GPU utilization:    {summary['gpu_util']:.1%}", file=out)
    print(f"Active nodes:       {summary['active_nodes']}", file=out)
    print(f"CPU imbalance:      {summary['cpu_imbalance']:.3f}", file=out)


def main(argv=None):
    args = parse_args(argv)

    try:
        cluster = load_cluster(args.cluster)
        pods = load_pods(args.workload)
    except LoadError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1

    decisions, final = run(cluster, pods, Strategy(args.strategy), debug=args.debug)
    print_decisions(decisions)

    if args.state:
        print()
        print_cluster(final)

    if args.summary:
        print()
        print_summary(metrics.summarize(decisions, final))

    if args.export:
        with open(args.export, 'w') as f:
            json.dump(export_schedule(decisions, final), f, indent=2)
        print(f"\n✓ Schedule saved to {args.export}")

    if args.plot:
        plot_node_usage(final, args.plot, title=f"Node utilization ({args.strategy})")

    return 0


if __name__ == "__main__":
    sys.exit(main())
