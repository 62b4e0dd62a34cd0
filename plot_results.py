#!/usr/bin/env python3
"""
Charts for scheduling passes and strategy comparisons.

1. Per-node usage: CPU / memory / GPU utilization of every node after a pass
2. Strategy comparison: mean metric per strategy with 95% CI error bars,
   read from the CSV written by strategy_comparison.py
"""
import csv
import sys

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

import metrics

COLORS = {
    'cpu': '#1f77b4',      # blue
    'memory': '#2ca02c',   # green
    'gpu': '#d62728',      # red
    'binpack': '#ff7f0e',  # orange
    'spread': '#808080',   # gray
}


def plot_node_usage(cluster, path, title="Node utilization"):
    """Grouped bar chart of per-node utilization for each resource dimension."""
    names = [node.name for node in cluster.nodes]
    x_pos = np.arange(len(names))
    width = 0.25

    fig, ax = plt.subplots(figsize=(max(6, len(names) * 0.9), 4.5))
    for dim_idx, dim in enumerate(metrics.DIMENSIONS):
        values = metrics.node_utilization(cluster, dim)
        offset = (dim_idx - 1) * width
        ax.bar(x_pos + offset, values, width, label=dim, color=COLORS[dim], alpha=0.8,
               edgecolor='black', linewidth=0.8)

    ax.set_ylabel("Utilization", fontsize=11, fontweight='bold')
    ax.set_title(title, fontsize=12, fontweight='bold')
    ax.set_xticks(x_pos)
    ax.set_xticklabels(names, fontsize=9, rotation=30, ha='right')
    ax.set_ylim([0.0, 1.05])
    ax.grid(True, alpha=0.2, axis='y', linestyle='--')
    ax.legend(fontsize=9, loc='upper right', framealpha=0.95)

    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"✓ Generated {path}")


def load_stats(csv_file):
    """Load {(strategy, metric): {mean, ci_lower, ci_upper}} from a stats CSV."""
    stats = {}
    with open(csv_file, 'r') as f:
        reader = csv.DictReader(f)
        for row in reader:
            stats[(row['Strategy'], row['Metric'])] = {
                'mean': float(row['Mean']),
                'ci_lower': float(row['CILower']),
                'ci_upper': float(row['CIUpper']),
            }
    return stats


def plot_strategy_comparison(stats, path, metric_names=None):
    """One panel per metric, one bar per strategy, 95% CI error bars."""
    strategies = sorted({strategy for strategy, _ in stats})
    if metric_names is None:
        metric_names = sorted({metric for _, metric in stats})
    if not strategies or not metric_names:
        raise ValueError("no statistics to plot")

    fig, axes = plt.subplots(1, len(metric_names), figsize=(4 * len(metric_names), 4), squeeze=False)
    for ax, metric in zip(axes[0], metric_names):
        means = np.array([stats[(s, metric)]['mean'] for s in strategies])
        lower = np.array([stats[(s, metric)]['ci_lower'] for s in strategies])
        upper = np.array([stats[(s, metric)]['ci_upper'] for s in strategies])
        errors = [means - lower, upper - means]
        ax.bar(strategies, means, color=[COLORS.get(s, '#aec7e8') for s in strategies],
               alpha=0.8, edgecolor='black', linewidth=0.8, yerr=errors, capsize=3,
               error_kw={'elinewidth': 0.8, 'alpha': 0.6})
        ax.set_title(metric, fontsize=11, fontweight='bold')
        ax.grid(True, alpha=0.2, axis='y', linestyle='--')

    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"✓ Generated {path}")


def main():
    csv_file = sys.argv[1] if len(sys.argv) > 1 else "strategy_comparison_stats.csv"
    try:
        stats = load_stats(csv_file)
    except FileNotFoundError:
        print(f"✗ {csv_file} not found")
        print("  Run: python strategy_comparison.py")
        sys.exit(1)
    if not stats:
        print(f"✗ {csv_file} has no statistics")
        print("  Run: python strategy_comparison.py")
        sys.exit(1)
    plot_strategy_comparison(stats, "strategy_comparison.png")


if __name__ == "__main__":
    main()
