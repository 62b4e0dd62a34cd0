"""
Multi-seed comparison of Binpack and Spread placement.

Uses Common Random Numbers (CRN): for every seed one synthetic cluster and one
synthetic workload are generated, and both strategies schedule exactly those
inputs. Reports mean ± 95% confidence interval per metric and a paired t-test
between the strategies.

Usage:
    python strategy_comparison.py                    # 20 seeds, random base seed
    python strategy_comparison.py --seeds 50         # Override to 50 seeds
    python strategy_comparison.py --base-seed 42     # Reproducible run
    python strategy_comparison.py --help             # Show options
"""
import argparse
import csv
import json
from datetime import datetime
from math import erfc, sqrt

import numpy as np

import metrics
from schedulers import Strategy
from simulator import run
from workload import generate_cluster, generate_pods

DEBUG = False

METRIC_NAMES = ["placement_rate", "cpu_util", "gpu_util", "active_nodes", "cpu_imbalance"]


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Multi-seed Binpack vs Spread comparison with CRN",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python strategy_comparison.py                 # Default: 20 seeds, random base
  python strategy_comparison.py --seeds 100     # Run 100 seeds
  python strategy_comparison.py --base-seed 42  # Reproducible: seeds 42-61
        """
    )
    parser.add_argument('--seeds', type=int, default=20,
                        help='Number of seeds to run (default: 20)')
    parser.add_argument('--base-seed', type=int, default=None,
                        help='Base seed for reproducibility (default: random)')
    parser.add_argument('--pods', type=int, default=60,
                        help='Pods per synthetic workload (default: 60)')
    parser.add_argument('--standard-nodes', type=int, default=6,
                        help='Nodes without GPUs (default: 6)')
    parser.add_argument('--gpu-nodes', type=int, default=2,
                        help='GPU-capable nodes (default: 2)')
    parser.add_argument('--output-prefix', default='strategy_comparison',
                        help='Prefix for the JSON/CSV outputs (default: strategy_comparison)')

    return parser.parse_args(argv)


def run_single_trial(seed, num_pods, num_standard, num_gpu):
    """Run every strategy on the same generated inputs (CRN)."""
    cluster = generate_cluster(num_standard=num_standard, num_gpu=num_gpu, seed=seed)
    pods = generate_pods(num_pods=num_pods, seed=seed)

    results = {}
    for strategy in Strategy:
        decisions, final = run(cluster, pods, strategy, debug=DEBUG)
        summary = metrics.summarize(decisions, final)
        results[strategy.value] = {name: summary[name] for name in METRIC_NAMES}
    return results


def mean_ci(values):
    """Return (mean, std_err, ci_lower, ci_upper, median) with a normal 95% CI."""
    values = np.asarray(values, dtype=float)
    mean = np.mean(values)
    std_err = np.std(values, ddof=1) / np.sqrt(len(values)) if len(values) > 1 else 0.0
    return mean, std_err, mean - 1.96 * std_err, mean + 1.96 * std_err, np.median(values)


def paired_ttest(x, y):
    """
    Paired t-test on per-seed values of two strategies (same seeds, CRN).

    Returns (t_stat, p_value) with a normal approximation for p. Fewer than
    two pairs or all-zero differences give (0.0, 1.0); a constant non-zero
    difference gives an infinite t and p = 0.
    """
    diff = np.asarray(x, dtype=float) - np.asarray(y, dtype=float)
    if diff.size < 2:
        return 0.0, 1.0
    spread = np.std(diff, ddof=1)
    if spread == 0:
        if np.all(diff == 0):
            return 0.0, 1.0
        return float(np.sign(diff[0]) * np.inf), 0.0
    t_stat = float(np.mean(diff) / (spread / np.sqrt(diff.size)))
    return t_stat, erfc(abs(t_stat) / sqrt(2))


def compare_strategies(all_results, first=Strategy.BINPACK.value, second=Strategy.SPREAD.value):
    """Per metric: mean per-seed difference (first - second), t statistic and p value."""
    comparison = {}
    for metric_name in METRIC_NAMES:
        x = all_results[first][metric_name]
        y = all_results[second][metric_name]
        t_stat, p_value = paired_ttest(x, y)
        comparison[metric_name] = {
            'mean_diff': float(np.mean(np.subtract(x, y))) if x else 0.0,
            't_stat': t_stat,
            'p_value': p_value,
        }
    return comparison


def collect(seeds, num_pods, num_standard, num_gpu):
    """Return {strategy: {metric: [value per seed]}}."""
    all_results = {s.value: {m: [] for m in METRIC_NAMES} for s in Strategy}
    for seed in seeds:
        trial = run_single_trial(seed, num_pods, num_standard, num_gpu)
        for strategy, values in trial.items():
            for metric_name in METRIC_NAMES:
                all_results[strategy][metric_name].append(values[metric_name])
    return all_results


def compute_stats(all_results):
    stats = {}
    for strategy, per_metric in all_results.items():
        for metric_name, values in per_metric.items():
            mean, std_err, lower, upper, median = mean_ci(values)
            stats[(strategy, metric_name)] = {
                'mean': mean,
                'std_err': std_err,
                'ci_lower': lower,
                'ci_upper': upper,
                'median': median,
            }
    return stats


def write_stats_csv(stats, path):
    with open(path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['Strategy', 'Metric', 'Mean', 'StdErr', 'CILower', 'CIUpper', 'Median'])
        for (strategy, metric), stat in sorted(stats.items()):
            writer.writerow([
                strategy, metric,
                f"{stat['mean']:.6f}",
                f"{stat['std_err']:.6f}",
                f"{stat['ci_lower']:.6f}",
                f"{stat['ci_upper']:.6f}",
                f"{stat['median']:.6f}",
            ])


def print_summary(stats, comparison, n_seeds):
    print(f"\n📊 Summary Statistics ({n_seeds} seeds, CRN)")
    print("-" * 100)
    header = "Strategy".ljust(12)
    for metric_name in METRIC_NAMES:
        header += metric_name.rjust(18)
    print(header)
    print("-" * 100)
    for strategy in Strategy:
        row = strategy.value.ljust(12)
        for metric_name in METRIC_NAMES:
            stat = stats[(strategy.value, metric_name)]
            half = stat['ci_upper'] - stat['mean']
            row += f"{stat['mean']:.3f}±{half:.3f}".rjust(18)
        print(row)

    print("\n📈 Paired t-tests (binpack vs spread):")
    print("-" * 100)
    for metric_name, result in comparison.items():
        t_stat, p_value = result['t_stat'], result['p_value']
        sig = "***" if p_value < 0.01 else "**" if p_value < 0.05 else "*" if p_value < 0.10 else "ns"
        print(f"{metric_name:<18}  diff={result['mean_diff']:+.3f}  t={t_stat:+.2f}, p={p_value:.3f} {sig}")


def main(argv=None):
    args = parse_args(argv)
    base_seed = args.base_seed if args.base_seed is not None else int(np.random.randint(0, 2**31))
    seeds = list(range(base_seed, base_seed + args.seeds))

    print("=" * 100)
    print("Binpack vs Spread: multi-seed comparison with Common Random Numbers (CRN)")
    print("=" * 100)
    print(f"  Seeds: {args.seeds} ({base_seed} to {base_seed + args.seeds - 1})")
    print(f"  Cluster: {args.standard_nodes} standard + {args.gpu_nodes} GPU nodes")
    print(f"  Pods per seed: {args.pods}")

    all_results = collect(seeds, args.pods, args.standard_nodes, args.gpu_nodes)
    stats = compute_stats(all_results)
    comparison = compare_strategies(all_results)
    print_summary(stats, comparison, args.seeds)

    results_path = f"{args.output_prefix}_results.json"
    with open(results_path, 'w') as f:
        json.dump({
            'base_seed': base_seed,
            'seeds': seeds,
            'timestamp': datetime.now().isoformat(),
            'results': all_results,
            'comparison': comparison,
        }, f, indent=2)
    print(f"\n✓ Results saved to {results_path}")

    stats_path = f"{args.output_prefix}_stats.csv"
    write_stats_csv(stats, stats_path)
    print(f"✓ Pre-computed stats saved to {stats_path}")
    print(f"  Reproducibility: Run with --base-seed {base_seed} to recreate")
    return stats


if __name__ == "__main__":
    main()
