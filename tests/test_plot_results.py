"""
Tests for chart generation.
"""
import pytest
from test_utils import *
import plot_results
from strategy_comparison import collect, compute_stats, write_stats_csv


def test_plot_node_usage(tmp_path, capsys):
    cluster = create_test_cluster(("cpu", 1000, 1024, 0, (500, 512, 0)), ("gpu", 4000, 8192, 2, (0, 0, 1)))
    target = tmp_path / "usage.png"

    plot_results.plot_node_usage(cluster, target)

    assert target.exists()
    assert "Generated" in capsys.readouterr().out


def test_stats_csv_round_trip_and_plot(tmp_path):
    stats = compute_stats(collect([1, 2], num_pods=10, num_standard=2, num_gpu=1))
    csv_path = tmp_path / "stats.csv"
    write_stats_csv(stats, csv_path)

    loaded = plot_results.load_stats(csv_path)

    assert set(loaded) == set(stats)
    key = ("spread", "placement_rate")
    assert loaded[key]['mean'] == pytest.approx(stats[key]['mean'], abs=1e-6)

    target = tmp_path / "cmp.png"
    plot_results.plot_strategy_comparison(loaded, target, metric_names=["placement_rate", "cpu_util"])
    assert target.exists()


def test_main_reports_missing_csv(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["plot_results.py", str(tmp_path / "missing.csv")])

    with pytest.raises(SystemExit):
        plot_results.main()
    assert "not found" in capsys.readouterr().out


def test_main_reports_empty_csv(tmp_path, monkeypatch, capsys):
    empty = tmp_path / "empty.csv"
    write_stats_csv({}, empty)
    monkeypatch.setattr("sys.argv", ["plot_results.py", str(empty)])

    with pytest.raises(SystemExit) as excinfo:
        plot_results.main()
    assert excinfo.value.code == 1
    assert "has no statistics" in capsys.readouterr().out


def test_plot_strategy_comparison_rejects_empty_stats(tmp_path):
    with pytest.raises(ValueError):
        plot_results.plot_strategy_comparison({}, tmp_path / "empty.png")
