"""
Tests for the command line entry point and run plots.

Run with: python -m pytest tests/test_cli.py -v
"""

import argparse
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import matplotlib.pyplot as plt

from evonet.__main__ import main, parse_group
from evonet.datasets.toy import constant_pair
from evonet.evolution import EvolutionConfig, EvolutionEngine
from evonet.visualization.plots import plot_error_trajectory, plot_topology, save_figure


class TestParseGroup:
    """Tests for DIR=LABEL parsing."""

    def test_valid(self):
        assert parse_group('data/shots=1') == ('data/shots', 1.0)
        assert parse_group('a=b=0.5') == ('a=b', 0.5)

    def test_invalid(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_group('data/shots')
        with pytest.raises(argparse.ArgumentTypeError):
            parse_group('data/shots=yes')
        with pytest.raises(argparse.ArgumentTypeError):
            parse_group('=1')


class TestMain:
    """End-to-end runs of the CLI."""

    def test_toy_run_converges(self, capsys):
        code = main([
            '--toy', 'constant_pair',
            '--target-error', '0.5',
            '--population', '4',
            '--survivors', '2',
            '--max-generations', '2000',
            '--seed', '0',
        ])
        out = capsys.readouterr().out

        assert code == 0
        assert 'Best model' in out
        assert 'Layer 0' in out

    def test_unreached_target_exit_code(self, capsys):
        code = main([
            '--toy', 'linear_sum',
            '--target-error', '-1',
            '--population', '6',
            '--survivors', '2',
            '--max-generations', '2',
            '--seed', '1',
        ])
        assert code == 1
        assert 'Generations: 2' in capsys.readouterr().out

    def test_csv_run_with_plots(self, tmp_path, capsys):
        data = tmp_path / 'shots'
        data.mkdir()
        (data / 'a_X__AXIS.csv').write_text('1\n2\n')
        (data / 'b_Y__AXIS.csv').write_text('3\n4\n')

        prefix = tmp_path / 'plots' / 'run'
        code = main([
            '--data', f'{data}=1',
            '--target-error', '0',
            '--population', '6',
            '--survivors', '2',
            '--max-generations', '3',
            '--seed', '2',
            '--plot', str(prefix),
        ])

        assert code in (0, 1)
        assert (tmp_path / 'plots' / 'run_error.png').exists()
        assert (tmp_path / 'plots' / 'run_topology.png').exists()

    def test_requires_a_source(self):
        with pytest.raises(SystemExit):
            main(['--target-error', '0.5'])


class TestPlots:
    """Tests for run history plots."""

    @pytest.fixture
    def history(self):
        engine = EvolutionEngine(EvolutionConfig(population_size=6, survivor_count=2), seed=0)
        engine.add_data(constant_pair())
        return engine.train(-1.0, max_generations=4).history

    def test_plot_error_trajectory(self, history):
        fig = plot_error_trajectory(history, title='Run')
        assert isinstance(fig, plt.Figure)
        assert len(fig.axes) == 2
        plt.close(fig)

    def test_plot_topology(self, history, tmp_path):
        fig = plot_topology(history)
        path = save_figure(fig, tmp_path / 'topology.png')
        assert path.exists()


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
