"""Charts of the player's game history."""

from __future__ import annotations
import os
from typing import Iterable, List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .history import HistoryEntry
from .stats import summarize


class HistoryVisualizer:
    """
    Chart generator for won games.

    Creates PNG charts of solve times and hint usage per difficulty.
    """

    # Color palette for difficulties
    COLORS = {
        "tutorial": "#95a5a6",  # Grey
        "facil": "#2ecc71",     # Green
        "medio": "#3498db",     # Blue
        "dificil": "#e67e22",   # Orange
        "expert": "#e74c3c",    # Red
    }

    def __init__(self, entries: Iterable[HistoryEntry], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            entries: History entries, newest first (as History keeps them).
            output_dir: Directory to save generated charts.
        """
        self.entries = list(entries)
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files. Empty if there is no history.
        """
        if not self.entries:
            return []

        return [
            self.plot_time_by_difficulty(),
            self.plot_time_trend(),
            self.plot_hints_used(),
        ]

    def plot_time_by_difficulty(self) -> str:
        """Bar chart of average solve time per difficulty, with best times marked."""
        summary = summarize(self.entries)
        difficulties = list(summary)
        avg_times = [summary[d]["avg_time"] for d in difficulties]
        best_times = [summary[d]["best_time"] for d in difficulties]
        colors = [self.COLORS.get(d, "#7f8c8d") for d in difficulties]

        fig, ax = plt.subplots(figsize=(10, 6))
        bars = ax.bar(difficulties, avg_times, color=colors, edgecolor='black', linewidth=0.5,
                      label='Average')
        ax.scatter(difficulties, best_times, color='black', marker='D', zorder=3, label='Best')

        for bar, avg in zip(bars, avg_times):
            ax.annotate(f'{avg:.0f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Solve Time by Difficulty', fontsize=14, fontweight='bold')
        ax.set_xticks(range(len(difficulties)))
        ax.set_xticklabels([d.capitalize() for d in difficulties])
        ax.set_ylim(bottom=0)
        ax.legend()

        return self._save(fig, "time_by_difficulty.png")

    def plot_time_trend(self) -> str:
        """Solve time of each game in the order it was played."""
        chronological = list(reversed(self.entries))
        games = np.arange(1, len(chronological) + 1)
        times = [e.time for e in chronological]
        difficulties = [e.difficulty for e in chronological]
        palette = {d: self.COLORS.get(d, "#7f8c8d") for d in set(difficulties)}

        fig, ax = plt.subplots(figsize=(12, 6))
        ax.plot(games, times, color='#bdc3c7', linewidth=1, zorder=1)
        sns.scatterplot(x=games, y=times, hue=difficulties, palette=palette,
                        s=60, edgecolor='black', ax=ax, zorder=2)

        ax.set_xlabel('Game', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Solve Time per Game', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)
        ax.legend(title='Difficulty')

        return self._save(fig, "time_trend.png")

    def plot_hints_used(self) -> str:
        """Bar chart of average hints used per difficulty."""
        summary = summarize(self.entries)
        difficulties = list(summary)
        hints = [summary[d]["avg_hints_used"] for d in difficulties]
        colors = [self.COLORS.get(d, "#7f8c8d") for d in difficulties]

        fig, ax = plt.subplots(figsize=(10, 6))
        ax.bar(difficulties, hints, color=colors, edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Difficulty', fontsize=12)
        ax.set_ylabel('Average Hints Used', fontsize=12)
        ax.set_title('Hint Usage by Difficulty', fontsize=14, fontweight='bold')
        ax.set_xticks(range(len(difficulties)))
        ax.set_xticklabels([d.capitalize() for d in difficulties])
        ax.set_ylim(bottom=0)

        return self._save(fig, "hints_used.png")

    def _save(self, fig, filename: str) -> str:
        fig.tight_layout()
        path = os.path.join(self.output_dir, filename)
        fig.savefig(path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        return path
