from datetime import date
from pathlib import Path
from typing import List, Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import matplotlib.dates as mdates  # noqa: E402
from matplotlib.dates import date2num  # noqa: E402
from matplotlib import ticker  # noqa: E402

from core.reporting.contexts import GanttTaskBar  # noqa: E402


class GanttPngRenderer:
    def render(
        self,
        bars: List[GanttTaskBar],
        output_path: Path,
        title: str = "Project Gantt Chart",
        today: Optional[date] = None,
    ) -> Path:
        bars = [b for b in bars if b.start and b.end]
        if not bars:
            raise ValueError("No tasks with dates available for Gantt chart")

        bars.sort(key=lambda b: (b.start, b.end or b.start))

        names = [b.name for b in bars]
        fig, ax = plt.subplots(figsize=(12, max(3, 0.35 * len(bars) + 1.5)))

        for i, b in enumerate(bars):
            start = date2num(b.start)
            if b.is_milestone:
                ax.plot(start, i, marker="D", markersize=8,
                        color="#cc0000" if b.is_critical else "#333399")
                continue
            dur = (b.end - b.start).days
            ax.barh(i, dur, left=start, height=0.4,
                    color="#ffcccc" if b.is_critical else "#d0d0ff",
                    edgecolor="black", linewidth=0.6)
            if b.percent_complete > 0:
                ax.barh(i, dur * b.percent_complete / 100.0, left=start, height=0.4,
                        color="#ff6666" if b.is_critical else "#8080ff")

        ax.set_yticks(range(len(names)))
        ax.set_yticklabels(names, fontsize=9)
        ax.invert_yaxis()

        locator = mdates.AutoDateLocator(minticks=4, maxticks=10)
        ax.xaxis.set_major_locator(locator)
        ax.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator))
        ax.xaxis.set_minor_locator(ticker.NullLocator())

        if today is not None:
            ax.axvline(date2num(today), color="red", linestyle="--", linewidth=1)

        ax.set_title(title)
        ax.grid(True, axis="x", linestyle=":", linewidth=0.5)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)

        return output_path
