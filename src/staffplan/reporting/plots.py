from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

from staffplan.input_data import InputData
from staffplan.score import ScoreResult

from .metrics import skill_coverage_by_day
from .text_report import get_active_report


def _save(fig: plt.Figure, out_dir: Path, filename: str) -> Path:
    """Persist the plot under out_dir and hand it to the active report."""
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / filename
    fig.savefig(path, dpi=fig.dpi, bbox_inches="tight")
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)
    else:
        plt.close(fig)
    return path


def show_daily_profit(
    res: ScoreResult, out_dir: Path, enable_plot: bool = True
) -> Path | None:
    """Bars of daily profit with the capacity line on a twin axis."""
    if not enable_plot:
        return None
    df = res.day_breakdown()
    if df.empty:
        return None

    days = df["day_id"].tolist()
    profits = df["profit"].astype(float).tolist()
    colors = ["tab:green" if p >= 0 else "tab:red" for p in profits]

    fig, ax = plt.subplots(figsize=(7.5, 4), dpi=150)
    ax.set_title("Daily profit and capacity", pad=35)
    ax.bar(days, profits, color=colors, alpha=0.8, width=0.9, edgecolor="none")
    ax.axhline(0, color="0.6", linewidth=0.8)
    ax.set_xlabel("Day")
    ax.set_ylabel("Profit")
    ax.spines["top"].set_visible(False)

    ax_cap = ax.twinx()
    ax_cap.plot(
        days,
        df["capacity"].astype(float).tolist(),
        color="black",
        linewidth=1,
        label="Capacity",
    )
    ax_cap.set_ylim(0, 1.05)
    ax_cap.set_ylabel("Capacity")
    ax_cap.spines["top"].set_visible(False)
    ax.xaxis.set_major_locator(plt.MaxNLocator(integer=True))

    fig.tight_layout(rect=(0, 0, 1, 0.92))
    return _save(fig, out_dir, "daily_profit.png")


def show_skill_coverage(
    res: ScoreResult, data: InputData, out_dir: Path, enable_plot: bool = True
) -> Path | None:
    """Heat map of per-skill coverage ratio by day."""
    if not enable_plot:
        return None
    grid = skill_coverage_by_day(res, data)
    if grid.empty or grid.shape[1] == 0:
        return None

    fig, ax = plt.subplots(
        figsize=(max(6.0, 0.25 * len(grid.index)), 1.5 + 0.4 * grid.shape[1]),
        dpi=150,
    )
    img = ax.imshow(
        grid.T.to_numpy(),
        aspect="auto",
        cmap="RdYlGn",
        vmin=0.0,
        vmax=1.0,
        interpolation="nearest",
    )
    ax.set_yticks(range(grid.shape[1]), list(grid.columns))
    step = max(1, len(grid.index) // 20)
    ticks = list(range(0, len(grid.index), step))
    ax.set_xticks(ticks, [str(grid.index[i]) for i in ticks])
    ax.set_xlabel("Day")
    ax.set_title("Skill coverage by day (blank = not demanded)")
    fig.colorbar(img, ax=ax, fraction=0.03, pad=0.02)
    fig.tight_layout()
    return _save(fig, out_dir, "skill_coverage_by_day.png")
