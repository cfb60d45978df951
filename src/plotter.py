"""
plotter.py
----------
Publication-quality charts for the stock composite report.

All figures use matplotlib with the Agg backend (headless / CI safe).
This is the only module that imports matplotlib.

Charts produced
---------------
1. Closing price time series with a +/- band.
2. Histogram of daily returns with the mean marked.
3. Correlation heatmap of the financial metrics.
4. Trading volume vs. price change scatter.
5. Composite 2x2 figure combining the four.
"""

import os
import warnings
import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")                     # headless rendering
import matplotlib.pyplot as plt
import matplotlib.gridspec as gridspec
from matplotlib.colors import LinearSegmentedColormap
from matplotlib.ticker import FuncFormatter
from typing import Dict, Optional

from src.config import ChartConfig, ReportConfig
from src.utils  import get_logger, format_volume

warnings.filterwarnings("ignore", category=UserWarning)

log = get_logger(__name__)

# --------------------------------------------------------------------------
# Style constants
# --------------------------------------------------------------------------
STYLE = {
    "bg":          "#f0f0f0",
    "panel":       "#ffffff",
    "text":        "#333333",
    "subtext":     "#666666",
    "muted":       "#888888",
    "axis":        "#444444",
    "edge":        "#7f7f7f",
    "grid":        "#d9d9d9",
    "blue":        "#1f77b4",
    "red":         "#d62728",
    "tomato":      "#FF6347",
    "dodger":      "#1E90FF",
    "neg":         "#4575B4",
    "pos":         "#D73027",
}
plt.rcParams.update({
    "figure.facecolor":  STYLE["bg"],
    "axes.facecolor":    STYLE["panel"],
    "axes.edgecolor":    STYLE["edge"],
    "axes.labelcolor":   STYLE["text"],
    "axes.labelweight":  "bold",
    "axes.titlecolor":   STYLE["text"],
    "xtick.color":       STYLE["axis"],
    "ytick.color":       STYLE["axis"],
    "text.color":        STYLE["text"],
    "grid.color":        STYLE["grid"],
    "grid.linewidth":    0.6,
    "legend.facecolor":  STYLE["panel"],
    "legend.edgecolor":  STYLE["grid"],
    "font.size":         10,
})

usd_fmt = FuncFormatter(lambda x, _: f"${x:,.0f}")
pct_fmt = FuncFormatter(lambda x, _: f"{x:.0f}%")
vol_fmt = FuncFormatter(lambda x, _: format_volume(x))

CORR_CMAP = LinearSegmentedColormap.from_list(
    "corr_div", [STYLE["neg"], "#ffffff", STYLE["pos"]]
)


def _save(fig, path: str, dpi: int = 150) -> str:
    """Save figure to PNG and close."""
    os.makedirs(os.path.dirname(path) if os.path.dirname(path) else ".", exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight", facecolor=STYLE["bg"])
    plt.close(fig)
    return path


def _titles(ax, title: str, subtitle: str, size: int = 13) -> None:
    ax.set_title(f"{title}\n", fontsize=size, fontweight="bold", color=STYLE["text"])
    ax.text(0.5, 1.02, subtitle, transform=ax.transAxes, ha="center", va="bottom",
            fontsize=size - 3, color=STYLE["subtext"])


def _caption(fig, text: str) -> None:
    fig.text(0.01, 0.005, text, ha="left", va="bottom", fontsize=8, color=STYLE["muted"])


# =============================================================================
# Panel drawers (shared by the single charts and the composite)
# =============================================================================
def _draw_closing_prices(ax, df: pd.DataFrame, cc: ChartConfig, years: str) -> None:
    dates, close = df["Date"], df["Close"]
    ax.fill_between(dates, close * (1 - cc.band_pct), close * (1 + cc.band_pct),
                    color=STYLE["blue"], alpha=0.1, lw=0)
    ax.plot(dates, close, color=STYLE["blue"], lw=1.2)
    _titles(ax, f"{cc.company} Stock Closing Prices ({years})",
            f"Time Series Plot of {cc.company} Stock Closing Price")
    ax.set_xlabel("Date")
    ax.set_ylabel("Closing Price (USD)")
    ax.yaxis.set_major_formatter(usd_fmt)
    ax.grid(True, alpha=0.8)


def _draw_returns_histogram(ax, df: pd.DataFrame, cc: ChartConfig, years: str) -> None:
    rets = df["Daily_Returns"].dropna()
    if not rets.empty:
        ax.hist(rets, bins=cc.hist_bins, color=STYLE["tomato"], edgecolor="black",
                alpha=0.8, label="Daily Returns")
        ax.axvline(rets.mean(), color=STYLE["dodger"], ls="--", lw=1.2,
                   label=f"Mean Return ({rets.mean():.3f}%)")
        ax.legend(loc="upper right", fontsize=8)
    _titles(ax, f"Histogram of {cc.company} Daily Returns",
            f"Distribution of daily percentage returns ({years})")
    ax.set_xlabel("Daily Returns (%)")
    ax.set_ylabel("Number of Trading Days")
    ax.grid(True, alpha=0.8)


def _draw_correlation_heatmap(ax, corr_long: pd.DataFrame, cc: ChartConfig,
                              years: str):
    metrics = list(dict.fromkeys(corr_long["MetricA"]))
    grid    = corr_long.pivot(index="MetricB", columns="MetricA", values="Value")
    grid    = grid.reindex(index=metrics, columns=metrics)

    im = ax.imshow(np.ma.masked_invalid(grid.to_numpy(dtype=float)), cmap=CORR_CMAP,
                   vmin=-1, vmax=1, origin="lower")
    ax.set_xticks(range(len(metrics)))
    ax.set_xticklabels(metrics, rotation=45, ha="right", fontsize=8, color="darkgrey")
    ax.set_yticks(range(len(metrics)))
    ax.set_yticklabels(metrics, fontsize=8, color="darkgrey")

    # Annotate cells
    for i, row in enumerate(metrics):
        for j, col in enumerate(metrics):
            val = grid.loc[row, col]
            ax.text(j, i, "n/a" if pd.isna(val) else f"{val:.2f}",
                    ha="center", va="center", color="black",
                    fontsize=7, fontweight="bold")

    _titles(ax, f"{cc.company} Stock Correlation Heatmap",
            f"Correlation between different financial metrics ({years})")
    ax.set_xlabel("Financial Metrics")
    ax.set_ylabel("Financial Metrics")
    return im


def _draw_volume_scatter(ax, df: pd.DataFrame, cc: ChartConfig):
    sc = ax.scatter(df["Volume"], df["Price_Change"], c=df["Price_Change"],
                    cmap=LinearSegmentedColormap.from_list(
                        "pc", [STYLE["blue"], STYLE["red"]]),
                    alpha=0.7, s=10)
    _titles(ax, "Scatter Plot of Trading Volume vs. Price Change",
            "Examining the relationship between trading volume and price changes")
    ax.set_xlabel("Trading Volume (Shares)")
    ax.set_ylabel("Price Change (USD)")
    ax.xaxis.set_major_formatter(vol_fmt)
    return sc


# =============================================================================
# Chart 1: Closing Prices
# =============================================================================
def plot_closing_prices(df: pd.DataFrame, cc: ChartConfig, years: str,
                        output_path: str) -> str:
    """
    Line chart of closing prices with a shaded +/- band_pct ribbon.

    Returns
    -------
    str : Path to saved PNG.
    """
    fig, ax = plt.subplots(figsize=(12, 6))
    _draw_closing_prices(ax, df, cc, years)
    _caption(fig, f"{cc.source_label} - {cc.ticker}.CSV")
    fig.tight_layout()
    return _save(fig, output_path, cc.dpi)


# =============================================================================
# Chart 2: Daily Returns Histogram
# =============================================================================
def plot_returns_histogram(df: pd.DataFrame, cc: ChartConfig, years: str,
                           output_path: str) -> str:
    """Histogram of Daily_Returns with a dashed line at the mean."""
    fig, ax = plt.subplots(figsize=(11, 6))
    _draw_returns_histogram(ax, df, cc, years)
    _caption(fig, f"Data Source: {cc.source_label} - {cc.ticker}.CSV")
    fig.tight_layout()
    return _save(fig, output_path, cc.dpi)


# =============================================================================
# Chart 3: Correlation Heatmap
# =============================================================================
def plot_correlation_heatmap(corr_long: pd.DataFrame, cc: ChartConfig, years: str,
                             output_path: str) -> str:
    """
    Tile heatmap built from the long (MetricA, MetricB, Value) form.

    Parameters
    ----------
    corr_long : Output of correlation.melt_correlation().

    Returns
    -------
    str : Path to saved PNG, or "" when there is nothing to draw.
    """
    if corr_long.empty:
        return ""
    n = corr_long["MetricA"].nunique()
    fig, ax = plt.subplots(figsize=(max(7, n * 1.1 + 3), max(6, n * 1.0 + 2)))
    im = _draw_correlation_heatmap(ax, corr_long, cc, years)
    plt.colorbar(im, ax=ax, label="Correlation")
    _caption(fig, f"Data Source: {cc.source_label} - {cc.ticker}.CSV")
    fig.tight_layout()
    return _save(fig, output_path, cc.dpi)


# =============================================================================
# Chart 4: Volume vs Price Change
# =============================================================================
def plot_volume_vs_price_change(df: pd.DataFrame, cc: ChartConfig,
                                output_path: str) -> str:
    """Scatter of Volume against Price_Change, colored by Price_Change."""
    fig, ax = plt.subplots(figsize=(11, 6))
    sc = _draw_volume_scatter(ax, df, cc)
    plt.colorbar(sc, ax=ax, label="Price Change")
    _caption(fig, f"Data Source: {cc.source_label} - {cc.ticker}.CSV")
    fig.tight_layout()
    return _save(fig, output_path, cc.dpi)


# =============================================================================
# Chart 5: Composite
# =============================================================================
def plot_composite(df: pd.DataFrame, corr_long: pd.DataFrame, cc: ChartConfig,
                   years: str, output_path: str) -> str:
    """
    Single 2x2 figure: closing prices, returns histogram, correlation
    heatmap and volume scatter.

    Returns
    -------
    str : Path to saved PNG.
    """
    fig = plt.figure(figsize=(20, 14))
    fig.suptitle(
        f"Composite Visualization of {cc.company} Stock Data ({years})",
        fontsize=18, fontweight="bold", color=STYLE["text"], y=0.995,
    )
    gs = gridspec.GridSpec(2, 2, figure=fig, hspace=0.45, wspace=0.3)

    _draw_closing_prices(fig.add_subplot(gs[0, 0]), df, cc, years)
    _draw_returns_histogram(fig.add_subplot(gs[0, 1]), df, cc, years)

    ax_hm = fig.add_subplot(gs[1, 0])
    if not corr_long.empty:
        im = _draw_correlation_heatmap(ax_hm, corr_long, cc, years)
        fig.colorbar(im, ax=ax_hm, label="Correlation")

    ax_sc = fig.add_subplot(gs[1, 1])
    sc    = _draw_volume_scatter(ax_sc, df, cc)
    fig.colorbar(sc, ax=ax_sc, label="Price Change")

    _caption(fig, f"Data Source: {cc.source_label} - {cc.ticker}.CSV")
    return _save(fig, output_path, cc.dpi)


# =============================================================================
# Report
# =============================================================================
def render_report(result, cfg: ReportConfig,
                  output_dir: Optional[str] = None) -> Dict[str, str]:
    """
    Write all five charts for a PipelineResult.

    Returns
    -------
    dict : chart name -> saved PNG path ("" for skipped charts).
    """
    out   = output_dir or os.path.join(cfg.output_dir, "charts")
    cc    = cfg.charts
    years = cfg.year_label
    df    = result.derived.dropna(subset=["Close"])
    tick  = cc.ticker.lower()

    if df.empty:
        log.warning("No rows to plot for %s; charts skipped.", years)
        return {}

    paths = {
        "closing_prices":   plot_closing_prices(
            df, cc, years, os.path.join(out, f"{tick}_closing_prices.png")),
        "returns_histogram": plot_returns_histogram(
            df, cc, years, os.path.join(out, f"{tick}_returns_histogram.png")),
        "correlation_heatmap": plot_correlation_heatmap(
            result.correlation_long, cc, years,
            os.path.join(out, f"{tick}_correlation_heatmap.png")),
        "volume_scatter":   plot_volume_vs_price_change(
            df, cc, os.path.join(out, f"{tick}_volume_vs_price_change.png")),
        "composite":        plot_composite(
            df, result.correlation_long, cc, years,
            os.path.join(out, f"{tick}_composite.png")),
    }
    for name, path in paths.items():
        if path:
            log.info("Saved %s: %s", name, path)
    return paths
