"""Generate a bar chart of stored summation benchmark results."""

from __future__ import annotations

import argparse
import glob
import logging
from pathlib import Path

import polars as pl
from plotnine import (
    aes,
    coord_flip,
    element_text,
    facet_wrap,
    geom_col,
    geom_text,
    ggplot,
    labs,
    scale_fill_manual,
    theme,
    theme_minimal,
)

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)

FAMILY_COLORS = {
    "c": "#2ca02c",
    "python": "#d62728",
    "numpy": "#1f77b4",
    "numba": "#9467bd",
}


def main():
    """Generate benchmark plot from CLI arguments."""
    parser = argparse.ArgumentParser(description="Generate summation benchmark bar chart")
    parser.add_argument(
        "--output-dir",
        type=str,
        default="benchmark/output",
        help="Directory containing benchmark CSV files",
    )
    parser.add_argument(
        "--output-file",
        type=str,
        default="benchmark_sum.png",
        help="Output filename for the plot",
    )
    parser.add_argument(
        "--pattern",
        type=str,
        default="benchmark_*.csv",
        help="Glob pattern of CSV files to include",
    )
    parser.add_argument("--dpi", type=int, default=150, help="DPI for output image")
    parser.add_argument("--width", type=int, default=12, help="Figure width in inches")
    parser.add_argument("--height", type=int, default=5, help="Figure height in inches")

    args = parser.parse_args()

    generate_plot(
        output_dir=args.output_dir,
        output_file=args.output_file,
        pattern=args.pattern,
        dpi=args.dpi,
        figsize=(args.width, args.height),
    )


def load_benchmark_data(output_dir: str, pattern: str = "benchmark_*.csv") -> pl.DataFrame:
    """Load stored results, keeping the fastest run per routine and array length."""
    frames = []
    for f in sorted(glob.glob(str(Path(output_dir) / pattern))):
        try:
            frames.append(pl.read_csv(f).select(["n_elements", "routine", "family", "min_time"]))
        except (OSError, pl.exceptions.ComputeError, pl.exceptions.ColumnNotFoundError) as e:
            logger.warning(f"Error reading {f}: {e}")

    if not frames:
        return pl.DataFrame()

    df = pl.concat(frames)
    return (
        df.group_by(["n_elements", "routine", "family"])
        .agg(pl.col("min_time").min())
        .with_columns(
            (pl.col("min_time") * 1000).alias("time_ms"),
            (pl.col("min_time") / pl.col("min_time").min().over("n_elements")).alias("relative"),
        )
        .sort(["n_elements", "time_ms"])
    )


def generate_plot(
    output_dir: str = "benchmark/output",
    output_file: str = "benchmark_sum.png",
    pattern: str = "benchmark_*.csv",
    dpi: int = 150,
    figsize: tuple[int, int] = (12, 5),
) -> Path | None:
    """Generate the summation benchmark bar chart."""
    df = load_benchmark_data(output_dir, pattern)
    if df.is_empty():
        logger.error("No benchmark data found")
        return None

    logger.info(f"{df.height} routine timings across {df['n_elements'].n_unique()} array lengths")

    df = df.with_columns(
        pl.col("relative").map_elements(lambda v: f"{v:.1f}x", return_dtype=pl.Utf8).alias("label"),
        pl.col("n_elements").map_elements(lambda n: f"{n:,} elements", return_dtype=pl.Utf8).alias("panel"),
    )

    # Convert to pandas for plotnine compatibility
    p = (
        ggplot(df.to_pandas(), aes(x="reorder(routine, time_ms)", y="time_ms", fill="family"))
        + geom_col()
        + geom_text(aes(label="label"), ha="left", size=8)
        + coord_flip()
        + facet_wrap("~panel", scales="free_x")
        + scale_fill_manual(values=FAMILY_COLORS)
        + labs(
            x="Routine",
            y="Minimum time (ms)",
            fill="Family",
            title="Array Summation: Minimum Time per Routine",
        )
        + theme_minimal()
        + theme(
            figure_size=figsize,
            plot_title=element_text(size=14, weight="bold"),
            strip_text=element_text(size=11, weight="bold"),
            legend_position="bottom",
        )
    )

    output_path = Path(output_dir) / output_file
    p.save(output_path, dpi=dpi)
    logger.info(f"Plot saved to {output_path}")
    return output_path


if __name__ == "__main__":
    main()
