"""
Plot the veering drift graphic for a recorded walking session.

This script analyses a session file, prints the results label and saves the
drift trace with its filled triangle (red for left, blue for right).

Usage:
    python3 plot_veering.py --session sessions/sample_walk.json
    python3 plot_veering.py --session sessions/sample_walk.json --output walk.png --window-ms 3000
"""

import argparse
import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon as PolygonPatch

import veering
from veering import constants


def plot_report(report: veering.VeeringReport, title: str, output_path: Path) -> None:
    """
    Draw the drift trace and triangle for a complete report.

    Args:
        report: Report from analyze_session() with a result.
        title: Figure title.
        output_path: Path to save the plot.
    """
    width = report.canvas_width
    height = report.canvas_height
    points = report.path_points

    fig, ax = plt.subplots(figsize=(5, 5 * height / width))

    outline = veering.close_trace(points, width)
    fill = constants.DIRECTION_COLORS.get(report.result.direction.value)
    if outline and fill:
        ax.add_patch(PolygonPatch(outline, closed=True, facecolor=fill, alpha=0.6, edgecolor='black'))

    ax.plot([p.x for p in points], [p.y for p in points], color='black', linewidth=1.5)
    ax.axvline(width / 2, color='gray', linestyle='--', linewidth=1)

    ax.set_xlim(0, width)
    # Canvas y grows downward, the walk starts at the bottom
    ax.set_ylim(height, 0)
    ax.set_aspect('equal')
    ax.set_title(title, fontsize=10, fontweight='bold')
    ax.set_xlabel(veering.display_text(report.result), fontsize=9)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    print(f"Saved veering plot to: {output_path}")
    plt.close(fig)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Plot the veering drift graphic for a walking session"
    )
    parser.add_argument(
        "--session",
        type=str,
        default=str(constants.DEFAULT_SESSION_FILE),
        help="Path to session JSON file (default: sessions/sample_walk.json)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output PNG path (default: <session stem>_veering.png)"
    )
    parser.add_argument(
        "--width",
        type=float,
        default=constants.DEFAULT_CANVAS_WIDTH,
        help=f"Canvas width (default: {constants.DEFAULT_CANVAS_WIDTH})"
    )
    parser.add_argument(
        "--height",
        type=float,
        default=constants.DEFAULT_CANVAS_HEIGHT,
        help=f"Canvas height (default: {constants.DEFAULT_CANVAS_HEIGHT})"
    )
    parser.add_argument(
        "--window-ms",
        type=int,
        default=constants.ENDPOINT_WINDOW_MS,
        help="Average start/end headings over this many milliseconds (default: 0, off)"
    )

    args = parser.parse_args(argv)

    session_file = Path(args.session)
    if not session_file.exists():
        print(f"Error: Session file not found: {session_file}")
        return 1

    try:
        record = veering.load_session(session_file)
        report = veering.analyze_session(
            record,
            canvas_width=args.width,
            canvas_height=args.height,
            endpoint_window_ms=args.window_ms,
        )
    except ValueError as exc:
        print(f"Error: {exc}")
        return 1

    print(veering.report_message(report))
    if report.result is None:
        return 0

    output_path = Path(args.output) if args.output else session_file.with_name(f"{session_file.stem}_veering.png")
    plot_report(report, session_file.name, output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
