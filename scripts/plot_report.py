import argparse
import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from factorylights.evaluation.viz import (  # noqa: E402
    show_nullity_scatter,
    show_presses_histogram,
)
from factorylights.runner import read_report  # noqa: E402


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--report", required=True, help="CSV written by solve_factory.py")
    ap.add_argument("--out", default="results/report.png", help="Output PNG path")
    args = ap.parse_args(argv)

    rows = read_report(args.report)
    if not rows:
        print(f"[plot] {args.report} has no rows, nothing to plot.")
        return 1

    fig, axes = plt.subplots(1, 2, figsize=(10.5, 3.8), constrained_layout=True)
    show_presses_histogram(rows, ax=axes[0])
    show_nullity_scatter(rows, ax=axes[1])

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out, dpi=150)
    print(f"[plot] saved {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
