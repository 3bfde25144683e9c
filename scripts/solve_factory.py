import argparse
import multiprocessing as mp
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from factorylights.errors import FactoryError  # noqa: E402
from factorylights.runner import load_config, run  # noqa: E402

# Limit threads per worker
os.environ["OMP_NUM_THREADS"] = "1"
os.environ["OPENBLAS_NUM_THREADS"] = "1"
os.environ["MKL_NUM_THREADS"] = "1"


def main(argv=None):
    ap = argparse.ArgumentParser(
        description="Fewest button presses to configure every factory machine."
    )
    ap.add_argument(
        "--config",
        default=None,
        help="YAML config (see experiments/configs/factory.yaml)",
    )
    ap.add_argument("--input", default=None, help="Puzzle input path")
    ap.add_argument("--out", default=None, help="Output path for the total")
    ap.add_argument("--report", default=None, help="Per-machine CSV report")
    ap.add_argument("--workers", type=int, default=None, help="Number of workers")
    ap.add_argument(
        "--search",
        choices=["brute_force", "gray_code", "vectorized"],
        default=None,
    )
    ap.add_argument(
        "--max-nullity",
        type=int,
        default=None,
        help="Largest nullity to enumerate exhaustively (negative = unbounded)",
    )
    ap.add_argument("--quiet", action="store_true")
    args = ap.parse_args(argv)

    cfg = load_config(args.config)
    overrides = {
        "input": args.input,
        "output": args.out,
        "report": args.report,
        "workers": args.workers,
        "search": args.search,
    }
    cfg.update({k: v for k, v in overrides.items() if v is not None})
    if args.max_nullity is not None:
        cfg["max_nullity"] = None if args.max_nullity < 0 else args.max_nullity
    if args.quiet:
        cfg["verbose"] = False

    try:
        total, _ = run(cfg)
    except FactoryError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1
    print(total)
    return 0


if __name__ == "__main__":
    mp.freeze_support()
    sys.exit(main())
