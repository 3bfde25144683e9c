from __future__ import annotations

import csv
import multiprocessing as mp
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

import yaml

from factorylights.aggregate import solve_machine
from factorylights.errors import FactoryError
from factorylights.parsing import read_machines
from factorylights.search import (
    DEFAULT_MAX_NULLITY,
    BruteForceSearch,
    GrayCodeSearch,
    VectorizedSearch,
)

DEFAULT_CONFIG = {
    "input": "input.txt",
    "output": "output_part_one.txt",
    "report": None,
    "search": "gray_code",
    "max_nullity": DEFAULT_MAX_NULLITY,
    "workers": 1,
    "batch_size": 50,
    "verbose": True,
}

FIELDNAMES = [
    "machine_id",
    "n",
    "m",
    "rank",
    "nullity",
    "particular_weight",
    "presses",
    "time_ms",
]

INT_FIELDS = FIELDNAMES[:-1]


def make_search(name: str, params=None):
    name = name.lower()
    params = params or {}
    max_nullity = params.get("max_nullity", DEFAULT_MAX_NULLITY)
    if name in ("brute_force", "bruteforce"):
        return BruteForceSearch(max_nullity=max_nullity)
    if name in ("gray_code", "gray"):
        return GrayCodeSearch(max_nullity=max_nullity)
    if name == "vectorized":
        return VectorizedSearch(
            max_nullity=max_nullity,
            chunk_size=params.get("chunk_size", 1 << 14),
        )
    raise ValueError(f"Unknown search: {name}")


def load_config(path=None) -> dict:
    """Read the ``factory`` section of a YAML config over the defaults."""
    cfg = dict(DEFAULT_CONFIG)
    if path is None:
        return cfg
    with open(path, "r", encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}
    section = loaded.get("factory", {}) or {}
    unknown = set(section) - set(DEFAULT_CONFIG) - {"chunk_size"}
    if unknown:
        raise ValueError(f"Unknown config keys: {sorted(unknown)}")
    cfg.update(section)
    return cfg


def make_batches(machines, batch_size):
    """Create job batches for parallel processing."""
    assert batch_size > 0, "batch_size must be positive"
    for lo in range(0, len(machines), batch_size):
        hi = min(lo + batch_size, len(machines))
        yield {"idx_lo": lo, "idx_hi": hi, "machines": machines[lo:hi]}


def _run_batch(job):
    """Solve one batch of machines and return one report row per machine."""
    search = make_search(job["search"], job.get("search_params"))
    rows = []
    for offset, machine in enumerate(job["machines"]):
        start_time = time.perf_counter()
        result = solve_machine(machine, search)
        time_ms = (time.perf_counter() - start_time) * 1000
        rows.append(
            {
                "machine_id": job["idx_lo"] + offset,
                "n": machine.n,
                "m": machine.m,
                "rank": result.rank,
                "nullity": result.nullity,
                "particular_weight": result.particular_weight,
                "presses": result.presses,
                "time_ms": time_ms,
            }
        )
    return rows


def _report_progress(done, total_jobs, total_rows, start_time):
    elapsed = time.time() - start_time
    pct = done / total_jobs if total_jobs else 1.0
    eta_seconds = (elapsed / done) * (total_jobs - done) if done else 0.0
    print(
        f"\r[progress] {done}/{total_jobs} batches ({pct:>6.1%}) | "
        f"{total_rows:>7,} machines | "
        f"elapsed: {int(elapsed // 60)}m {int(elapsed % 60)}s | "
        f"ETA: {int(eta_seconds // 60)}m {int(eta_seconds % 60)}s",
        end="",
        flush=True,
    )
    if done == total_jobs:
        print()


def run_pool(jobs, workers, total_jobs, max_inflight=None, verbose=False):
    """Run jobs in parallel; returns all rows ordered by machine_id."""
    ctx = mp.get_context("spawn")
    if max_inflight is None:
        max_inflight = workers * 3

    inflight = set()
    rows = []
    done = 0
    start_time = time.time()

    with ProcessPoolExecutor(max_workers=workers, mp_context=ctx) as ex:
        jobs_iter = iter(jobs)
        for j in jobs_iter:
            inflight.add(ex.submit(_run_batch, j))
            if len(inflight) >= max_inflight:
                break

        while inflight:
            fut = next(as_completed(inflight))
            inflight.remove(fut)
            try:
                batch_rows = fut.result()
            except FactoryError:
                # reported by the caller
                for other in inflight:
                    other.cancel()
                raise
            except Exception:
                import traceback

                print("\n[ERROR] Worker failed:")
                traceback.print_exc()
                for other in inflight:
                    other.cancel()
                raise
            rows.extend(batch_rows)
            done += 1
            if verbose:
                _report_progress(done, total_jobs, len(rows), start_time)

            # Submit next job to keep inflight bounded
            j = next(jobs_iter, None)
            if j is not None:
                inflight.add(ex.submit(_run_batch, j))

    rows.sort(key=lambda r: r["machine_id"])
    return rows


def write_report(rows, path) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        writer.writerows(rows)


def read_report(path) -> list[dict]:
    rows = []
    with open(path, "r", newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            parsed = {k: int(row[k]) for k in INT_FIELDS}
            parsed["time_ms"] = float(row["time_ms"])
            rows.append(parsed)
    return rows


def run(cfg: dict):
    """Solve every machine of ``cfg['input']`` and write the total.

    Parsing finishes before any solving starts, so a malformed line aborts
    the run without partial output. Returns (total, rows).
    """
    verbose = bool(cfg.get("verbose", False))
    machines = read_machines(cfg["input"])
    batch_size = int(cfg.get("batch_size", 50))
    workers = int(cfg.get("workers", 1))
    search_params = {"max_nullity": cfg.get("max_nullity", DEFAULT_MAX_NULLITY)}
    if "chunk_size" in cfg:
        search_params["chunk_size"] = int(cfg["chunk_size"])

    def job_stream():
        for j in make_batches(machines, batch_size):
            j.update({"search": cfg["search"], "search_params": search_params})
            yield j

    total_jobs = (len(machines) + batch_size - 1) // batch_size
    if verbose:
        print(
            f"[solve] {len(machines):,} machines in {total_jobs:,} batches "
            f"with {workers} worker(s), search={cfg['search']}"
        )

    start_time = time.time()
    if workers > 1 and total_jobs > 1:
        rows = run_pool(job_stream(), workers, total_jobs, verbose=verbose)
    else:
        rows = []
        for done, job in enumerate(job_stream(), start=1):
            rows.extend(_run_batch(job))
            if verbose:
                _report_progress(done, total_jobs, len(rows), start_time)

    total = sum(r["presses"] for r in rows)

    out_path = Path(cfg["output"])
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(str(total), encoding="utf-8")
    if cfg.get("report"):
        write_report(rows, cfg["report"])

    if verbose:
        elapsed = time.time() - start_time
        print(f"[solve] done in {int(elapsed / 60)}m {int(elapsed % 60)}s")
        print(f"[solve] output: {out_path}")
    return total, rows
