#!/usr/bin/env python3
"""Tile Index Demo Driver

Runs concurrent writer and reader threads against one TileIndex and writes
per-sample counters to CSV.

Usage:
    python demo/tile_index_demo_driver.py --writers 4 --readers 4 --duration-seconds 10
"""

from __future__ import annotations

import argparse
import csv
import logging
import random
import threading
import time
from collections import defaultdict

from tile_index import TileIndex, TileIndexConfig, quadkey, tile_from_quadkey


def random_quadkey(rng: random.Random, max_zoom: int) -> str:
    return "".join(rng.choice("0123") for _ in range(rng.randint(1, max_zoom)))


def run_demo(args: argparse.Namespace) -> None:
    """Run the demo workload and collect counters."""
    cfg = TileIndexConfig(max_zoom=args.max_zoom, sort_log_threshold=args.sort_log_threshold)
    counters = defaultdict(int)
    counters_lock = threading.Lock()
    stop = threading.Event()

    def bump(name: str, n: int = 1) -> None:
        with counters_lock:
            counters[name] += n

    print(f"Starting tile index demo for {args.duration_seconds}s...")
    print(f"Workload: writers={args.writers}, readers={args.readers}, max_zoom={args.max_zoom}")
    print(f"Output: {args.out_csv}")

    with TileIndex(cfg) as idx:

        def writer(seed: int) -> None:
            rng = random.Random(seed)
            while not stop.is_set():
                idx.insert(tile_from_quadkey(random_quadkey(rng, args.max_zoom)), seed)
                bump("inserts")

        def reader(seed: int) -> None:
            rng = random.Random(seed)
            while not stop.is_set():
                if rng.random() < args.range_fraction:
                    n = sum(1 for _ in idx.tile_range(args.range_zmin, args.range_zmax))
                    bump("range_scans")
                    bump("range_tiles", n)
                else:
                    vals = idx.values(tile_from_quadkey(random_quadkey(rng, 3)))
                    bump("lookups")
                    bump("lookup_values", len(vals))

        threads = [threading.Thread(target=writer, args=(i,), daemon=True) for i in range(args.writers)]
        threads += [
            threading.Thread(target=reader, args=(1000 + i,), daemon=True) for i in range(args.readers)
        ]
        for t in threads:
            t.start()

        with open(args.out_csv, "w", newline="") as f:
            w = csv.writer(f)
            header = ["ts_ms", "entries", "inserts", "lookups", "lookup_values", "range_scans", "range_tiles"]
            w.writerow(header)

            t_start = time.time()
            t_end = t_start + args.duration_seconds
            while time.time() < t_end:
                time.sleep(args.sample_ms / 1000.0)
                with counters_lock:
                    snapshot = dict(counters)
                w.writerow([
                    int((time.time() - t_start) * 1000),
                    len(idx),
                    snapshot.get("inserts", 0),
                    snapshot.get("lookups", 0),
                    snapshot.get("lookup_values", 0),
                    snapshot.get("range_scans", 0),
                    snapshot.get("range_tiles", 0),
                ])

        stop.set()
        for t in threads:
            t.join(timeout=5.0)

        coverage = [quadkey(t) for t in idx.tile_range(1, 1)]
        print(f"Done: {len(idx)} entries, zoom-1 coverage {sorted(coverage)}")
        print(f"Counters: {dict(counters)}")


def main() -> None:
    ap = argparse.ArgumentParser(description="Concurrent workload against TileIndex")
    ap.add_argument("--writers", type=int, default=2)
    ap.add_argument("--readers", type=int, default=2)
    ap.add_argument("--duration-seconds", type=float, default=5.0)
    ap.add_argument("--sample-ms", type=int, default=250)
    ap.add_argument("--max-zoom", type=int, default=12)
    ap.add_argument("--range-zmin", type=int, default=2)
    ap.add_argument("--range-zmax", type=int, default=4)
    ap.add_argument("--range-fraction", type=float, default=0.1, help="Fraction of reads that are range scans")
    ap.add_argument("--sort-log-threshold", type=int, default=10_000)
    ap.add_argument("--out-csv", default="tile_index_demo.csv")
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_demo(args)


if __name__ == "__main__":
    main()
