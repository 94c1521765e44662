#!/usr/bin/env python3
"""Benchmark suite timing Redis list vs. sorted-set insertion and neighbor lookup."""

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import plotly.graph_objects as go
from tqdm import tqdm

from redisbench import RedisList, RedisSortedSet, lookup
from redisbench.config import Settings
from redisbench.data import generate_records
from redisbench.store import connect
from redisbench.timing import Stopwatch, time_operation

logger = logging.getLogger("redisbench.bench")


class Metrics:
    def __init__(self):
        self.insert_seconds: Optional[float] = None
        self.lookup_latencies: List[float] = []

    def to_dict(self) -> Dict:
        out: Dict = {"insert_seconds": self.insert_seconds}
        if self.lookup_latencies:
            out["lookup_latencies"] = {
                "p50": float(np.percentile(self.lookup_latencies, 50)),
                "p95": float(np.percentile(self.lookup_latencies, 95)),
                "p99": float(np.percentile(self.lookup_latencies, 99)),
                "mean": float(np.mean(self.lookup_latencies)),
            }
        return out


def plot_latencies(metrics: Dict[str, Metrics], title: str, output_path: Path):
    fig = go.Figure()
    for name, m in metrics.items():
        if m.lookup_latencies:
            fig.add_trace(go.Box(
                y=m.lookup_latencies,
                name=f"{name} neighbor lookup",
                boxpoints="outliers"
            ))

    fig.update_layout(
        title=title,
        yaxis_title="Latency (ms)",
        boxmode="group"
    )

    fig.write_html(output_path)


class BenchmarkSuite:
    def __init__(self, client, records: List[int], num_lookups: int):
        self.client = client
        self.records = records
        self.num_lookups = min(num_lookups, len(records))
        self.metrics: Dict[str, Metrics] = {}

    async def run_list_benchmark(self):
        metrics = self.metrics["list"] = Metrics()
        lst = RedisList(self.client)
        print("List Testing")
        metrics.insert_seconds = await time_operation(
            "Insert all data into a list", lambda: lst.bulk_insert(self.records)
        )

        sw = Stopwatch()
        for i in tqdm(range(self.num_lookups), desc="List neighbor lookup"):
            with sw:
                await lookup(lst, i)
        metrics.lookup_latencies = sw.samples
        await lst.delete()

    async def run_sorted_set_benchmark(self):
        metrics = self.metrics["sorted_set"] = Metrics()
        zset = RedisSortedSet(self.client)
        print("Sorted Set Testing")
        metrics.insert_seconds = await time_operation(
            "Insert all data into a sorted set", lambda: zset.bulk_insert(self.records)
        )
        await zset.delete()


async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--settings", type=Path, default=None, help="Path to appsettings.json")
    parser.add_argument("--url", default=None, help="Redis URL (overrides settings)")
    parser.add_argument("--size", type=int, default=None, help="Number of records")
    parser.add_argument("--lookups", type=int, default=10000, help="Number of neighbor lookups to time")
    parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    parser.add_argument("--no-flush", action="store_true", help="Do not flush Redis before running")
    parser.add_argument("--plot", action="store_true", help="Write an HTML latency box plot")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    settings = Settings.load(args.settings).override(
        redis_url=args.url,
        records=args.size,
        seed=args.seed,
        flush=False if args.no_flush else None,
    )

    args.output.mkdir(parents=True, exist_ok=True)
    records = generate_records(settings.records, seed=settings.seed)

    async with connect(settings.redis_url, flush=settings.flush) as client:
        suite = BenchmarkSuite(client, records, args.lookups)
        await suite.run_list_benchmark()
        print("++++++++++============================================++++++++++")
        await suite.run_sorted_set_benchmark()

    if args.plot:
        plot_latencies(suite.metrics, "Neighbor Lookup Latency", args.output / "lookup_latencies.html")

    with open(args.output / "metrics.json", "w") as f:
        json.dump({name: m.to_dict() for name, m in suite.metrics.items()}, f, indent=2)

if __name__ == "__main__":
    asyncio.run(main())
