"""CLI entry point: run QAP search strategies on an instance."""
from __future__ import annotations

import argparse
import logging
from typing import List, Sequence

from .benchmark import plot_costs, run_benchmark, summarize
from .config import COOLING_FACTOR, INIT_MODES, TABU_TENURE, SearchConfig
from .io import QAPInstance, generate_random_instance, read_qaplib, read_solution, write_output
from .sampling import PermutationSampler
from .state import SearchResult
from .strategies import STRATEGIES
from .utils import LOGGER, configure_logging, format_permutation, set_seed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Local search for the Quadratic Assignment Problem")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", help="QAPLIB instance file")
    source.add_argument("--random", type=int, metavar="N", help="generate a random instance of size N")
    parser.add_argument(
        "--algorithm",
        default="steepest",
        help=f"one of {', '.join(STRATEGIES)} or 'all' (default: steepest)",
    )
    parser.add_argument("--time-limit", type=float, default=None, help="seconds per run")
    parser.add_argument("--max-iterations", type=int, default=None, help="evaluation cap per run")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--init", choices=INIT_MODES, default="random")
    parser.add_argument("--runs", type=int, default=1)
    parser.add_argument("--tabu-tenure", type=int, default=TABU_TENURE)
    parser.add_argument("--cooling", type=float, default=COOLING_FACTOR)
    parser.add_argument("--temperature", type=float, default=None, help="initial annealing temperature")
    parser.add_argument("--solution", help="QAPLIB .sln file with the optimum, for gap reporting")
    parser.add_argument("--output", help="write the runs to this JSON file")
    parser.add_argument("--csv", help="write the per-run table to this CSV file")
    parser.add_argument("--plot", help="save a boxplot of final costs to this image file")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def _algorithms(parser: argparse.ArgumentParser, name: str) -> List[str]:
    if name == "all":
        return list(STRATEGIES)
    if name not in STRATEGIES:
        parser.error(f"unknown algorithm {name!r}; choose from {', '.join(STRATEGIES)} or 'all'")
    return [name]


def _load_instance(args: argparse.Namespace) -> QAPInstance:
    if args.input:
        return read_qaplib(args.input)
    return generate_random_instance(args.random, seed=args.seed if args.seed is not None else 0)


def print_summary(instance: QAPInstance, results: Sequence[SearchResult], optimum: int | None) -> None:
    print(f"\n=== {instance.name} (n={instance.n}) ===")
    for result in results:
        line = (
            f"{result.algorithm:<14} cost={result.cost:<10} initial={result.initial_cost:<10} "
            f"steps={result.steps:<8} time={result.elapsed_s:.2f}s status={result.status.value}"
        )
        if optimum:
            line += f" gap={100.0 * (result.cost - optimum) / optimum:.2f}%"
        print(line)
    if results:
        best = min(results, key=lambda r: r.cost)
        print(f"\nBest: {best.cost} ({best.algorithm})")
        print(f"Permutation: {format_permutation(best.permutation)}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(getattr(logging, args.log_level))

    algorithms = _algorithms(parser, args.algorithm)
    try:
        config = SearchConfig(
            time_limit_s=args.time_limit,
            max_iterations=args.max_iterations,
            seed=args.seed,
            init=args.init,
            runs=args.runs,
            tabu_tenure=args.tabu_tenure,
            cooling=args.cooling,
            initial_temperature=args.temperature,
        )
        instance = _load_instance(args)
        model = instance.cost_model()
        optimum = read_solution(args.solution).cost if args.solution else None
    except ValueError as exc:
        parser.error(str(exc))

    rng = set_seed(args.seed) if args.seed is not None else None
    sampler = PermutationSampler(rng=rng)
    LOGGER.info("Instance %s loaded (n=%d)", instance.name, instance.n)
    frame, results = run_benchmark(model, algorithms, config, sampler=sampler, optimum=optimum)

    print_summary(instance, results, optimum)
    if len(results) > 1:
        print("\n" + summarize(frame).to_string())
    if args.output:
        write_output(args.output, instance.name, results, optimum)
        LOGGER.info("Results written to %s", args.output)
    if args.csv:
        frame.to_csv(args.csv, index=False)
        LOGGER.info("Run table written to %s", args.csv)
    if args.plot:
        plot_costs(frame, args.plot, title=instance.name)
        LOGGER.info("Plot written to %s", args.plot)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
