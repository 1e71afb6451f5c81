#!/usr/bin/env python3
"""
Trust Evolution - CLI Runner

Sandbox run: evolve a population for a fixed number of generations and
print how the strategy mix changes.
"""

import argparse
import json
import logging
import random
import sys

from pydantic import ValidationError

from .catalog import get_info
from .evolution import Population, PopulationConfig
from .narrator import Narrator

MAX_GENERATIONS = 50


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trustevo", description="Trust Evolution Simulation")
    parser.add_argument("--population", type=int, default=100, help="Population size")
    parser.add_argument("--rounds", type=int, default=10, help="Rounds per match")
    parser.add_argument("--mutation", type=float, default=5, help="Mutation rate (%%)")
    parser.add_argument("--noise", type=float, default=2, help="Noise rate (%%)")
    parser.add_argument("--generations", type=int, default=MAX_GENERATIONS, help="Generations to run")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--log-matches", action="store_true", help="Show logged matches")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    parser.add_argument("--quiet", action="store_true", help="Less output")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.generations < 0:
        parser.error("--generations must be >= 0")

    try:
        config = PopulationConfig(
            population_size=args.population,
            rounds_per_match=args.rounds,
            mutation_rate=args.mutation / 100,
            noise_rate=args.noise / 100,
        )
    except ValidationError as e:
        parser.error(f"invalid configuration:\n{e}")

    rng = random.Random(args.seed)
    population = Population.from_config(config, rng=rng)
    narrator = Narrator()
    chatty = not args.quiet and not args.json

    if chatty:
        print("🧬 Trust Evolution\n")
        print(f"Config: {config.population_size} agents, {config.rounds_per_match} rounds/match, "
              f"mutation {args.mutation:g}%, noise {args.noise:g}%\n")
        print_distribution(population)

    for _ in range(args.generations):
        match_log = population.evolve(log_matches=args.log_matches)
        events = population.pop_events()
        narration = narrator.narrate(events, population.history[-1])

        if chatty:
            print(f"━━━ Generation {population.generation} ━━━")
            for m in match_log:
                print(f"  {get_info(m.agent_a).name} ({m.score_a}) vs "
                      f"{get_info(m.agent_b).name} ({m.score_b})")
            if narration:
                print(f"  {narration['icon']} {narration['title']}: {narration['text']}")

    summary = narrator.summary(population)

    if args.json:
        result = population.to_dict()
        result['summary'] = summary
        print(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        print(f"\n{'=' * 50}")
        print(f"🏆 {summary['title'].upper()}")
        print(f"{'=' * 50}\n")
        print_distribution(population)
        print(summary['text'])

    return 0


def print_distribution(population: Population):
    total = population.population_size
    print(f"{'Strategy':<18} {'Count':>6} {'Share':>7}")
    print("-" * 33)
    for strategy, count in population.get_distribution().items():
        info = get_info(strategy)
        print(f"{info.name:<18} {count:>6} {count / total:>6.0%}")
    print()


if __name__ == "__main__":
    sys.exit(main())
