"""
Trust Evolution — Population Evolution Engine

Copyright (c) 2026 SolisHQ (github.com/solishq). All rights reserved.
Licensed under MIT.

ONE GENERATION:
  1. Tournament. Every agent is reset, then attempts MATCHES_PER_AGENT
     matches against opponents drawn uniformly from the whole roster.
     Drawing itself wastes the attempt (no retry), so unlucky agents play
     fewer matches. Scores accumulate across all of an agent's matches,
     including the ones where it was drawn as somebody else's opponent.
  2. Snapshot. (generation, distribution) goes into history.
  3. Selection. Roulette wheel over max(0, score). Agents are walked from
     highest to lowest score. If nobody scored, parents are drawn uniformly.
  4. Reproduction. Each of population_size slots copies a parent's strategy;
     with probability mutation_rate it is replaced by a uniformly drawn
     strategy (which may be the same one).
  5. Turnover. The whole roster is replaced and the generation advances.

The tournament always uses the default payoff table. Custom tables are a
playground feature.

CONFIGURATION:
  PopulationConfig validates at construction. A bad configuration never
  produces a population, so nothing degenerate ever runs.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .agent import Agent
from .game import Match
from .strategies import ALL_STRATEGIES, Strategy

logger = logging.getLogger(__name__)

MATCHES_PER_AGENT = 5
MATCH_LOG_LIMIT = 20


# ─── Configuration ───────────────────────────────────────

class PopulationConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')

    population_size: int = Field(default=100, ge=1)
    rounds_per_match: int = Field(default=10, ge=1)
    mutation_rate: float = Field(default=0.05, ge=0.0, le=1.0)
    noise_rate: float = Field(default=0.02, ge=0.0, le=1.0)


# ─── Records ─────────────────────────────────────────────

@dataclass(frozen=True)
class MatchSummary:
    """One logged tournament match. Scores are cumulative tournament scores."""
    agent_a: Strategy
    agent_b: Strategy
    score_a: int
    score_b: int

    def to_dict(self) -> dict:
        return {
            'agent_a': self.agent_a.value,
            'agent_b': self.agent_b.value,
            'score_a': self.score_a,
            'score_b': self.score_b,
        }


@dataclass(frozen=True)
class GenerationSnapshot:
    generation: int
    distribution: dict
    mean_scores: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'generation': self.generation,
            'distribution': {s.value: n for s, n in self.distribution.items()},
            'mean_scores': {s.value: v for s, v in self.mean_scores.items()},
        }


# ─── Population ──────────────────────────────────────────

class Population:
    """
    Fixed-size roster of strategy agents evolving under fitness-proportional
    selection with mutation.
    """

    def __init__(self, population_size: int = 100, rounds_per_match: int = 10,
                 mutation_rate: float = 0.05, noise_rate: float = 0.02, rng=None):
        self.config = PopulationConfig(
            population_size=population_size,
            rounds_per_match=rounds_per_match,
            mutation_rate=mutation_rate,
            noise_rate=noise_rate,
        )
        self.rng = rng if rng is not None else random
        self.generation = 0
        self.agents: list[Agent] = self.initialize_population()
        self.history: list[GenerationSnapshot] = []
        self.events: list[dict] = []

    @classmethod
    def from_config(cls, config: Union[PopulationConfig, dict, None] = None,
                    rng=None) -> 'Population':
        if config is None:
            config = PopulationConfig()
        elif not isinstance(config, PopulationConfig):
            config = PopulationConfig(**config)
        return cls(rng=rng, **config.model_dump())

    # ─── Configuration Access ────────────────────────────

    @property
    def population_size(self) -> int:
        return self.config.population_size

    @property
    def rounds_per_match(self) -> int:
        return self.config.rounds_per_match

    @property
    def mutation_rate(self) -> float:
        return self.config.mutation_rate

    @property
    def noise_rate(self) -> float:
        return self.config.noise_rate

    # ─── Roster ──────────────────────────────────────────

    def initialize_population(self) -> list[Agent]:
        """Even split across strategies; remainder goes to the first ones."""
        per_strategy, remainder = divmod(self.population_size, len(ALL_STRATEGIES))
        agents = []
        for i, strategy in enumerate(ALL_STRATEGIES):
            count = per_strategy + (1 if i < remainder else 0)
            agents.extend(Agent(strategy) for _ in range(count))
        return agents

    def get_distribution(self) -> dict[Strategy, int]:
        distribution = {s: 0 for s in ALL_STRATEGIES}
        for agent in self.agents:
            distribution[agent.strategy] += 1
        return distribution

    def get_strategy_stats(self) -> dict[Strategy, dict]:
        """Count and mean score per strategy over the current roster."""
        scores = np.array([a.score for a in self.agents], dtype=float)
        labels = np.array([ALL_STRATEGIES.index(a.strategy) for a in self.agents], dtype=int)
        stats = {}
        for i, strategy in enumerate(ALL_STRATEGIES):
            mask = labels == i
            count = int(mask.sum())
            stats[strategy] = {
                'count': count,
                'mean_score': float(np.mean(scores[mask])) if count else 0.0,
            }
        return stats

    # ─── Tournament ──────────────────────────────────────

    def run_tournament(self, log_matches: bool = False) -> list[MatchSummary]:
        for agent in self.agents:
            agent.reset()

        match_log = []
        for agent in self.agents:
            for _ in range(MATCHES_PER_AGENT):
                opponent = self.rng.choice(self.agents)
                if opponent is agent:
                    continue

                match = Match(agent, opponent, self.rounds_per_match,
                              self.noise_rate, rng=self.rng)
                match.play_all()

                if log_matches and len(match_log) < MATCH_LOG_LIMIT:
                    match_log.append(MatchSummary(
                        agent_a=agent.strategy,
                        agent_b=opponent.strategy,
                        score_a=agent.score,
                        score_b=opponent.score,
                    ))

        return match_log

    # ─── Selection & Reproduction ────────────────────────

    def select_parent(self, ranked: Optional[list[Agent]] = None) -> Agent:
        """
        Roulette-wheel pick over max(0, score).
        ranked: agents sorted by score, highest first (computed if omitted).
        """
        if ranked is None:
            ranked = self._rank()
        total = sum(max(0, a.score) for a in ranked)

        if total == 0:
            return ranked[self.rng.randrange(len(ranked))]

        pick = self.rng.random() * total
        current = 0
        for agent in ranked:
            current += max(0, agent.score)
            if current >= pick:
                return agent

        # Floating point drift: the best agent takes the slot
        return ranked[0]

    def _rank(self) -> list[Agent]:
        # Stable sort keeps roster order among equal scores
        return sorted(self.agents, key=lambda a: a.score, reverse=True)

    def _offspring_strategy(self, parent: Agent) -> Strategy:
        strategy = parent.strategy
        if self.rng.random() < self.mutation_rate:
            strategy = self.rng.choice(ALL_STRATEGIES)
        return strategy

    def evolve(self, log_matches: bool = False) -> list[MatchSummary]:
        """Run one full generation. Returns the tournament's match log."""
        match_log = self.run_tournament(log_matches)

        before = self.get_distribution()
        snapshot = GenerationSnapshot(
            generation=self.generation,
            distribution=before,
            mean_scores={s: v['mean_score'] for s, v in self.get_strategy_stats().items()},
        )

        ranked = self._rank()
        new_agents = [
            Agent(self._offspring_strategy(self.select_parent(ranked)))
            for _ in range(self.population_size)
        ]

        # Commit: history, roster and counter change together
        self.history.append(snapshot)
        self.agents = new_agents
        self.generation += 1

        after = self.get_distribution()
        self._record_generation_events(before, after)
        logger.debug("generation %d: %s", self.generation,
                     {s.value: n for s, n in after.items()})
        return match_log

    def run_generations(self, count: int,
                        callback: Optional[Callable[[int, dict], None]] = None):
        """Evolve `count` times, reporting (generation, distribution) after each."""
        for _ in range(count):
            self.evolve()
            if callback:
                callback(self.generation, self.get_distribution())

    def reset(self):
        self.agents = self.initialize_population()
        self.generation = 0
        self.history = []
        self.events = []

    # ─── Events ──────────────────────────────────────────

    def _record_generation_events(self, before: dict, after: dict):
        self.events.append({
            'type': 'generation', 'generation': self.generation,
            'distribution': {s.value: n for s, n in after.items()},
        })
        for strategy in ALL_STRATEGIES:
            if before[strategy] > 0 and after[strategy] == 0:
                self.events.append({
                    'type': 'extinction', 'generation': self.generation,
                    'strategy': strategy.value,
                })
            elif before[strategy] == 0 and after[strategy] > 0:
                self.events.append({
                    'type': 'revival', 'generation': self.generation,
                    'strategy': strategy.value, 'count': after[strategy],
                })
        survivors = [s for s in ALL_STRATEGIES if after[s] > 0]
        if len(survivors) == 1 and before[survivors[0]] < self.population_size:
            self.events.append({
                'type': 'fixation', 'generation': self.generation,
                'strategy': survivors[0].value,
            })

    def pop_events(self) -> list[dict]:
        events = self.events
        self.events = []
        return events

    def to_dict(self) -> dict:
        return {
            'generation': self.generation,
            'config': self.config.model_dump(),
            'distribution': {s.value: n for s, n in self.get_distribution().items()},
            'history': [h.to_dict() for h in self.history],
        }
