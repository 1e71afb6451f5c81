"""
Trust Evolution — Match

Copyright (c) 2026 SolisHQ (github.com/solishq). All rights reserved.
Licensed under MIT.

A match is a fixed number of simultaneous-move rounds between two agents.

  InProgress  current_round <  rounds
  Complete    current_round >= rounds

Each round:
  1. Both sides decide from their OWN opponent memory, the round index and
     the match noise rate.
  2. Payoffs come from the table keyed by (move_a, move_b): side A gets the
     outcome's `player` value, side B its `opponent` value.
  3. Scores accumulate, moves are recorded into both memories, the round is
     appended to history and the round counter advances.

Playing a round on a complete match raises MatchOverError and leaves the
match untouched. Check is_over() first.
"""

import logging
import random
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from .agent import Agent
from .payoffs import Move, PayoffTable

logger = logging.getLogger(__name__)


class MatchOverError(RuntimeError):
    """Raised when a round is requested from a complete match."""


@dataclass(frozen=True)
class RoundResult:
    round: int
    move_a: Move
    move_b: Move
    payoff_a: int
    payoff_b: int

    def to_dict(self) -> dict:
        return {
            'round': self.round,
            'move_a': self.move_a.value,
            'move_b': self.move_b.value,
            'payoff_a': self.payoff_a,
            'payoff_b': self.payoff_b,
        }


class Match:
    """Round-by-round Prisoner's Dilemma between two agents."""

    def __init__(self, agent_a: Agent, agent_b: Agent, rounds: int = 10,
                 noise_rate: float = 0.0,
                 payoffs: Union[PayoffTable, Mapping, None] = None,
                 rng=None):
        if isinstance(rounds, bool) or not isinstance(rounds, int) or rounds < 1:
            raise ValueError(f"rounds must be a positive integer, got {rounds!r}")
        if not 0.0 <= noise_rate <= 1.0:
            raise ValueError(f"noise_rate must be within [0, 1], got {noise_rate!r}")

        self.agent_a = agent_a
        self.agent_b = agent_b
        self.rounds = rounds
        self.noise_rate = noise_rate
        self.payoffs = PayoffTable.coerce(payoffs)
        self.rng = rng if rng is not None else random
        self.current_round = 0
        self.history: list[RoundResult] = []

    # ─── Core Loop ───────────────────────────────────────

    def play_round(self, move_a: Optional[Move] = None,
                   move_b: Optional[Move] = None) -> RoundResult:
        """
        Play one round. A move passed explicitly replaces that side's policy
        decision and is played exactly as given (no noise).
        """
        if self.is_over():
            raise MatchOverError(
                f"Match already complete after {self.rounds} rounds"
            )

        if move_a is None:
            move_a = self.agent_a.decide(self.agent_a.opponent_memory,
                                         self.current_round, self.noise_rate, self.rng)
        if move_b is None:
            move_b = self.agent_b.decide(self.agent_b.opponent_memory,
                                         self.current_round, self.noise_rate, self.rng)

        payoff_a, payoff_b = self.payoffs.lookup(move_a, move_b)

        self.agent_a.add_score(payoff_a)
        self.agent_b.add_score(payoff_b)

        self.agent_a.record_move(move_a, move_b)
        self.agent_b.record_move(move_b, move_a)

        result = RoundResult(self.current_round, move_a, move_b, payoff_a, payoff_b)
        self.history.append(result)
        self.current_round += 1
        return result

    def play_all(self) -> list[RoundResult]:
        """Play every remaining round."""
        results = []
        while not self.is_over():
            results.append(self.play_round())
        logger.debug("match %s vs %s finished: %s",
                     _label(self.agent_a), _label(self.agent_b), self.get_scores())
        return results

    # ─── Query ───────────────────────────────────────────

    def is_over(self) -> bool:
        return self.current_round >= self.rounds

    def get_scores(self) -> dict:
        return {
            'agent_a': self.agent_a.score,
            'agent_b': self.agent_b.score,
        }

    def to_dict(self) -> dict:
        return {
            'agent_a': _label(self.agent_a),
            'agent_b': _label(self.agent_b),
            'rounds': self.rounds,
            'current_round': self.current_round,
            'noise_rate': self.noise_rate,
            'payoffs': self.payoffs.to_dict(),
            'scores': self.get_scores(),
            'history': [r.to_dict() for r in self.history],
        }


# Game is the name the presentation layer knows a match by
Game = Match


def _label(agent: Agent) -> Optional[str]:
    return agent.strategy.value if agent.strategy else None
