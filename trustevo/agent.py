"""
Trust Evolution — Strategy Agent

Copyright (c) 2026 SolisHQ (github.com/solishq). All rights reserved.
Licensed under MIT.

An agent is a strategy plus the memory of one match:

    memory           own moves, in round order
    opponent_memory  the opponent's moves, index-aligned with memory
    score            cumulative payoff (no clamping; may go negative with
                     custom payoffs)
    has_been_betrayed  set once the opponent ever defects

DECISION = POLICY + NOISE:
  The strategy's policy picks a move from the opponent's history and the
  round number. Noise then flips it with probability noise_rate, modeling
  unreliable execution rather than strategic error.

has_been_betrayed is write-only. No shipped strategy reads it; Grudger
derives its grudge from the opponent history instead.
"""

import random
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .catalog import StrategyInfo, get_info
from .payoffs import Move
from .strategies import Strategy, get_policy, parse_strategy


@dataclass
class Agent:
    # None marks a human-controlled seat: moves are supplied to the match
    strategy: Optional[Strategy] = None

    # ─── Match Memory ────────────────────────────────────
    memory: list = field(default_factory=list)
    opponent_memory: list = field(default_factory=list)

    # ─── State ───────────────────────────────────────────
    score: int = 0
    has_been_betrayed: bool = False

    def __post_init__(self):
        if self.strategy is not None:
            self.strategy = parse_strategy(self.strategy)

    # ─── Decision Making ─────────────────────────────────

    def decide(self, opponent_history: Sequence[Move], round_number: int = 0,
               noise_rate: float = 0.0, rng=None) -> Move:
        """
        Decide: Cooperate or Defect.
        opponent_history holds only the current match's prior rounds.
        """
        rng = rng if rng is not None else random
        if self.strategy is None:
            decision = Move.COOPERATE
        else:
            decision = get_policy(self.strategy).decide(opponent_history, round_number, rng)

        # Execution noise: independent draw per decision
        if noise_rate > 0 and rng.random() < noise_rate:
            decision = decision.flip()

        return decision

    # ─── Interaction Recording ───────────────────────────

    def record_move(self, my_move: Move, opponent_move: Move):
        self.memory.append(my_move)
        self.opponent_memory.append(opponent_move)
        if opponent_move is Move.DEFECT:
            self.has_been_betrayed = True

    def add_score(self, points: int):
        self.score += points

    def reset(self):
        """Fresh match state. Strategy survives."""
        self.memory = []
        self.opponent_memory = []
        self.score = 0
        self.has_been_betrayed = False

    # ─── Query ───────────────────────────────────────────

    def get_info(self) -> StrategyInfo:
        return get_info(self.strategy)

    def cooperation_rate(self) -> float:
        if not self.memory:
            return 0.5  # Unknown = neutral
        return self.memory.count(Move.COOPERATE) / len(self.memory)

    def to_dict(self) -> dict:
        info = self.get_info()
        return {
            'strategy': self.strategy.value if self.strategy else None,
            'name': info.name,
            'icon': info.icon,
            'score': self.score,
            'rounds_played': len(self.memory),
            'cooperation_rate': round(self.cooperation_rate(), 3),
            'has_been_betrayed': self.has_been_betrayed,
        }
