"""
Trust Evolution — Playground

A human plays one match against each strategy in turn. The human's seat is
an Agent without a strategy; its moves are passed straight to the match, so
they are never perturbed by noise. The opponent decides (and is noised)
exactly as in the tournament.
"""

from typing import Mapping, Optional, Sequence, Union

from .agent import Agent
from .game import Match, MatchOverError, RoundResult
from .payoffs import Move, PayoffTable
from .strategies import ALL_STRATEGIES, Strategy, parse_strategy

DEFAULT_ROUNDS = 7


class Playground:

    def __init__(self, strategies: Optional[Sequence[Strategy]] = None,
                 rounds: int = DEFAULT_ROUNDS, noise_rate: float = 0.0,
                 payoffs: Union[PayoffTable, Mapping, None] = None, rng=None):
        self.strategies = [parse_strategy(s) for s in (strategies or ALL_STRATEGIES)]
        if not self.strategies:
            raise ValueError("Playground needs at least one strategy")
        self.rounds = rounds
        self.noise_rate = noise_rate
        self.payoffs = PayoffTable.coerce(payoffs)
        self.custom_payoffs = payoffs is not None
        self.rng = rng
        self.index = 0
        self.player: Optional[Agent] = None
        self.opponent: Optional[Agent] = None
        self.match: Optional[Match] = None
        self._load()

    @classmethod
    def from_sandbox(cls, reward: int = 3, sucker: int = 0, temptation: int = 5,
                     punishment: int = 1, rounds: int = DEFAULT_ROUNDS,
                     noise_percent: int = 2, **kwargs) -> 'Playground':
        """Sandbox settings: classic payoff parameters, noise as a percentage."""
        return cls(
            rounds=rounds,
            noise_rate=noise_percent / 100,
            payoffs=PayoffTable.from_parameters(reward, sucker, temptation, punishment),
            **kwargs,
        )

    def _load(self):
        self.player = Agent()
        self.opponent = Agent(self.strategies[self.index])
        self.match = Match(self.player, self.opponent, self.rounds,
                           self.noise_rate, self.payoffs, rng=self.rng)

    # ─── Play ────────────────────────────────────────────

    def play(self, move: Union[Move, str]) -> RoundResult:
        if self.match.is_over():
            raise MatchOverError("Match is over; call next_opponent() to continue")
        return self.match.play_round(move_a=Move(move))

    def next_opponent(self) -> bool:
        """Advance to the next strategy. False once every strategy has been played."""
        if self.index + 1 >= len(self.strategies):
            return False
        self.index += 1
        self._load()
        return True

    # ─── Reporting ───────────────────────────────────────

    @staticmethod
    def describe_round(result: RoundResult) -> str:
        """Classify a round from the human's point of view."""
        if result.move_a is Move.COOPERATE and result.move_b is Move.COOPERATE:
            return 'mutual_cooperation'
        if result.move_a is Move.DEFECT and result.move_b is Move.DEFECT:
            return 'mutual_defection'
        if result.move_a is Move.COOPERATE:
            return 'betrayed'
        return 'betrayer'

    def verdict(self) -> str:
        if self.player.score > self.opponent.score:
            return 'won'
        if self.player.score < self.opponent.score:
            return 'lost'
        return 'tie'

    def status(self) -> dict:
        info = self.opponent.get_info()
        description = info.description
        if self.custom_payoffs:
            description += ' (Using custom sandbox settings)'
        return {
            'opponent': self.opponent.strategy.value,
            'name': info.name,
            'icon': info.icon,
            'description': description,
            'round': self.match.current_round,
            'rounds': self.rounds,
            'scores': {'player': self.player.score, 'opponent': self.opponent.score},
            'over': self.match.is_over(),
            'remaining_opponents': len(self.strategies) - self.index - 1,
            'payoffs': self.payoffs.to_dict(),
        }
