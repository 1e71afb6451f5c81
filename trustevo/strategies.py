"""
Trust Evolution Strategies

Each strategy decides: Cooperate or Defect based on what the opponent has
done so far in the current match and the round number.
"""

from enum import Enum
from typing import Sequence

from .payoffs import Move


class Strategy(Enum):
    COOPERATOR = 'cooperator'
    DEFECTOR = 'defector'
    TIT_FOR_TAT = 'tit-for-tat'
    GRUDGER = 'grudger'
    RANDOM = 'random'
    DETECTIVE = 'detective'


# Enumeration order matters: initial roster remainder and mutation draws use it
ALL_STRATEGIES: tuple[Strategy, ...] = tuple(Strategy)


class Policy:
    """Base policy class"""
    strategy: Strategy = None

    def decide(self, opponent_history: Sequence[Move], round_number: int, rng) -> Move:
        raise NotImplementedError


class Cooperator(Policy):
    """Always cooperates. Trusting and naive."""
    strategy = Strategy.COOPERATOR

    def decide(self, opponent_history, round_number, rng):
        return Move.COOPERATE


class Defector(Policy):
    """Always defects. Pure self-interest."""
    strategy = Strategy.DEFECTOR

    def decide(self, opponent_history, round_number, rng):
        return Move.DEFECT


class TitForTat(Policy):
    """
    Starts cooperating, then mirrors opponent's last move.
    Nice, retaliatory, forgiving.
    """
    strategy = Strategy.TIT_FOR_TAT

    def decide(self, opponent_history, round_number, rng):
        if not opponent_history:
            return Move.COOPERATE
        return opponent_history[-1]


class Grudger(Policy):
    """
    Cooperates until betrayed, then always defects.
    Unforgiving but never initiates defection.
    """
    strategy = Strategy.GRUDGER

    def decide(self, opponent_history, round_number, rng):
        if Move.DEFECT in opponent_history:
            return Move.DEFECT
        return Move.COOPERATE


class RandomPolicy(Policy):
    """50/50 coin flip every round."""
    strategy = Strategy.RANDOM

    def decide(self, opponent_history, round_number, rng):
        return Move.COOPERATE if rng.random() < 0.5 else Move.DEFECT


class Detective(Policy):
    """
    Probes with C, D, C, C. If the opponent never struck back during the
    probe, exploits it forever. Otherwise settles into Tit for Tat.
    """
    strategy = Strategy.DETECTIVE

    OPENING = (Move.COOPERATE, Move.DEFECT, Move.COOPERATE, Move.COOPERATE)

    def decide(self, opponent_history, round_number, rng):
        if round_number < len(self.OPENING):
            return self.OPENING[round_number]
        probe = opponent_history[:len(self.OPENING)]
        if Move.DEFECT not in probe:
            return Move.DEFECT
        return opponent_history[-1]


# Strategy registry
POLICIES: dict[Strategy, Policy] = {
    policy.strategy: policy
    for policy in (Cooperator(), Defector(), TitForTat(), Grudger(), RandomPolicy(), Detective())
}


def get_policy(strategy: Strategy) -> Policy:
    return POLICIES[strategy]


def parse_strategy(value) -> Strategy:
    """Accept a Strategy, its wire value ('tit-for-tat') or its name ('TIT_FOR_TAT')."""
    if isinstance(value, Strategy):
        return value
    text = str(value).strip()
    try:
        return Strategy(text.lower())
    except ValueError:
        pass
    key = text.upper().replace('-', '_').replace(' ', '_')
    if key in Strategy.__members__:
        return Strategy[key]
    raise ValueError(f"Unknown strategy: {value!r}")
