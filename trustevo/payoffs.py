"""
Trust Evolution — Moves and Payoff Tables

Copyright (c) 2026 SolisHQ (github.com/solishq). All rights reserved.
Licensed under MIT.

THE CANONICAL DILEMMA:
  Four outcomes, each an ordered (player, opponent) pair:

    Both cooperate:                 (R, R)   reward       = 3
    Player cooperates, opp defects: (S, T)   sucker       = 0
    Player defects, opp cooperates: (T, S)   temptation   = 5
    Both defect:                    (P, P)   punishment   = 1

  The table is directional. The first move of a lookup key is the side
  receiving `player`, the second is the side receiving `opponent`.

  Custom tables are accepted as-is. R > P keeps the game a dilemma; without
  T > R there is no betrayal incentive and defection stops being tempting.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Union


class Move(Enum):
    COOPERATE = 'cooperate'
    DEFECT = 'defect'

    def flip(self) -> 'Move':
        return Move.DEFECT if self is Move.COOPERATE else Move.COOPERATE


@dataclass(frozen=True)
class Outcome:
    player: int
    opponent: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.player, self.opponent)


# Outcome keys, in the order custom tables are supplied
OUTCOME_KEYS = (
    'BOTH_COOPERATE',
    'PLAYER_COOPERATE_OPP_DEFECT',
    'PLAYER_DEFECT_OPP_COOPERATE',
    'BOTH_DEFECT',
)

_KEY_FOR_MOVES = {
    (Move.COOPERATE, Move.COOPERATE): 'BOTH_COOPERATE',
    (Move.COOPERATE, Move.DEFECT): 'PLAYER_COOPERATE_OPP_DEFECT',
    (Move.DEFECT, Move.COOPERATE): 'PLAYER_DEFECT_OPP_COOPERATE',
    (Move.DEFECT, Move.DEFECT): 'BOTH_DEFECT',
}


@dataclass(frozen=True)
class PayoffTable:
    both_cooperate: Outcome
    player_cooperate_opp_defect: Outcome
    player_defect_opp_cooperate: Outcome
    both_defect: Outcome

    # ─── Construction ────────────────────────────────────

    @classmethod
    def from_parameters(cls, reward: int = 3, sucker: int = 0,
                        temptation: int = 5, punishment: int = 1) -> 'PayoffTable':
        """Symmetric table from the four classic parameters (sandbox sliders)."""
        reward = _payoff('reward', reward)
        sucker = _payoff('sucker', sucker)
        temptation = _payoff('temptation', temptation)
        punishment = _payoff('punishment', punishment)
        return cls(
            both_cooperate=Outcome(reward, reward),
            player_cooperate_opp_defect=Outcome(sucker, temptation),
            player_defect_opp_cooperate=Outcome(temptation, sucker),
            both_defect=Outcome(punishment, punishment),
        )

    @classmethod
    def from_dict(cls, table: Mapping) -> 'PayoffTable':
        """
        Build from a mapping of outcome key -> (player, opponent).
        Values may be 2-sequences, Outcome instances or {'player', 'opponent'}
        dicts. Keys are case-insensitive.
        """
        normalized = {str(k).upper(): v for k, v in table.items()}
        missing = [k for k in OUTCOME_KEYS if k not in normalized]
        if missing:
            raise ValueError(f"Payoff table missing outcomes: {', '.join(missing)}")
        unknown = sorted(set(normalized) - set(OUTCOME_KEYS))
        if unknown:
            raise ValueError(f"Unknown payoff outcomes: {', '.join(unknown)}")
        outcomes = [_to_outcome(k, normalized[k]) for k in OUTCOME_KEYS]
        return cls(*outcomes)

    @classmethod
    def coerce(cls, payoffs: Union['PayoffTable', Mapping, None]) -> 'PayoffTable':
        if payoffs is None:
            return DEFAULT_PAYOFFS
        if isinstance(payoffs, PayoffTable):
            return payoffs
        if isinstance(payoffs, Mapping):
            return cls.from_dict(payoffs)
        raise ValueError(f"Unsupported payoff table: {payoffs!r}")

    # ─── Lookup ──────────────────────────────────────────

    def outcome(self, move: Move, other: Move) -> Outcome:
        return getattr(self, _KEY_FOR_MOVES[(move, other)].lower())

    def lookup(self, move_a: Move, move_b: Move) -> tuple[int, int]:
        """Payoffs for (side A, side B) given A's move first."""
        return self.outcome(move_a, move_b).as_tuple()

    # ─── Shape of the game ───────────────────────────────

    @property
    def reward(self) -> int:
        return self.both_cooperate.player

    @property
    def sucker(self) -> int:
        return self.player_cooperate_opp_defect.player

    @property
    def temptation(self) -> int:
        return self.player_defect_opp_cooperate.player

    @property
    def punishment(self) -> int:
        return self.both_defect.player

    @property
    def is_dilemma(self) -> bool:
        """Mutual cooperation must beat mutual defection."""
        return self.reward > self.punishment

    @property
    def has_betrayal_incentive(self) -> bool:
        return self.temptation > self.reward

    def to_dict(self) -> dict:
        return {k: list(getattr(self, k.lower()).as_tuple()) for k in OUTCOME_KEYS}


def _to_outcome(key: str, value) -> Outcome:
    if isinstance(value, Outcome):
        return value
    if isinstance(value, Mapping):
        try:
            player, opponent = value['player'], value['opponent']
        except KeyError as e:
            raise ValueError(f"Outcome {key} needs 'player' and 'opponent'") from e
    else:
        try:
            player, opponent = value
        except (TypeError, ValueError) as e:
            raise ValueError(f"Outcome {key} must be a (player, opponent) pair, got {value!r}") from e
    return Outcome(_payoff(key, player), _payoff(key, opponent))


def _payoff(key: str, value) -> int:
    """Payoffs are integers. Integral floats (3.0) are accepted, fractions are not."""
    if isinstance(value, bool):
        raise ValueError(f"Outcome {key}: payoff must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"Outcome {key}: payoff must be an integer, got {value!r}")


DEFAULT_PAYOFFS = PayoffTable.from_parameters(reward=3, sucker=0, temptation=5, punishment=1)
