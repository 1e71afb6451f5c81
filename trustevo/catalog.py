"""
Strategy catalog — display metadata for presentation layers.
"""

from dataclasses import dataclass, asdict
from typing import Optional

from .strategies import Strategy


@dataclass(frozen=True)
class StrategyInfo:
    name: str
    description: str
    icon: str

    def to_dict(self) -> dict:
        return asdict(self)


STRATEGY_INFO: dict[Strategy, StrategyInfo] = {
    Strategy.COOPERATOR: StrategyInfo(
        name='Always Cooperate',
        description='This naive optimist always cooperates, trusting everyone no matter what.',
        icon='😊',
    ),
    Strategy.DEFECTOR: StrategyInfo(
        name='Always Cheat',
        description='This cynical exploiter always defects, never trusting anyone.',
        icon='😈',
    ),
    Strategy.TIT_FOR_TAT: StrategyInfo(
        name='Tit for Tat',
        description='This reciprocator starts with cooperation, then mirrors your last move.',
        icon='🔄',
    ),
    Strategy.GRUDGER: StrategyInfo(
        name='Grudger',
        description='This agent cooperates until you defect once, then holds a grudge forever.',
        icon='😤',
    ),
    Strategy.RANDOM: StrategyInfo(
        name='Random',
        description='This unpredictable agent has a 50% chance of cooperating each round.',
        icon='🎲',
    ),
    Strategy.DETECTIVE: StrategyInfo(
        name='Detective',
        description='This clever agent tests you first, then adapts based on your responses.',
        icon='🕵️',
    ),
}

UNKNOWN_INFO = StrategyInfo(name='Unknown', description='', icon='❓')


def get_info(strategy: Optional[Strategy]) -> StrategyInfo:
    return STRATEGY_INFO.get(strategy, UNKNOWN_INFO)
