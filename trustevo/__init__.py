# Trust Evolution Engine
# Copyright (c) 2026 SolisHQ (github.com/solishq). MIT License.

from .payoffs import Move, Outcome, PayoffTable, DEFAULT_PAYOFFS
from .strategies import Strategy, ALL_STRATEGIES
from .catalog import StrategyInfo, STRATEGY_INFO, get_info
from .agent import Agent
from .game import Match, Game, MatchOverError, RoundResult
from .evolution import Population, PopulationConfig, MatchSummary, GenerationSnapshot
from .playground import Playground
from .narrator import Narrator

__author__ = "SolisHQ"
__version__ = "1.0.0"
