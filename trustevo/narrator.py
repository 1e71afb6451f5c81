"""
Trust Evolution — Generation Narrator

Copyright (c) 2026 SolisHQ (github.com/solishq). All rights reserved.
Licensed under MIT.

The narrative writes itself from what actually happens between generations.
Extinctions, revivals and fixations are dramatic; otherwise every few
generations the current leader gets a line.
"""

from typing import Optional

from .catalog import get_info
from .strategies import Strategy


def _name(strategy_value: str) -> str:
    info = get_info(Strategy(strategy_value))
    return f"{info.icon} {info.name}"


# What the winner says about the run
INSIGHTS = {
    Strategy.COOPERATOR: 'Pure cooperation dominated! This usually happens in low-noise '
                         'environments where trust can flourish.',
    Strategy.DEFECTOR: "Defection took over. This often happens when there's too much noise "
                       "or when cooperative strategies can't establish themselves.",
    Strategy.TIT_FOR_TAT: 'Tit for Tat succeeded! This reciprocal strategy often wins in repeated '
                          'games, rewarding cooperation and punishing defection.',
    Strategy.GRUDGER: 'Grudger dominated! While unforgiving, this strategy can thrive when '
                      'betrayal is rare.',
    Strategy.DETECTIVE: 'Detective outsmarted the competition! This adaptive strategy exploits '
                        'cooperative agents while defending against defectors.',
}
DEFAULT_INSIGHT = 'The population reached an interesting equilibrium.'


class Narrator:
    """Generates commentary from population events."""

    def __init__(self, every: int = 10):
        if isinstance(every, bool) or not isinstance(every, int) or every < 1:
            raise ValueError(f"every must be a positive integer, got {every!r}")
        self.every = every
        self.major_events: list[dict] = []

    def narrate(self, events: list[dict], snapshot=None) -> Optional[dict]:
        """
        Returns {title, text, severity, icon} or None if nothing interesting.
        snapshot: the GenerationSnapshot of the tournament just played.
        """
        best = None
        for event in events:
            narration = self._narrate_event(event)
            if narration:
                self.major_events.append(narration)
                if narration['severity'] == 'critical':
                    return narration
                if best is None:
                    best = narration
        if best:
            return best

        generation_events = [e for e in events if e.get('type') == 'generation']
        if generation_events and generation_events[-1]['generation'] % self.every == 0:
            return self._narrate_state(generation_events[-1], snapshot)
        return None

    def _narrate_event(self, event: dict) -> Optional[dict]:
        etype = event.get('type', '')

        if etype == 'fixation':
            return {
                'title': 'Fixation',
                'text': f"Generation {event['generation']}. {_name(event['strategy'])} "
                        f"is all that is left. Only mutation can break the monopoly now.",
                'severity': 'critical',
                'icon': '👑',
            }

        if etype == 'extinction':
            return {
                'title': 'Extinction',
                'text': f"Generation {event['generation']}. {_name(event['strategy'])} "
                        f"has died out.",
                'severity': 'high',
                'icon': '💀',
            }

        if etype == 'revival':
            return {
                'title': 'Return',
                'text': f"Generation {event['generation']}. Mutation brought back "
                        f"{_name(event['strategy'])} ({event['count']}).",
                'severity': 'medium',
                'icon': '🌱',
            }

        return None

    def _narrate_state(self, event: dict, snapshot=None) -> dict:
        distribution = event['distribution']
        total = sum(distribution.values()) or 1
        leader, count = max(distribution.items(), key=lambda kv: kv[1])
        text = (f"Generation {event['generation']}. {_name(leader)} leads with "
                f"{count / total:.0%} of the population.")
        if snapshot is not None and snapshot.mean_scores:
            top, score = max(snapshot.mean_scores.items(), key=lambda kv: kv[1])
            text += f" Best average score last tournament: {_name(top.value)} ({score:.1f})."
        return {
            'title': f"Generation {event['generation']}",
            'text': text,
            'severity': 'info',
            'icon': '⚡',
        }

    def summary(self, population) -> dict:
        """Final standings, most common strategy first, with commentary."""
        distribution = population.get_distribution()
        total = population.population_size

        # Ties go to the later strategy in enumeration order
        dominant, dominant_count = None, -1
        for strategy, count in distribution.items():
            if count >= dominant_count:
                dominant, dominant_count = strategy, count

        ranked = sorted(distribution.items(), key=lambda kv: kv[1], reverse=True)
        survivors = [s for s, n in ranked if n > 0]
        extinct = [get_info(s).name for s, n in distribution.items() if n == 0]
        dominant_share = dominant_count / total

        return {
            'title': 'Simulation Complete',
            'text': f"After {population.generation} generations, "
                    f"{len(survivors)} of {len(distribution)} strategies survive. "
                    f"{get_info(dominant).name} holds {dominant_count} of "
                    f"{total} places ({dominant_share:.1%}). "
                    f"{len(self.major_events)} major events.",
            'severity': 'info',
            'icon': '🏆',
            'dominant': dominant.value,
            'dominant_share': dominant_share,
            'extinct': extinct,
            'insight': INSIGHTS.get(dominant, DEFAULT_INSIGHT),
            'parameter_insight': parameter_insight(population),
            'standings': [{'strategy': s.value, 'count': n} for s, n in ranked],
            'major_events': self.major_events[-10:],
        }


def parameter_insight(population) -> str:
    """What the configuration suggests about the outcome."""
    insights = []

    if population.mutation_rate > 0.1:
        insights.append('High mutation rate led to more diversity and unpredictability.')
    elif population.mutation_rate == 0:
        insights.append('With no mutations, strategies compete purely on merit.')

    if population.noise_rate > 0.05:
        insights.append('High noise made cooperation more difficult, as mistakes were common.')
    elif population.noise_rate == 0:
        insights.append('Perfect information allowed strategies to execute flawlessly.')

    if population.rounds_per_match < 5:
        insights.append('Short matches favored simple strategies.')
    elif population.rounds_per_match > 12:
        insights.append('Long matches allowed complex patterns to emerge.')

    if not insights:
        return 'Try adjusting the parameters to see how they affect which strategies thrive!'
    return ' '.join(insights)
