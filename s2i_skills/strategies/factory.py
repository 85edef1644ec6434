from __future__ import annotations

from collections.abc import Callable

from s2i_skills.config import Settings
from s2i_skills.strategies.base import Strategy
from s2i_skills.strategies.onbuild import OnBuild

STRATEGIES: dict[str, Callable[[Settings], Strategy]] = {
    OnBuild.name: OnBuild.from_settings,
}


def strategy_names() -> list[str]:
    return sorted(STRATEGIES)


def new_strategy(name: str, settings: Settings) -> Strategy:
    factory = STRATEGIES.get(name)
    if factory is None:
        raise ValueError(f"Unknown build strategy '{name}'. Available: {', '.join(strategy_names())}")
    return factory(settings)
