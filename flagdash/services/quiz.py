"""
Question generator.

Daily modes draw their content from a seeded LCG so every player worldwide
gets the same flags on the same game-timezone day. The order questions are
presented in is always reshuffled with unseeded randomness.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from flagdash.core.clock import Clock
from flagdash.schemas.game import GameMode, questions_count
from flagdash.services.countries import (
    AFRICAN_COUNTRIES,
    ALL_WORLD_COUNTRIES,
    AMERICAN_COUNTRIES,
    ASIAN_COUNTRIES,
    CARIBBEAN_COUNTRIES,
    EUROPEAN_COUNTRIES,
    OCEANIA_COUNTRIES,
    POPULOUS_COUNTRIES,
    Country,
)

OPTIONS_PER_QUESTION = 8
THEMATIC_SEED_OFFSET = 99999


class SeededRNG:
    def __init__(self, seed: int):
        self.seed = seed

    def next(self) -> float:
        self.seed = (self.seed * 9301 + 49297) % 233280
        return self.seed / 233280


class _UnseededRNG:
    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def next(self) -> float:
        return self._rng.random()


@dataclass(frozen=True)
class QuizOption:
    name: str
    code: str


@dataclass(frozen=True)
class QuizQuestion:
    target_name: str
    correct_code: str
    options: list[QuizOption]


# 0 = Sunday ... 6 = Saturday
_THEMATIC_POOLS: dict[int, list[Country]] = {
    0: ALL_WORLD_COUNTRIES,
    1: ASIAN_COUNTRIES,
    2: AFRICAN_COUNTRIES,
    3: AMERICAN_COUNTRIES,
    4: OCEANIA_COUNTRIES,
    5: CARIBBEAN_COUNTRIES,
    6: POPULOUS_COUNTRIES,
}


def thematic_pool_for_day(weekday: int) -> list[Country]:
    return _THEMATIC_POOLS.get(weekday, EUROPEAN_COUNTRIES)


def _shuffle(items: list, rng) -> list:
    items = list(items)
    for i in range(len(items) - 1, 0, -1):
        j = int(rng.next() * (i + 1))
        items[i], items[j] = items[j], items[i]
    return items


class QuizGenerator:
    def __init__(self, clock: Clock | None = None, rng: random.Random | None = None):
        self.clock = clock or Clock()
        self.rng = rng or random.Random()

    def daily_seed(self, thematic: bool = False) -> int:
        today = self.clock.today()
        seed = today.year * 10000 + today.month * 100 + today.day
        return seed + THEMATIC_SEED_OFFSET if thematic else seed

    def generate(self, mode: GameMode) -> list[QuizQuestion]:
        if mode == GameMode.DAILY_STANDARD:
            rng = SeededRNG(self.daily_seed(thematic=False))
            pool = EUROPEAN_COUNTRIES
        elif mode == GameMode.DAILY_THEMATIC:
            rng = SeededRNG(self.daily_seed(thematic=True))
            pool = thematic_pool_for_day(self.clock.weekday())
        else:
            rng = _UnseededRNG(self.rng)
            pool = EUROPEAN_COUNTRIES

        shuffled = _shuffle(pool, rng)
        targets = shuffled[: min(questions_count(mode), len(shuffled))]
        distractor_pool = shuffled if mode == GameMode.DAILY_THEMATIC else EUROPEAN_COUNTRIES

        questions = []
        for target in targets:
            candidates = [c for c in distractor_pool if c.code != target.code]
            distractors = _shuffle(candidates, rng)[: OPTIONS_PER_QUESTION - 1]
            options = _shuffle([target, *distractors], rng)
            questions.append(
                QuizQuestion(
                    target_name=target.name,
                    correct_code=target.code,
                    options=[QuizOption(name=o.name, code=o.code) for o in options],
                )
            )

        # Content is fixed per day for daily modes; presentation order never is
        self.rng.shuffle(questions)
        return questions
