import random
from datetime import datetime

from flagdash.core.clock import FixedClock
from flagdash.schemas.game import GameMode, questions_count
from flagdash.services.countries import ALL_WORLD_COUNTRIES, ASIAN_COUNTRIES, EUROPEAN_COUNTRIES
from flagdash.services.quiz import OPTIONS_PER_QUESTION, QuizGenerator, SeededRNG, thematic_pool_for_day


def _targets(questions):
    return sorted(q.correct_code for q in questions)


def test_seeded_rng_sequence():
    rng = SeededRNG(1)
    assert rng.next() == 58598 / 233280
    assert rng.seed == 58598


def test_daily_seed_uses_madrid_date():
    gen = QuizGenerator(FixedClock(datetime(2024, 3, 13, 0, 30)))
    assert gen.daily_seed() == 20240313
    assert gen.daily_seed(thematic=True) == 20240313 + 99999


def test_daily_content_is_shared_across_players():
    clock = FixedClock(datetime(2024, 3, 13, 9, 0))
    a = QuizGenerator(clock, rng=random.Random(1)).generate(GameMode.DAILY_STANDARD)
    b = QuizGenerator(clock, rng=random.Random(2)).generate(GameMode.DAILY_STANDARD)

    assert _targets(a) == _targets(b)
    assert {q.correct_code: q.options for q in a} == {q.correct_code: q.options for q in b}

    clock.advance(days=1)
    c = QuizGenerator(clock, rng=random.Random(1)).generate(GameMode.DAILY_STANDARD)
    assert _targets(c) != _targets(a)


def test_question_shape():
    questions = QuizGenerator(FixedClock(datetime(2024, 3, 13, 9, 0))).generate(GameMode.COMPETITIVE_5)
    assert len(questions) == questions_count(GameMode.COMPETITIVE_5) == 5
    europe = {c.code for c in EUROPEAN_COUNTRIES}
    for q in questions:
        codes = [o.code for o in q.options]
        assert len(codes) == OPTIONS_PER_QUESTION
        assert len(set(codes)) == OPTIONS_PER_QUESTION
        assert q.correct_code in codes
        assert set(codes) <= europe


def test_thematic_monday_is_asia():
    monday = FixedClock(datetime(2024, 3, 11, 9, 0))
    questions = QuizGenerator(monday).generate(GameMode.DAILY_THEMATIC)
    asia = {c.code for c in ASIAN_COUNTRIES}
    assert len(questions) == 10
    for q in questions:
        assert q.correct_code in asia
        assert {o.code for o in q.options} <= asia


def test_thematic_pools():
    assert thematic_pool_for_day(0) is ALL_WORLD_COUNTRIES
    assert thematic_pool_for_day(1) is ASIAN_COUNTRIES
    assert thematic_pool_for_day(42) is EUROPEAN_COUNTRIES
    assert len({c.code for c in ALL_WORLD_COUNTRIES}) == len(ALL_WORLD_COUNTRIES)
