"""
Cosmetic and achievement catalog.

Each achievement grants exactly one cosmetic. Predicates read cumulative user
state or the match that just ended; the evaluator only cares about the
``check`` callable, so this table is plain configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal

from flagdash.schemas.game import GameMode
from flagdash.schemas.progression import LastGame
from flagdash.schemas.user import User

RewardType = Literal["FRAME", "BANNER", "NAME_STYLE"]

SLOT_BY_REWARD_TYPE: dict[str, str] = {
    "FRAME": "frame_id",
    "BANNER": "banner_id",
    "NAME_STYLE": "name_style_id",
}


@dataclass(frozen=True)
class Cosmetic:
    id: str
    name: str
    type: RewardType
    css: str


@dataclass(frozen=True)
class AchievementDefinition:
    id: str
    title: str
    description: str
    reward_id: str
    reward_type: RewardType
    check: Callable[[User, LastGame | None], bool]
    progress: Callable[[User], tuple[int, int]]


def _count(user: User, achievement_type: str) -> int:
    return sum(1 for a in user.achievements if a.type == achievement_type)


def _games(target: int):
    return (
        lambda u, _g: u.total_games >= target,
        lambda u: (u.total_games, target),
    )


def _streak(target: int):
    return (
        lambda u, _g: u.current_streak >= target,
        lambda u: (u.current_streak, target),
    )


def _level(target: int):
    return (
        lambda u, _g: u.level >= target,
        lambda u: (u.level, target),
    )


def _has_achievement(achievement_type: str):
    return (
        lambda u, _g: _count(u, achievement_type) > 0,
        lambda u: (min(_count(u, achievement_type), 1), 1),
    )


def _fast_run(mode: GameMode, under_ms: int):
    def check(u: User, g: LastGame | None) -> bool:
        if g is not None and g.mode == mode and g.time_ms < under_ms:
            return True
        rec = u.records.get(mode)
        return bool(rec and rec.pb is not None and rec.pb < under_ms)

    def progress(u: User) -> tuple[int, int]:
        rec = u.records.get(mode)
        return (1 if rec and rec.pb is not None and rec.pb < under_ms else 0, 1)

    return check, progress


COSMETICS: list[Cosmetic] = [
    Cosmetic("frame_rookie", "Marco Novato", "FRAME", "ring-2 ring-gray-400"),
    Cosmetic("frame_veteran", "Marco Veterano", "FRAME", "ring-2 ring-orange-400"),
    Cosmetic("frame_legend", "Marco Leyenda", "FRAME", "ring-4 ring-yellow-400"),
    Cosmetic("frame_champion", "Marco Campeon", "FRAME", "ring-4 ring-red-500"),
    Cosmetic("banner_flame", "Banner Llamas", "BANNER", "bg-gradient-to-r from-orange-500 to-red-600"),
    Cosmetic("banner_ocean", "Banner Oceano", "BANNER", "bg-gradient-to-r from-cyan-500 to-blue-700"),
    Cosmetic("banner_royal", "Banner Real", "BANNER", "bg-gradient-to-r from-purple-600 to-indigo-800"),
    Cosmetic("banner_sunrise", "Banner Amanecer", "BANNER", "bg-gradient-to-r from-amber-300 to-rose-500"),
    Cosmetic("name_gold", "Nombre Dorado", "NAME_STYLE", "text-yellow-400"),
    Cosmetic("name_neon", "Nombre Neon", "NAME_STYLE", "text-pink-400"),
    Cosmetic("name_lightning", "Nombre Relampago", "NAME_STYLE", "text-cyan-300"),
    Cosmetic("name_world", "Nombre Mundial", "NAME_STYLE", "text-amber-300"),
]

COSMETICS_MAP: dict[str, Cosmetic] = {c.id: c for c in COSMETICS}


def _definition(id: str, title: str, description: str, reward_id: str, rule) -> AchievementDefinition:
    check, progress = rule
    return AchievementDefinition(
        id=id,
        title=title,
        description=description,
        reward_id=reward_id,
        reward_type=COSMETICS_MAP[reward_id].type,
        check=check,
        progress=progress,
    )


ACHIEVEMENTS: list[AchievementDefinition] = [
    _definition("first_game", "Primera Bandera", "Juega tu primera partida.", "frame_rookie", _games(1)),
    _definition("games_10", "Aficionado", "Juega 10 partidas.", "banner_ocean", _games(10)),
    _definition("games_50", "Veterano", "Juega 50 partidas.", "frame_veteran", _games(50)),
    _definition("games_100", "Leyenda", "Juega 100 partidas.", "frame_legend", _games(100)),
    _definition("streak_3", "Constancia", "Juega 3 dias seguidos.", "name_neon", _streak(3)),
    _definition("streak_7", "Semana Perfecta", "Juega 7 dias seguidos.", "banner_flame", _streak(7)),
    _definition("level_5", "Nivel 5", "Alcanza el nivel 5.", "name_gold", _level(5)),
    _definition("level_10", "Nivel 10", "Alcanza el nivel 10.", "banner_royal", _level(10)),
    _definition(
        "speed_5", "Relampago", "Completa el modo Rapido (5) en menos de 15 segundos.", "name_lightning",
        _fast_run(GameMode.COMPETITIVE_5, 15000),
    ),
    _definition("world_record", "Plusmarquista", "Bate un Record Mundial.", "name_world", _has_achievement("WR")),
    _definition("league_win", "Campeon de Liga", "Termina una Liga Semanal sin ser eliminado.", "frame_champion", _has_achievement("LEAGUE_WIN")),
    _definition("daily_win", "Ganador del Dia", "Gana un Desafio Diario o Tematico.", "banner_sunrise", _has_achievement("DAILY_WIN")),
]
