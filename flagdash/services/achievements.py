from __future__ import annotations

import logging
from dataclasses import dataclass

from flagdash.schemas.progression import LastGame
from flagdash.schemas.user import User
from flagdash.services.catalog import ACHIEVEMENTS, AchievementDefinition

logger = logging.getLogger(__name__)


@dataclass
class AchievementProgress:
    id: str
    title: str
    reward_id: str
    current: int
    target: int
    unlocked: bool


class AchievementEvaluator:
    def __init__(self, definitions: list[AchievementDefinition] | None = None):
        self.definitions = definitions if definitions is not None else ACHIEVEMENTS

    def evaluate(self, user: User, last_game: LastGame | None = None) -> list[str]:
        """Unlock every reward whose check passes; mutates ``user`` and returns the new reward ids."""
        newly_unlocked: list[str] = []
        for ach in self.definitions:
            if ach.reward_id in user.unlocked_cosmetics:
                continue
            if ach.check(user, last_game):
                user.unlocked_cosmetics.append(ach.reward_id)
                newly_unlocked.append(ach.reward_id)
                logger.info(f"{user.username} unlocked cosmetic {ach.reward_id} ({ach.id})")
        return newly_unlocked

    def progress(self, user: User) -> list[AchievementProgress]:
        rows = []
        for ach in self.definitions:
            current, target = ach.progress(user)
            unlocked = ach.reward_id in user.unlocked_cosmetics
            rows.append(
                AchievementProgress(
                    id=ach.id,
                    title=ach.title,
                    reward_id=ach.reward_id,
                    current=target if unlocked else min(current, target),
                    target=target,
                    unlocked=unlocked,
                )
            )
        return rows
