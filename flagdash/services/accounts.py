from __future__ import annotations

import logging
import math

from pydantic import TypeAdapter

from flagdash.core.clock import Clock
from flagdash.core.config import settings
from flagdash.core.exceptions import UserNotFoundError
from flagdash.core.security import hash_password, verify_password
from flagdash.schemas.game import GameMode
from flagdash.schemas.user import ModeRecord, OperationResult, User
from flagdash.services.catalog import COSMETICS_MAP, SLOT_BY_REWARD_TYPE
from flagdash.services.kv_store import KeyValueStore, dump_json, load_json

logger = logging.getLogger(__name__)

USERS_KEY = "flagdash_users_v1"
SESSION_KEY = "flagdash_current_user"

_users_adapter = TypeAdapter(dict[str, User])
_session_adapter = TypeAdapter(str | None)

EQUIP_SLOTS = tuple(SLOT_BY_REWARD_TYPE.values())


def calculate_level(xp: int) -> int:
    if xp <= 0:
        return 1
    return math.floor(math.sqrt(xp / settings.XP_BASE_DIVISOR)) + 1


def apply_mode_time(user: User, mode: GameMode, time_ms: int, season_id: str) -> list[str]:
    """Update PB/SB for ``mode`` in place and return the badges earned."""
    badges: list[str] = []
    rec = user.records.get(mode)
    if rec is None:
        rec = ModeRecord(pb=None, sb=None, season_id=season_id)
        user.records[mode] = rec

    if rec.pb is None or time_ms < rec.pb:
        rec.pb = time_ms
        badges.append("PB")

    if rec.season_id != season_id:
        # New season: SB restarts from this run even if it is slower
        rec.sb = time_ms
        rec.season_id = season_id
        badges.append("SB")
    elif rec.sb is None or time_ms < rec.sb:
        rec.sb = time_ms
        badges.append("SB")

    return badges


class AccountStore:
    def __init__(self, store: KeyValueStore, clock: Clock | None = None):
        self.store = store
        self.clock = clock or Clock()

    def _load(self) -> dict[str, User]:
        return load_json(self.store, USERS_KEY, _users_adapter, dict)

    def _save_all(self, users: dict[str, User]):
        dump_json(self.store, USERS_KEY, _users_adapter, users)

    def get_user(self, username: str) -> User | None:
        return self._load().get(username)

    def require_user(self, username: str) -> User:
        user = self.get_user(username)
        if user is None:
            raise UserNotFoundError(username)
        return user

    def list_users(self) -> list[User]:
        return list(self._load().values())

    def save_user(self, user: User) -> User:
        user.level = calculate_level(user.xp)
        users = self._load()
        users[user.username] = user
        self._save_all(users)
        return user

    def register(self, username: str, password: str, country_code: str) -> OperationResult:
        username = (username or "").strip()
        if not username or not password:
            return OperationResult(success=False, message="Usuario y contraseña son obligatorios.")

        users = self._load()
        if username in users:
            return OperationResult(success=False, message="El nombre de usuario ya existe.")

        user = User(
            username=username,
            password_hash=hash_password(password),
            country_code=country_code.lower(),
        )
        users[username] = user
        self._save_all(users)
        logger.info(f"Registered user {username} ({user.country_code})")
        return OperationResult(success=True, message="Usuario registrado con éxito.", user=user)

    def login(self, username: str, password: str) -> OperationResult:
        user = self.get_user(username)
        if user is None or not verify_password(password, user.password_hash):
            return OperationResult(success=False, message="Usuario o contraseña incorrectos.")
        return OperationResult(success=True, message="Login correcto.", user=user)

    def grant_xp(self, user: User, xp: int) -> User:
        user.xp += xp
        user.level = calculate_level(user.xp)
        return user

    def apply_time(self, user: User, mode: GameMode, time_ms: int) -> list[str]:
        return apply_mode_time(user, mode, time_ms, self.clock.season_id())

    def equip_cosmetic(self, username: str, slot: str, cosmetic_id: str) -> OperationResult:
        if slot not in EQUIP_SLOTS:
            return OperationResult(success=False, message=f"Ranura desconocida: {slot}.")
        user = self.get_user(username)
        if user is None:
            return OperationResult(success=False, message="Usuario no encontrado.")
        cosmetic = COSMETICS_MAP.get(cosmetic_id)
        if cosmetic is None or SLOT_BY_REWARD_TYPE[cosmetic.type] != slot:
            return OperationResult(success=False, message="Cosmético no válido para esta ranura.")
        if cosmetic_id not in user.unlocked_cosmetics:
            return OperationResult(success=False, message="Cosmético bloqueado.")

        setattr(user.equipped_cosmetics, slot, cosmetic_id)
        self.save_user(user)
        return OperationResult(success=True, message="Cosmético equipado.", user=user)

    def unequip_cosmetic(self, username: str, slot: str) -> OperationResult:
        if slot not in EQUIP_SLOTS:
            return OperationResult(success=False, message=f"Ranura desconocida: {slot}.")
        user = self.get_user(username)
        if user is None:
            return OperationResult(success=False, message="Usuario no encontrado.")
        setattr(user.equipped_cosmetics, slot, None)
        self.save_user(user)
        return OperationResult(success=True, message="Cosmético retirado.", user=user)

    def save_session(self, user: User):
        dump_json(self.store, SESSION_KEY, _session_adapter, user.username)

    def get_session(self) -> User | None:
        username = load_json(self.store, SESSION_KEY, _session_adapter, lambda: None)
        return self.get_user(username) if username else None

    def clear_session(self):
        dump_json(self.store, SESSION_KEY, _session_adapter, None)
