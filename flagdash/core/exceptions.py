"""
Exceptions raised by the progression engine for integration errors.

Validation outcomes (duplicate username, wrong password, locked cosmetic) are
returned as ``OperationResult`` values instead.
"""


class FlagDashError(Exception):
    """Base exception carrying a message safe to show to players."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message


class UserNotFoundError(FlagDashError):
    def __init__(self, username: str):
        super().__init__(
            f"User '{username}' not found",
            "Usuario no encontrado."
        )
        self.username = username


class InvalidMatchError(FlagDashError):
    def __init__(self, time_ms: int, reason: str):
        super().__init__(
            f"Invalid match time {time_ms}: {reason}",
            "Resultado de partida invalido."
        )
        self.time_ms = time_ms
