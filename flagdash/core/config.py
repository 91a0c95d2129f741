from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    ENV: str = "prod"

    DATABASE_URL: str = "sqlite:///flagdash.db"

    # All day/week/season boundaries are computed in this zone, whatever the player's locale
    TIMEZONE: str = "Europe/Madrid"

    LEADERBOARD_CAP: int = 2000
    ACTIVITY_LOG_SIZE: int = 4

    XP_BASE_DIVISOR: int = 100

    # Nations league
    NATION_TOP_CONTRIBUTORS: int = 5
    NATION_PENALTY_MS: int = 60000
    NATION_POINTS_TOP_RANKS: int = 10

    # Weekly league
    WEEKLY_LEAGUE_WINDOW_DAYS: int = 7
    WEEKLY_LEAGUE_MIN_PLAYERS: int = 5

    DAILY_WIN_WINDOW_HOURS: int = 48

    LOG_LEVEL: str = "INFO"
    LOG_DIR: str | None = None

settings = Settings()
