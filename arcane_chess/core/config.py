"""Application settings. Every value can be overridden through an environment variable."""

import os
from dataclasses import dataclass, field

TRUTHY_VALUES = {"1", "true", "yes", "on"}


def _read_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUTHY_VALUES


@dataclass(slots=True)
class Settings:
    """
    Central configuration
    ----

    * database_url: SQLAlchemy URL of the database holding the games and their moves.
    * sql_echo: let SQLAlchemy log the statements it emits.
    * log_level: level name for the `arcane_chess` logger.
    * engine_advances_turn: let the rule engine flip the side to move (and update counters) after a move.
        Off by default: the game service keeps track of the turn in its own record.
    """

    database_url: str = field(
        default_factory=lambda: os.getenv(
            "ARCANE_CHESS_DATABASE_URL", "sqlite:///arcane_chess.db"
        )
    )
    sql_echo: bool = field(
        default_factory=lambda: _read_bool("ARCANE_CHESS_SQL_ECHO", False)
    )
    log_level: str = field(
        default_factory=lambda: os.getenv("ARCANE_CHESS_LOG_LEVEL", "INFO").upper()
    )
    engine_advances_turn: bool = field(
        default_factory=lambda: _read_bool("ARCANE_CHESS_ENGINE_ADVANCES_TURN", False)
    )


def get_settings() -> Settings:
    return Settings()
