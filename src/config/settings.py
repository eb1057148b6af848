"""
Yahtzee Engine - Application Settings

Loads configuration from environment variables using Pydantic Settings.
"""

import logging
from functools import lru_cache
from typing import Sequence

from pydantic import field_validator
from pydantic_settings import BaseSettings

from src.engine.base import RuleSet, get_rule_set
from src.engine.dice import DiceSource
from src.engine.events import EventListener
from src.engine.match import Match


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase (snapshot persistence only)
    supabase_url: str = ""
    supabase_anon_key: str = ""
    snapshot_table: str = "match_snapshots"

    # Rules
    rule_variant: str = "classic"
    strict_transitions: bool = False

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("rule_variant")
    @classmethod
    def _known_variant(cls, value: str) -> str:
        get_rule_set(value)
        return value.lower()

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level {value!r}.")
        return level

    @property
    def rules(self) -> RuleSet:
        """Rule set selected by ``rule_variant``."""
        return get_rule_set(self.rule_variant)

    def new_match(
        self,
        player_names: Sequence[str],
        *,
        dice_source: DiceSource | None = None,
        listener: EventListener | None = None,
    ) -> Match:
        """Start a match with the configured rule variant and transition mode."""
        return Match(
            player_names,
            rules=self.rules,
            dice_source=dice_source,
            strict=self.strict_transitions,
            listener=listener,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging from settings (DEBUG when ``debug`` is set)."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
