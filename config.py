"""
Settings for the checkers rules engine.

Rule toggles and logging options are pydantic models. They are read from
CHECKERS_* environment variables by default, or from a JSON file.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

_TRUTHY = ('1', 'true', 'yes', 'on')
_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')

# Environment variable -> (section, field)
ENV_VARS: Dict[str, tuple] = {
    'CHECKERS_MANDATORY': ('rules', 'captures_mandatory'),
    'CHECKERS_ALLOW_UNDO': ('rules', 'allow_undo'),
    'CHECKERS_LOG_LEVEL': ('logging', 'log_level'),
    'CHECKERS_LOG_FILE': ('logging', 'log_to_file'),
}


class GameRulesSettings(BaseModel):
    """House-rule switches consulted by GameState."""

    captures_mandatory: bool = Field(default=True, description="A capture must be taken when one exists")
    allow_undo: bool = Field(default=True, description="GameState.undo_move is permitted")

    @field_validator('captures_mandatory', 'allow_undo', mode='before')
    @classmethod
    def coerce_flag(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in _TRUTHY
        return bool(v)


class LoggingSettings(BaseModel):
    """Where engine log records go and how verbose they are."""

    log_level: str = Field(default="INFO", description="One of DEBUG, INFO, WARNING, ERROR")
    log_to_file: bool = Field(default=False, description="Also write records to log_file_path")
    log_file_path: str = Field(default="checkers.log", description="Destination when log_to_file is set")

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_level(cls, v):
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(_LOG_LEVELS)}, got {v!r}")
        return level

    @field_validator('log_to_file', mode='before')
    @classmethod
    def coerce_flag(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in _TRUTHY
        return bool(v)


class CheckersConfig(BaseModel):
    """Top-level settings object."""

    rules: GameRulesSettings = Field(default_factory=GameRulesSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    version: str = Field(default="1.0.0", description="Settings schema version")
    config_file: Optional[str] = Field(default=None, description="File these settings were read from")

    @classmethod
    def from_env(cls) -> 'CheckersConfig':
        """Defaults overridden by any CHECKERS_* variables that are set."""
        sections: Dict[str, Dict[str, str]] = {'rules': {}, 'logging': {}}
        for var, (section, field) in ENV_VARS.items():
            value = os.getenv(var)
            if value is not None:
                sections[section][field] = value
        return cls(
            rules=GameRulesSettings(**sections['rules']),
            logging=LoggingSettings(**sections['logging']),
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    def save_to_file(self, filepath: str) -> None:
        """Write settings as JSON, recording `filepath` as their source."""
        self.config_file = filepath
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'CheckersConfig':
        with open(filepath, 'r') as f:
            data = json.load(f)
        data['config_file'] = filepath
        return cls.model_validate(data)

    def update_from_dict(self, updates: Dict[str, Any]) -> None:
        """Overwrite known fields of known sections; anything else is ignored."""
        for section_name, values in updates.items():
            section = getattr(self, section_name, None)
            if not isinstance(section, BaseModel) or not isinstance(values, dict):
                continue
            known = {k: v for k, v in values.items() if k in type(section).model_fields}
            if known:
                merged = section.model_validate({**section.model_dump(), **known})
                setattr(self, section_name, merged)


_config: Optional[CheckersConfig] = None


def get_config() -> CheckersConfig:
    """Process-wide settings, built from the environment on first use."""
    global _config
    if _config is None:
        _config = CheckersConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> CheckersConfig:
    global _config
    _config = CheckersConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Drop cached settings so the next get_config() re-reads the environment."""
    global _config
    _config = None


def get_game_rules() -> GameRulesSettings:
    return get_config().rules


def get_logging_settings() -> LoggingSettings:
    return get_config().logging


def setup_logging() -> None:
    """Install root handlers according to the logging settings. Later calls are no-ops."""
    if getattr(setup_logging, "_configured", False):
        return
    settings = get_logging_settings()
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if settings.log_to_file:
        handlers.append(logging.FileHandler(settings.log_file_path))
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
