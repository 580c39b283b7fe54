from enum import Enum
from typing import Any, Optional
import json
import os
from pydantic import BaseModel, ConfigDict, Field
from loguru import logger
from .events import Signal


class InverseErrorPolicy(str, Enum):
    """What a view-model write does when its inverse transform raises."""
    PROPAGATE = "propagate"
    USE_DEFAULT = "use_default"


# --- Settings Models ---
class BindingSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    inverse_error_policy: InverseErrorPolicy = InverseErrorPolicy.USE_DEFAULT
    strict_types: bool = True
    # Remember changes of never-read properties and notify on first bind
    replay_pending_changes: bool = False


class FormatSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    separator: str = " "


class LoggingSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    debug_mode: bool = False
    log_dir: Optional[str] = None


class AppConfig(BaseModel):
    binding: BindingSettings = Field(default_factory=BindingSettings)
    format: FormatSettings = Field(default_factory=FormatSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# --- Manager ---
class ConfigManager:
    """
    Manages binding configuration with optional persistence and reactivity.

    Without a filepath the configuration lives in memory only. JSON files are
    rewritten on every `update`; TOML files are read-only, so updates to a
    TOML-backed config apply in memory and are not written back.
    """
    def __init__(self, filepath: Optional[str] = None):
        self.filepath = filepath
        self._data = AppConfig()
        self.on_changed = Signal("ConfigChanged")
        if self.filepath:
            self._load()

    @property
    def data(self) -> AppConfig:
        return self._data

    def update(self, section: str, key: str, value: Any):
        """Update a setting, validate via Pydantic, autosave, and emit change event."""
        if section not in AppConfig.model_fields:
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if key not in type(section_obj).model_fields:
            raise ValueError(f"Invalid key: {key} in section {section}")

        setattr(section_obj, key, value)
        if self.filepath and self.filepath.endswith('.toml'):
            logger.warning(f"TOML config {self.filepath} is read-only; {section}.{key} changed in memory only")
        else:
            self._save()
        self.on_changed.emit(section, key, getattr(section_obj, key))

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        return getattr(section_obj, key)

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if os.path.isfile(self.filepath):
            try:
                if self.filepath.endswith('.toml'):
                    import tomllib
                    with open(self.filepath, "rb") as f:
                        raw = tomllib.load(f)
                else:
                    with open(self.filepath, "r", encoding="utf-8") as f:
                        raw = json.load(f)
                self._data = AppConfig.model_validate(raw)
            except Exception as e:
                logger.error(f"Failed to load config from {self.filepath}: {e}")
                self._save()
        else:
            self._save()

    def _save(self):
        """Persist current config to JSON file."""
        if not self.filepath or self.filepath.endswith('.toml'):
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(mode="json"), f, indent=4)
        except Exception as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
