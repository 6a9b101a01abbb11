"""Configuration loading for the Gentle Diary."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


def _resolve_path(raw_path: str, base_dir: Path) -> str:
    path = Path(raw_path).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)


@dataclass
class StorageConfig:
    """Backing key-value store location and the key holding all entries."""

    path: str = "data/diary.db"
    storage_key: str = "gentle_diary_entries_v1"


@dataclass
class GenerationConfig:
    """Encouragement generation settings."""

    use_delegated: bool = False
    provider: str = "google"
    model: str = "gemini-2.5-flash"
    temperature: float = 0.7
    max_output_tokens: int = 150


@dataclass
class UIConfig:
    """Presentation limits. Never enforced on stored data."""

    max_reflection_display_length: int = 800
    excerpt_length: int = 120


@dataclass
class AppConfig:
    """Top-level app configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    google_api_key: Optional[str] = None
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> "AppConfig":
        """Build config from a dictionary."""
        base = Path.cwd() if base_dir is None else base_dir

        storage_data = dict(data.get("storage") or {})
        storage_data["path"] = _resolve_path(storage_data.get("path", "data/diary.db"), base)
        storage = StorageConfig(**storage_data)

        generation = GenerationConfig(**(data.get("generation") or {}))
        ui = UIConfig(**(data.get("ui") or {}))

        return cls(
            storage=storage,
            generation=generation,
            ui=ui,
            google_api_key=data.get("google_api_key"),
            log_level=str(data.get("log_level", "WARNING")).upper(),
        )

    @classmethod
    def from_yaml(cls, path: str) -> "AppConfig":
        """Load config from YAML."""
        config_path = Path(path).resolve()
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        return cls.from_dict(data, base_dir=config_path.parent)
