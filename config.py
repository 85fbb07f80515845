#!/usr/bin/env python3
"""
Configuration management for nl-agent.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


DEFAULT_CONFIG = {
    "paths": {
        "home_dir": "~",
        "allowed_dirs": ["Downloads", "Desktop", "Documents"],
        "summary_file": "agent_operation_summary.md",
        "headlines_file": "hn_top5_headlines.md",
        "config_dir": "~/.config/nl-agent",
        "command_log": "command_log.jsonl",
    },
    "tools": {
        "archiver": ["zip"],
        "converter": ["soffice", "--headless", "--convert-to", "pdf"],
        "http_client": ["curl", "-s"],
        "timeout_seconds": None,
    },
    "news": {
        "api_base": "https://hacker-news.firebaseio.com/v0",
    },
    "ui": {
        "mode": "terminal",
        "assume_yes": False,
    },
    "security": {
        "canonicalize_paths": False,
    },
}


@dataclass
class PathsConfig:
    home_dir: str = "~"
    allowed_dirs: List[str] = field(default_factory=lambda: ["Downloads", "Desktop", "Documents"])
    summary_file: str = "agent_operation_summary.md"
    headlines_file: str = "hn_top5_headlines.md"
    config_dir: str = "~/.config/nl-agent"
    command_log: str = "command_log.jsonl"


@dataclass
class ToolsConfig:
    archiver: List[str] = field(default_factory=lambda: ["zip"])
    converter: List[str] = field(default_factory=lambda: ["soffice", "--headless", "--convert-to", "pdf"])
    http_client: List[str] = field(default_factory=lambda: ["curl", "-s"])
    timeout_seconds: Optional[float] = None


@dataclass
class NewsConfig:
    api_base: str = "https://hacker-news.firebaseio.com/v0"


@dataclass
class UIConfig:
    mode: str = "terminal"
    assume_yes: bool = False


@dataclass
class SecurityConfig:
    canonicalize_paths: bool = False


@dataclass
class Config:
    paths: PathsConfig
    tools: ToolsConfig
    news: NewsConfig
    ui: UIConfig
    security: SecurityConfig

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Config:
        return cls(
            paths=PathsConfig(**data.get("paths", {})),
            tools=ToolsConfig(**data.get("tools", {})),
            news=NewsConfig(**data.get("news", {})),
            ui=UIConfig(**data.get("ui", {})),
            security=SecurityConfig(**data.get("security", {})),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "paths": asdict(self.paths),
            "tools": asdict(self.tools),
            "news": asdict(self.news),
            "ui": asdict(self.ui),
            "security": asdict(self.security),
        }

    # ---- resolved locations ----
    def home(self) -> Path:
        return Path(os.path.expanduser(self.paths.home_dir))

    def allowed_paths(self) -> List[str]:
        home = self.home()
        return [str(home / d) for d in self.paths.allowed_dirs]

    def _under_home(self, name: str) -> Path:
        p = Path(os.path.expanduser(name))
        return p if p.is_absolute() else self.home() / p

    def summary_path(self) -> Path:
        return self._under_home(self.paths.summary_file)

    def headlines_path(self) -> Path:
        return self._under_home(self.paths.headlines_file)

    def command_log_path(self) -> Path:
        p = Path(os.path.expanduser(self.paths.command_log))
        if p.is_absolute():
            return p
        return Path(os.path.expanduser(self.paths.config_dir)) / p


class ConfigManager:
    def __init__(self, config_file: Optional[Path] = None):
        if config_file is None:
            config_dir = Path(os.path.expanduser(DEFAULT_CONFIG["paths"]["config_dir"]))
            config_file = config_dir / "config.json"
        self.config_file = Path(config_file)
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def _load_config(self) -> Config:
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                merged = self._deep_merge(DEFAULT_CONFIG, data)
                return Config.from_dict(merged)
            except Exception as e:
                logger.warning(f"Failed to load config {self.config_file}: {e}")
        return Config.from_dict(DEFAULT_CONFIG)

    def save_config(self) -> None:
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(self.config.to_dict(), f, indent=2)
            try:
                os.chmod(self.config_file, 0o600)
            except OSError:
                pass
        except Exception as e:
            logger.error(f"Error saving config: {e}")

    def update_config(self, updates: Dict[str, Any]) -> None:
        current = self.config.to_dict()
        merged = self._deep_merge(current, updates)
        self._config = Config.from_dict(merged)
        self.save_config()

    def _deep_merge(self, base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()
        for key, value in update.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


# Global singleton
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_file: Optional[Path] = None) -> ConfigManager:
    global _config_manager
    if _config_manager is None or (config_file is not None and Path(config_file) != _config_manager.config_file):
        _config_manager = ConfigManager(config_file)
    return _config_manager


def get_config() -> Config:
    return get_config_manager().config
