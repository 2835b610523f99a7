"""
Configuration management for Spinpool.
Supports config.json with environment variable overrides.
All paths are resolved relative to the project root.
"""

import json
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

# Project root directory (parent of 'spinpool' folder)
PROJECT_ROOT = Path(__file__).parent.parent


def get_env(key: str, default: str = None) -> Optional[str]:
    """Get environment variable with optional default."""
    return os.environ.get(key, default)


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean environment variable."""
    val = os.environ.get(key)
    if val is None:
        return default
    return val.lower() in ("true", "1", "yes", "on")


def get_env_int(key: str, default: int = 0) -> int:
    """Get integer environment variable."""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


def get_env_float(key: str, default: float = 0.0) -> float:
    """Get float environment variable."""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default


# ==================== Configuration Models ====================

class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = True
    name: str = "Spinpool"


class SlotsConfig(BaseModel):
    """Stake bounds, wallet defaults and recent-win retention."""
    min_bet: float = 0.01
    max_bet: float = 1.0
    # Outer bound applied to the raw request body before the stake check
    request_min_bet: float = 0.001
    request_max_bet: float = 10.0
    starting_balance: float = 1.5
    recent_wins_capacity: int = 20
    recent_wins_visible: int = 10
    default_wallet: str = "0x1234567890abcdef"
    seed_demo_wins: bool = True


class PoolConfig(BaseModel):
    """Initial liquidity pool figures shown next to the machine."""
    total_liquidity: float = 1250.45
    user_share: float = 0.05
    volume_24h: float = 342.18
    apy: float = 12.5


class LoggingConfig(BaseModel):
    level: str = "INFO"
    log_to_file: bool = False
    formatter: str = "color"


class PathsConfig(BaseModel):
    """All paths are relative to PROJECT_ROOT."""
    config_file: str = "config.json"
    log_file: str = "data/app.log"

    def get_config_path(self) -> Path:
        return PROJECT_ROOT / self.config_file

    def get_log_path(self) -> Path:
        return PROJECT_ROOT / self.log_file


class AppConfig(BaseModel):
    """Main application configuration."""
    server: ServerConfig = Field(default_factory=ServerConfig)
    slots: SlotsConfig = Field(default_factory=SlotsConfig)
    pool: PoolConfig = Field(default_factory=PoolConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)


# ==================== Configuration Loading ====================

def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load configuration from config.json with environment variable overrides.
    Environment variables take precedence over config.json values.
    """
    if config_path is None:
        config_path = PROJECT_ROOT / "config.json"

    data = {}

    if config_path.exists():
        with open(config_path, "r") as f:
            data = json.load(f)

    # Apply environment variable overrides
    if get_env("SERVER_HOST"):
        data.setdefault("server", {})["host"] = get_env("SERVER_HOST")
    if get_env("SERVER_PORT"):
        data.setdefault("server", {})["port"] = get_env_int("SERVER_PORT", 8000)
    if get_env("DEBUG"):
        data.setdefault("server", {})["debug"] = get_env_bool("DEBUG")

    if get_env("SLOTS_MIN_BET"):
        data.setdefault("slots", {})["min_bet"] = get_env_float("SLOTS_MIN_BET", 0.01)
    if get_env("SLOTS_MAX_BET"):
        data.setdefault("slots", {})["max_bet"] = get_env_float("SLOTS_MAX_BET", 1.0)
    if get_env("STARTING_BALANCE"):
        data.setdefault("slots", {})["starting_balance"] = get_env_float("STARTING_BALANCE", 1.5)
    if get_env("SEED_DEMO_WINS"):
        data.setdefault("slots", {})["seed_demo_wins"] = get_env_bool("SEED_DEMO_WINS", True)

    if get_env("LOG_LEVEL"):
        data.setdefault("logging", {})["level"] = get_env("LOG_LEVEL")
    if get_env("LOG_TO_FILE"):
        data.setdefault("logging", {})["log_to_file"] = get_env_bool("LOG_TO_FILE")
    if get_env("LOG_FORMATTER"):
        data.setdefault("logging", {})["formatter"] = get_env("LOG_FORMATTER")

    return AppConfig(**data)


def save_config(config: AppConfig):
    """Save configuration to config.json."""
    config_path = config.paths.get_config_path()

    # Paths are computed, not persisted
    data = config.model_dump(exclude={"paths"})

    with open(config_path, "w") as f:
        json.dump(data, f, indent=4)


# Global config instance
settings = load_config()
