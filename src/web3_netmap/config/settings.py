from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default config paths relative to the package config directory
_CONFIG_DIR = Path(__file__).parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WEB3_NETMAP_")

    log_json: bool = False
    log_level: str = "INFO"
    geo_config_path: Path = _CONFIG_DIR / "geo.yaml"
    cluster_radius: float = 40.0
    random_seed: int | None = None


@lru_cache
def get_settings() -> Settings:
    return Settings()
