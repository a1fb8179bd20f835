"""Application configuration via environment variables."""

from pathlib import Path
from pydantic_settings import BaseSettings

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    database_url: str = "sqlite:///./ohla.db"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173"]  # Vite dev server

    # Remote node RPC
    rpc_timeout_seconds: float = 10.0

    # Bootstrap profile, created on startup when the store is empty
    btc_rpc_url: str = ""
    btc_rpc_user: str = ""
    btc_rpc_pass: str = ""
    btc_network: str = "mainnet"
    btc_node_name: str = "default"

    model_config = {"env_prefix": "OHLA_", "env_file": ".env"}


settings = Settings()
