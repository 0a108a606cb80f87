"""
Runtime configuration from environment variables.
The CLI loads .env first (python-dotenv), so values there apply too.
"""

import os
from dataclasses import dataclass
from pathlib import Path

STORE_FILE = "file"
STORE_MEMORY = "memory"
STORE_NEO4J = "neo4j"
STORE_BACKENDS = (STORE_FILE, STORE_MEMORY, STORE_NEO4J)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_STORE_PATH = Path.home() / ".contactor" / "contacts.json"
DEFAULT_OUTPUT_DIR = Path.home() / "Documents"


@dataclass(frozen=True)
class Settings:
    store: str = STORE_FILE
    store_path: Path = DEFAULT_STORE_PATH
    output_dir: Path = DEFAULT_OUTPUT_DIR
    default_region: str | None = None
    log_level: str = "WARNING"
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    container_id: str = "default"

    def __post_init__(self):
        if self.store not in STORE_BACKENDS:
            raise ValueError(
                f"CONTACTOR_STORE must be one of {', '.join(STORE_BACKENDS)}, got {self.store!r}."
            )
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"CONTACTOR_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}."
            )


def _env(key: str, default: str) -> str:
    return os.environ.get(key, default).strip() or default


def load_settings() -> Settings:
    region = os.environ.get("CONTACTOR_DEFAULT_REGION", "").strip().upper()
    return Settings(
        store=_env("CONTACTOR_STORE", STORE_FILE).lower(),
        store_path=Path(_env("CONTACTOR_STORE_PATH", str(DEFAULT_STORE_PATH))).expanduser(),
        output_dir=Path(_env("CONTACTOR_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR))).expanduser(),
        default_region=region or None,
        log_level=_env("CONTACTOR_LOG_LEVEL", "WARNING").upper(),
        neo4j_uri=_env("NEO4J_URI", "bolt://localhost:7687"),
        neo4j_user=_env("NEO4J_USER", "neo4j"),
        neo4j_password=_env("NEO4J_PASSWORD", "password"),
        container_id=_env("CONTACTOR_CONTAINER_ID", "default"),
    )
