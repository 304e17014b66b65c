"""Configuration management for cadastro."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from cadastro.exceptions import ConfigurationError

STORAGE_BACKENDS = ("memory", "json", "postgres")
DEFAULT_BLOB_KEY = "app_cadastros"


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "cadastro"
    user: str = "postgres"
    password: str = "postgres"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class StorageConfig:
    """Where the record collection is persisted."""

    backend: str = "json"
    data_dir: Path = field(default_factory=lambda: Path("data"))
    blob_key: str = DEFAULT_BLOB_KEY

    def __post_init__(self) -> None:
        if self.backend not in STORAGE_BACKENDS:
            raise ConfigurationError(
                f"Unknown storage backend {self.backend!r} (expected one of {', '.join(STORAGE_BACKENDS)})"
            )
        if not self.blob_key:
            raise ConfigurationError("Storage blob key must not be empty")
        self.data_dir = Path(self.data_dir)


@dataclass
class CadastroConfig:
    """Main configuration for cadastro."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    log_level: str = "INFO"
    log_format: str = "standard"
    seed_sample_data: bool = False

    @classmethod
    def from_env(cls) -> "CadastroConfig":
        """Create config from environment variables."""
        storage = StorageConfig(
            backend=os.getenv("CADASTRO_STORAGE", "json").lower(),
            data_dir=Path(os.getenv("CADASTRO_DATA_DIR", "data")),
            blob_key=os.getenv("CADASTRO_BLOB_KEY", DEFAULT_BLOB_KEY),
        )

        port = os.getenv("POSTGRES_PORT", "5432")
        try:
            port_number = int(port)
        except ValueError as e:
            raise ConfigurationError(f"POSTGRES_PORT must be an integer, got {port!r}") from e

        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=port_number,
            database=os.getenv("POSTGRES_DB", "cadastro"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
        )

        return cls(
            storage=storage,
            postgres=postgres,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            seed_sample_data=os.getenv("CADASTRO_SEED_SAMPLE", "false").lower() == "true",
        )
