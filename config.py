from pydantic import PrivateAttr
from pydantic_settings import BaseSettings


def url_backend(database_url: str) -> str:
    """Lower-cased scheme of a database URL, e.g. 'sqlite+aiosqlite'."""
    return database_url.split(":")[0].lower()


class Settings(BaseSettings):
    app_name: str = "Broker Back Office API"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./broker_backoffice.db"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Loan amounts above average * ratio are flagged for a manual check
    check_amount_ratio: float = 1.5

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    _is_sqlite: bool = PrivateAttr(default=False)
    _is_postgresql: bool = PrivateAttr(default=False)

    def model_post_init(self, __context: object) -> None:
        _scheme = url_backend(self.database_url)
        self._is_sqlite = "sqlite" in _scheme
        self._is_postgresql = "postgresql" in _scheme

    @property
    def is_sqlite(self) -> bool:
        return self._is_sqlite

    @property
    def is_postgresql(self) -> bool:
        return self._is_postgresql


settings = Settings()
