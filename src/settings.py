from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
_ENV_FILE = _PROJECT_ROOT / '.env'


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'NFT Gated Events'
    VERSION: str = '0.1.0'

    # Database
    DATABASE_URL: str = 'sqlite+aiosqlite:///db.sqlite3'
    DATABASE_ECHO: bool = False

    # Single privileged identity for both the registry and the issuer
    ADMINISTRATOR: str = '0x0000000000000000000000000000000000000001'

    # Ticket collection deployment parameters
    TICKET_NAME: str = 'Event Ticket'
    TICKET_SYMBOL: str = 'ETK'
    TICKET_MAX_SUPPLY: int = 1000
    TICKET_METADATA_BASE: str = 'https://example.com/metadata/'

    # Logging
    LOG_LEVEL: str = 'INFO'
    LOG_DIR: str | None = None


settings = Settings()
