from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SIGNATURES_FILE = (
    Path(__file__).resolve().parent.parent / "data" / "magic_numbers_reference.json"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SIGIL_",
        extra="ignore",
    )
    APP_NAME: str = "Sigil"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    # Signature database loaded when no other file is given
    SIGNATURES_FILE: Path = DEFAULT_SIGNATURES_FILE
    # Upper bound for offset + pattern length of a single signature
    MAX_SIGNATURE_SPAN: int = 64 * 1024
    # Concurrent header reads while scanning a directory
    MAX_WORKERS: int = 8
    MAX_UPLOAD_SIZE_MB: float = 10.0
    # CORS: comma-separated list of allowed origins. Empty = same-origin only.
    CORS_ORIGINS: str = ""


settings = Settings()
