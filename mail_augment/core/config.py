# File: mail_augment/core/config.py
import sys
import logging
from pydantic import Field, field_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env',
        env_prefix='MAIL_AUGMENT_',
        case_sensitive=False,
        env_file_encoding='utf-8',
        extra='ignore'
    )

    PROJECT_NAME: str = "Mail Augment Service (Gemini)"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # --- Gemini API ---
    GEMINI_API_KEY: SecretStr = Field(default=SecretStr(""), description="Google Gemini API key. Empty disables AI summaries.")
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT_SECONDS: float = 30.0

    # --- Embeddings ---
    EMBEDDING_MODEL_NAME: str = "text-embedding-004"
    EMBEDDING_DIMENSION: int = 768
    EMBEDDING_MAX_BODY_CHARS: int = Field(default=8000, gt=0)

    # --- Summaries ---
    SUMMARY_MODEL_NAME: str = "gemini-1.5-flash"
    SUMMARY_TEMPERATURE: float = Field(default=0.5, ge=0.0, le=2.0)
    SUMMARY_MAX_OUTPUT_TOKENS: int = Field(default=150, gt=0)
    SUMMARY_PREVIEW_CHARS: int = Field(default=200, gt=0)
    SUMMARY_SENTENCE_CUT_MIN_INDEX: int = Field(default=100, ge=0)
    MIN_SUBSTANTIVE_CHARS: int = Field(default=10, ge=0)
    SUMMARY_BATCH_DEADLINE_SECONDS: float = Field(default=60.0, ge=0.0, description="0 disables the batch deadline.")

    @field_validator('LOG_LEVEL')
    @classmethod
    def check_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid LOG_LEVEL '{v}'. Must be one of {valid_levels}")
        return v.upper()

    @property
    def gemini_enabled(self) -> bool:
        return bool(self.GEMINI_API_KEY.get_secret_value())

temp_log = logging.getLogger("mail_augment.config.loader")
if not temp_log.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    temp_log.addHandler(handler)
    temp_log.setLevel(logging.INFO)

try:
    temp_log.info("Loading Mail Augment settings...")
    settings = Settings()
    temp_log.info("--- Mail Augment Settings Loaded ---")
    temp_log.info(f"  PROJECT_NAME: {settings.PROJECT_NAME}")
    temp_log.info(f"  LOG_LEVEL: {settings.LOG_LEVEL}")
    temp_log.info(f"  GEMINI_API_KEY: {'*** SET ***' if settings.gemini_enabled else '*** NOT SET (AI summaries disabled) ***'}")
    temp_log.info(f"  EMBEDDING_MODEL_NAME: {settings.EMBEDDING_MODEL_NAME} (dim={settings.EMBEDDING_DIMENSION})")
    temp_log.info(f"  SUMMARY_MODEL_NAME: {settings.SUMMARY_MODEL_NAME}")
    temp_log.info("------------------------------------")
except Exception as e:
    temp_log.critical(f"FATAL: Error loading Mail Augment settings: {e}")
    sys.exit("FATAL: Invalid configuration. Check logs.")
