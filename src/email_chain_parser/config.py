from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from email_chain_parser.services.chain_parser import ChainOptions
from email_chain_parser.services.patterns import (
    MIN_FALLBACK_SEGMENT_CHARS,
    QUOTE_STRIP_MIN_KEPT_LINES,
    QUOTE_STRIP_MIN_ORIGINAL_LINES,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    log_level: str = "INFO"
    max_upload_bytes: int = 10 * 1024 * 1024

    blank_line_min_segment_chars: int = MIN_FALLBACK_SEGMENT_CHARS
    quote_strip_min_kept_lines: int = QUOTE_STRIP_MIN_KEPT_LINES
    quote_strip_min_original_lines: int = QUOTE_STRIP_MIN_ORIGINAL_LINES

    def chain_options(self) -> ChainOptions:
        return ChainOptions(
            blank_line_min_segment_chars=self.blank_line_min_segment_chars,
            quote_strip_min_kept_lines=self.quote_strip_min_kept_lines,
            quote_strip_min_original_lines=self.quote_strip_min_original_lines,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
