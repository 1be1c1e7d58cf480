from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HIGH_SENSITIVITY_KEYWORDS = [
    "security",
    "defense",
    "defence",
    "military",
    "government",
    "mossad",
    "shin bet",
    "health",
    "medical",
    "hospital",
    "bank",
    "finance",
    "crypto",
    "anthropic",
    "openai",
]

DEFAULT_MEDIUM_SENSITIVITY_KEYWORDS = [
    "aws",
    "amazon",
    "gcp",
    "google",
    "azure",
    "microsoft",
    "hosting",
    "server",
    "cloud",
]

_MIB = 1024 * 1024


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    app_env: str = "dev"
    log_level: str = "INFO"

    max_upload_bytes: int = 10 * _MIB
    text_preview_limit: int = 5000

    pdf_engine: str = "pdfplumber"
    pdf_min_text_length: int = 20

    ocr_engine: str = "tesseract"
    ocr_languages: str = "eng+heb"
    ocr_timeout_seconds: int = 30

    high_sensitivity_keywords: list[str] = DEFAULT_HIGH_SENSITIVITY_KEYWORDS
    medium_sensitivity_keywords: list[str] = DEFAULT_MEDIUM_SENSITIVITY_KEYWORDS

    retention_high_value_threshold: Decimal = Decimal("20000")
    retention_mid_value_threshold: Decimal = Decimal("5000")
    temporary_retention_days: int = 365

    reduction_full_days: int = 30
    reduction_essential_days: int = 90

    scan_png_max_bytes: int = 50 * _MIB
    scan_jpeg_max_bytes: int = 100 * _MIB
    scan_entropy_min_bytes: int = 10 * _MIB
    scan_entropy_threshold: float = 7.5
