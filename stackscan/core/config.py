from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stackscan.scanner import ScannerOptions


class Settings(BaseSettings):
    """Scanner settings loaded from environment variables.

    Every field can be set with a STACKSCAN_ prefixed variable, e.g.
    STACKSCAN_MIN_CONFIDENCE=60, or from a .env file in the working
    directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="STACKSCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Results below this confidence are dropped from the stack (0-100).
    min_confidence: int = 40

    # Keep everything the detectors admitted, ignoring min_confidence.
    include_low_confidence: bool = False

    # Logging
    debug: bool = True
    log_level: str = "INFO"

    @field_validator("min_confidence")
    @classmethod
    def check_min_confidence(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError("min_confidence must be between 0 and 100")
        return v

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, v: str) -> str:
        return v.upper()

    def scanner_options(self) -> ScannerOptions:
        return ScannerOptions(
            min_confidence=self.min_confidence,
            include_low_confidence=self.include_low_confidence,
        )


def get_settings() -> Settings:
    return Settings()
