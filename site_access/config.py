from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    LOG_LEVEL: str = "INFO"

    # =================================================================
    # COMPLIANCE ENGINE SETTINGS
    # =================================================================
    # Affiliation bucket for people with no company/department/site on file
    UNKNOWN_BUCKET: str = "Unknown"

    # Renewal watch window (days before expiry)
    EXPIRY_WARNING_DAYS: int = 30

    # Analytics rollups
    BOTTLENECK_LIMIT: int = 5
    RISK_DEPARTMENT_LIMIT: int = 3
    FAILING_MODULE_LIMIT: int = 3
    HEALTH_GOOD_THRESHOLD: float = 90.0
    HEALTH_WARNING_THRESHOLD: float = 75.0

    # Grading
    PASS_MARK: int = 70

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def health_band(self, score: float) -> str:
        """
        Classify an overall compliance rate (0-100) for dashboards.

        Returns "good", "warning" or "critical".
        """
        if score >= self.HEALTH_GOOD_THRESHOLD:
            return "good"
        if score >= self.HEALTH_WARNING_THRESHOLD:
            return "warning"
        return "critical"


settings = Settings()
