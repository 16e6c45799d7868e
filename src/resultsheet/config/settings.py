from dataclasses import dataclass
import os
from dotenv import load_dotenv


load_dotenv()


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    results_api_url: str = os.getenv("RESULTSHEET_API_URL", "")
    results_api_token: str = os.getenv("RESULTSHEET_API_TOKEN", "")
    results_api_timeout: float = float(os.getenv("RESULTSHEET_API_TIMEOUT", "15"))

    log_level: str = os.getenv("RESULTSHEET_LOG_LEVEL", "INFO")

    cors_allowed_origins: tuple[str, ...] = _split_csv(
        os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
    )
    cors_allow_origin_regex: str = os.getenv(
        "CORS_ALLOW_ORIGIN_REGEX",
        r"^https?:\/\/(localhost|127\.0\.0\.1)(:\d+)?$",
    )


settings = Settings()
