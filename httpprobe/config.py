import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class Settings:
    HTTPPROBE_CHECK_INTERVAL: float = float(
        os.getenv("HTTPPROBE_CHECK_INTERVAL", "30")
    )
    HTTPPROBE_REQUEST_TIMEOUT: float = float(
        os.getenv("HTTPPROBE_REQUEST_TIMEOUT", "15")
    )
    HTTPPROBE_CHECKS_PATH: str = os.getenv(
        "HTTPPROBE_CHECKS_PATH", str(PROJECT_ROOT / "checks.yml")
    )
    HTTPPROBE_LOG_LEVEL: str = os.getenv("HTTPPROBE_LOG_LEVEL", "INFO")


settings = Settings()
