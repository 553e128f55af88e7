import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./appointments.db")

DOCTOR_CATALOG_URL = os.getenv(
    "DOCTOR_CATALOG_URL",
    "https://raw.githubusercontent.com/suyogshiftcare/jsontest/main/available.json",
)
DOCTOR_CATALOG_TIMEOUT_SECONDS = float(os.getenv("DOCTOR_CATALOG_TIMEOUT_SECONDS", "10"))
FETCH_DOCTORS_ON_STARTUP = _get_bool(os.getenv("FETCH_DOCTORS_ON_STARTUP"), default=True)

APPOINTMENTS_STORAGE_KEY = os.getenv("APPOINTMENTS_STORAGE_KEY", "appointments")

CORS_ALLOWED_ORIGINS = _get_list(
    os.getenv("CORS_ALLOWED_ORIGINS"),
    default=["http://localhost:5173"],
)


def validate_runtime_config() -> None:
    if not DOCTOR_CATALOG_URL:
        raise RuntimeError("DOCTOR_CATALOG_URL must be set.")
    if DOCTOR_CATALOG_TIMEOUT_SECONDS <= 0:
        raise RuntimeError("DOCTOR_CATALOG_TIMEOUT_SECONDS must be positive.")
