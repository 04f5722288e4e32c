import os

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cricket_league.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("true", "1", "yes")

# Monte Carlo forecaster
FORECAST_TRIALS = _env_int("FORECAST_TRIALS", 10000)
FORECAST_TIME_BUDGET_SECONDS = _env_float("FORECAST_TIME_BUDGET_SECONDS", 0.0)  # 0 = unbounded
FORECAST_WORKERS = _env_int("FORECAST_WORKERS", 1)

# Backtracking fixture search
SCHEDULER_MAX_STEPS = _env_int("SCHEDULER_MAX_STEPS", 200000)
SCHEDULER_TIME_BUDGET_SECONDS = _env_float("SCHEDULER_TIME_BUDGET_SECONDS", 2.0)
