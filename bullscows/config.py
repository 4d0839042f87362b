"""
Single place to:
- Load env vars from .env if present
- Turn them into a Settings object
- Set up logging for the CLI and the API

Why: every entry point reads the same knobs the same way.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .codes import Code, InvalidCodeError
from .engine import OPENING_GUESS

# dev convenience; in prod the platform injects env vars
load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    # None means "pick a random opener per game"
    opening_guess: Optional[Code] = OPENING_GUESS
    bench_workers: int = 4
    bench_seed: Optional[int] = None
    log_level: str = "INFO"
    random_org_enabled: bool = True
    random_org_timeout: float = 3.0


def _parse_opener(raw: str) -> Optional[Code]:
    if raw.strip().lower() == "random":
        return None
    try:
        return Code.parse(raw)
    except InvalidCodeError as exc:
        raise RuntimeError(
            f"OPENING_GUESS must be 4 distinct digits like 0123, or 'random' ({exc})"
        ) from exc


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}.") from None


def load_settings() -> Settings:
    bench_seed = os.getenv("BENCH_SEED")
    timeout = os.getenv("RANDOM_ORG_TIMEOUT", "3.0")
    try:
        random_org_timeout = float(timeout)
    except ValueError:
        raise RuntimeError(f"RANDOM_ORG_TIMEOUT must be a number, got {timeout!r}.") from None

    return Settings(
        opening_guess=_parse_opener(os.getenv("OPENING_GUESS", "0123")),
        bench_workers=max(1, _parse_int("BENCH_WORKERS", os.getenv("BENCH_WORKERS", "4"))),
        bench_seed=_parse_int("BENCH_SEED", bench_seed) if bench_seed else None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        random_org_enabled=os.getenv("RANDOM_ORG_ENABLED", "1").lower() not in ("0", "false", "no"),
        random_org_timeout=random_org_timeout,
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
