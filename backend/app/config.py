"""Runtime settings read from the environment (``.env`` is loaded by server.py)."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_PORT = 8080


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    allowed_origins: tuple[str, ...] = ("*",)
    puzzle_seed: int | None = None    # base seed; each game id derives its own puzzle RNG from it


def _get(env: Mapping[str, str], name: str) -> str:
    return env.get(name, "").strip()


def _get_int(env: Mapping[str, str], name: str) -> int | None:
    raw = _get(env, name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if env is None else env
    port = _get_int(env, "PORT")
    origins = tuple(o.strip() for o in _get(env, "ALLOWED_ORIGINS").split(",") if o.strip())
    return Settings(
        host=_get(env, "HOST") or Settings.host,
        port=port if port is not None else DEFAULT_PORT,
        log_level=(_get(env, "LOG_LEVEL") or Settings.log_level).upper(),
        allowed_origins=origins or Settings.allowed_origins,
        puzzle_seed=_get_int(env, "PUZZLE_SEED"),
    )
