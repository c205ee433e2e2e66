"""Environment-driven settings.

Values come from the process environment, which ``nextscope/__init__.py``
populates from a ``.env`` file when one is present.
"""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_BATCH_SIZE = 10


def _env_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    return value if value > 0 else None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    return max(1, value)


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the server and CLI."""

    project_path: Path
    timeout: float | None = None  # Seconds per plugin execution; None = unlimited
    batch_size: int = DEFAULT_BATCH_SIZE

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from NEXTSCOPE_* environment variables.

        Raises:
            ValueError: If a numeric variable is malformed.
        """
        project = os.getenv("NEXTSCOPE_PROJECT_PATH") or os.getcwd()
        return cls(
            project_path=Path(project).expanduser().resolve(),
            timeout=_env_float("NEXTSCOPE_TIMEOUT"),
            batch_size=_env_int("NEXTSCOPE_BATCH_SIZE", DEFAULT_BATCH_SIZE),
        )
