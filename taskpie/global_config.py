"""Global configuration storage for taskpie.

Stores user preferences in ~/.taskpie/config.json (or ``$TASKPIE_HOME``)
and remembers the last task document that was opened.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from taskpie.domain.animation import RingGeometry

logger = logging.getLogger(__name__)


class PieConfig(BaseModel):
    """Pie drawing and animation settings."""

    r1: float = Field(default=70.0, gt=0)
    r2: float = Field(default=100.0, gt=0)
    gap: float = Field(default=5.0, ge=0)
    hub_ratio: float = Field(default=0.4, gt=0, lt=1)
    duration_ms: float = Field(default=1500.0, gt=0)
    frame_rate: int = Field(default=60, gt=0)
    narrow_width: int = 60  # terminal columns below which the layout is "mobile"
    view_size: int = 220

    def ring_geometry(self) -> RingGeometry:
        return RingGeometry(
            r1=self.r1,
            r2=self.r2,
            gap=self.gap,
            hub_ratio=self.hub_ratio,
            duration_ms=self.duration_ms,
        )


def get_config_dir() -> Path:
    """Get the taskpie config directory."""
    override = os.environ.get("TASKPIE_HOME")
    config_dir = Path(override) if override else Path.home() / ".taskpie"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_global_config() -> PieConfig:
    """Load the global configuration, falling back to defaults."""
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return PieConfig(**data)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Ignoring invalid config {config_file}: {e}")
    return PieConfig()  # defaults


def save_global_config(config: PieConfig) -> None:
    """Save the global configuration."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(config.model_dump(), indent=2),
        encoding="utf-8",
    )


def get_last_document() -> Optional[Path]:
    """Get the last opened task document."""
    config_file = get_config_dir() / "last_document.txt"
    if config_file.exists():
        text = config_file.read_text(encoding="utf-8").strip()
        return Path(text) if text else None
    return None


def save_last_document(path: Path) -> None:
    """Remember the task document that was opened last."""
    config_file = get_config_dir() / "last_document.txt"
    config_file.write_text(str(path.resolve()), encoding="utf-8")
