"""
Converter configuration.

Settings live in a small YAML file; anything missing falls back to the
hardware defaults.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from chuk_mcp_arduino_midi.constants import DEFAULT_BPM, TIMER_RESOLUTION

logger = logging.getLogger(__name__)


class ConverterConfig(BaseModel):
    """
    Settings that shape a conversion.

    Example YAML:
        timer_resolution: 40
        default_bpm: 120
        zero_velocity_note_on_is_off: true
    """

    timer_resolution: int = Field(
        TIMER_RESOLUTION, gt=0, description="Device timer resolution (microseconds per tick)"
    )
    default_bpm: int = Field(
        DEFAULT_BPM, gt=0, description="Tempo for files without a set_tempo message"
    )
    zero_velocity_note_on_is_off: bool = Field(
        True, description="Read note_on with velocity 0 as note_off"
    )

    model_config = {"frozen": True}

    @classmethod
    def from_yaml(cls, text: str) -> ConverterConfig:
        """Parse a YAML document. An empty document gives the defaults."""
        data = yaml.safe_load(text) or {}
        return cls.model_validate(data)

    def to_yaml(self) -> str:
        """Serialize to a YAML document."""
        return yaml.safe_dump(self.model_dump(), sort_keys=False)


def load_config(path: Path | None) -> ConverterConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Config file, or None for defaults

    Returns:
        The loaded config; defaults if the file does not exist
    """
    if path is None or not path.exists():
        if path is not None:
            logger.info(f"No config at {path}, using defaults")
        return ConverterConfig()
    return ConverterConfig.from_yaml(path.read_text())
