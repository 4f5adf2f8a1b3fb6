# craftd/config/models.py
"""
Pydantic models for validating the structure and types of the configuration
loaded from YAML files (e.g., craftd.yaml).
"""

import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from craftd.utils.money import CURRENCY_SYMBOLS, DEFAULT_CURRENCY

logger = logging.getLogger(__name__)


class HeatmapSettings(BaseModel):
    """Application heatmap window."""

    days: int = Field(365, ge=7, le=3660, description="Length of the trailing window in days")
    weeks_to_show: int = Field(52, ge=1, le=52, description="Week columns kept in the grid")


class SalaryChartSettings(BaseModel):
    consolidation: Literal["max"] = Field(
        "max", description="How overlapping salary entries for one year are combined"
    )


class LoggingSettings(BaseModel):
    log_dir: Path = Field(Path("output_dev/craftd_logs"), description="Directory for log files")
    debug: bool = False
    clear_existing: bool = False


class CraftdConfig(BaseModel):
    """Top-level configuration."""

    currency: str = Field(DEFAULT_CURRENCY, description="Display currency for amounts")
    heatmap: HeatmapSettings = Field(default_factory=HeatmapSettings)
    salary_chart: SalaryChartSettings = Field(default_factory=SalaryChartSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("currency")
    @classmethod
    def _known_currency(cls, v: str) -> str:
        code = v.upper()
        if code not in CURRENCY_SYMBOLS:
            logger.warning(f"Currency {code} has no symbol; amounts will be prefixed with the code")
        return code
