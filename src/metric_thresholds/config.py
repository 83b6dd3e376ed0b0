"""Runtime settings for the metric-thresholds CLI."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class ThresholdSettings(BaseSettings):
    """Settings read from ``METRIC_THRESHOLDS_*`` environment variables."""

    log_level: str = Field(default="WARNING", description="Root logging level")
    output_format: Literal["text", "json"] = Field(
        default="text", description="Default CLI output format"
    )

    model_config = {"env_prefix": "METRIC_THRESHOLDS_"}
