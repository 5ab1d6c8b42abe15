"""Loads the tunables for prefix sum indices from the environment."""

import os
from typing import Mapping, Optional
from pydantic import BaseModel, Field


class PrefixSumIndexSettings(BaseModel):
    """Settings shared by every PrefixSumIndex which isn't given its own"""

    enforce_int64: bool = Field(
        default=True,
        description=(
            "If true, values, deltas, and partial sums must fit in a signed "
            "64-bit integer; otherwise integers are unbounded"
        ),
    )
    log_file: Optional[str] = Field(
        default=None,
        description="If set, the path of a file sink for the loguru logger",
    )
    log_rotation: str = Field(
        default="100 MB",
        description="When the log file is rotated, in loguru rotation syntax",
    )

    @classmethod
    def from_environ(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "PrefixSumIndexSettings":
        """Builds the settings from the given environment, defaulting to
        os.environ. Unset variables keep their defaults.

        Raises:
            pydantic.ValidationError: if a variable is set but malformed
        """
        if environ is None:
            environ = os.environ

        raw = dict()
        if "PREFIX_SUMS_ENFORCE_INT64" in environ:
            raw["enforce_int64"] = environ["PREFIX_SUMS_ENFORCE_INT64"]
        if environ.get("PREFIX_SUMS_LOG_FILE"):
            raw["log_file"] = environ["PREFIX_SUMS_LOG_FILE"]
        if environ.get("PREFIX_SUMS_LOG_ROTATION"):
            raw["log_rotation"] = environ["PREFIX_SUMS_LOG_ROTATION"]
        return cls.model_validate(raw)
