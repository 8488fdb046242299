"""
Report Options Model
====================
Pydantic model holding the per-guard reporting configuration.

Fields:
    title   — appended to the "[<fingerprint>]" prefix of every issue title
    body    — text placed above the fenced error text in new issues
    labels  — labels applied to new issues and used to narrow the search
    reopen  — when True, closed matches are searched for and reopened

Instances are frozen: one ReportOptions is built at setup time and shared by
every report of a guarded app.
"""
from typing import Tuple
from pydantic import BaseModel, ConfigDict, field_validator

from lifeguard.core import config
from lifeguard.core.constants import DEFAULT_TITLE, DEFAULT_BODY


class ReportOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str = DEFAULT_TITLE
    body: str = DEFAULT_BODY
    labels: Tuple[str, ...] = ()
    reopen: bool = False

    @field_validator("labels", mode="before")
    @classmethod
    def _drop_blank_labels(cls, value):
        if not isinstance(value, (list, tuple)):
            return value
        return tuple(
            label.strip() if isinstance(label, str) else label
            for label in value
            if not isinstance(label, str) or label.strip()
        )

    @classmethod
    def from_config(cls) -> "ReportOptions":
        """Build options from the LIFEGUARD_* environment settings."""
        return cls(
            title=config.LIFEGUARD_TITLE,
            body=config.LIFEGUARD_BODY,
            labels=tuple(config.LIFEGUARD_LABELS),
            reopen=config.LIFEGUARD_REOPEN,
        )
