from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ImportEnvelope(BaseModel):
    """Shape of a backup file. Entry records stay raw; the normalizer repairs them."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    exported_at: Any = Field(default=None, alias="exportedAt")
    version: Any = None
    settings: Optional[dict[str, Any]] = None
    holidays: Optional[list[Any]] = None
    sickness: Optional[list[Any]] = None
    childcare: Optional[list[Any]] = None
    overtimes: Optional[list[Any]] = None
    hours: Optional[list[Any]] = None
