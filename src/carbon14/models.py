"""Domain models shared by the analyzer, the report and the API."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

Headers = List[Tuple[str, str]]


def header_value(headers: Sequence[Tuple[str, str]], name: str) -> str | None:
    """Return the first value stored under ``name``, ignoring case."""

    wanted = name.lower()
    for key, value in headers:
        if key.lower() == wanted:
            return value
    return None


class PageContext(BaseModel):
    """The analysed page as fetched from the network."""

    model_config = ConfigDict(frozen=True)

    url: str
    author: Optional[str] = None
    markup: str = ""
    headers: Headers = Field(default_factory=list)
    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _check_timing(self) -> "PageContext":
        if self.end < self.start:
            raise ValueError("Page fetch cannot end before it started")
        return self


class ImageResult(BaseModel):
    """A single dated image."""

    model_config = ConfigDict(frozen=True)

    url: str
    timestamp: datetime
    internal: bool


class Analysis(BaseModel):
    """Outcome of analysing one page, ready to be rendered."""

    model_config = ConfigDict(frozen=True)

    url: str
    author: Optional[str] = None
    title: Optional[str] = None
    headers: Headers = Field(default_factory=list)
    start: datetime
    end: datetime
    images: List[ImageResult] = Field(default_factory=list)

    @property
    def internal_images(self) -> List[ImageResult]:
        return [image for image in self.images if image.internal]

    @property
    def external_images(self) -> List[ImageResult]:
        return [image for image in self.images if not image.internal]

    @property
    def estimated_date(self) -> datetime | None:
        """Timestamp of the oldest dated image, if any."""

        if not self.images:
            return None
        return min(image.timestamp for image in self.images)
