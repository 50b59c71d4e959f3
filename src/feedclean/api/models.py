"""Data models for FeedWrangler API responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

SUCCESS_RESULT = "success"

# Shorter tokens are treated as "never authorized"
MIN_TOKEN_LENGTH = 5


class Feed(BaseModel):
    """A subscribed feed as returned by users/authorize."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    feed_id: int
    feed_url: str = ""
    site_url: str | None = None

    @field_validator("title", "feed_url", mode="before")
    @classmethod
    def _null_as_blank(cls, value: Any) -> Any:
        return "" if value is None else value


class Envelope(BaseModel):
    """Common response shape shared by every endpoint.

    Only the fields feedclean reads are declared; the rest of the body is
    ignored.
    """

    access_token: str | None = None
    error: str | None = None
    result: str | None = None
    feeds: list[Feed] = Field(default_factory=list)
    count: int = 0

    @field_validator("feeds", "count", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "feeds" else 0
        return value

    @property
    def success(self) -> bool:
        return self.result == SUCCESS_RESULT

    def __str__(self) -> str:
        return f"Response{{{self.result} -- {self.error}}}"


class Session(BaseModel):
    """An authorized API session.

    Returned by authorize and passed explicitly to every authenticated call.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(repr=False)

    @property
    def is_active(self) -> bool:
        """Whether the token looks like one the API actually issued."""
        return len(self.access_token) >= MIN_TOKEN_LENGTH
