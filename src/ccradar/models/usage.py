"""Usage record model for parsed JSONL data."""

from __future__ import annotations

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field


class UsageRecord(BaseModel):
    """One logged API call's token consumption."""

    model_config = ConfigDict(frozen=True)

    timestamp: AwareDatetime
    input_tokens: int = Field(default=0, ge=0)
    output_tokens: int = Field(default=0, ge=0)
    cache_creation_tokens: int = Field(default=0, ge=0)
    cache_read_tokens: int = Field(default=0, ge=0)
    model: str = ""
    cost: float = Field(default=0.0, ge=0.0)
    message_id: str | None = None
    request_id: str | None = None
    project: str | None = None

    @property
    def total_tokens(self) -> int:
        return (
            self.input_tokens
            + self.output_tokens
            + self.cache_creation_tokens
            + self.cache_read_tokens
        )

    @property
    def dedup_key(self) -> str | None:
        """Logical identity used to drop repeated log lines, if known."""
        if self.message_id and self.request_id:
            return f"{self.message_id}:{self.request_id}"
        return None
