# Third-party imports
from pydantic import BaseModel, Field


class PushMessage(BaseModel):
    tokens: list[str]
    title: str
    body: str
    # FCM data payloads only carry string values
    data: dict[str, str] = Field(default_factory=dict)
    link: str | None = None


class TokenDeliveryOutcome(BaseModel):
    index: int
    token: str
    success: bool
    message_id: str | None = None
    error: str | None = None


class MulticastResult(BaseModel):
    success_count: int = 0
    failure_count: int = 0
    outcomes: list[TokenDeliveryOutcome] = Field(default_factory=list)

    @property
    def failures(self) -> list[TokenDeliveryOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]
