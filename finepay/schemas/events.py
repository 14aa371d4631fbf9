"""Stripe webhook event schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


class EventData(BaseModel):
    """``data`` block of a Stripe event."""

    model_config = ConfigDict(extra="ignore")

    object: dict[str, Any] = Field(default_factory=dict)


class SettlementEvent(BaseModel):
    """A verified notification from the payment processor."""

    model_config = ConfigDict(extra="ignore")

    id: str
    type: str
    data: EventData = Field(default_factory=EventData)

    @property
    def is_checkout_completed(self) -> bool:
        return self.type == CHECKOUT_SESSION_COMPLETED

    @property
    def metadata(self) -> dict[str, Any]:
        """Metadata attached to the session at creation time."""
        metadata = self.data.object.get("metadata")
        return metadata if isinstance(metadata, dict) else {}

    @property
    def fine_id(self) -> str | None:
        fine_id = self.metadata.get("fineId")
        if fine_id is None or str(fine_id).strip() == "":
            return None
        return str(fine_id)

    @property
    def session_id(self) -> str | None:
        return self.data.object.get("id")
