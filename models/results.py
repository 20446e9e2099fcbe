"""Outcome values returned by the notification handlers and the FCM sender."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Optional

# NotifyResult.status values
NO_ACTION = "no_action"
BLOCKED = "blocked"
DATA_ERROR = "data_error"
DELIVERED = "delivered"
DELIVERY_FAILED = "delivery_failed"


@dataclass
class DeliveryResult:
    success_count: int = 0
    failure_count: int = 0
    message_id: Optional[str] = None  # single sends only
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.failure_count == 0


@dataclass
class NotifyResult:
    status: str
    success_count: int = 0
    failure_count: int = 0
    detail: str = ""

    @property
    def did_work(self) -> bool:
        """True when a push was actually handed to FCM, whatever its outcome."""
        return self.status in (DELIVERED, DELIVERY_FAILED)

    @classmethod
    def from_delivery(cls, delivery: DeliveryResult, detail: str = "") -> "NotifyResult":
        status = DELIVERED if delivery.ok else DELIVERY_FAILED
        return cls(
            status=status,
            success_count=delivery.success_count,
            failure_count=delivery.failure_count,
            detail=delivery.error or detail,
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["did_work"] = self.did_work
        return data
