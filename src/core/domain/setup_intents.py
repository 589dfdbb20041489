"""SetupIntent: preparación de un método de pago para cobros futuros."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import Field, StrictBool

from core.domain.models import StripeModel, Timestamp


class SetupIntentStatus(str, Enum):
    REQUIRES_PAYMENT_METHOD = "requires_payment_method"
    REQUIRES_CONFIRMATION = "requires_confirmation"
    REQUIRES_ACTION = "requires_action"
    PROCESSING = "processing"
    CANCELED = "canceled"
    SUCCEEDED = "succeeded"


class SetupIntentCancellationReason(str, Enum):
    ABANDONED = "abandoned"
    REQUESTED_BY_CUSTOMER = "requested_by_customer"
    DUPLICATE = "duplicate"


class SetupIntent(StripeModel):
    id: str
    object: Literal["setup_intent"] = "setup_intent"
    application: str | None = None
    cancellation_reason: SetupIntentCancellationReason | None = None
    client_secret: str | None = None
    created: Timestamp | None = None
    customer: str | None = None
    description: str | None = None
    last_setup_error: dict[str, Any] | None = None
    livemode: StrictBool | None = None
    mandate: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    next_action: dict[str, Any] | None = None
    on_behalf_of: str | None = None
    payment_method: str | None = None
    payment_method_options: dict[str, Any] | None = None
    payment_method_types: list[str] = Field(default_factory=list)
    single_use_mandate: str | None = None
    status: SetupIntentStatus | None = None
    usage: str | None = None
