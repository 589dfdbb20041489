"""PaymentMethod y sus sub-objetos de tarjeta/wallet."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import Field, StrictBool, StrictInt

from core.domain.models import Address, StripeModel, Timestamp


class PaymentMethodType(str, Enum):
    CARD = "card"
    CARD_PRESENT = "card_present"


class CardBrand(str, Enum):
    AMEX = "amex"
    DINERS = "diners"
    DISCOVER = "discover"
    JCB = "jcb"
    MASTERCARD = "mastercard"
    UNIONPAY = "unionpay"
    VISA = "visa"
    UNKNOWN = "unknown"


class CardWalletType(str, Enum):
    AMEX_EXPRESS_CHECKOUT = "amex_express_checkout"
    APPLE_PAY = "apple_pay"
    GOOGLE_PAY = "google_pay"
    MASTERPASS = "masterpass"
    SAMSUNG_PAY = "samsung_pay"
    VISA_CHECKOUT = "visa_checkout"


class BillingDetails(StripeModel):
    address: Address | None = None
    email: str | None = None
    name: str | None = None
    phone: str | None = None


class CardChecks(StripeModel):
    """Resultado de las comprobaciones: `pass`, `failed`, `unavailable` o `unchecked`."""

    address_line1_check: str | None = None
    address_postal_code_check: str | None = None
    cvc_check: str | None = None


class ThreeDSecureUsage(StripeModel):
    supported: StrictBool | None = None


class WalletDetails(StripeModel):
    """Datos verificados por wallets tipo Masterpass / Visa Checkout."""

    billing_address: Address | None = None
    email: str | None = None
    name: str | None = None
    shipping_address: Address | None = None


class CardWallet(StripeModel):
    type: CardWalletType | None = None
    dynamic_last4: str | None = None
    masterpass: WalletDetails | None = None
    visa_checkout: WalletDetails | None = None


class PaymentMethodCard(StripeModel):
    brand: CardBrand | None = None
    checks: CardChecks | None = None
    country: str | None = None
    exp_month: StrictInt | None = None
    exp_year: StrictInt | None = None
    fingerprint: str | None = None
    funding: str | None = None
    last4: str | None = None
    three_d_secure_usage: ThreeDSecureUsage | None = None
    wallet: CardWallet | None = None


class PaymentMethod(StripeModel):
    """The PaymentMethod object."""

    id: str
    object: Literal["payment_method"] = "payment_method"
    billing_details: BillingDetails | None = None
    card: PaymentMethodCard | None = None
    card_present: dict[str, Any] | None = None
    created: Timestamp | None = None
    customer: str | None = None
    livemode: StrictBool | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    type: PaymentMethodType | None = None
