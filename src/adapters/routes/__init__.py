"""Rutas de recursos (customers, payment methods, setup intents, events).

Por qué un paquete:
- Cada módulo es un mapeo fino de opciones tipadas -> árbol de parámetros
  -> `core.interfaces.requester.StripeRequester.send`.
- No contienen lógica de red ni de decodificación propia.
"""

from adapters.routes.base import RouteParams
from adapters.routes.customers import (
    CustomerCreateParams,
    CustomerRoutes,
    CustomerUpdateParams,
    ShippingParams,
)
from adapters.routes.events import EventRoutes
from adapters.routes.payment_methods import (
    PaymentMethodCreateParams,
    PaymentMethodRoutes,
    PaymentMethodUpdateParams,
)
from adapters.routes.setup_intents import (
    SetupIntentConfirmParams,
    SetupIntentCreateParams,
    SetupIntentRoutes,
    SetupIntentUpdateParams,
)

__all__ = [
    "CustomerCreateParams",
    "CustomerRoutes",
    "CustomerUpdateParams",
    "EventRoutes",
    "PaymentMethodCreateParams",
    "PaymentMethodRoutes",
    "PaymentMethodUpdateParams",
    "RouteParams",
    "SetupIntentConfirmParams",
    "SetupIntentCreateParams",
    "SetupIntentRoutes",
    "SetupIntentUpdateParams",
    "ShippingParams",
]
