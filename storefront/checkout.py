# storefront/checkout.py
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from .cart import Cart, DEFAULT_NAME, MAX_QUANTITY, subtotal, total
from .config import MESSAGING_BASE_URL, NOTICE_TIMEOUT_MS, WHATSAPP_NUMBER
from .formatting import as_number, format_naira

GREETING = "Hi, I would like to purchase:"
EMPTY_CART_NOTICE = "Your cart is empty."
HANDOFF_FAILED_NOTICE = "Unable to open WhatsApp. Please try again."

# Characters encodeURIComponent leaves as they are
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class Notice:
    """Transient message; the page decides whether it is a toast, modal or log line."""

    text: str
    level: str = "info"
    timeout_ms: int = NOTICE_TIMEOUT_MS


@dataclass(frozen=True)
class CheckoutResult:
    ok: bool
    url: Optional[str] = None
    notice: Optional[Notice] = None


def build_checkout_message(cart: Cart) -> str:
    """
    Order text handed to the merchant's chat.

    Same cart gives the same text. Bad numbers count as 0 and missing names
    fall back to the generic label, so this never raises.
    """
    lines = [GREETING]
    for line in cart:
        quantity = max(1, min(MAX_QUANTITY, int(as_number(line.quantity))))
        name = line.name or DEFAULT_NAME
        lines.append(f"- {name} x{quantity} ({format_naira(subtotal(line))})")
    lines.append(f"Total: ₦{format_naira(total(cart))}")
    lines.append("")
    lines.append("Name:")
    lines.append("Phone:")
    return "\n".join(lines)


def build_handoff_url(message: str, merchant_id: str = WHATSAPP_NUMBER, base_url: str = MESSAGING_BASE_URL) -> str:
    return (
        f"{base_url.rstrip('/')}/{quote(merchant_id, safe=_URI_COMPONENT_SAFE)}"
        f"?text={quote(message, safe=_URI_COMPONENT_SAFE)}"
    )
