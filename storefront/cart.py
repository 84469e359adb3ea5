# storefront/cart.py
import json
import math
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from .config import CART_STORAGE_KEY, CART_STORE_PATH
from .formatting import Number, as_number
from .logging import get_logger
from .storage import JsonFileStorage, Storage, StorageError

logger = get_logger(__name__)

DEFAULT_NAME = "Item"

# Bounds for stored numbers; anything larger is a corrupted record
MAX_QUANTITY = 9999
MAX_UNIT_PRICE = 10**12

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d{1,9})")


@dataclass
class CartLine:
    key: Optional[str]
    name: str
    unit_price: Number
    quantity: int

    def to_record(self) -> dict:
        return {
            "key": self.key,
            "name": self.name,
            "unitPrice": self.unit_price,
            "quantity": self.quantity,
        }


Cart = List[CartLine]


# ============================================================
# Normalization of untrusted records
# ============================================================

def _parse_quantity(value: Any) -> int:
    quantity = None
    if isinstance(value, bool):
        quantity = None
    elif isinstance(value, int):
        quantity = value
    elif isinstance(value, float):
        quantity = int(value) if math.isfinite(value) else None
    elif isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        quantity = int(match.group(1)) if match else None
    return _clamp_quantity(quantity) if quantity else 1


def _clamp_quantity(quantity: int) -> int:
    return min(MAX_QUANTITY, max(1, quantity))


def _clamp_price(value: Any) -> Number:
    return min(MAX_UNIT_PRICE, max(0, as_number(value)))


def _pick(raw: Mapping, *names: str) -> Any:
    for name in names:
        if raw.get(name) is not None:
            return raw[name]
    return None


def normalize_line(raw: Mapping) -> CartLine:
    """
    Coerce one stored record into a CartLine.

    Accepts the legacy ``priceNaira`` / ``qty`` field names. The result always
    has ``quantity >= 1``, ``unit_price >= 0`` and a non-empty name.
    """
    key = raw.get("key")
    name = raw.get("name")
    return CartLine(
        key=key if isinstance(key, str) and key else None,
        name=name if isinstance(name, str) and name.strip() else DEFAULT_NAME,
        unit_price=_clamp_price(_pick(raw, "unitPrice", "priceNaira")),
        quantity=_parse_quantity(_pick(raw, "quantity", "qty")),
    )


# ============================================================
# Derived values
# ============================================================

def subtotal(line: CartLine) -> Number:
    return as_number(line.quantity) * as_number(line.unit_price)


def total(cart: Cart) -> Number:
    return sum((subtotal(line) for line in cart), 0)


def total_quantity(cart: Cart) -> int:
    return sum(int(as_number(line.quantity)) for line in cart)


# ============================================================
# Store
# ============================================================

class CartStore:
    """
    The only component touching the persisted cart record.

    ``load`` normalizes on every read: the record is shared by independent
    pages and may have been edited or corrupted since the last write.
    Mutators change the given cart in place and return it; callers persist.
    """

    ACTIONS = {
        "increment": "increment",
        "inc": "increment",
        "decrement": "decrement",
        "dec": "decrement",
        "remove": "remove",
    }

    def __init__(self, storage: Storage, key: str = CART_STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> Cart:
        try:
            raw = self.storage.get_item(self.key)
        except StorageError as e:
            logger.warning(f"Failed to read cart from storage: {e}")
            return []
        if not raw:
            return []

        try:
            parsed = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Failed to parse stored cart: {e}")
            return []

        if not isinstance(parsed, list):
            logger.warning("Stored cart is not a list, resetting")
            return []

        cart: Cart = []
        for position, item in enumerate(parsed):
            if not isinstance(item, Mapping):
                logger.warning(f"Dropping malformed cart entry at position {position}: {item!r}")
                continue
            cart.append(normalize_line(item))
        return cart

    def save(self, cart: Cart) -> bool:
        payload = json.dumps([line.to_record() for line in cart], ensure_ascii=False, separators=(",", ":"))
        try:
            self.storage.set_item(self.key, payload)
        except (StorageError, OSError) as e:
            logger.warning(f"Failed to save cart, keeping it in memory only: {e}")
            return False
        return True

    def add_or_merge(self, cart: Cart, key: str, name: str, unit_price: Any) -> Cart:
        existing = next((line for line in cart if line.key == key), None)
        if existing:
            existing.quantity = _clamp_quantity(_parse_quantity(existing.quantity) + 1)
        else:
            cart.append(
                CartLine(
                    key=key,
                    name=name or DEFAULT_NAME,
                    unit_price=_clamp_price(unit_price),
                    quantity=1,
                )
            )
        return cart

    def _checked_index(self, cart: Cart, index: Any) -> Optional[int]:
        if isinstance(index, bool):
            index = None
        elif isinstance(index, str):
            try:
                index = int(index.strip())
            except ValueError:
                index = None

        if not isinstance(index, int) or not 0 <= index < len(cart):
            logger.warning(f"Invalid cart index: {index!r}")
            return None
        return index

    def set_quantity_delta(self, cart: Cart, index: Any, delta: int) -> Cart:
        position = self._checked_index(cart, index)
        if position is not None:
            line = cart[position]
            line.quantity = _clamp_quantity(_parse_quantity(line.quantity) + delta)
        return cart

    def remove_at(self, cart: Cart, index: Any) -> Cart:
        position = self._checked_index(cart, index)
        if position is not None:
            del cart[position]
        return cart

    def apply(self, cart: Cart, action: Optional[str], index: Any) -> bool:
        """Run one ``(action, index)`` command; False when it was ignored."""
        command = self.ACTIONS.get(action or "")
        if command is None:
            logger.warning(f"Unknown cart action: {action!r}")
            return False

        position = self._checked_index(cart, index)
        if position is None:
            return False

        if command == "increment":
            self.set_quantity_delta(cart, position, +1)
        elif command == "decrement":
            self.set_quantity_delta(cart, position, -1)
        else:
            self.remove_at(cart, position)
        return True


def get_cart_store() -> CartStore:
    """Store over the shared file every page reads and writes."""
    return CartStore(JsonFileStorage(CART_STORE_PATH))
