# storefront/views.py
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, List, Optional, Tuple

from .cart import CartStore, subtotal, total, total_quantity
from .catalog import CATALOG, ProductCatalogEntry, get_product
from .checkout import (
    EMPTY_CART_NOTICE,
    HANDOFF_FAILED_NOTICE,
    CheckoutResult,
    Notice,
    build_checkout_message,
    build_handoff_url,
)
from .formatting import format_naira, naira_to_usd
from .logging import get_logger

logger = get_logger(__name__)

ADDED_NOTICE = "{name} added to cart"
CANNOT_ADD_NOTICE = "Cannot add: product not found."


@dataclass(frozen=True)
class LineWidget:
    index: int
    key: Optional[str]
    name: str
    unit_price: Any
    quantity: int
    subtotal: Any
    unit_price_formatted: str
    subtotal_formatted: str


@dataclass(frozen=True)
class CartPage:
    lines: List[LineWidget]
    total: Any
    total_formatted: str
    total_quantity: int
    notice: Optional[Notice] = None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def checkout_enabled(self) -> bool:
        return bool(self.lines)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["isEmpty"] = self.is_empty
        data["checkoutEnabled"] = self.checkout_enabled
        return data


@dataclass(frozen=True)
class ProductPage:
    key: Optional[str]
    product: Optional[ProductCatalogEntry] = None
    price_naira: str = ""
    price_usd: str = ""
    cart_count: int = 0
    hint: str = ""

    @property
    def found(self) -> bool:
        return self.product is not None


@dataclass(frozen=True)
class AddResult:
    added: bool
    notice: Notice
    cart_count: int = 0
    cart: List[dict] = field(default_factory=list)


class CartView:
    """
    Cart page controller.

    Every edit is applied, saved and re-rendered from the same in-memory cart,
    so the page always shows what was just written.
    """

    def __init__(self, store: CartStore):
        self.store = store
        self.cart = store.load()

    def render(self, notice: Optional[Notice] = None) -> CartPage:
        lines = []
        for idx, line in enumerate(self.cart):
            line_subtotal = subtotal(line)
            lines.append(
                LineWidget(
                    index=idx,
                    key=line.key,
                    name=line.name,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                    subtotal=line_subtotal,
                    unit_price_formatted=format_naira(line.unit_price),
                    subtotal_formatted=format_naira(line_subtotal),
                )
            )

        cart_total = total(self.cart)
        return CartPage(
            lines=lines,
            total=cart_total,
            total_formatted=format_naira(cart_total),
            total_quantity=total_quantity(self.cart),
            notice=notice,
        )

    def handle(self, action: Optional[str], index: Any) -> Tuple[bool, CartPage]:
        """Apply one edit command; ignored commands leave the cart untouched."""
        applied = self.store.apply(self.cart, action, index)
        if applied:
            self.store.save(self.cart)
        return applied, self.render()

    def checkout(self, handoff: Optional[Callable[[str], Any]] = None) -> CheckoutResult:
        # Another page may have changed the cart since this one was rendered
        self.cart = self.store.load()
        if not self.cart:
            logger.info("Checkout blocked: cart is empty")
            return CheckoutResult(ok=False, notice=Notice(EMPTY_CART_NOTICE, level="warning"))

        try:
            url = build_handoff_url(build_checkout_message(self.cart))
            if handoff is not None:
                handoff(url)
        except Exception:
            logger.error("Checkout hand-off failed", exc_info=True)
            return CheckoutResult(ok=False, notice=Notice(HANDOFF_FAILED_NOTICE, level="error"))

        logger.info(f"Checkout handed off with {len(self.cart)} line(s)")
        return CheckoutResult(ok=True, url=url)


class ProductView:
    """Product detail page controller."""

    def __init__(self, store: CartStore, lookup: Callable[[Optional[str]], Optional[ProductCatalogEntry]] = get_product):
        self.store = store
        self.lookup = lookup

    def show(self, key: Optional[str]) -> ProductPage:
        cart_count = total_quantity(self.store.load())
        product = self.lookup(key)
        if product is None:
            logger.warning(f"Invalid product key: {key!r}")
            return ProductPage(
                key=key,
                cart_count=cart_count,
                hint="Use ?product=" + " or ".join(CATALOG),
            )

        return ProductPage(
            key=key,
            product=product,
            price_naira=format_naira(product.unit_price),
            price_usd=naira_to_usd(product.unit_price),
            cart_count=cart_count,
        )

    def add_to_cart(self, key: Optional[str]) -> AddResult:
        product = self.lookup(key)
        if product is None:
            logger.warning(f"add_to_cart: invalid key {key!r}")
            return AddResult(
                added=False,
                notice=Notice(CANNOT_ADD_NOTICE, level="error"),
                cart_count=total_quantity(self.store.load()),
            )

        cart = self.store.load()
        self.store.add_or_merge(cart, product.key, product.name, product.unit_price)
        self.store.save(cart)
        logger.info(f"Added {product.key} to cart, {len(cart)} line(s)")

        return AddResult(
            added=True,
            notice=Notice(ADDED_NOTICE.format(name=product.name)),
            cart_count=total_quantity(cart),
            cart=[line.to_record() for line in cart],
        )

    def add_notice(self, page: ProductPage, added: Optional[str]) -> Optional[Notice]:
        """Notice for the page shown after the add-to-cart redirect."""
        if added is None:
            return None
        if added == "1" and page.found:
            return Notice(ADDED_NOTICE.format(name=page.product.name))
        return Notice(CANNOT_ADD_NOTICE, level="error")
