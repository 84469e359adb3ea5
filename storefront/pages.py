# storefront/pages.py
from typing import Optional

from .checkout import Notice
from .formatting import escape_html
from .views import CartPage, ProductPage


def _layout(title: str, body: str, cart_count: int, notice: Optional[Notice] = None) -> str:
    notice_html = ""
    if notice:
        notice_html = (
            f'<div id="message" class="notice notice-{escape_html(notice.level)}" '
            f'data-timeout="{notice.timeout_ms}">{escape_html(notice.text)}</div>'
        )
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en"><head><meta charset="utf-8">'
        f"<title>{escape_html(title)}</title></head><body>"
        '<header><a id="cart-icon" href="/cart">Cart '
        f'<span id="cart-count">{cart_count}</span></a></header>'
        f"{notice_html}{body}</body></html>"
    )


def render_product_page(page: ProductPage, notice: Optional[Notice] = None) -> str:
    if not page.found:
        body = (
            '<h1 id="product-name">Product not found</h1>'
            f'<p id="product-description">{escape_html(page.hint)}</p>'
        )
        return _layout("Product not found", body, page.cart_count, notice)

    p = page.product
    body = (
        f'<img id="product-image" src="/{escape_html(p.image_path)}" alt="{escape_html(p.name)}">'
        f'<h1 id="product-name">{escape_html(p.name)}</h1>'
        f'<p id="product-description">{escape_html(p.description)}</p>'
        f'<p>₦<span id="product-price-naira">{page.price_naira}</span>'
        f' ($<span id="product-price-usd">{page.price_usd}</span>)</p>'
        f'<form method="post" action="/product/{escape_html(p.key)}/add">'
        '<button id="add-to-cart-btn" type="submit">Add to cart</button></form>'
    )
    return _layout(p.name, body, page.cart_count, notice)


def render_cart_page(page: CartPage) -> str:
    if page.is_empty:
        items = "<p>Your cart is empty.</p>"
    else:
        parts = []
        for line in page.lines:
            actions = "".join(
                f'<form method="post" action="/cart/{action}/{line.index}">'
                f'<button data-action="{action}" data-idx="{line.index}">{label}</button></form>'
                for action, label in (("dec", "-"), ("inc", "+"), ("remove", "Remove"))
            )
            parts.append(
                '<div class="cart-item">'
                f"<p><strong>{escape_html(line.name)}</strong></p>"
                f"<p>₦{line.unit_price_formatted} × {line.quantity} = ₦{line.subtotal_formatted}</p>"
                f'<div class="cart-actions">{actions}</div>'
                "</div>"
            )
        items = "".join(parts)

    disabled = "" if page.checkout_enabled else " disabled"
    body = (
        "<h1>Your cart</h1>"
        f'<div id="cart-items">{items}</div>'
        f'<p>Total: ₦<span id="cart-total">{page.total_formatted}</span></p>'
        f'<form method="get" action="/checkout"><button id="checkout-btn"{disabled}>Checkout on WhatsApp</button></form>'
    )
    return _layout("Your cart", body, page.total_quantity, page.notice)
