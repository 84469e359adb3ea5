"""
Tests for the checkout message and hand-off URL
"""

from urllib.parse import parse_qs, urlsplit

from storefront.cart import CartLine
from storefront.checkout import build_checkout_message, build_handoff_url


def _entry_lines(message):
    return [line for line in message.split("\n") if line.startswith("- ")]


class TestCheckoutMessage:

    def test_single_line_cart(self):
        message = build_checkout_message([CartLine("casio", "Casio Classic", 55000, 2)])
        lines = message.split("\n")

        assert _entry_lines(message) == ["- Casio Classic x2 (110,000)"]
        assert "Total: ₦110,000" in lines

    def test_full_layout(self):
        cart = [CartLine("casio", "Casio Classic", 55000, 2), CartLine("smart", "Smart Watch HR12", 40000, 1)]
        assert build_checkout_message(cart) == (
            "Hi, I would like to purchase:\n"
            "- Casio Classic x2 (110,000)\n"
            "- Smart Watch HR12 x1 (40,000)\n"
            "Total: ₦150,000\n"
            "\n"
            "Name:\n"
            "Phone:"
        )

    def test_is_deterministic(self):
        cart = [CartLine("rolex", "Rolex Prestige", 250000, 3)]
        assert build_checkout_message(cart) == build_checkout_message(list(cart))

    def test_degrades_instead_of_raising(self):
        cart = [CartLine(None, "", "not a number", "??")]
        message = build_checkout_message(cart)
        assert _entry_lines(message) == ["- Item x1 (0)"]
        assert "Total: ₦0" in message.split("\n")

    def test_oversized_numbers_do_not_raise(self):
        huge = 10**4000
        message = build_checkout_message([CartLine("x", "Huge", huge, huge)])
        lines = message.split("\n")

        assert len(_entry_lines(message)) == 1
        assert _entry_lines(message)[0].startswith("- Huge x9999 (")
        assert any(line.startswith("Total: ₦") for line in lines)
        assert lines[-2:] == ["Name:", "Phone:"]


class TestHandoffUrl:

    def test_url_shape(self):
        url = build_handoff_url("Hi there\nTotal: ₦1,000", merchant_id="2348066775722", base_url="https://wa.me")
        parts = urlsplit(url)

        assert parts.scheme == "https"
        assert parts.netloc == "wa.me"
        assert parts.path == "/2348066775722"
        assert parse_qs(parts.query)["text"] == ["Hi there\nTotal: ₦1,000"]

    def test_encodes_like_encode_uri_component(self):
        url = build_handoff_url("a b&c=d/(x)!", merchant_id="1", base_url="https://wa.me/")
        assert url == "https://wa.me/1?text=a%20b%26c%3Dd%2F(x)!"
