from typing import Callable

from mcp.server.fastmcp import FastMCP

from .cart import CartStore, get_cart_store
from .catalog import get_product, search_catalog
from .formatting import naira_to_usd
from .views import CartView, ProductView


def register_mcp(mcp: FastMCP, store_factory: Callable[[], CartStore] = get_cart_store):
    """MCP tool registration"""

    @mcp.tool()
    async def search_products(query: str = "") -> dict:
        """Search the watch catalog"""
        results = [p.to_dict() for p in search_catalog(query)]
        return {
            "products": results,
            "count": len(results),
            "message": f"{len(results)} product(s) found"
        }

    @mcp.tool()
    async def view_product(productId: str) -> dict:
        """Show one catalog product"""
        product = get_product(productId)
        if not product:
            return {"success": False, "message": "Product not found"}

        return {
            "success": True,
            "product": product.to_dict(),
            "priceUsd": naira_to_usd(product.unit_price)
        }

    @mcp.tool()
    async def add_to_cart(productId: str) -> dict:
        """Add a product to the cart"""
        result = ProductView(store_factory()).add_to_cart(productId)
        return {
            "success": result.added,
            "message": result.notice.text,
            "cartCount": result.cart_count,
            "cart": result.cart
        }

    @mcp.tool()
    async def update_cart_line(index: int, action: str) -> dict:
        """Increment or decrement the quantity of a cart line"""
        applied, page = CartView(store_factory()).handle(action, index)
        return {
            "success": applied,
            "message": "Cart updated" if applied else "Invalid cart action or index",
            "cart": page.to_dict()
        }

    @mcp.tool()
    async def remove_from_cart(index: int) -> dict:
        """Remove a cart line"""
        applied, page = CartView(store_factory()).handle("remove", index)
        return {
            "success": applied,
            "message": "Item removed from cart" if applied else "No cart line at that position",
            "cart": page.to_dict()
        }

    @mcp.tool()
    async def get_cart() -> dict:
        """Show the cart"""
        page = CartView(store_factory()).render()
        return {
            "isEmpty": page.is_empty,
            "message": "Your cart is empty" if page.is_empty else f"{page.total_quantity} item(s) in your cart",
            "cart": page.to_dict()
        }

    @mcp.tool()
    async def checkout() -> dict:
        """Build the WhatsApp order link for the current cart"""
        result = CartView(store_factory()).checkout()
        if not result.ok:
            return {"success": False, "message": result.notice.text}

        return {
            "success": True,
            "message": "Open the link to send your order on WhatsApp",
            "url": result.url
        }
