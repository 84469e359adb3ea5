from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, FastAPI, Query
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from .cart import CartStore, get_cart_store
from .catalog import get_product, search_catalog
from .formatting import naira_to_usd
from .pages import render_cart_page, render_product_page
from .views import CartView, ProductView


def register_api_routes(app: FastAPI) -> None:

    # ---------------------------------------------------
    # PAGES (product detail + cart)
    # ---------------------------------------------------
    pages = APIRouter(tags=["pages"])

    @pages.get("/product", response_class=HTMLResponse)
    def product_page(
        product: Optional[str] = Query(None),
        added: Optional[str] = Query(None),
        store: CartStore = Depends(get_cart_store),
    ):
        view = ProductView(store)
        page = view.show(product)
        notice = view.add_notice(page, added)
        return HTMLResponse(render_product_page(page, notice=notice), status_code=200 if page.found else 404)

    @pages.post("/product/{key}/add")
    def product_add(key: str, store: CartStore = Depends(get_cart_store)):
        result = ProductView(store).add_to_cart(key)
        query = urlencode({"product": key, "added": "1" if result.added else "0"})
        return RedirectResponse(f"/product?{query}", status_code=303)

    @pages.get("/cart", response_class=HTMLResponse)
    def cart_page(store: CartStore = Depends(get_cart_store)):
        return HTMLResponse(render_cart_page(CartView(store).render()))

    @pages.post("/cart/{action}/{index}")
    def cart_edit(action: str, index: str, store: CartStore = Depends(get_cart_store)):
        CartView(store).handle(action, index)
        return RedirectResponse("/cart", status_code=303)

    @pages.get("/checkout")
    def checkout_page(store: CartStore = Depends(get_cart_store)):
        view = CartView(store)
        result = view.checkout()
        if result.ok:
            return RedirectResponse(result.url, status_code=303)
        return HTMLResponse(render_cart_page(view.render(notice=result.notice)))

    # ---------------------------------------------------
    # JSON API
    # ---------------------------------------------------
    router = APIRouter(prefix="/api", tags=["storefront"])

    # 1) Product search
    @router.get("/products")
    def search_products_endpoint(query: str = Query("", description="Search term")):
        results = [p.to_dict() for p in search_catalog(query)]
        return {
            "products": results,
            "count": len(results),
            "message": f"{len(results)} product(s) found"
        }

    # 2) Product detail
    @router.get("/products/{key}")
    def product_detail_endpoint(key: str):
        product = get_product(key)
        if not product:
            return JSONResponse({"success": False, "message": "Product not found"}, status_code=404)

        return {
            "success": True,
            "product": product.to_dict(),
            "priceUsd": naira_to_usd(product.unit_price)
        }

    # 3) Add to cart
    @router.post("/cart/add")
    def add_to_cart_endpoint(productId: str, store: CartStore = Depends(get_cart_store)):
        result = ProductView(store).add_to_cart(productId)
        return {
            "success": result.added,
            "message": result.notice.text,
            "cartCount": result.cart_count,
            "cart": result.cart
        }

    # 4) View cart
    @router.get("/cart")
    def get_cart_endpoint(store: CartStore = Depends(get_cart_store)):
        page = CartView(store).render()

        if page.is_empty:
            return {
                "isEmpty": True,
                "message": "Your cart is empty",
                "cart": page.to_dict()
            }

        return {
            "isEmpty": False,
            "message": f"{page.total_quantity} item(s) in your cart",
            "cart": page.to_dict()
        }

    # 5) Edit a line: increment / decrement / remove
    @router.post("/cart/{action}")
    def edit_cart_endpoint(action: str, index: str = Query(...), store: CartStore = Depends(get_cart_store)):
        applied, page = CartView(store).handle(action, index)
        return {
            "success": applied,
            "message": "Cart updated" if applied else "Invalid cart action or index",
            "cart": page.to_dict()
        }

    # 6) Checkout hand-off
    @router.post("/checkout")
    def checkout_endpoint(store: CartStore = Depends(get_cart_store)):
        result = CartView(store).checkout()
        if not result.ok:
            return {
                "success": False,
                "message": result.notice.text
            }

        return {
            "success": True,
            "message": "Continue on WhatsApp to complete your order",
            "url": result.url
        }

    app.include_router(pages)
    app.include_router(router)
