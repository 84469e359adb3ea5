# storefront/config.py
import os

# Public HTTPS address of the shop
BASE_URL = os.getenv("BASE_URL", "http://localhost:8000")

# Merchant WhatsApp number in international format, without "+"
WHATSAPP_NUMBER = os.getenv("WHATSAPP_NUMBER", "2348066775722")
MESSAGING_BASE_URL = os.getenv("MESSAGING_BASE_URL", "https://wa.me")

# Shared persisted store (one record, read by every page)
CART_STORE_PATH = os.getenv("CART_STORE_PATH", "data/cart_store.json")
CART_STORAGE_KEY = os.getenv("CART_STORAGE_KEY", "cart")

# Display-only conversion for the product page
NAIRA_TO_USD = float(os.getenv("NAIRA_TO_USD", "1600"))

# "added to cart" notice hides itself after this many milliseconds
NOTICE_TIMEOUT_MS = int(os.getenv("NOTICE_TIMEOUT_MS", "1600"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
