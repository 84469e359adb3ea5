from dataclasses import dataclass, asdict
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ProductCatalogEntry:
    key: str
    name: str
    unit_price: int
    description: str
    image_path: str

    def to_dict(self) -> dict:
        return asdict(self)


CATALOG: Dict[str, ProductCatalogEntry] = {
    entry.key: entry
    for entry in (
        ProductCatalogEntry("casio", "Casio Classic", 55000, "Timeless Casio — lightweight, reliable and great for everyday wear.", "images/casio.jpg"),
        ProductCatalogEntry("gshock", "G-Shock Explorer", 45000, "Rugged G-Shock built to take shocks, water and adventures.", "images/gshock.jpg.JPG"),
        ProductCatalogEntry("navi", "NaviForce Sport", 75000, "Sporty NaviForce — precise, durable and stylish for active days.", "images/Navi.jpg"),
        ProductCatalogEntry("patek", "Patek Elegance", 85000, "Refined Patek-style design with dressy details and presence.", "images/patek.1.jpg"),
        ProductCatalogEntry("rewa", "Reward VIP", 65000, "Reward VIP — attention-grabbing look with premium finishes.", "images/rewa.jpg.JPG"),
        ProductCatalogEntry("rolex", "Rolex Prestige", 250000, "Rolex-level styling that signals craftsmanship and status.", "images/rolex.jpg.JPG"),
        ProductCatalogEntry("smart", "Smart Watch HR12", 40000, "HR12 Smart — notifications, health tracking and modern looks.", "images/smart.jpg.JPG"),
    )
}


def get_product(key: Optional[str]) -> Optional[ProductCatalogEntry]:
    if not key:
        return None
    return CATALOG.get(key)


def search_catalog(query: Optional[str]) -> List[ProductCatalogEntry]:
    if not query:
        return list(CATALOG.values())
    q = query.lower()
    return [p for p in CATALOG.values() if q in p.name.lower() or q in p.description.lower()]
