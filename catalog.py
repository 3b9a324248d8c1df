import logging
from typing import Iterable, List, Optional

from config import LOW_STOCK_THRESHOLD
from errors import UnknownProduct
from schemas import Product

logger = logging.getLogger(__name__)


SAMPLE_PRODUCTS = [
    {
        "id": 1,
        "name": "Telur Ayam Kampung Premium",
        "price": 45000,
        "category": "Telur",
        "description": "Telur ayam kampung asli, kaya omega 3, dipanen setiap pagi. Cocok untuk kesehatan keluarga.",
        "stock": 50,
        "unit": "tray (30 butir)",
        "image": "https://images.unsplash.com/photo-1563822248828-fd50acca9ad0?q=80&w=687&auto=format&fit=crop",
    },
    {
        "id": 2,
        "name": "Dada Ayam Fillet Segar",
        "price": 55000,
        "category": "Daging Ayam",
        "description": "Dada ayam tanpa tulang dan kulit, rendah lemak, tinggi protein. Potongan bersih dan higienis.",
        "stock": 25,
        "unit": "kg",
        "image": "https://images.unsplash.com/photo-1604503468506-a8da13d82791?auto=format&fit=crop&w=800&q=80",
    },
    {
        "id": 3,
        "name": "Paha Ayam Utuh (Thigh)",
        "price": 42000,
        "category": "Daging Ayam",
        "description": "Bagian paha ayam yang juicy dan lembut. Sangat cocok untuk ayam bakar atau goreng.",
        "stock": 40,
        "unit": "kg",
        "image": "https://images.unsplash.com/photo-1759493321741-883fbf9f433c?q=80&w=1170&auto=format&fit=crop",
    },
    {
        "id": 4,
        "name": "Telur Omega 3 Gold",
        "price": 38000,
        "category": "Telur",
        "description": "Telur dengan kandungan Omega 3 tinggi, kuning telur berwarna oranye pekat.",
        "stock": 100,
        "unit": "pack (10 butir)",
        "image": "https://images.unsplash.com/photo-1506976785307-8732e854ad03?auto=format&fit=crop&w=800&q=80",
    },
    {
        "id": 5,
        "name": "Ayam Utuh Karkas (0.8 - 1.0kg)",
        "price": 35000,
        "category": "Daging Ayam",
        "description": "Ayam utuh segar, pemotongan syariah, bersih dari bulu.",
        "stock": 15,
        "unit": "ekor",
        "image": "https://images.unsplash.com/photo-1672787153720-e85fe802fd9f?q=80&w=1887&auto=format&fit=crop",
    },
]


class CatalogStore:
    """Read-only product list. Listing order is preserved."""

    def __init__(self, products: Optional[Iterable[Product]] = None):
        if products is None:
            products = [Product(**p) for p in SAMPLE_PRODUCTS]
        self._products: List[Product] = []
        self._by_id = {}
        for product in products:
            if product.id in self._by_id:
                raise ValueError(f"Duplicate product id: {product.id}")
            self._products.append(product)
            self._by_id[product.id] = product
        logger.debug("Catalog loaded with %d products", len(self._products))

    def list_products(self) -> List[Product]:
        return list(self._products)

    def find_by_id(self, product_id: int) -> Optional[Product]:
        return self._by_id.get(product_id)

    def require(self, product_id: int) -> Product:
        product = self._by_id.get(product_id)
        if product is None:
            raise UnknownProduct(product_id)
        return product

    def search(self, query: Optional[str] = None, category: Optional[str] = None) -> List[Product]:
        """Case-insensitive substring match on name or category."""
        needle = (query or "").lower()
        wanted = (category or "").lower()
        results = []
        for p in self._products:
            if wanted and wanted != "all" and p.category.lower() != wanted:
                continue
            if needle and needle not in p.name.lower() and needle not in p.category.lower():
                continue
            results.append(p)
        return results

    def categories(self) -> List[str]:
        return sorted({p.category for p in self._products})

    def low_stock(self, threshold: int = LOW_STOCK_THRESHOLD) -> List[Product]:
        return [p for p in self._products if p.stock < threshold]
