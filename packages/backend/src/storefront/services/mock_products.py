"""Generated sample catalog for front-end work and load tests.

Nothing here touches the database: each call builds a fresh batch of
products in the same shape the product API answers with.
"""

import random

from storefront.db.models import new_object_id, utcnow
from storefront.schemas.product import ProductRead

DEFAULT_COUNT = 100

_ADJECTIVES = ("Classic", "Organic", "Premium", "Rustic", "Smoked", "Spiced", "Toasted", "Wild")
_NOUNS = ("Yerba", "Tea", "Coffee", "Honey", "Jam", "Biscuits", "Chocolate", "Mate gourd")
_CATEGORIES = ("infusions", "pantry", "sweets", "accessories")


def mock_products(count: int = DEFAULT_COUNT) -> list[ProductRead]:
    rng = random.Random()
    now = utcnow()
    products = []
    for n in range(1, count + 1):
        title = f"{rng.choice(_ADJECTIVES)} {rng.choice(_NOUNS)}"
        products.append(ProductRead(
            id=new_object_id(),
            title=title,
            description=f"{title}, sample item {n}",
            price=round(rng.uniform(1, 500), 2),
            thumbnail=f"mock-{n:03d}.jpg",
            code=f"MOCK-{n:04d}",
            category=rng.choice(_CATEGORIES),
            stock=rng.randint(0, 200),
            created_at=now,
        ))
    return products
