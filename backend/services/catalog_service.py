import logging
import math
from typing import List, Optional

from sqlalchemy.orm import Session

from models.product import DEFAULT_PRODUCT_IMAGE, Product
from models.users import User, UserRole
from utils.exceptions import InvalidInput, ProductNotFound
from utils.tokenJWT import require_role

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Sortable columns, keyed by lower-case name without underscores so that
# both "createdAt" and "created_at" resolve
SORT_COLUMNS = {
    "id": Product.id,
    "title": Product.title,
    "price": Product.price,
    "category": Product.category,
    "rating": Product.rating,
    "stock": Product.stock,
    "sellerid": Product.seller_id,
    "createdat": Product.created_at,
}


def list_products(
    db: Session,
    *,
    category: Optional[str] = None,
    sort_key: Optional[str] = None,
    sort_order: Optional[str] = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> List[Product]:
    """One page of the catalog.

    No total is returned: a page shorter than ``limit`` is the last one.
    Unknown sort keys fall back to id order.
    """
    if page < 1:
        raise InvalidInput("Page must be at least 1")
    if not 1 <= limit <= MAX_PAGE_SIZE:
        raise InvalidInput(f"Limit must be between 1 and {MAX_PAGE_SIZE}")

    query = db.query(Product)
    if category and category != "All":
        query = query.filter(Product.category == category)

    sort_col = SORT_COLUMNS.get((sort_key or "id").replace("_", "").lower(), Product.id)
    descending = (sort_order or "asc").lower() == "desc"
    query = query.order_by(sort_col.desc() if descending else sort_col.asc())
    if sort_col is not Product.id:
        # Deterministic order for equal sort values
        query = query.order_by(Product.id.asc())

    return query.offset((page - 1) * limit).limit(limit).all()


def get_product(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise ProductNotFound(product_id)
    return product


def list_categories(db: Session) -> List[str]:
    rows = db.query(Product.category).distinct().filter(Product.category != "").all()
    return sorted(r[0] for r in rows if r[0])


def create_product(
    db: Session,
    seller: User,
    *,
    title: str,
    price: float,
    category: str,
    description: Optional[str] = None,
    image: Optional[str] = None,
    stock: Optional[int] = None,
) -> Product:
    require_role(seller, UserRole.SELLER, "Only sellers can create products")

    if not title or not title.strip() or not category or not category.strip() or price is None:
        raise InvalidInput("Title, price, and category are required")
    price = float(price)
    if not math.isfinite(price) or price < 0:
        raise InvalidInput("Price must be a non-negative number")
    stock = int(stock or 0)
    if stock < 0:
        raise InvalidInput("Stock must be a non-negative integer")

    product = Product(
        title=title.strip(),
        price=price,
        category=category.strip(),
        description=description or "",
        image=image or DEFAULT_PRODUCT_IMAGE,
        stock=stock,
        seller_id=seller.id,
        rating=0,
    )
    db.add(product)
    db.commit()
    db.refresh(product)

    logger.info("Seller %s created product %s", seller.id, product.id)
    return product
