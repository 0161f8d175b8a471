import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from models.cart import Cart, CartItem
from models.product import Product
from models.users import User, UserRole
from utils.exceptions import InsufficientStock, InvalidInput, NotFound, ProductNotFound
from utils.tokenJWT import require_role

logger = logging.getLogger(__name__)


def get_cart(db: Session, user_id: int) -> Optional[Cart]:
    # None means the user never added anything, callers render an empty cart
    return db.query(Cart).filter(Cart.user_id == user_id).first()


def _get_or_create_cart(db: Session, user_id: int) -> Cart:
    cart = get_cart(db, user_id)
    if cart is None:
        cart = Cart(user_id=user_id)
        db.add(cart)
        db.flush()
    return cart


def _find_item(cart: Optional[Cart], product_id: int) -> Optional[CartItem]:
    if cart is None:
        return None
    return next((it for it in cart.items if it.product_id == product_id), None)


def _commit(db: Session, cart: Cart) -> Cart:
    cart.updated_at = datetime.now(timezone.utc)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(cart)
    return cart


def add_to_cart(db: Session, user: User, product_id: int, quantity: int = 1) -> Cart:
    """Add a product to the buyer's cart, summing quantities for repeated products.

    Quantities are not capped to stock here; stock is checked when the order is placed.
    """
    require_role(user, UserRole.BUYER, "Only buyers can add items to cart")
    if quantity < 1:
        raise InvalidInput("Quantity must be at least 1")

    product = db.get(Product, product_id)
    if product is None:
        raise ProductNotFound(product_id)

    cart = _get_or_create_cart(db, user.id)
    item = _find_item(cart, product_id)
    if item:
        item.quantity += quantity
    else:
        cart.items.append(CartItem(product_id=product_id, quantity=quantity))

    cart = _commit(db, cart)
    logger.debug("User %s cart: +%s x product %s", user.id, quantity, product_id)
    return cart


def update_cart_item(db: Session, user: User, product_id: int, quantity: int) -> Cart:
    require_role(user, UserRole.BUYER, "Only buyers can modify the cart")
    if quantity < 1:
        raise InvalidInput("Quantity must be at least 1")

    cart = get_cart(db, user.id)
    item = _find_item(cart, product_id)
    if item is None:
        raise NotFound("Cart item not found")

    product = db.get(Product, product_id)
    if product is not None and quantity > product.stock:
        raise InsufficientStock(f"Insufficient stock for {product.title}")

    item.quantity = quantity
    return _commit(db, cart)


def remove_cart_item(db: Session, user: User, product_id: int) -> Cart:
    require_role(user, UserRole.BUYER, "Only buyers can modify the cart")

    cart = get_cart(db, user.id)
    item = _find_item(cart, product_id)
    if item is None:
        raise NotFound("Cart item not found")

    cart.items.remove(item)
    return _commit(db, cart)


def clear_cart(db: Session, user: User) -> Optional[Cart]:
    require_role(user, UserRole.BUYER, "Only buyers can modify the cart")

    cart = get_cart(db, user.id)
    if cart is None:
        return None
    cart.items.clear()
    return _commit(db, cart)
