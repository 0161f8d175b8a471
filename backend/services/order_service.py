import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy import update
from sqlalchemy.orm import Session

from models.order import DEFAULT_PAYMENT_METHOD, Order, OrderItem, OrderStatus
from models.product import Product
from models.users import User, UserRole
from schemas.order import OrderItemIn, ShippingAddress
from utils.cart_math import calculate_totals
from utils.exceptions import InsufficientStock, InvalidInput, NotFound, ProductNotFound
from utils.tokenJWT import require_role

logger = logging.getLogger(__name__)


def reserve_stock(db: Session, product_id: int, quantity: int) -> bool:
    """Atomically take ``quantity`` units of a product.

    A single conditional UPDATE, so two transactions can never both take the
    last unit. Returns False when the stock no longer covers the quantity.
    """
    result = db.execute(
        update(Product)
        .where(Product.id == product_id, Product.stock >= quantity)
        .values(stock=Product.stock - quantity)
    )
    return result.rowcount == 1


def default_shipping_address(user: User) -> ShippingAddress:
    return ShippingAddress(
        full_name=user.name,
        address=user.address or "",
        phone=user.phone or "",
    )


def place_order(
    db: Session,
    user: User,
    items: Sequence[OrderItemIn],
    total_amount: float,
    shipping_address: Optional[ShippingAddress] = None,
    payment_method: Optional[str] = None,
) -> Order:
    """Validate every line, then reserve stock and store the order in one transaction.

    Either the order exists with all stock taken, or nothing changed.
    """
    require_role(user, UserRole.BUYER, "Only buyers can place orders")
    if not items:
        raise InvalidInput("At least one item is required")

    # 1. Validate lines; repeated lines of one product count together
    products: Dict[int, Product] = {}
    requested: Dict[int, int] = {}
    for item in items:
        if item.quantity < 1:
            raise InvalidInput("Quantity must be at least 1")
        product = products.get(item.product_id) or db.get(Product, item.product_id)
        if product is None:
            raise ProductNotFound(item.product_id)
        products[product.id] = product
        requested[product.id] = requested.get(product.id, 0) + item.quantity
        if product.stock < requested[product.id]:
            raise InsufficientStock(f"Insufficient stock for {product.title}")

    # 2. Snapshot title and price so later product edits leave the order alone
    address = shipping_address or default_shipping_address(user)
    order = Order(
        user_id=user.id,
        status=OrderStatus.PENDING.value,
        total_amount=float(total_amount),
        payment_method=payment_method or DEFAULT_PAYMENT_METHOD,
        shipping_full_name=address.full_name,
        shipping_address=address.address,
        shipping_city=address.city,
        shipping_state=address.state,
        shipping_zip_code=address.zip_code,
        shipping_phone=address.phone,
    )
    for item in items:
        product = products[item.product_id]
        order.items.append(OrderItem(
            product_id=product.id, quantity=item.quantity, price=product.price, title=product.title
        ))

    _, lines_total = calculate_totals(
        [{"product_id": it.product_id, "price": it.price, "quantity": it.quantity} for it in order.items]
    )
    if abs(lines_total - order.total_amount) >= 0.01:
        # Client totals may include shipping, the submitted amount is stored as is
        logger.info("Order total %.2f for user %s differs from line total %.2f",
                    order.total_amount, user.id, lines_total)

    # 3. Reserve stock (sorted ids keep row lock order stable) and persist once
    try:
        for product_id, quantity in sorted(requested.items()):
            if not reserve_stock(db, product_id, quantity):
                raise InsufficientStock(f"Insufficient stock for {products[product_id].title}")
        db.add(order)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(order)

    logger.info("User %s placed order %s with %s line(s)", user.id, order.id, len(order.items))
    return order


def list_orders(db: Session, user_id: int) -> List[Order]:
    return db.query(Order).filter(Order.user_id == user_id).order_by(Order.id.desc()).all()


def get_order(db: Session, user_id: int, order_id: int) -> Order:
    order = db.get(Order, order_id)
    # Someone else's order is reported exactly like a missing one
    if order is None or order.user_id != user_id:
        raise NotFound("Order not found")
    return order
