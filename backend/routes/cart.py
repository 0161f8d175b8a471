# backend/routes/cart.py
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from models.cart import Cart
from models.users import User, UserRole
from schemas.cart import CartAddItem, CartAddResponse, CartItemOut, CartOut, CartUpdateItem
from services import cart_service
from utils.audit import client_ip, write_log
from utils.cart_math import calculate_totals, line_total
from utils.tokenJWT import get_current_user, role_required

router = APIRouter(prefix="/api/cart", tags=["Cart"])

buyer_only = role_required(UserRole.BUYER, "Only buyers can modify the cart")


def _cart_to_out(cart: Optional[Cart], user_id: int) -> CartOut:
    # Users without a cart get an empty one
    if cart is None:
        return CartOut(user_id=user_id)

    lines = []
    items_out = []
    for it in cart.items:
        product = it.product
        line = {"product_id": it.product_id, "price": product.price, "quantity": it.quantity,
                "max_stock": product.stock}
        lines.append(line)
        items_out.append(CartItemOut(
            product_id=it.product_id,
            quantity=it.quantity,
            added_at=it.added_at,
            title=product.title,
            price=product.price,
            image=product.image,
            stock=product.stock,
            line_total=round(line_total(line), 2),
        ))

    total_items, total_amount = calculate_totals(lines)
    return CartOut(
        id=cart.id,
        user_id=cart.user_id,
        items=items_out,
        total_items=total_items,
        total_amount=total_amount,
        updated_at=cart.updated_at,
    )


@router.get("", response_model=CartOut)
def get_cart(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _cart_to_out(cart_service.get_cart(db, current_user.id), current_user.id)


@router.post("/add", response_model=CartAddResponse)
def add_to_cart(
    payload: CartAddItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required(UserRole.BUYER, "Only buyers can add items to cart"))
):
    cart = cart_service.add_to_cart(db, current_user, payload.product_id, payload.quantity)
    out = _cart_to_out(cart, current_user.id)

    write_log(
        db,
        user_id=current_user.id,
        action="CART_ADD",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"product_id": payload.product_id, "quantity": payload.quantity,
              "cart_items": len(out.items), "total": out.total_amount},
    )
    return CartAddResponse(message="Item added to cart", cart=out)


@router.put("/items/{product_id}", response_model=CartOut)
def update_cart_item(
    product_id: int,
    payload: CartUpdateItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(buyer_only)
):
    cart = cart_service.update_cart_item(db, current_user, product_id, payload.quantity)
    out = _cart_to_out(cart, current_user.id)

    write_log(
        db,
        user_id=current_user.id,
        action="CART_UPDATE",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"product_id": product_id, "quantity": payload.quantity, "total": out.total_amount},
    )
    return out


@router.delete("/items/{product_id}", response_model=CartOut)
def delete_cart_item(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(buyer_only)
):
    cart = cart_service.remove_cart_item(db, current_user, product_id)
    out = _cart_to_out(cart, current_user.id)

    write_log(
        db,
        user_id=current_user.id,
        action="CART_DELETE",
        resource="cart",
        status="SUCCESS",
        ip=client_ip(request),
        meta={"product_id": product_id, "cart_items": len(out.items), "total": out.total_amount},
    )
    return out


@router.delete("", response_model=CartOut)
def clear_cart(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(buyer_only)
):
    cart = cart_service.clear_cart(db, current_user)
    out = _cart_to_out(cart, current_user.id)

    write_log(db, user_id=current_user.id, action="CART_CLEAR", resource="cart",
              status="SUCCESS", ip=client_ip(request))
    return out
