# backend/routes/orders.py
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.order import Order
from models.users import User, UserRole
from schemas.order import (
    OrderCreatePayload, OrderCreateResponse, OrderItemOut, OrderResponse, ShippingAddress
)
from services import order_service
from utils.audit import client_ip, write_log
from utils.exceptions import DomainError
from utils.tokenJWT import get_current_user, role_required

router = APIRouter(prefix="/api/orders", tags=["Orders"])


# Map Order model to OrderResponse schema, lines come from the order-time snapshot
def _order_to_out(order: Order) -> OrderResponse:
    items = [
        OrderItemOut(
            product_id=it.product_id,
            quantity=it.quantity,
            price=it.price,
            title=it.title,
            line_total=round(it.quantity * it.price, 2),
        )
        for it in order.items
    ]
    return OrderResponse(
        id=order.id,
        user_id=order.user_id,
        status=order.status,
        total_amount=order.total_amount,
        payment_method=order.payment_method,
        shipping_address=ShippingAddress(
            full_name=order.shipping_full_name,
            address=order.shipping_address,
            city=order.shipping_city,
            state=order.shipping_state,
            zip_code=order.shipping_zip_code,
            phone=order.shipping_phone,
        ),
        items=items,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


# Place an order: validate all lines, reserve stock, store the snapshot
@router.post("", response_model=OrderCreateResponse, status_code=status.HTTP_201_CREATED)
def place_order(
    payload: OrderCreatePayload,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required(UserRole.BUYER, "Only buyers can place orders")),
):
    try:
        order = order_service.place_order(
            db,
            current_user,
            payload.items,
            payload.total_amount,
            shipping_address=payload.shipping_address,
            payment_method=payload.payment_method,
        )
    except DomainError as e:
        write_log(db, user_id=current_user.id, action="ORDER_CREATE", resource="orders", status="FAIL",
                  ip=client_ip(request), meta={"reason": e.message})
        raise

    out = _order_to_out(order)
    write_log(
        db, user_id=current_user.id, action="ORDER_CREATE", resource="orders", status="SUCCESS",
        ip=client_ip(request), meta={"order_id": out.id, "total": out.total_amount, "lines": len(out.items)}
    )
    return OrderCreateResponse(message="Order placed successfully", order=out)


# List the caller's orders, newest first
@router.get("", response_model=List[OrderResponse])
def list_my_orders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return [_order_to_out(o) for o in order_service.list_orders(db, current_user.id)]


# Get details of one of the caller's orders
@router.get("/{order_id}", response_model=OrderResponse)
def get_order_detail(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _order_to_out(order_service.get_order(db, current_user.id, order_id))
