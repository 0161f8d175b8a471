# backend/routes/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.product import Product
from models.users import User, UserRole
import schemas.product as product_schemas
from services import catalog_service
from utils.audit import client_ip, write_log
from utils.image_url import get_image_url
from utils.tokenJWT import role_required

router = APIRouter(prefix="/api/products", tags=["Products"])


def _base_url(request: Request) -> str:
    return settings.PUBLIC_API_URL or str(request.base_url)


def _product_to_out(request: Request, product: Product) -> product_schemas.ProductOut:
    out = product_schemas.ProductOut.model_validate(product)
    out.image_url = get_image_url(product.image, _base_url(request))
    return out


# =========================
# PRODUCT LIST
# =========================
@router.get("", response_model=List[product_schemas.ProductOut])
def list_products(
    request: Request,
    category: Optional[str] = Query(None, description="Exact category, 'All' disables the filter"),
    sort: Optional[str] = Query(None, alias="_sort"),
    order: Optional[str] = Query(None, alias="_order", description="'desc' sorts descending, anything else ascending"),
    page: int = Query(1, ge=1, alias="_page"),
    limit: int = Query(catalog_service.DEFAULT_PAGE_SIZE, ge=1, le=catalog_service.MAX_PAGE_SIZE, alias="_limit"),
    db: Session = Depends(get_db),
):
    products = catalog_service.list_products(
        db, category=category, sort_key=sort, sort_order=order, page=page, limit=limit
    )
    return [_product_to_out(request, p) for p in products]


@router.get("/categories", response_model=List[str])
def list_categories(db: Session = Depends(get_db)):
    return catalog_service.list_categories(db)


# =========================
# SINGLE PRODUCT
# =========================
@router.get("/{product_id}", response_model=product_schemas.ProductOut)
def get_product(product_id: int, request: Request, db: Session = Depends(get_db)):
    return _product_to_out(request, catalog_service.get_product(db, product_id))


# =========================
# CREATE PRODUCT
# =========================
@router.post("", response_model=product_schemas.ProductOut, status_code=status.HTTP_201_CREATED)
def add_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(role_required(UserRole.SELLER, "Only sellers can create products")),
):
    product = catalog_service.create_product(db, current_user, **payload.model_dump())

    write_log(
        db, user_id=current_user.id, action="PRODUCT_CREATE", resource="products",
        status="SUCCESS", ip=client_ip(request), meta={"id": product.id, "title": product.title}
    )
    return _product_to_out(request, product)
