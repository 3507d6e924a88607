"""
Merchant endpoints — list merchants and manage their product catalogues.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ecodeli_admin.core.errors import NotFoundError
from ecodeli_admin.database import get_db
from ecodeli_admin.models import Product, Role, User
from ecodeli_admin.schemas.common import MessageResponse
from ecodeli_admin.schemas.merchant import (
    MerchantListResponse,
    MerchantResponse,
    ProductResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _delete_product(db: AsyncSession, product_id: UUID) -> None:
    product = await db.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    merchant_id = product.merchant_id
    await db.delete(product)
    await db.flush()
    logger.info("Product %s of merchant %s deleted", product_id, merchant_id)


@router.get("", response_model=MerchantListResponse)
async def list_merchants(db: AsyncSession = Depends(get_db)):
    """List MERCHANT users newest first with their product counts."""
    product_count = (
        select(func.count(Product.id))
        .where(Product.merchant_id == User.id)
        .correlate(User)
        .scalar_subquery()
    )
    result = await db.execute(
        select(User, product_count)
        .where(User.role == Role.MERCHANT)
        .order_by(User.created_at.desc())
    )
    merchants = [
        MerchantResponse.model_validate(user).model_copy(update={"product_count": count})
        for user, count in result.all()
    ]
    return MerchantListResponse(merchants=merchants, total=len(merchants))


@router.get("/products", response_model=list[ProductResponse])
async def list_merchant_products(
    merchant_id: UUID | None = Query(None, alias="merchantId"),
    db: AsyncSession = Depends(get_db),
):
    """List one merchant's products, newest first."""
    if merchant_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="merchantId is required",
        )

    merchant = await db.get(User, merchant_id)
    if merchant is None or merchant.role != Role.MERCHANT:
        raise NotFoundError("Merchant not found")

    result = await db.execute(
        select(Product)
        .where(Product.merchant_id == merchant_id)
        .order_by(Product.created_at.desc())
    )
    return [ProductResponse.model_validate(p) for p in result.scalars().all()]


@router.delete("/products", response_model=MessageResponse)
async def delete_product_by_query(
    product_id: UUID | None = Query(None, alias="productId"),
    db: AsyncSession = Depends(get_db),
):
    """Delete a product given as ``?productId=``."""
    if product_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="productId is required",
        )
    await _delete_product(db, product_id)
    return MessageResponse(message="Product deleted")


@router.delete("/products/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: UUID, db: AsyncSession = Depends(get_db)):
    """Delete a product by path id."""
    await _delete_product(db, product_id)
    return MessageResponse(message="Product deleted")
