"""
==============================================================================
Product Catalog Endpoints
==============================================================================

REST surface of the catalog backend. Records are returned raw (backend
field names); failures use the shared error envelope.

==============================================================================
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from product_catalog.db.database import get_db
from product_catalog.schemas.product import ProductCreate, ProductRecord, ProductUpdate
from product_catalog.services.product_service import ProductLifecycleManager


router = APIRouter(prefix="/products", tags=["Products"])


class ProductController:
    """Controller for product lifecycle operations."""

    def __init__(self, db: Session):
        self._manager = ProductLifecycleManager(db)

    def list_products(self) -> List[ProductRecord]:
        return [ProductRecord.model_validate(p) for p in self._manager.list()]

    def get_product(self, product_id: int) -> ProductRecord:
        return ProductRecord.model_validate(self._manager.get(product_id))

    def create_product(self, data: ProductCreate) -> ProductRecord:
        product = self._manager.create(data.name, data.country)
        return ProductRecord.model_validate(product)

    def update_product(self, product_id: int, data: ProductUpdate) -> ProductRecord:
        product = self._manager.update(product_id, data.name, data.country)
        return ProductRecord.model_validate(product)

    def delete_product(self, product_id: int) -> dict:
        return {"message": self._manager.delete(product_id)}

    def restore_product(self, product_id: int) -> dict:
        return {"message": self._manager.restore(product_id)}


@router.get("", response_model=List[ProductRecord])
async def list_products(db: Session = Depends(get_db)):
    """List all products, including soft-deleted ones."""
    return ProductController(db).list_products()


@router.post("", response_model=ProductRecord, status_code=status.HTTP_201_CREATED)
async def create_product(data: ProductCreate, db: Session = Depends(get_db)):
    """Create a product; 409 if the (name, country) pair was ever used."""
    return ProductController(db).create_product(data)


@router.get("/{product_id}", response_model=ProductRecord)
async def get_product(product_id: int, db: Session = Depends(get_db)):
    """Get a product by id, deleted or not."""
    return ProductController(db).get_product(product_id)


@router.put("/{product_id}", response_model=ProductRecord)
async def update_product(product_id: int, data: ProductUpdate, db: Session = Depends(get_db)):
    """Update an active product."""
    return ProductController(db).update_product(product_id, data)


@router.delete("/{product_id}")
async def delete_product(product_id: int, db: Session = Depends(get_db)):
    """Soft delete a product."""
    return ProductController(db).delete_product(product_id)


@router.patch("/{product_id}/restore")
async def restore_product(product_id: int, db: Session = Depends(get_db)):
    """Restore a soft-deleted product."""
    return ProductController(db).restore_product(product_id)
