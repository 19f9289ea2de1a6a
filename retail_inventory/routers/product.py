from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from typing import Any, List

from beanie import PydanticObjectId

from retail_inventory.core.config import settings
from retail_inventory.dependencies.inventory import get_inventory_service
from retail_inventory.models.product import Product
from retail_inventory.schemas.product import (
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    StockAdjustment,
)
from retail_inventory.services.inventory import InventoryService
from retail_inventory.services.results import NotFound, Ok

router = APIRouter()


# ==========================================
# HELPER FUNCTIONS
# ==========================================

def mutation_not_found_status() -> int:
    """Status for update/delete/stock calls against a missing product."""
    if settings.STRICT_NOT_FOUND:
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


def unwrap(result, not_found_status: int = status.HTTP_400_BAD_REQUEST) -> Any:
    """Return the value of an ``Ok`` or raise the matching HTTPException."""
    if isinstance(result, Ok):
        return result.value
    if isinstance(result, NotFound):
        raise HTTPException(status_code=not_found_status, detail=result.message)
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.message)


def to_response(product: Product) -> ProductResponse:
    return ProductResponse.model_validate(product)


# ==========================================
# QUERIES
# ==========================================

@router.get("", response_model=List[ProductResponse])
async def get_products(service: InventoryService = Depends(get_inventory_service)):
    return [to_response(product) for product in await service.list()]


# Registered before /{product_id} so the literal paths win
@router.get("/search", response_model=List[ProductResponse])
async def search_products(
    query: str = Query(..., description="Case-insensitive substring of the product name"),
    service: InventoryService = Depends(get_inventory_service)
):
    return [to_response(product) for product in await service.search(query)]


@router.get("/low-stock", response_model=List[ProductResponse])
async def get_low_stock_products(service: InventoryService = Depends(get_inventory_service)):
    """Products whose quantity is below their low-stock threshold."""
    return [to_response(product) for product in await service.list_low_stock()]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: PydanticObjectId,
    service: InventoryService = Depends(get_inventory_service)
):
    product = unwrap(await service.get(product_id), not_found_status=status.HTTP_404_NOT_FOUND)
    return to_response(product)


# ==========================================
# MUTATIONS
# ==========================================

@router.post("", response_model=ProductResponse)
async def create_product(
    product_data: ProductCreate,
    service: InventoryService = Depends(get_inventory_service)
):
    return to_response(unwrap(await service.create(product_data)))


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: PydanticObjectId,
    update_data: ProductUpdate,
    service: InventoryService = Depends(get_inventory_service)
):
    result = await service.update(product_id, update_data)
    return to_response(unwrap(result, not_found_status=mutation_not_found_status()))


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_product(
    product_id: PydanticObjectId,
    service: InventoryService = Depends(get_inventory_service)
):
    unwrap(await service.delete(product_id), not_found_status=mutation_not_found_status())
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{product_id}/increase-stock", response_model=ProductResponse)
async def increase_stock(
    product_id: PydanticObjectId,
    adjustment: StockAdjustment,
    service: InventoryService = Depends(get_inventory_service)
):
    result = await service.increase_stock(product_id, adjustment.quantity)
    return to_response(unwrap(result, not_found_status=mutation_not_found_status()))


@router.patch("/{product_id}/decrease-stock", response_model=ProductResponse)
async def decrease_stock(
    product_id: PydanticObjectId,
    adjustment: StockAdjustment,
    service: InventoryService = Depends(get_inventory_service)
):
    result = await service.decrease_stock(product_id, adjustment.quantity)
    return to_response(unwrap(result, not_found_status=mutation_not_found_status()))
