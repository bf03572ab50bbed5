# app/modules/products/router.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import require_roles
from app.shared.schemas.common import MessageResponse
from .service import ProductsService
from .schemas import (
    ProductCreateRequest, ProductUpdateRequest, ProductResponse,
    StockAdjustmentRequest, StockAvailabilityResponse
)

router = APIRouter()

@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    product_data: ProductCreateRequest,
    current_user = Depends(require_roles(["ADMIN"])),
    db: Session = Depends(get_db)
):
    """Crear un nuevo producto"""
    service = ProductsService(db)
    return await service.create_product(product_data)

@router.get("", response_model=List[ProductResponse])
async def list_products(
    category: Optional[str] = Query(None, description="Filtrar por categoría"),
    active: Optional[bool] = Query(None, description="Filtrar por estado activo/inactivo"),
    current_user = Depends(require_roles(["ADMIN", "TECHNICIAN"])),
    db: Session = Depends(get_db)
):
    """Obtener todos los productos ordenados por nombre"""
    service = ProductsService(db)
    return await service.list_products(category, active)

@router.get("/search", response_model=List[ProductResponse])
async def search_products(
    query: str = Query(..., min_length=1, description="Término de búsqueda"),
    current_user = Depends(require_roles(["ADMIN", "TECHNICIAN"])),
    db: Session = Depends(get_db)
):
    """Buscar productos por nombre, descripción o categoría"""
    service = ProductsService(db)
    return await service.search_products(query)

@router.get("/categories", response_model=List[str])
async def get_categories(
    current_user = Depends(require_roles(["ADMIN", "TECHNICIAN"])),
    db: Session = Depends(get_db)
):
    """Obtener todas las categorías de productos"""
    service = ProductsService(db)
    return await service.get_categories()

@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    current_user = Depends(require_roles(["ADMIN", "TECHNICIAN"])),
    db: Session = Depends(get_db)
):
    service = ProductsService(db)
    return await service.get_product(product_id)

@router.get("/{product_id}/availability", response_model=StockAvailabilityResponse)
async def check_availability(
    product_id: str,
    quantity: int = Query(1, gt=0, description="Cantidad solicitada"),
    current_user = Depends(require_roles(["ADMIN", "TECHNICIAN"])),
    db: Session = Depends(get_db)
):
    """Verificar disponibilidad de stock sin bloquear"""
    service = ProductsService(db)
    return await service.check_availability(product_id, quantity)

@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    update_data: ProductUpdateRequest,
    current_user = Depends(require_roles(["ADMIN"])),
    db: Session = Depends(get_db)
):
    """Actualizar datos de catálogo (el stock se ajusta por /stock)"""
    service = ProductsService(db)
    return await service.update_product(product_id, update_data)

@router.patch("/{product_id}/stock", response_model=ProductResponse)
async def adjust_stock(
    product_id: str,
    adjustment: StockAdjustmentRequest,
    current_user = Depends(require_roles(["ADMIN"])),
    db: Session = Depends(get_db)
):
    """Ajustar stock: cantidad positiva suma, negativa resta"""
    service = ProductsService(db)
    return await service.adjust_stock(product_id, adjustment.quantity)

@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    current_user = Depends(require_roles(["ADMIN"])),
    db: Session = Depends(get_db)
):
    """Eliminar producto (o desactivarlo si tiene ventas)"""
    service = ProductsService(db)
    return await service.delete_product(product_id)
