# app/modules/sales/router.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import datetime

from app.config.database import get_db
from app.core.auth.dependencies import require_roles
from app.shared.schemas.common import MessageResponse
from .service import SalesService
from .schemas import SaleCreateRequest, SaleUpdateRequest, SaleResponse, SaleInvoice

router = APIRouter()

@router.post("", response_model=SaleResponse, status_code=201)
async def create_sale(
    sale_data: SaleCreateRequest,
    current_user = Depends(require_roles(["ADMIN", "TECHNICIAN"])),
    db: Session = Depends(get_db)
):
    """
    Registrar una venta

    **Incluye:**
    - Validación de cliente (registrado o nombre libre)
    - Validación de stock de todos los productos
    - Precio del catálogo cuando el item no trae precio
    - Descuento automático de inventario en la misma transacción
    """
    service = SalesService(db)
    return await service.create_sale(sale_data, user_id=current_user.id)

@router.get("", response_model=List[SaleResponse])
async def list_sales(
    start_date: Optional[datetime] = Query(None, alias="startDate", description="Fecha de inicio (YYYY-MM-DD)"),
    end_date: Optional[datetime] = Query(None, alias="endDate", description="Fecha de fin (YYYY-MM-DD)"),
    customer_id: Optional[str] = Query(None, alias="customerId", description="ID del cliente"),
    current_user = Depends(require_roles(["ADMIN", "TECHNICIAN"])),
    db: Session = Depends(get_db)
):
    """Obtener todas las ventas, más recientes primero"""
    service = SalesService(db)
    return await service.find_all(start_date, end_date, customer_id)

@router.get("/{sale_id}", response_model=SaleResponse)
async def get_sale(
    sale_id: str,
    current_user = Depends(require_roles(["ADMIN", "TECHNICIAN"])),
    db: Session = Depends(get_db)
):
    """Obtener una venta por ID"""
    service = SalesService(db)
    return await service.find_one(sale_id)

@router.get("/{sale_id}/invoice", response_model=SaleInvoice)
async def get_sale_invoice(
    sale_id: str,
    current_user = Depends(require_roles(["ADMIN", "TECHNICIAN"])),
    db: Session = Depends(get_db)
):
    """Generar factura o ticket para una venta (IGV incluido en el total)"""
    service = SalesService(db)
    return await service.get_invoice(sale_id)

@router.patch("/{sale_id}", response_model=SaleResponse)
async def update_sale(
    sale_id: str,
    update_data: SaleUpdateRequest,
    current_user = Depends(require_roles(["ADMIN"])),
    db: Session = Depends(get_db)
):
    """Actualizar cliente o método de pago. Los items no se pueden modificar."""
    service = SalesService(db)
    return await service.update_sale(sale_id, update_data)

@router.delete("/{sale_id}", response_model=MessageResponse)
async def delete_sale(
    sale_id: str,
    current_user = Depends(require_roles(["ADMIN"])),
    db: Session = Depends(get_db)
):
    """Eliminar una venta devolviendo el stock de sus productos"""
    service = SalesService(db)
    return await service.delete_sale(sale_id)
