# app/modules/customers/router.py
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import require_roles
from app.shared.schemas.common import MessageResponse
from .service import CustomersService
from .schemas import CustomerCreateRequest, CustomerUpdateRequest, CustomerResponse

router = APIRouter()

@router.post("", response_model=CustomerResponse, status_code=201)
async def create_customer(
    customer_data: CustomerCreateRequest,
    current_user = Depends(require_roles(["ADMIN", "TECHNICIAN"])),
    db: Session = Depends(get_db)
):
    """Registrar un nuevo cliente"""
    service = CustomersService(db)
    return await service.create_customer(customer_data)

@router.get("", response_model=List[CustomerResponse])
async def list_customers(
    current_user = Depends(require_roles(["ADMIN", "TECHNICIAN"])),
    db: Session = Depends(get_db)
):
    service = CustomersService(db)
    return await service.list_customers()

@router.get("/search", response_model=List[CustomerResponse])
async def search_customers(
    query: str = Query(..., min_length=1, description="Nombre, email, teléfono o documento"),
    current_user = Depends(require_roles(["ADMIN", "TECHNICIAN"])),
    db: Session = Depends(get_db)
):
    service = CustomersService(db)
    return await service.search_customers(query)

@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: str,
    current_user = Depends(require_roles(["ADMIN", "TECHNICIAN"])),
    db: Session = Depends(get_db)
):
    service = CustomersService(db)
    return await service.get_customer(customer_id)

@router.patch("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: str,
    update_data: CustomerUpdateRequest,
    current_user = Depends(require_roles(["ADMIN", "TECHNICIAN"])),
    db: Session = Depends(get_db)
):
    service = CustomersService(db)
    return await service.update_customer(customer_id, update_data)

@router.delete("/{customer_id}", response_model=MessageResponse)
async def delete_customer(
    customer_id: str,
    current_user = Depends(require_roles(["ADMIN"])),
    db: Session = Depends(get_db)
):
    """Eliminar cliente sin ventas asociadas"""
    service = CustomersService(db)
    return await service.delete_customer(customer_id)
