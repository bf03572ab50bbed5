# app/modules/sales/schemas.py
from pydantic import BaseModel, Field
from typing import Any, List, Optional
from decimal import Decimal
from datetime import datetime

from app.shared.database.models import PaymentMethod

class SaleItemCreate(BaseModel):
    product_id: str = Field(..., description="ID del producto")
    quantity: int = Field(..., gt=0, description="Cantidad")
    price: Optional[Decimal] = Field(None, gt=0, decimal_places=2, description="Precio unitario; si se omite se usa el del catálogo")

class SaleCreateRequest(BaseModel):
    customer_id: Optional[str] = Field(None, description="ID del cliente (opcional para clientes no registrados)")
    customer_name: Optional[str] = Field(None, max_length=255, description="Nombre del cliente no registrado")
    payment_method: PaymentMethod = Field(..., description="Método de pago")
    # La validación de lista vacía la hace el servicio
    items: List[SaleItemCreate] = Field(default_factory=list, description="Items de la venta")

    class Config:
        json_schema_extra = {
            "example": {
                "customer_name": "Pedro Gómez",
                "payment_method": "CASH",
                "items": [
                    {"product_id": "6f1c2c1e-4b7a-4f43-9f3e-1f3f0d0b9a10", "quantity": 2},
                    {"product_id": "0d8a1a7b-2f55-4c1b-8b5e-93c1d0f7e2aa", "quantity": 1, "price": 45.50}
                ]
            }
        }

class SaleUpdateRequest(BaseModel):
    customer_id: Optional[str] = None
    customer_name: Optional[str] = Field(None, max_length=255)
    payment_method: Optional[PaymentMethod] = None
    # Solo se acepta para poder rechazarlo explícitamente
    items: Optional[List[Any]] = None

class SaleItemResponse(BaseModel):
    id: str
    sale_id: str
    product_id: str
    quantity: int
    price: Decimal
    subtotal: Decimal
    product_name: str
    product_description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class SaleResponse(BaseModel):
    id: str
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    user_id: str
    total_amount: Decimal
    payment_method: PaymentMethod
    created_at: datetime
    updated_at: datetime
    items: List[SaleItemResponse]

    user_name: str
    customer_full_name: Optional[str] = None

class SaleInvoiceItem(BaseModel):
    product_name: str
    product_description: Optional[str] = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal

class SaleInvoice(BaseModel):
    invoice_number: str
    date: datetime
    customer_name: Optional[str] = None
    customer_document: Optional[str] = None
    seller_name: str
    payment_method: PaymentMethod
    subtotal: Decimal
    tax: Decimal
    tax_rate: Decimal
    total_amount: Decimal
    items: List[SaleInvoiceItem]
