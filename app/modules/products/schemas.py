# app/modules/products/schemas.py
from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime

class ProductCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Nombre del producto")
    description: Optional[str] = Field(None, description="Descripción detallada del producto")
    price: Decimal = Field(..., gt=0, decimal_places=2, description="Precio de venta")
    cost: Decimal = Field(..., gt=0, decimal_places=2, description="Costo de adquisición")
    stock: int = Field(0, ge=0, description="Cantidad disponible en inventario")
    category: str = Field(..., min_length=1, max_length=100, description="Categoría (Repuestos, Accesorios, etc.)")
    is_active: bool = Field(True, description="Estado del producto")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Pantalla iPhone 11",
                "description": "Pantalla LCD compatible",
                "price": 180.00,
                "cost": 120.00,
                "stock": 5,
                "category": "Repuestos"
            }
        }

class ProductUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    cost: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    is_active: Optional[bool] = None

class StockAdjustmentRequest(BaseModel):
    quantity: int = Field(..., description="Cantidad a añadir (positiva) o restar (negativa)")

class ProductResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    price: Decimal
    cost: Decimal
    stock: int
    category: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class StockAvailabilityResponse(BaseModel):
    product_id: str
    available: int
    requested: int
    can_sell: bool
