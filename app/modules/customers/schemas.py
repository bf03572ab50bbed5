# app/modules/customers/schemas.py
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

class CustomerCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Nombre completo del cliente")
    email: Optional[EmailStr] = Field(None, description="Correo electrónico")
    phone: str = Field(..., min_length=1, max_length=50, description="Teléfono")
    document_type: str = Field(..., min_length=1, max_length=50, description="Tipo de documento (DNI, Pasaporte, etc.)")
    document_number: str = Field(..., min_length=1, max_length=50, description="Número de documento")
    address: Optional[str] = Field(None, description="Dirección")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Lucía Ramírez",
                "email": "lucia@example.com",
                "phone": "987654321",
                "document_type": "DNI",
                "document_number": "45678912"
            }
        }

class CustomerUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=50)
    document_type: Optional[str] = Field(None, min_length=1, max_length=50)
    document_number: Optional[str] = Field(None, min_length=1, max_length=50)
    address: Optional[str] = None

class CustomerResponse(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: str
    document_type: str
    document_number: str
    address: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
