from pydantic import BaseModel, Field
from typing import Optional

from app.shared.database.models import Role

class UserLogin(BaseModel):
    """Schema para login de usuario"""
    email: str = Field(..., description="Email del usuario")
    password: str = Field(..., min_length=6, description="Contraseña del usuario")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "tecnico@tallerpro.com",
                "password": "tecnico123"
            }
        }

class UserResponse(BaseModel):
    """Schema para respuesta de usuario"""
    id: str
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: Role
    is_active: bool

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": "2b1f7c34-5a3e-4e59-9d1b-7f0c8a2e6d11",
                "email": "tecnico@tallerpro.com",
                "first_name": "Juan",
                "last_name": "Pérez",
                "phone": "999888777",
                "role": "TECHNICIAN",
                "is_active": True
            }
        }

class TokenResponse(BaseModel):
    """Schema para respuesta de token"""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
