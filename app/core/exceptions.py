# app/core/exceptions.py
"""
Errores de negocio de la aplicación.

Todos heredan de HTTPException, igual que los errores de autenticación,
para que FastAPI los convierta en respuestas sin manejadores adicionales.
El ``detail`` es siempre un diccionario con ``error_code`` y ``message``
más los datos estructurados de cada tipo.
"""
from typing import Any, Dict, Optional
from fastapi import HTTPException, status


class AppError(HTTPException):
    error_code = "APP_ERROR"
    status_code_default = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, **extra: Any):
        self.message = message
        self.extra = extra
        detail: Dict[str, Any] = {"error_code": self.error_code, "message": message}
        detail.update(extra)
        super().__init__(status_code=self.status_code_default, detail=detail)

    def __str__(self) -> str:
        return self.message


class InvalidInputError(AppError):
    error_code = "INVALID_INPUT"
    status_code_default = status.HTTP_400_BAD_REQUEST


class ImmutableSaleError(InvalidInputError):
    error_code = "IMMUTABLE_SALE"

    def __init__(self, sale_id: str):
        super().__init__(
            "No se pueden modificar los ítems de una venta ya realizada",
            sale_id=sale_id
        )


class NotFoundError(AppError):
    error_code = "NOT_FOUND"
    status_code_default = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, resource_id: Optional[str]):
        super().__init__(
            f"{resource} con ID {resource_id} no encontrado",
            resource=resource,
            resource_id=resource_id
        )


class InsufficientStockError(AppError):
    error_code = "INSUFFICIENT_STOCK"
    status_code_default = status.HTTP_409_CONFLICT

    def __init__(self, product_name: str, available: int, requested: int, product_id: Optional[str] = None):
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Stock insuficiente para el producto {product_name}. "
            f"Disponible: {available}, Solicitado: {requested}",
            product_id=product_id,
            product_name=product_name,
            available=available,
            requested=requested
        )


class ConflictError(AppError):
    error_code = "CONFLICT"
    status_code_default = status.HTTP_409_CONFLICT
