# app/modules/sales/__init__.py
"""
Módulo de Ventas - Punto de venta del taller

Este módulo maneja el ciclo completo de ventas incluyendo:
- Registro de ventas con descuento de inventario atómico
- Consulta y filtrado de ventas
- Actualización de cliente / método de pago (items inmutables)
- Eliminación de ventas con devolución de stock
- Generación de factura o ticket

Arquitectura:
- router.py: Endpoints de ventas
- service.py: Lógica de negocio de ventas
- repository.py: Acceso a datos y transacciones de ventas
- invoice.py: Derivación de la factura (solo lectura)
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import SalesService
from .repository import SalesRepository

__all__ = [
    "router",
    "SalesService",
    "SalesRepository"
]
