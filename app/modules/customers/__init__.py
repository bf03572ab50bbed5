# app/modules/customers/__init__.py
"""
Módulo de Clientes - Directorio de clientes del taller
"""

from .router import router
from .service import CustomersService

__all__ = ["router", "CustomersService"]
