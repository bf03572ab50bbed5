# app/modules/products/__init__.py
"""
Módulo de Productos - Catálogo de repuestos y accesorios

- Alta, consulta, búsqueda y categorías
- Ajuste manual de stock a través del inventario
- Baja lógica de productos con ventas
"""

from .router import router
from .service import ProductsService

__all__ = ["router", "ProductsService"]
