# app/modules/products/service.py
from typing import List, Optional
from sqlalchemy.orm import Session
import logging

from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from app.shared.database.models import Product
from app.shared.schemas.common import MessageResponse
from app.shared.services.inventory_service import InventoryService
from app.shared.utils.validation import reject_null_fields
from .repository import ProductsRepository
from .schemas import (
    ProductCreateRequest, ProductUpdateRequest, ProductResponse,
    StockAvailabilityResponse
)

logger = logging.getLogger(__name__)

NON_NULLABLE_FIELDS = ('name', 'price', 'cost', 'category', 'is_active')


class ProductsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ProductsRepository(db)

    async def create_product(self, product_data: ProductCreateRequest) -> ProductResponse:
        """Crear producto; el nombre es único en el catálogo"""
        if self.repository.get_by_name(product_data.name):
            raise ConflictError(f"Ya existe un producto con el nombre {product_data.name}")

        product = self.repository.create_product(product_data.model_dump())
        logger.info(f"Producto creado: {product.id} ({product.name})")
        return ProductResponse.model_validate(product)

    async def list_products(self, category: Optional[str] = None, active: Optional[bool] = None) -> List[ProductResponse]:
        return [ProductResponse.model_validate(p) for p in self.repository.list_products(category, active)]

    async def search_products(self, term: str) -> List[ProductResponse]:
        return [ProductResponse.model_validate(p) for p in self.repository.search_products(term)]

    async def get_categories(self) -> List[str]:
        return self.repository.get_categories()

    async def get_product(self, product_id: str) -> ProductResponse:
        return ProductResponse.model_validate(self._get_product_or_404(product_id))

    async def check_availability(self, product_id: str, quantity: int) -> StockAvailabilityResponse:
        check = InventoryService.check_availability(self.db, product_id, quantity)
        return StockAvailabilityResponse(
            product_id=check.product_id,
            available=check.available,
            requested=check.requested,
            can_sell=check.ok
        )

    async def update_product(self, product_id: str, update_data: ProductUpdateRequest) -> ProductResponse:
        product = self._get_product_or_404(product_id)
        changes = update_data.model_dump(exclude_unset=True)
        reject_null_fields(changes, NON_NULLABLE_FIELDS)

        if changes.get('name') and self.repository.get_by_name(changes['name'], exclude_id=product_id):
            raise ConflictError(f"Ya existe otro producto con el nombre {changes['name']}")

        product = self.repository.update_product(product, changes)
        return ProductResponse.model_validate(product)

    async def adjust_stock(self, product_id: str, quantity: int) -> ProductResponse:
        """Ajuste manual de stock; nunca deja el stock en negativo"""
        product = self._get_product_or_404(product_id)

        if product.stock + quantity < 0:
            raise InvalidInputError(
                f"No hay suficiente stock disponible. Stock actual: {product.stock}",
                product_id=product_id,
                available=product.stock,
                requested=-quantity
            )

        product = self.repository.adjust_stock(product, quantity)
        logger.info(f"Stock de {product.name} ajustado en {quantity:+d} -> {product.stock}")
        return ProductResponse.model_validate(product)

    async def delete_product(self, product_id: str) -> MessageResponse:
        """
        Eliminar producto.

        Si el producto figura en ventas se marca como inactivo en lugar de
        borrarlo, para no romper el historial.
        """
        product = self._get_product_or_404(product_id)

        if self.repository.has_sales(product_id):
            self.repository.update_product(product, {'is_active': False})
            return MessageResponse(
                message="Producto marcado como inactivo porque tiene ventas asociadas"
            )

        self.repository.delete_product(product)
        return MessageResponse(message="Producto eliminado correctamente")

    def _get_product_or_404(self, product_id: str) -> Product:
        product = self.repository.get_product(product_id)
        if not product:
            raise NotFoundError("Producto", product_id)
        return product
