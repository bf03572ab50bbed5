# app/modules/sales/service.py
from fastapi import HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
import logging

from app.config.settings import settings
from app.core.exceptions import ImmutableSaleError, InvalidInputError, NotFoundError
from app.shared.database.models import Sale
from app.shared.schemas.common import MessageResponse
from app.shared.utils.validation import reject_null_fields
from .invoice import build_invoice
from .repository import SalesRepository
from .schemas import (
    SaleCreateRequest, SaleUpdateRequest, SaleResponse,
    SaleItemResponse, SaleInvoice
)

logger = logging.getLogger(__name__)

# customer_id y customer_name sí admiten null (venta sin cliente registrado)
NON_NULLABLE_FIELDS = ('payment_method',)

class SalesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = SalesRepository(db)

    async def create_sale(self, sale_data: SaleCreateRequest, user_id: str) -> SaleResponse:
        """
        Crear venta.

        Responsabilidades:
        - Validar items y cliente antes de escribir
        - Delegar la transacción (stock + venta) al repository
        - Construir respuesta con nombres de producto, vendedor y cliente

        El usuario que vende llega como parámetro desde el router.
        """
        if not sale_data.items:
            raise InvalidInputError("La venta debe tener al menos un ítem")

        customer_name = sale_data.customer_name
        if sale_data.customer_id:
            if not self.repository.get_customer(sale_data.customer_id):
                raise NotFoundError("Cliente", sale_data.customer_id)
        elif not customer_name:
            customer_name = settings.unregistered_customer_label

        logger.info(f"Iniciando venta - Usuario: {user_id}, Items: {len(sale_data.items)}")

        try:
            sale = self.repository.create_sale_atomic(
                items=[item.model_dump() for item in sale_data.items],
                payment_method=sale_data.payment_method,
                user_id=user_id,
                customer_id=sale_data.customer_id,
                customer_name=customer_name
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.exception("Error inesperado creando venta")
            raise HTTPException(500, detail=f"Error al crear la venta: {str(e)}")

        return self._build_response(sale)

    async def find_all(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        customer_id: Optional[str] = None
    ) -> List[SaleResponse]:
        sales = self.repository.list_sales(start_date, end_date, customer_id)
        return [self._build_response(sale) for sale in sales]

    async def find_one(self, sale_id: str) -> SaleResponse:
        return self._build_response(self._get_sale_or_404(sale_id))

    async def get_invoice(self, sale_id: str) -> SaleInvoice:
        """Generar factura o ticket (solo lectura)"""
        return build_invoice(self._get_sale_or_404(sale_id))

    async def update_sale(self, sale_id: str, update_data: SaleUpdateRequest) -> SaleResponse:
        """
        Actualizar una venta.

        Solo se permite cambiar cliente y método de pago; los items son el
        registro de lo vendido y del stock ya descontado.
        """
        sale = self._get_sale_or_404(sale_id)

        if update_data.items is not None:
            raise ImmutableSaleError(sale_id)

        changes = update_data.model_dump(exclude_unset=True, exclude={'items'})
        reject_null_fields(changes, NON_NULLABLE_FIELDS)

        if changes.get('customer_id'):
            if not self.repository.get_customer(changes['customer_id']):
                raise NotFoundError("Cliente", changes['customer_id'])

        sale = self.repository.update_sale(sale, changes)
        logger.info(f"Venta #{sale_id} actualizada: {sorted(changes)}")
        return self._build_response(sale)

    async def delete_sale(self, sale_id: str) -> MessageResponse:
        """Eliminar venta y devolver su stock al inventario"""
        sale = self._get_sale_or_404(sale_id)

        try:
            self.repository.delete_sale_atomic(sale)
        except HTTPException:
            raise
        except Exception as e:
            logger.exception(f"Error eliminando venta #{sale_id}")
            raise HTTPException(500, detail=f"Error al eliminar la venta: {str(e)}")

        return MessageResponse(message="Venta eliminada correctamente")

    # MÉTODOS PRIVADOS HELPERS

    def _get_sale_or_404(self, sale_id: str) -> Sale:
        sale = self.repository.get_sale(sale_id)
        if not sale:
            raise NotFoundError("Venta", sale_id)
        return sale

    def _build_response(self, sale: Sale) -> SaleResponse:
        """Construir respuesta; los nombres no se persisten en la venta"""
        return SaleResponse(
            id=sale.id,
            customer_id=sale.customer_id,
            customer_name=sale.customer_name,
            user_id=sale.user_id,
            total_amount=sale.total_amount,
            payment_method=sale.payment_method,
            created_at=sale.created_at,
            updated_at=sale.updated_at,
            items=[
                SaleItemResponse(
                    id=item.id,
                    sale_id=item.sale_id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=item.price,
                    subtotal=item.subtotal,
                    product_name=item.product.name,
                    product_description=item.product.description,
                    created_at=item.created_at,
                    updated_at=item.updated_at
                )
                for item in sale.items
            ],
            user_name=sale.user.full_name,
            customer_full_name=sale.customer_display_name
        )
