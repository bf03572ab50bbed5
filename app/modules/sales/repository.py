from sqlalchemy.orm import Session, joinedload, selectinload
from typing import Any, Dict, List, Optional
from datetime import datetime
from decimal import Decimal
import logging

from app.config.database import transaction
from app.core.exceptions import InvalidInputError, InsufficientStockError
from app.shared.database.models import Customer, Sale, SaleItem
from app.shared.services.inventory_service import InventoryService
from app.shared.utils.money import to_money

logger = logging.getLogger(__name__)

class SalesRepository:
    def __init__(self, db: Session):
        self.db = db
        self.inventory_service = InventoryService()

    def create_sale_atomic(
        self,
        items: List[Dict[str, Any]],
        payment_method: str,
        user_id: str,
        customer_id: Optional[str] = None,
        customer_name: Optional[str] = None
    ) -> Sale:
        """
        Crear venta con actualización de inventario en transacción atómica.

        Proceso:
        1. Bloquear productos (SELECT FOR UPDATE, una sola consulta)
        2. Validar existencia y stock en el orden recibido
        3. Fijar precio unitario y calcular total
        4. Crear Sale + SaleItems
        5. Descontar inventario
        6. Commit único

        Cualquier error revierte todo: no queda venta ni cambios de stock.

        Raises:
            InvalidInputError: Si algún producto no existe
            InsufficientStockError: Primer item sin stock suficiente
        """
        with transaction(self.db):
            # PASO 1: Productos reales de BD, bloqueados
            products = self.inventory_service.lock_products(
                self.db, [item['product_id'] for item in items]
            )
            if any(item['product_id'] not in products for item in items):
                raise InvalidInputError("Uno o más productos no existen")

            # PASO 2 y 3: Stock y precios
            reserved: Dict[str, int] = {}
            sale_items = []
            total_amount = Decimal("0.00")

            for position, item in enumerate(items):
                product = products[item['product_id']]
                already_reserved = reserved.get(product.id, 0)
                available = product.stock - already_reserved

                if available < item['quantity']:
                    logger.info(
                        f"Stock insuficiente: {product.name} disponible {available}, solicitado {item['quantity']}"
                    )
                    raise InsufficientStockError(
                        product.name, available, item['quantity'], product_id=product.id
                    )
                reserved[product.id] = already_reserved + item['quantity']

                unit_price = to_money(item['price']) if item.get('price') else to_money(product.price)
                total_amount += unit_price * item['quantity']

                sale_items.append(SaleItem(
                    product_id=product.id,
                    position=position,
                    quantity=item['quantity'],
                    price=unit_price
                ))

            # PASO 4: Crear venta
            sale = Sale(
                customer_id=customer_id,
                customer_name=customer_name,
                user_id=user_id,
                total_amount=total_amount,
                payment_method=payment_method,
                items=sale_items
            )
            self.db.add(sale)
            self.db.flush()
            logger.info(f"Venta creada con ID: {sale.id} ({len(sale_items)} items)")

            # PASO 5: Actualizar inventario
            for sale_item in sale_items:
                self.inventory_service.decrement(self.db, sale_item.product_id, sale_item.quantity)

        logger.info(f"Transacción completada - Venta #{sale.id}")
        self.db.refresh(sale)
        return sale

    def delete_sale_atomic(self, sale: Sale) -> None:
        """
        Eliminar venta restaurando el stock.

        En una sola transacción: devolver stock de cada item, eliminar los
        items y eliminar la venta.
        """
        sale_id = sale.id
        with transaction(self.db):
            restored = [(item.product_id, item.quantity) for item in sale.items]

            for product_id, quantity in restored:
                self.inventory_service.increment(self.db, product_id, quantity)

            # delete-orphan elimina los items al vaciar la colección
            sale.items.clear()
            self.db.flush()

            self.db.delete(sale)

        logger.info(f"Venta #{sale_id} eliminada, {len(restored)} items devueltos al inventario")

    def update_sale(self, sale: Sale, changes: Dict[str, Any]) -> Sale:
        """Actualizar solo datos de cliente y método de pago"""
        with transaction(self.db):
            for field in ('customer_id', 'customer_name', 'payment_method'):
                if field in changes:
                    setattr(sale, field, changes[field])

        self.db.refresh(sale)
        return sale

    def get_sale(self, sale_id: str) -> Optional[Sale]:
        return self.db.query(Sale).options(
            selectinload(Sale.items).joinedload(SaleItem.product),
            joinedload(Sale.user),
            joinedload(Sale.customer)
        ).filter(Sale.id == sale_id).first()

    def list_sales(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        customer_id: Optional[str] = None
    ) -> List[Sale]:
        """Ventas filtradas, más recientes primero"""
        query = self.db.query(Sale).options(
            selectinload(Sale.items).joinedload(SaleItem.product),
            joinedload(Sale.user),
            joinedload(Sale.customer)
        )

        if start_date:
            query = query.filter(Sale.created_at >= start_date)
        if end_date:
            query = query.filter(Sale.created_at <= end_date)
        if customer_id:
            query = query.filter(Sale.customer_id == customer_id)

        return query.order_by(Sale.created_at.desc()).all()

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        return self.db.query(Customer).filter(Customer.id == customer_id).first()
