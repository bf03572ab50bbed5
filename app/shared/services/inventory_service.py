from dataclasses import dataclass
from typing import Dict, Iterable
import logging

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.core.exceptions import InsufficientStockError, NotFoundError
from app.shared.database.models import Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockCheck:
    """Resultado de verificar disponibilidad (solo lectura)"""
    product_id: str
    available: int
    requested: int

    @property
    def ok(self) -> bool:
        return self.available >= self.requested


class InventoryService:
    """
    Libro de inventario: dueño del stock de cada producto.

    Todas las operaciones escriben directamente en la sesión recibida y
    deben ejecutarse dentro de la transacción del llamador. No hay caché:
    el stock autoritativo es siempre la fila de ``products``.
    """

    @staticmethod
    def lock_products(db: Session, product_ids: Iterable[str]) -> Dict[str, Product]:
        """
        Obtener productos en una sola consulta con bloqueo pesimista.

        SELECT FOR UPDATE serializa ventas concurrentes sobre los mismos
        productos en motores que lo soportan (PostgreSQL).

        Returns:
            Dict[product_id, Product]: solo los productos que existen
        """
        ids = list(dict.fromkeys(product_ids))
        if not ids:
            return {}

        products = db.query(Product).filter(
            Product.id.in_(ids)
        ).with_for_update().all()

        return {product.id: product for product in products}

    @staticmethod
    def check_availability(db: Session, product_id: str, requested_quantity: int) -> StockCheck:
        """Verificar disponibilidad SIN modificar el stock"""
        stock = db.query(Product.stock).filter(Product.id == product_id).scalar()

        if stock is None:
            raise NotFoundError("Producto", product_id)

        return StockCheck(product_id=product_id, available=stock, requested=requested_quantity)

    @staticmethod
    def decrement(db: Session, product_id: str, quantity: int) -> None:
        """
        Descontar stock de forma condicional.

        El UPDATE solo afecta la fila si ``stock >= quantity``; si otra
        transacción consumió el stock entre la verificación y el descuento,
        no se afecta ninguna fila y se lanza InsufficientStockError en lugar
        de dejar el stock en negativo.
        """
        if quantity < 1:
            raise ValueError(f"Cantidad inválida para descontar: {quantity}")

        result = db.execute(
            update(Product)
            .where(Product.id == product_id, Product.stock >= quantity)
            .values(stock=Product.stock - quantity)
            .execution_options(synchronize_session="evaluate")
        )

        if result.rowcount != 1:
            product = db.query(Product.name, Product.stock).filter(Product.id == product_id).first()
            if product is None:
                raise NotFoundError("Producto", product_id)
            logger.warning(
                f"Descuento rechazado para {product_id}: stock {product.stock}, solicitado {quantity}"
            )
            raise InsufficientStockError(product.name, product.stock, quantity, product_id=product_id)

        logger.debug(f"Stock de {product_id} reducido en {quantity}")

    @staticmethod
    def increment(db: Session, product_id: str, quantity: int) -> None:
        """Restaurar stock (anulación de venta). Sin tope superior."""
        if quantity < 1:
            raise ValueError(f"Cantidad inválida para restaurar: {quantity}")

        result = db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(stock=Product.stock + quantity)
            .execution_options(synchronize_session="evaluate")
        )

        if result.rowcount != 1:
            raise NotFoundError("Producto", product_id)

        logger.debug(f"Stock de {product_id} incrementado en {quantity}")

    @classmethod
    def adjust(cls, db: Session, product_id: str, delta: int) -> None:
        """Ajuste manual de catálogo: positivo suma, negativo descuenta"""
        if delta > 0:
            cls.increment(db, product_id, delta)
        elif delta < 0:
            cls.decrement(db, product_id, -delta)
