# app/modules/products/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import Any, Dict, List, Optional

from app.config.database import transaction
from app.shared.database.models import Product, SaleItem
from app.shared.services.inventory_service import InventoryService

class ProductsRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_product(self, product_data: Dict[str, Any]) -> Product:
        product = Product(**product_data)
        with transaction(self.db):
            self.db.add(product)
        self.db.refresh(product)
        return product

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_by_name(self, name: str, exclude_id: Optional[str] = None) -> Optional[Product]:
        query = self.db.query(Product).filter(Product.name == name)
        if exclude_id:
            query = query.filter(Product.id != exclude_id)
        return query.first()

    def list_products(self, category: Optional[str] = None, active: Optional[bool] = None) -> List[Product]:
        query = self.db.query(Product)
        if category:
            query = query.filter(Product.category == category)
        if active is not None:
            query = query.filter(Product.is_active == active)
        return query.order_by(Product.name.asc()).all()

    def search_products(self, term: str) -> List[Product]:
        """Búsqueda por nombre, descripción o categoría (sin distinguir mayúsculas)"""
        pattern = f"%{term}%"
        return self.db.query(Product).filter(
            or_(
                Product.name.ilike(pattern),
                Product.description.ilike(pattern),
                Product.category.ilike(pattern)
            )
        ).order_by(Product.name.asc()).all()

    def get_categories(self) -> List[str]:
        rows = self.db.query(Product.category).distinct().order_by(Product.category.asc()).all()
        return [row.category for row in rows]

    def update_product(self, product: Product, changes: Dict[str, Any]) -> Product:
        with transaction(self.db):
            for field, value in changes.items():
                setattr(product, field, value)
        self.db.refresh(product)
        return product

    def adjust_stock(self, product: Product, delta: int) -> Product:
        with transaction(self.db):
            InventoryService.adjust(self.db, product.id, delta)
        self.db.refresh(product)
        return product

    def has_sales(self, product_id: str) -> bool:
        return self.db.query(SaleItem.id).filter(SaleItem.product_id == product_id).first() is not None

    def delete_product(self, product: Product) -> None:
        with transaction(self.db):
            self.db.delete(product)
