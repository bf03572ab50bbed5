# app/modules/customers/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import or_
from typing import Any, Dict, List, Optional

from app.config.database import transaction
from app.shared.database.models import Customer, Sale

class CustomersRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_customer(self, customer_data: Dict[str, Any]) -> Customer:
        customer = Customer(**customer_data)
        with transaction(self.db):
            self.db.add(customer)
        self.db.refresh(customer)
        return customer

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        return self.db.query(Customer).filter(Customer.id == customer_id).first()

    def find_duplicate(
        self,
        email: Optional[str],
        document_number: Optional[str],
        exclude_id: Optional[str] = None
    ) -> Optional[Customer]:
        """Cliente con el mismo email o documento (campos únicos)"""
        conditions = []
        if email:
            conditions.append(Customer.email == email)
        if document_number:
            conditions.append(Customer.document_number == document_number)
        if not conditions:
            return None

        query = self.db.query(Customer).filter(or_(*conditions))
        if exclude_id:
            query = query.filter(Customer.id != exclude_id)
        return query.first()

    def list_customers(self) -> List[Customer]:
        return self.db.query(Customer).order_by(Customer.name.asc()).all()

    def search_customers(self, term: str) -> List[Customer]:
        pattern = f"%{term}%"
        return self.db.query(Customer).filter(
            or_(
                Customer.name.ilike(pattern),
                Customer.email.ilike(pattern),
                Customer.phone.ilike(pattern),
                Customer.document_number.ilike(pattern)
            )
        ).order_by(Customer.name.asc()).all()

    def update_customer(self, customer: Customer, changes: Dict[str, Any]) -> Customer:
        with transaction(self.db):
            for field, value in changes.items():
                setattr(customer, field, value)
        self.db.refresh(customer)
        return customer

    def count_sales(self, customer_id: str) -> int:
        return self.db.query(Sale).filter(Sale.customer_id == customer_id).count()

    def delete_customer(self, customer: Customer) -> None:
        with transaction(self.db):
            self.db.delete(customer)
