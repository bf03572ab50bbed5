# app/modules/customers/service.py
from typing import List
from sqlalchemy.orm import Session
import logging

from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from app.shared.database.models import Customer
from app.shared.schemas.common import MessageResponse
from app.shared.utils.validation import reject_null_fields
from .repository import CustomersRepository
from .schemas import CustomerCreateRequest, CustomerUpdateRequest, CustomerResponse

logger = logging.getLogger(__name__)

NON_NULLABLE_FIELDS = ('name', 'phone', 'document_type', 'document_number')


class CustomersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = CustomersRepository(db)

    async def create_customer(self, customer_data: CustomerCreateRequest) -> CustomerResponse:
        self._check_unique(customer_data.email, customer_data.document_number)
        customer = self.repository.create_customer(customer_data.model_dump())
        logger.info(f"Cliente creado: {customer.id}")
        return CustomerResponse.model_validate(customer)

    async def list_customers(self) -> List[CustomerResponse]:
        return [CustomerResponse.model_validate(c) for c in self.repository.list_customers()]

    async def search_customers(self, term: str) -> List[CustomerResponse]:
        return [CustomerResponse.model_validate(c) for c in self.repository.search_customers(term)]

    async def get_customer(self, customer_id: str) -> CustomerResponse:
        return CustomerResponse.model_validate(self._get_customer_or_404(customer_id))

    async def update_customer(self, customer_id: str, update_data: CustomerUpdateRequest) -> CustomerResponse:
        customer = self._get_customer_or_404(customer_id)
        changes = update_data.model_dump(exclude_unset=True)
        reject_null_fields(changes, NON_NULLABLE_FIELDS)

        self._check_unique(changes.get('email'), changes.get('document_number'), exclude_id=customer_id)

        customer = self.repository.update_customer(customer, changes)
        return CustomerResponse.model_validate(customer)

    async def delete_customer(self, customer_id: str) -> MessageResponse:
        """Eliminar cliente; no se permite si tiene ventas asociadas"""
        customer = self._get_customer_or_404(customer_id)

        if self.repository.count_sales(customer_id) > 0:
            raise InvalidInputError(
                "No se puede eliminar el cliente porque tiene ventas asociadas",
                customer_id=customer_id
            )

        self.repository.delete_customer(customer)
        return MessageResponse(message="Cliente eliminado correctamente")

    def _check_unique(self, email, document_number, exclude_id=None) -> None:
        duplicate = self.repository.find_duplicate(email, document_number, exclude_id)
        if not duplicate:
            return
        if email and duplicate.email == email:
            raise ConflictError("El correo electrónico ya está registrado")
        raise ConflictError("El número de documento ya está registrado")

    def _get_customer_or_404(self, customer_id: str) -> Customer:
        customer = self.repository.get_customer(customer_id)
        if not customer:
            raise NotFoundError("Cliente", customer_id)
        return customer
