# app/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Text,
    Numeric, ForeignKey, CheckConstraint, Enum, func
)
from sqlalchemy.orm import relationship, declarative_base
from datetime import datetime
import enum
import uuid

Base = declarative_base()


def generate_uuid() -> str:
    return str(uuid.uuid4())


# =====================================================
# ENUMERACIONES
# =====================================================

class Role(str, enum.Enum):
    """Roles de usuario"""
    ADMIN = "ADMIN"
    TECHNICIAN = "TECHNICIAN"


class PaymentMethod(str, enum.Enum):
    """Métodos de pago aceptados en caja"""
    CASH = "CASH"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    TRANSFER = "TRANSFER"
    YAPE = "YAPE"
    PLIN = "PLIN"


# =====================================================
# MIXIN PARA TIMESTAMPS
# =====================================================
class TimestampMixin:
    """Mixin que agrega campos created_at y updated_at"""
    created_at = Column(DateTime, nullable=False, default=datetime.now, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, default=datetime.now, server_default=func.current_timestamp(), onupdate=datetime.now)


# =====================================================
# USUARIOS
# =====================================================

class User(Base, TimestampMixin):
    """Modelo de Usuario"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False, default="")
    role = Column(Enum(Role, name="role"), nullable=False, default=Role.TECHNICIAN)
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    sales = relationship("Sale", back_populates="user")

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"


# =====================================================
# CLIENTES
# =====================================================

class Customer(Base, TimestampMixin):
    """Modelo de Cliente"""
    __tablename__ = "customers"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True)
    phone = Column(String(50), nullable=False)
    document_type = Column(String(50), nullable=False)
    document_number = Column(String(50), nullable=False, unique=True)
    address = Column(Text)

    # Relationships
    sales = relationship("Sale", back_populates="customer")


# =====================================================
# PRODUCTOS
# =====================================================

class Product(Base, TimestampMixin):
    """Modelo de Producto (repuestos y accesorios)"""
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
    cost = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    category = Column(String(100), nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint('stock >= 0', name='products_stock_non_negative'),
    )

    # Relationships
    sale_items = relationship("SaleItem", back_populates="product")


# =====================================================
# VENTAS
# =====================================================

class Sale(Base, TimestampMixin):
    """Modelo de Venta"""
    __tablename__ = "sales"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    customer_id = Column(String(36), ForeignKey("customers.id", ondelete="SET NULL"), nullable=True, index=True)
    customer_name = Column(String(255))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(Enum(PaymentMethod, name="payment_method"), nullable=False)

    # Relationships
    customer = relationship("Customer", back_populates="sales")
    user = relationship("User", back_populates="sales")
    items = relationship(
        "SaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",
        order_by="SaleItem.position"
    )

    @property
    def customer_display_name(self):
        return self.customer.name if self.customer else self.customer_name


class SaleItem(Base, TimestampMixin):
    """Modelo de Item de Venta"""
    __tablename__ = "sale_items"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    sale_id = Column(String(36), ForeignKey("sales.id"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    __table_args__ = (
        CheckConstraint('quantity >= 1', name='sale_items_quantity_positive'),
    )

    # Relationships
    sale = relationship("Sale", back_populates="items")
    product = relationship("Product", back_populates="sale_items")

    @property
    def subtotal(self):
        return self.price * self.quantity
