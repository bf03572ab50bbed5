# app/modules/sales/invoice.py
"""
Derivación de la factura/ticket de una venta.

Funciones puras: leen una venta persistida y nunca la modifican.

El ``total_amount`` de una venta ya incluye el impuesto. El subtotal se
obtiene dividiendo el total entre ``1 + tasa`` y el impuesto es la
diferencia; no existe un campo de impuesto almacenado.
"""
from decimal import Decimal
from typing import List, Optional, Tuple

from app.config.settings import settings
from app.shared.database.models import Sale
from app.shared.utils.money import to_money
from .schemas import SaleInvoice, SaleInvoiceItem

INVOICE_PREFIX = "INV"


def split_tax(total_amount: Decimal, tax_rate: Optional[Decimal] = None) -> Tuple[Decimal, Decimal]:
    """
    Separar subtotal e impuesto de un total con impuesto incluido.

    Returns:
        (subtotal, tax) redondeados a céntimos; siempre suman el total.
    """
    rate = settings.tax_rate if tax_rate is None else Decimal(str(tax_rate))
    total = to_money(total_amount)
    subtotal = to_money(total / (Decimal("1") + rate))
    return subtotal, total - subtotal


def invoice_number(sale: Sale) -> str:
    """Formato INV-YYYYMMDD-<primeros 8 caracteres del ID>"""
    return f"{INVOICE_PREFIX}-{sale.created_at:%Y%m%d}-{sale.id[:8]}"


def invoice_items(sale: Sale) -> List[SaleInvoiceItem]:
    return [
        SaleInvoiceItem(
            product_name=item.product.name,
            product_description=item.product.description,
            quantity=item.quantity,
            unit_price=item.price,
            total_price=item.price * item.quantity
        )
        for item in sale.items
    ]


def build_invoice(sale: Sale, tax_rate: Optional[Decimal] = None) -> SaleInvoice:
    rate = settings.tax_rate if tax_rate is None else Decimal(str(tax_rate))
    subtotal, tax = split_tax(sale.total_amount, rate)

    return SaleInvoice(
        invoice_number=invoice_number(sale),
        date=sale.created_at,
        customer_name=sale.customer_display_name,
        customer_document=sale.customer.document_number if sale.customer else None,
        seller_name=sale.user.full_name,
        payment_method=sale.payment_method,
        subtotal=subtotal,
        tax=tax,
        tax_rate=rate,
        total_amount=to_money(sale.total_amount),
        items=invoice_items(sale)
    )
