from datetime import datetime
from decimal import Decimal

from app.modules.sales.invoice import build_invoice, invoice_number, split_tax
from app.shared.database.models import Customer, PaymentMethod, Product, Sale, SaleItem, User


def _sale(customer=None, customer_name=None, items=None, total="118.00"):
    seller = User(first_name="Juan", last_name="Pérez", email="tecnico@tallerpro.com")
    sale = Sale(
        id="3f2a9c7e-1b2d-4c5e-8f90-a1b2c3d4e5f6",
        customer=customer,
        customer_name=customer_name,
        user=seller,
        total_amount=Decimal(total),
        payment_method=PaymentMethod.CASH,
        created_at=datetime(2024, 3, 15, 10, 30)
    )
    sale.items = items or []
    return sale


def _item(name, quantity, price, description=None):
    return SaleItem(
        product=Product(name=name, description=description),
        quantity=quantity,
        price=Decimal(price)
    )


def test_split_tax_on_round_total():
    assert split_tax(Decimal("118.00"), Decimal("0.18")) == (Decimal("100.00"), Decimal("18.00"))


def test_split_tax_rounds_to_cents_and_sums_to_total():
    subtotal, tax = split_tax(Decimal("100.00"), Decimal("0.18"))

    assert subtotal == Decimal("84.75")
    assert tax == Decimal("15.25")
    assert subtotal + tax == Decimal("100.00")


def test_split_tax_uses_configured_rate_by_default():
    assert split_tax(Decimal("118.00")) == (Decimal("100.00"), Decimal("18.00"))


def test_split_tax_zero_rate():
    assert split_tax(Decimal("45.50"), Decimal("0")) == (Decimal("45.50"), Decimal("0.00"))


def test_invoice_number_format():
    assert invoice_number(_sale()) == "INV-20240315-3f2a9c7e"


def test_invoice_for_registered_customer():
    customer = Customer(name="Lucía Ramírez", document_number="45678912")
    sale = _sale(
        customer=customer,
        items=[_item("Pantalla iPhone 11", 2, "59.00", description="LCD compatible")]
    )

    invoice = build_invoice(sale, Decimal("0.18"))

    assert invoice.invoice_number == "INV-20240315-3f2a9c7e"
    assert invoice.date == datetime(2024, 3, 15, 10, 30)
    assert invoice.customer_name == "Lucía Ramírez"
    assert invoice.customer_document == "45678912"
    assert invoice.seller_name == "Juan Pérez"
    assert invoice.payment_method == PaymentMethod.CASH
    assert invoice.subtotal == Decimal("100.00")
    assert invoice.tax == Decimal("18.00")
    assert invoice.total_amount == Decimal("118.00")
    assert len(invoice.items) == 1
    assert invoice.items[0].unit_price == Decimal("59.00")
    assert invoice.items[0].total_price == Decimal("118.00")
    assert invoice.items[0].product_description == "LCD compatible"


def test_invoice_for_walk_in_customer():
    sale = _sale(customer_name="Cliente no registrado", items=[_item("Mica templada", 1, "118.00")])

    invoice = build_invoice(sale, Decimal("0.18"))

    assert invoice.customer_name == "Cliente no registrado"
    assert invoice.customer_document is None


def test_invoice_keeps_item_order():
    sale = _sale(
        items=[
            _item("Batería", 1, "50.00"),
            _item("Cable USB-C", 3, "10.00"),
            _item("Protector", 2, "19.00"),
        ],
        total="118.00"
    )

    invoice = build_invoice(sale, Decimal("0.18"))

    assert [i.product_name for i in invoice.items] == ["Batería", "Cable USB-C", "Protector"]
    assert [i.total_price for i in invoice.items] == [Decimal("50.00"), Decimal("30.00"), Decimal("38.00")]


def test_building_invoice_does_not_modify_sale():
    sale = _sale(items=[_item("Batería", 2, "59.00")])

    first = build_invoice(sale, Decimal("0.18"))
    second = build_invoice(sale, Decimal("0.18"))

    assert first == second
    assert sale.total_amount == Decimal("118.00")
