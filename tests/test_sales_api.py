from decimal import Decimal

SALES_URL = "/api/v1/sales"


def _create(client, headers, items, **extra):
    payload = {"payment_method": "CASH", "items": items}
    payload.update(extra)
    return client.post(SALES_URL, json=payload, headers=headers)


def test_create_sale(client, tech_headers, tech_user, make_product, stock_of):
    product = make_product(price="10.00", stock=5)

    response = _create(client, tech_headers, [{"product_id": product.id, "quantity": 3}])

    assert response.status_code == 201
    body = response.json()
    assert Decimal(body["total_amount"]) == Decimal("30.00")
    assert body["user_id"] == tech_user.id
    assert body["user_name"] == "Juan Pérez"
    assert body["customer_name"] == "Cliente no registrado"
    assert body["items"][0]["product_id"] == product.id
    assert stock_of(product.id) == 2


def test_create_sale_insufficient_stock(client, tech_headers, make_product, stock_of):
    product = make_product(name="Pin de carga", stock=2)

    response = _create(client, tech_headers, [{"product_id": product.id, "quantity": 3}])

    assert response.status_code == 409
    detail = response.json()["detail"]
    assert detail["error_code"] == "INSUFFICIENT_STOCK"
    assert detail["product_id"] == product.id
    assert detail["product_name"] == "Pin de carga"
    assert detail["available"] == 2
    assert detail["requested"] == 3
    assert stock_of(product.id) == 2
    assert client.get(SALES_URL, headers=tech_headers).json() == []


def test_create_sale_validation_errors(client, tech_headers, make_product):
    product = make_product(stock=5)

    empty = _create(client, tech_headers, [])
    zero_quantity = _create(client, tech_headers, [{"product_id": product.id, "quantity": 0}])
    bad_method = _create(client, tech_headers, [{"product_id": product.id, "quantity": 1}], payment_method="BITCOIN")

    assert empty.status_code == 400
    assert empty.json()["detail"]["error_code"] == "INVALID_INPUT"
    assert zero_quantity.status_code == 422
    assert bad_method.status_code == 422


def test_create_sale_unknown_customer(client, tech_headers, make_product):
    product = make_product(stock=5)

    response = _create(
        client, tech_headers, [{"product_id": product.id, "quantity": 1}], customer_id="no-existe"
    )

    assert response.status_code == 404
    assert response.json()["detail"]["resource"] == "Cliente"


def test_requires_authentication(client):
    response = client.get(SALES_URL)

    assert response.status_code in (401, 403)


def test_invalid_token_rejected(client):
    response = client.get(SALES_URL, headers={"Authorization": "Bearer no-es-un-token"})

    assert response.status_code == 401


def test_get_and_list_sales(client, tech_headers, customer, make_product):
    product = make_product(stock=10)
    first = _create(client, tech_headers, [{"product_id": product.id, "quantity": 1}], customer_id=customer.id).json()
    _create(client, tech_headers, [{"product_id": product.id, "quantity": 2}])

    fetched = client.get(f"{SALES_URL}/{first['id']}", headers=tech_headers)
    all_sales = client.get(SALES_URL, headers=tech_headers)
    by_customer = client.get(SALES_URL, params={"customerId": customer.id}, headers=tech_headers)

    assert fetched.status_code == 200
    assert fetched.json()["customer_full_name"] == "Lucía Ramírez"
    assert len(all_sales.json()) == 2
    assert [s["id"] for s in by_customer.json()] == [first["id"]]


def test_get_unknown_sale(client, tech_headers):
    response = client.get(f"{SALES_URL}/no-existe", headers=tech_headers)

    assert response.status_code == 404
    assert response.json()["detail"]["error_code"] == "NOT_FOUND"


def test_invoice(client, tech_headers, customer, make_product):
    product = make_product(name="Pantalla Moto G8", price="59.00", stock=5)
    sale = _create(
        client, tech_headers, [{"product_id": product.id, "quantity": 2}], customer_id=customer.id
    ).json()

    response = client.get(f"{SALES_URL}/{sale['id']}/invoice", headers=tech_headers)

    assert response.status_code == 200
    invoice = response.json()
    assert invoice["invoice_number"].startswith("INV-")
    assert invoice["invoice_number"].endswith(sale["id"][:8])
    assert Decimal(invoice["subtotal"]) == Decimal("100.00")
    assert Decimal(invoice["tax"]) == Decimal("18.00")
    assert Decimal(invoice["total_amount"]) == Decimal("118.00")
    assert invoice["customer_document"] == "45678912"
    assert invoice["seller_name"] == "Juan Pérez"
    assert invoice["items"][0]["product_name"] == "Pantalla Moto G8"


def test_technician_cannot_delete_or_update(client, tech_headers, make_product, stock_of):
    product = make_product(stock=5)
    sale = _create(client, tech_headers, [{"product_id": product.id, "quantity": 2}]).json()

    deleted = client.delete(f"{SALES_URL}/{sale['id']}", headers=tech_headers)
    updated = client.patch(f"{SALES_URL}/{sale['id']}", json={"payment_method": "YAPE"}, headers=tech_headers)

    assert deleted.status_code == 403
    assert updated.status_code == 403
    assert stock_of(product.id) == 3


def test_admin_deletes_sale_and_stock_returns(client, tech_headers, admin_headers, make_product, stock_of):
    product = make_product(stock=5)
    sale = _create(client, tech_headers, [{"product_id": product.id, "quantity": 2}]).json()

    response = client.delete(f"{SALES_URL}/{sale['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert stock_of(product.id) == 5
    assert client.get(f"{SALES_URL}/{sale['id']}", headers=admin_headers).status_code == 404


def test_patch_items_rejected(client, tech_headers, admin_headers, make_product, stock_of):
    product = make_product(stock=5)
    sale = _create(client, tech_headers, [{"product_id": product.id, "quantity": 2}]).json()

    response = client.patch(
        f"{SALES_URL}/{sale['id']}",
        json={"items": [{"product_id": product.id, "quantity": 5}]},
        headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error_code"] == "IMMUTABLE_SALE"
    assert stock_of(product.id) == 3


def test_patch_payment_method(client, tech_headers, admin_headers, make_product):
    product = make_product(stock=5)
    sale = _create(client, tech_headers, [{"product_id": product.id, "quantity": 1}]).json()

    response = client.patch(f"{SALES_URL}/{sale['id']}", json={"payment_method": "DEBIT_CARD"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["payment_method"] == "DEBIT_CARD"
    assert response.json()["total_amount"] == sale["total_amount"]


def test_patch_null_payment_method_rejected(client, tech_headers, admin_headers, make_product):
    product = make_product(stock=5)
    sale = _create(client, tech_headers, [{"product_id": product.id, "quantity": 1}]).json()

    response = client.patch(f"{SALES_URL}/{sale['id']}", json={"payment_method": None}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"]["error_code"] == "INVALID_INPUT"
    assert response.json()["detail"]["fields"] == ["payment_method"]
    assert client.get(f"{SALES_URL}/{sale['id']}", headers=admin_headers).json()["payment_method"] == "CASH"


def test_patch_can_unlink_customer(client, tech_headers, admin_headers, customer, make_product):
    product = make_product(stock=5)
    sale = _create(
        client, tech_headers, [{"product_id": product.id, "quantity": 1}], customer_id=customer.id
    ).json()

    response = client.patch(
        f"{SALES_URL}/{sale['id']}",
        json={"customer_id": None, "customer_name": "Mostrador"},
        headers=admin_headers
    )

    assert response.status_code == 200
    assert response.json()["customer_id"] is None
    assert response.json()["customer_full_name"] == "Mostrador"


def test_explicit_price_with_more_than_two_decimals_rejected(client, tech_headers, make_product, stock_of):
    product = make_product(stock=5)

    response = _create(client, tech_headers, [{"product_id": product.id, "quantity": 1, "price": "12.345"}])

    assert response.status_code == 422
    assert stock_of(product.id) == 5
