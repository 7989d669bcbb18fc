from app.models.stock_logs import StockLog


def _logs(client, admin_headers):
    response = client.get("/logs", headers=admin_headers)
    assert response.status_code == 200
    return response.json()


def test_create_and_get_product(client, admin_headers, make_product):
    product_id = make_product()

    response = client.get(f"/products/{product_id}", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Widget"
    assert body["sku"] == "W-1"
    assert body["price"] == 10.0
    assert body["quantity"] == 5
    assert body["minStock"] == 10
    assert body["supplier"] == "TechCorp"
    assert body["status"] == "Low Stock"
    assert body["lastUpdated"] is not None


def test_create_defaults_min_stock_and_supplier(client, admin_headers):
    response = client.post(
        "/products",
        json={"name": "Bolt", "sku": "B-1", "category": "Hardware", "price": 0.5, "quantity": 100},
        headers=admin_headers,
    )
    assert response.status_code == 201

    body = client.get(f"/products/{response.json()['id']}", headers=admin_headers).json()
    assert body["minStock"] == 0
    assert body["supplier"] == ""
    assert body["status"] == "In Stock"


def test_create_logs_initial_quantity(client, admin_headers, make_product):
    product_id = make_product(quantity=7)

    logs = _logs(client, admin_headers)

    assert len(logs) == 1
    assert logs[0]["product_id"] == product_id
    assert logs[0]["product_name"] == "Widget"
    assert (logs[0]["old_quantity"], logs[0]["new_quantity"]) == (0, 7)
    assert logs[0]["reason"] == "Product Created"
    assert logs[0]["user_name"] == "admin"


def test_duplicate_sku_fails_without_log_entry(client, admin_headers, make_product, db):
    make_product()

    response = client.post(
        "/products",
        json={"name": "Other", "sku": "W-1", "category": "Electronics", "price": 1, "quantity": 1},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json() == {"error": "SKU already exists"}
    assert db.query(StockLog).count() == 1


def test_create_requires_fields(client, admin_headers):
    response = client.post("/products", json={"name": "Widget"}, headers=admin_headers)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error.startswith("Missing required fields")
    for field in ("sku", "category", "price", "quantity"):
        assert field in error


def test_create_rejects_negative_values(client, admin_headers):
    response = client.post(
        "/products",
        json={"name": "Widget", "sku": "W-1", "category": "E", "price": 1, "quantity": -1},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_staff_cannot_create_or_delete(client, staff_headers, make_product):
    product_id = make_product()

    create = client.post(
        "/products",
        json={"name": "X", "sku": "X-1", "category": "E", "price": 1, "quantity": 1},
        headers=staff_headers,
    )
    delete = client.delete(f"/products/{product_id}", headers=staff_headers)

    assert create.status_code == 403
    assert delete.status_code == 403


def test_get_missing_product_is_404(client, admin_headers):
    response = client.get("/products/999", headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Product not found"}


def test_staff_update_only_changes_stock_fields(client, admin_headers, staff_headers, make_product):
    product_id = make_product()

    response = client.put(
        f"/products/{product_id}",
        json={
            "name": "Renamed",
            "sku": "NEW-SKU",
            "category": "Toys",
            "price": 999,
            "supplier": "Someone",
            "quantity": 12,
            "minStock": 3,
        },
        headers=staff_headers,
    )

    assert response.status_code == 200
    body = client.get(f"/products/{product_id}", headers=admin_headers).json()
    assert body["name"] == "Widget"
    assert body["sku"] == "W-1"
    assert body["category"] == "Electronics"
    assert body["price"] == 10.0
    assert body["supplier"] == "TechCorp"
    assert body["quantity"] == 12
    assert body["minStock"] == 3

    latest = _logs(client, admin_headers)[0]
    assert latest["reason"] == "Stock Update"
    assert latest["product_name"] == "Widget"
    assert latest["user_name"] == "staff"
    assert (latest["old_quantity"], latest["new_quantity"]) == (5, 12)


def test_admin_update_logs_effective_name(client, admin_headers, make_product):
    product_id = make_product()

    response = client.put(
        f"/products/{product_id}",
        json={"name": "Gadget", "quantity": 8},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Gadget"
    latest = _logs(client, admin_headers)[0]
    assert latest["product_name"] == "Gadget"
    assert (latest["old_quantity"], latest["new_quantity"]) == (5, 8)


def test_update_without_quantity_change_writes_no_log(client, admin_headers, make_product):
    product_id = make_product()

    response = client.put(
        f"/products/{product_id}",
        json={"price": 11.5, "quantity": 5},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["price"] == 11.5
    assert len(_logs(client, admin_headers)) == 1


def test_update_rejects_sku_of_another_product(client, admin_headers, make_product):
    make_product()
    other_id = make_product(name="Other", sku="O-1")

    response = client.put(f"/products/{other_id}", json={"sku": "W-1"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "SKU already exists"}


def test_update_keeping_own_sku_is_allowed(client, admin_headers, make_product):
    product_id = make_product()

    response = client.put(f"/products/{product_id}", json={"sku": "W-1"}, headers=admin_headers)

    assert response.status_code == 200


def test_update_missing_product_is_404(client, admin_headers):
    response = client.put("/products/42", json={"quantity": 1}, headers=admin_headers)

    assert response.status_code == 404


def test_widget_lifecycle_log_survives_delete(client, admin_headers, make_product):
    product_id = make_product()
    assert client.get(f"/products/{product_id}", headers=admin_headers).json()["status"] == "Low Stock"

    client.put(f"/products/{product_id}", json={"quantity": 0}, headers=admin_headers)
    assert client.get(f"/products/{product_id}", headers=admin_headers).json()["status"] == "Out of Stock"

    response = client.delete(f"/products/{product_id}", headers=admin_headers)
    assert response.status_code == 200
    assert client.get(f"/products/{product_id}", headers=admin_headers).status_code == 404

    logs = _logs(client, admin_headers)
    transitions = [(log["old_quantity"], log["new_quantity"], log["reason"]) for log in logs]
    assert transitions == [
        (0, 0, "Product Deleted"),
        (5, 0, "Stock Update"),
        (0, 5, "Product Created"),
    ]
    assert all(log["product_id"] == product_id for log in logs)
    assert all(log["product_name"] == "Widget" for log in logs)


def test_delete_missing_product_is_404(client, admin_headers):
    response = client.delete("/products/7", headers=admin_headers)

    assert response.status_code == 404
    assert _logs(client, admin_headers) == []


def test_pagination(client, admin_headers, make_product):
    for index in range(5):
        make_product(name=f"Item {index}", sku=f"SKU-{index}")

    pages = [
        client.get(f"/products?page={page}&limit=2", headers=admin_headers).json()
        for page in (1, 2, 3)
    ]

    assert [page["totalPages"] for page in pages] == [3, 3, 3]
    assert [page["totalProducts"] for page in pages] == [5, 5, 5]
    assert [page["currentPage"] for page in pages] == [1, 2, 3]
    assert [len(page["products"]) for page in pages] == [2, 2, 1]

    ids = [product["id"] for page in pages for product in page["products"]]
    assert len(set(ids)) == 5
    # Most recently updated first
    assert ids == sorted(ids, reverse=True)


def test_pagination_falls_back_on_bad_values(client, admin_headers, make_product):
    make_product()

    body = client.get("/products?page=0&limit=0", headers=admin_headers).json()

    assert body["currentPage"] == 1
    assert body["totalPages"] == 1


def test_empty_listing(client, admin_headers):
    body = client.get("/products", headers=admin_headers).json()

    assert body == {"products": [], "totalPages": 0, "currentPage": 1, "totalProducts": 0}


def test_filters_combine(client, admin_headers, make_product):
    make_product(name="Red Shirt", sku="TS-1", category="Clothing", supplier="FashionHub", quantity=0, minStock=5)
    make_product(name="Blue Shirt", sku="TS-2", category="Clothing", supplier="FashionHub", quantity=3, minStock=5)
    make_product(name="Green Shirt", sku="TS-3", category="Clothing", supplier="OtherCo", quantity=20, minStock=5)
    make_product(name="Headphones", sku="WH-1", category="Electronics", supplier="TechCorp", quantity=20, minStock=5)

    def names(**params):
        response = client.get("/products", params=params, headers=admin_headers)
        assert response.status_code == 200
        return sorted(product["name"] for product in response.json()["products"])

    assert names(category="Clothing") == ["Blue Shirt", "Green Shirt", "Red Shirt"]
    assert names(category="Clothing", supplier="FashionHub") == ["Blue Shirt", "Red Shirt"]
    assert names(status="Out of Stock") == ["Red Shirt"]
    assert names(status="Low Stock") == ["Blue Shirt"]
    assert names(status="In Stock", category="Clothing") == ["Green Shirt"]
    assert names(search="shirt") == ["Blue Shirt", "Green Shirt", "Red Shirt"]
    assert names(search="wh-") == ["Headphones"]
    assert names(search="%") == []


def test_status_filter_counts_match_results(client, admin_headers, make_product):
    for index in range(3):
        make_product(name=f"Low {index}", sku=f"L-{index}", quantity=1, minStock=5)
    make_product(name="Plenty", sku="P-1", quantity=50, minStock=5)

    body = client.get(
        "/products", params={"status": "Low Stock", "limit": 2}, headers=admin_headers
    ).json()

    assert body["totalProducts"] == 3
    assert body["totalPages"] == 2
    assert all(product["status"] == "Low Stock" for product in body["products"])


def test_unknown_status_filter_is_rejected(client, admin_headers):
    response = client.get("/products", params={"status": "Sold Out"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid status")


def test_staff_can_list_products(client, staff_headers, make_product):
    make_product()

    response = client.get("/products", headers=staff_headers)

    assert response.status_code == 200
    assert response.json()["totalProducts"] == 1


def test_updated_product_moves_to_front(client, admin_headers, make_product):
    first = make_product(name="First", sku="F-1")
    second = make_product(name="Second", sku="S-1")

    response = client.put(f"/products/{first}", json={"quantity": 9}, headers=admin_headers)
    assert response.status_code == 200

    body = client.get("/products", headers=admin_headers).json()

    assert [product["id"] for product in body["products"]] == [first, second]


def test_admin_can_clear_supplier(client, admin_headers, make_product):
    product_id = make_product()

    response = client.put(f"/products/{product_id}", json={"supplier": None}, headers=admin_headers)

    assert response.status_code == 200
    body = client.get(f"/products/{product_id}", headers=admin_headers).json()
    assert body["supplier"] == ""
    assert body["name"] == "Widget"


def test_null_on_required_field_is_rejected(client, admin_headers, make_product):
    product_id = make_product()

    response = client.put(f"/products/{product_id}", json={"name": None}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "name cannot be null"}
    body = client.get(f"/products/{product_id}", headers=admin_headers).json()
    assert body["name"] == "Widget"
