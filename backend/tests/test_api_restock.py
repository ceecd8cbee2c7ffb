from decimal import Decimal


def test_list_restock_items(client, associate_headers):
    response = client.get("/restock", headers=associate_headers)

    assert response.status_code == 200
    items = response.json()["items"]
    assert [item["product"]["sku"] for item in items] == ["ELE-001", "TOO-002", "PLU-001"]
    assert [item["urgency"] for item in items] == ["critical", "high", "medium"]
    assert [item["suggested_quantity"] for item in items] == [100, 35, 22]
    assert items[0]["urgency_label"] == "Critical - Out of Stock"
    assert Decimal(str(items[1]["estimated_cost"])) == Decimal("280.00")


def test_associate_commits_restock(client, associate_headers, product_ids, stores):
    product_id = product_ids["TOO-002"]
    before = stores.catalog.get(product_id)

    response = client.post(f"/restock/{product_id}", json={"quantity": 35}, headers=associate_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["quantity_added"] == 35
    assert body["product"]["current_stock"] == 40
    assert body["product"]["status"] == "in_stock"
    assert stores.catalog.get(product_id).updated_at > before.updated_at


def test_commit_restock_errors(client, associate_headers, product_ids):
    product_id = product_ids["TOO-002"]

    zero = client.post(f"/restock/{product_id}", json={"quantity": 0}, headers=associate_headers)
    assert zero.status_code == 400

    negative = client.post(f"/restock/{product_id}", json={"quantity": -3}, headers=associate_headers)
    assert negative.status_code == 422

    missing = client.post("/restock/missing", json={"quantity": 5}, headers=associate_headers)
    assert missing.status_code == 404
