from decimal import Decimal

from core.repositories import JsonCatalogStore, JsonDocument, JsonUserStore, StoreBundle


def test_dashboard(client, associate_headers):
    response = client.get("/dashboard", headers=associate_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total_products"] == 5
    assert body["low_stock_items"] == 2
    assert body["out_of_stock_items"] == 1
    assert Decimal(str(body["total_value"])) == Decimal("1102.50")
    assert [item["sku"] for item in body["low_stock_products"]] == ["TOO-002", "PLU-001"]


def test_reports_overview(client, associate_headers):
    response = client.get("/reports/overview", headers=associate_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["kpis"]["total_products"] == 5
    assert Decimal(str(body["kpis"]["total_inventory_value"])) == Decimal("1102.50")
    assert [entry["category"] for entry in body["category_breakdown"]] == [
        "Tools",
        "Electrical",
        "Plumbing",
        "Paint & Supplies",
    ]
    assert body["category_breakdown"][0]["share"] == 40.0
    assert [Decimal(str(entry["value_share"])) for entry in body["category_breakdown"]] == [
        Decimal("31.97"),
        Decimal("0.00"),
        Decimal("10.88"),
        Decimal("57.14"),
    ]
    assert [(level["level"], level["count"]) for level in body["stock_levels"]] == [
        ("good", 2),
        ("low", 2),
        ("out", 1),
    ]


def test_reports_export_csv(client, associate_headers):
    response = client.get("/reports/export", headers=associate_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    disposition = response.headers["content-disposition"]
    assert disposition.startswith('attachment; filename="inventory-report-')
    assert disposition.endswith('.csv"')
    assert response.text == (
        "Category,Product Count,Inventory Value\n"
        '"Tools",2,"$352.50"\n'
        '"Electrical",1,"$0.00"\n'
        '"Plumbing",1,"$120.00"\n'
        '"Paint & Supplies",1,"$630.00"\n'
        "\n"
        "Stock Level,Count,Percentage\n"
        '"Good Stock",2,"40.0%"\n'
        '"Low Stock",2,"40.0%"\n'
        '"Out of Stock",1,"20.0%"\n'
    )


def test_store_failure_maps_to_503(client, associate_headers, tmp_path):
    from backend.dependencies.stores import get_stores
    from backend.main import app

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    document = JsonDocument(broken)
    app.dependency_overrides[get_stores] = lambda: StoreBundle(
        catalog=JsonCatalogStore(document),
        users=JsonUserStore(document),
    )

    assert client.get("/dashboard", headers=associate_headers).status_code == 503
    assert client.get("/products", headers=associate_headers).status_code == 503
