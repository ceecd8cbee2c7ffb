import csv
import io
from datetime import date

from core.inventory_policy import build_report
from core.report_export import EXPORT_MEDIA_TYPE, format_report_csv, report_filename
from tests.sample_data import make_product, make_three_product_catalog


def test_report_filename_is_dated():
    assert report_filename(date(2024, 5, 1)) == "inventory-report-2024-05-01.csv"
    assert report_filename().startswith("inventory-report-")
    assert EXPORT_MEDIA_TYPE == "text/csv"


def test_format_report_csv_three_products():
    payload = format_report_csv(build_report(make_three_product_catalog()))

    assert payload == (
        "Category,Product Count,Inventory Value\n"
        '"Tools",2,"$352.50"\n'
        '"Electrical",1,"$0.00"\n'
        "\n"
        "Stock Level,Count,Percentage\n"
        '"Good Stock",1,"33.3%"\n'
        '"Low Stock",1,"33.3%"\n'
        '"Out of Stock",1,"33.3%"\n'
    )


def test_format_report_csv_empty_catalog_keeps_headers_only():
    payload = format_report_csv(build_report([]))

    assert payload == "Category,Product Count,Inventory Value\n\nStock Level,Count,Percentage\n"


def test_format_report_csv_quotes_categories_with_commas():
    catalog = [make_product(category='Paint, "Supplies"', current_stock=2, cost_price="4.25")]

    payload = format_report_csv(build_report(catalog))
    rows = list(csv.reader(io.StringIO(payload)))

    assert rows[1] == ['Paint, "Supplies"', "1", "$8.50"]
    assert rows[-1] == ["Out of Stock", "0", "0.0%"]
