import pytest

from vcnty.errors import BackendAPIError
from vcnty.importing.pipeline import import_file, run_import

STORE = {"latitude": 52.37, "longitude": 4.89}


class FakeClient:
    def __init__(self, fail_with: str | None = None):
        self.fail_with = fail_with
        self.calls = []

    def create_items_batch(self, store_id, items, token=None):
        self.calls.append({"store_id": store_id, "items": items, "token": token})
        if self.fail_with is not None:
            raise BackendAPIError(self.fail_with, status_code=500)
        return {"created": len(items)}


def test_import_end_to_end_scenario():
    rows = [
        {"Name": "Widget", "Cost": "9.99", "Stock": "5", "Category": "Home"},
        {"Name": "", "Cost": "3.00", "Stock": "2", "Category": "Home"},
        {"Name": "Gadget", "Cost": "-1", "Stock": "1", "Category": ""},
    ]
    client = FakeClient()
    report = run_import(rows, "store-1", STORE, client, token="tok")

    assert report["total"] == 3
    assert report["success"] == 1
    assert report["failed"] == 2
    assert report["errors"] == [
        "Row 2: Missing Title.",
        "Row 3: Invalid price format.",
        "Row 3: Missing Category.",
    ]

    assert len(client.calls) == 1
    call = client.calls[0]
    assert call["store_id"] == "store-1"
    assert call["token"] == "tok"
    item = call["items"][0]
    assert item["title"] == "Widget"
    assert item["price"] == pytest.approx(9.99)
    assert item["quantity"] == 5
    assert item["category"] == "Home"
    assert item["currency"] == "EUR"
    assert item["latitude"] == 52.37 and item["longitude"] == 4.89


def test_batch_carries_store_coordinates_for_every_item():
    rows = [
        {"Title": "A", "Category": "x"},
        {"Title": "B", "Category": "y"},
    ]
    client = FakeClient()
    run_import(rows, "s", STORE, client)
    coords = {(i["latitude"], i["longitude"]) for i in client.calls[0]["items"]}
    assert coords == {(52.37, 4.89)}


def test_no_accepted_rows_skips_submission():
    rows = [{"Title": "", "Category": ""}]
    client = FakeClient()
    report = run_import(rows, "s", STORE, client)

    assert client.calls == []
    assert report == {
        "total": 1,
        "success": 0,
        "failed": 1,
        "errors": ["Row 1: Missing Title.", "Row 1: Missing Category."],
        "ignored_columns": [],
    }


def test_batch_failure_marks_everything_failed_and_keeps_row_errors():
    rows = [
        {"Title": "A", "Category": "x"},
        {"Title": "", "Category": "x"},
        {"Title": "C", "Category": "z"},
    ]
    client = FakeClient(fail_with="Store is closed")
    report = run_import(rows, "s", STORE, client)

    assert report["total"] == 3
    assert report["success"] == 0
    assert report["failed"] == 3
    assert report["errors"] == ["Row 2: Missing Title.", "Network Error: Store is closed"]


def test_count_invariant_holds_on_success():
    rows = [
        {"title": "ok", "category": "c", "price": "1"},
        {"title": "ok", "category": "c", "price": "abc"},
        {"title": "ok", "category": "c", "main_image_url": "http://x.test/a.png"},
        {"title": "ok", "category": "c", "main_image_url": "https://x.test/a.png"},
    ]
    report = run_import(rows, "s", STORE, FakeClient())
    assert report["success"] + report["failed"] == report["total"] == 4
    assert report["success"] == 2


def test_unknown_columns_are_reported_but_never_errors():
    rows = [{"Title": "A", "Category": "x", "Foo Bar Baz": "??", "Pricee": "12"}]
    client = FakeClient()
    report = run_import(rows, "s", STORE, client)

    assert report["errors"] == []
    assert report["success"] == 1
    assert report["ignored_columns"] == ["Foo Bar Baz", "Pricee"]
    assert "Foo Bar Baz" not in client.calls[0]["items"][0]


def test_empty_file_reports_zero_rows():
    report = run_import([], "s", STORE, FakeClient())
    assert report["total"] == 0
    assert report["success"] == 0
    assert report["failed"] == 0


def test_import_file_from_csv_bytes():
    data = (
        "Name,Cost,Stock,Category,Tags,Status\n"
        "Widget,$12.50 USD,5,Home,\"red, blue ,,red\",Published\n"
        ",,,,,\n"
        "Lamp,3,1,Home,,draft\n"
    ).encode("utf-8")
    client = FakeClient()
    report = import_file("items.csv", data, "s", STORE, client)

    assert report["total"] == 2
    assert report["success"] == 2
    widget, lamp = client.calls[0]["items"]
    assert widget["price"] == 12.5
    assert widget["tags"] == ["red", "blue", "red"]
    assert widget["status"] == "AVAILABLE"
    assert lamp["status"] == "DRAFT"


def test_import_file_trailing_commas_still_import():
    data = b"Title,Category\nWidget,Home,\nLamp,Office,\n"
    client = FakeClient()
    report = import_file("items.csv", data, "s", STORE, client)

    assert report["success"] == 2
    assert report["errors"] == []
    assert [i["category"] for i in client.calls[0]["items"]] == ["Home", "Office"]


def test_import_file_row_with_extra_cells_does_not_fail_the_batch():
    data = b"Title,Category\nWidget,Home\nLamp,Office,extra\n"
    client = FakeClient()
    report = import_file("items.csv", data, "s", STORE, client)

    assert report["total"] == 2
    assert report["success"] == 2


def test_import_file_repeated_header_later_column_wins():
    data = b"Title,Category,Title\nfirst,Home,second\n"
    client = FakeClient()
    report = import_file("items.csv", data, "s", STORE, client)

    assert report["ignored_columns"] == []
    assert client.calls[0]["items"][0]["title"] == "second"
