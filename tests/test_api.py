"""HTTP tests: authentication, error mapping and the sale/reorder endpoints."""

import time
from decimal import Decimal

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.services import ledger


def _create_sale(client, headers, line_items, customer_id=None, employee_id=None):
    return client.post(
        "/sales",
        json={
            "customer_id": customer_id,
            "employee_id": employee_id,
            "line_items": line_items,
        },
        headers=headers,
    )


class TestAuthentication:
    """Mutations need a bearer token; reads do not."""

    def test_health_check(self, client):
        response = client.get("/")
        assert response.status_code == 200

    def test_reads_are_public(self, client, catalog):
        response = client.get("/merchandise")
        assert response.status_code == 200

    def test_mutation_without_token_is_rejected(self, client, catalog):
        response = _create_sale(client, {}, [{"item_id": 7, "quantity": 1, "price_each": "10.00"}])
        assert response.status_code == 401

    def test_mutation_with_bad_token_is_rejected(self, client, catalog):
        response = _create_sale(
            client,
            {"Authorization": "Bearer not-a-jwt"},
            [{"item_id": 7, "quantity": 1, "price_each": "10.00"}],
        )
        assert response.status_code == 401

    def test_expired_token_is_rejected(self, client, catalog, make_token):
        token = make_token({"exp": int(time.time()) - 60})

        response = client.post(
            "/customers",
            json={"first_name": "Late"},
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == 401

    def test_token_without_subject_is_rejected(self, client, catalog, make_token):
        token = make_token({"sub": ""})

        response = client.post(
            "/customers",
            json={"first_name": "Nobody"},
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == 401


class TestSalesEndpoints:
    """Tests for /sales and /salesdetail."""

    def test_create_sale_returns_id_and_total(self, client, db, catalog, auth_headers):
        response = _create_sale(
            client, auth_headers, [{"item_id": 7, "quantity": 2, "price_each": "10.00"}]
        )

        assert response.status_code == 201
        body = response.json()
        assert body["sales_id"] > 0
        assert Decimal(str(body["total_amount"])) == Decimal("20.00")
        assert ledger.get_quantity(db, 7) == 48

    def test_create_sale_without_line_items_is_400(self, client, catalog, auth_headers):
        response = _create_sale(client, auth_headers, [])

        assert response.status_code == 400
        assert response.json()["detail"] == "At least one line item is required"

    def test_create_sale_with_unknown_item_is_404(self, client, db, catalog, auth_headers):
        response = _create_sale(
            client,
            auth_headers,
            [
                {"item_id": 7, "quantity": 2, "price_each": "10.00"},
                {"item_id": 404, "quantity": 1, "price_each": "1.00"},
            ],
        )

        assert response.status_code == 404
        assert ledger.get_quantity(db, 7) == 50
        assert client.get("/sales").json() == []

    def test_line_item_update_flow(self, client, db, catalog, auth_headers):
        sales_id = _create_sale(
            client,
            auth_headers,
            [
                {"item_id": 8, "quantity": 2, "price_each": "15.00"},
                {"item_id": 7, "quantity": 2, "price_each": "10.00"},
            ],
            customer_id=1,
        ).json()["sales_id"]

        lines = client.get(f"/salesdetail/{sales_id}").json()
        dune_line = next(line for line in lines if line["item_id"] == 7)

        response = client.put(
            f"/salesdetail/{dune_line['sales_detail_id']}",
            json={"item_quantity": 5, "price_each": "10.00"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert ledger.get_quantity(db, 7) == 45
        sale = client.get(f"/sales/{sales_id}").json()
        assert Decimal(str(sale["total_amount"])) == Decimal("80.00")
        assert len(sale["line_items"]) == 2

    def test_add_and_delete_line_item(self, client, db, catalog, auth_headers):
        sales_id = _create_sale(
            client, auth_headers, [{"item_id": 7, "quantity": 1, "price_each": "10.00"}]
        ).json()["sales_id"]

        added = client.post(
            "/salesdetail",
            json={"sales_id": sales_id, "item_id": 8, "item_quantity": 2, "price_each": "15.00"},
            headers=auth_headers,
        )
        assert added.status_code == 201
        assert ledger.get_quantity(db, 8) == 18

        deleted = client.delete(f"/salesdetail/{added.json()['id']}", headers=auth_headers)
        assert deleted.status_code == 200
        assert ledger.get_quantity(db, 8) == 20

        sale = client.get(f"/sales/{sales_id}").json()
        assert Decimal(str(sale["total_amount"])) == Decimal("10.00")

    def test_update_missing_line_item_is_404(self, client, catalog, auth_headers):
        response = client.put(
            "/salesdetail/999",
            json={"item_quantity": 1, "price_each": "1.00"},
            headers=auth_headers,
        )
        assert response.status_code == 404

    def test_header_update_requires_customer(self, client, catalog, auth_headers):
        sales_id = _create_sale(
            client, auth_headers, [{"item_id": 7, "quantity": 1, "price_each": "10.00"}]
        ).json()["sales_id"]

        response = client.put(
            f"/sales/{sales_id}",
            json={"customer_id": None, "employee_id": 1},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_delete_sale_with_restock(self, client, db, catalog, auth_headers):
        sales_id = _create_sale(
            client, auth_headers, [{"item_id": 7, "quantity": 4, "price_each": "10.00"}]
        ).json()["sales_id"]

        response = client.delete(f"/sales/{sales_id}?restock=true", headers=auth_headers)

        assert response.status_code == 200
        assert ledger.get_quantity(db, 7) == 50
        assert client.get(f"/sales/{sales_id}").status_code == 404


class TestReorderEndpoints:
    """Tests for /reorders."""

    def test_receive_pending_reorder_is_400(self, client, catalog, auth_headers):
        created = client.post(
            "/reorders",
            json={"item_id": 7, "quantity": 20},
            headers=auth_headers,
        )
        assert created.status_code == 201
        assert created.json()["status"] == "pending"

        response = client.put(f"/reorders/receive/{created.json()['id']}", headers=auth_headers)

        assert response.status_code == 400
        assert "pending" in response.json()["detail"]

    def test_receive_ordered_reorder(self, client, db, catalog, auth_headers):
        reorder_id = client.post(
            "/reorders",
            json={"item_id": 7, "quantity": 20, "status": "ordered"},
            headers=auth_headers,
        ).json()["id"]

        response = client.put(f"/reorders/receive/{reorder_id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["status"] == "received"
        assert ledger.get_quantity(db, 7) == 70

    def test_cancel_then_delete_is_refused(self, client, catalog, auth_headers):
        reorder_id = client.post(
            "/reorders", json={"item_id": 8, "quantity": 5}, headers=auth_headers
        ).json()["id"]

        cancelled = client.put(f"/reorders/cancel/{reorder_id}", headers=auth_headers)
        assert cancelled.status_code == 200
        assert cancelled.json()["status"] == "cancelled"

        assert client.delete(f"/reorders/{reorder_id}", headers=auth_headers).status_code == 400
        assert client.put(f"/reorders/cancel/{reorder_id}", headers=auth_headers).status_code == 400

    def test_delete_pending_reorder(self, client, catalog, auth_headers):
        reorder_id = client.post(
            "/reorders", json={"item_id": 8, "quantity": 5}, headers=auth_headers
        ).json()["id"]

        response = client.delete(f"/reorders/{reorder_id}", headers=auth_headers)

        assert response.status_code == 200
        assert client.get("/reorders").json() == []

    def test_unknown_reorder_is_404(self, client, catalog, auth_headers):
        assert client.put("/reorders/cancel/999", headers=auth_headers).status_code == 404


class TestCatalogEndpoints:
    """CRUD plumbing for the reference tables."""

    def test_customer_crud(self, client, auth_headers):
        created = client.post(
            "/customers",
            json={"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"},
            headers=auth_headers,
        )
        assert created.status_code == 201
        customer_id = created.json()["id"]

        updated = client.put(
            f"/customers/{customer_id}",
            json={"first_name": "Ada", "last_name": "King", "zip_code": "97331"},
            headers=auth_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["last_name"] == "King"
        assert updated.json()["email"] is None

        assert client.delete(f"/customers/{customer_id}", headers=auth_headers).status_code == 204
        assert client.delete(f"/customers/{customer_id}", headers=auth_headers).status_code == 404

    def test_employee_update_missing_is_404(self, client, auth_headers):
        response = client.put(
            "/employees/999",
            json={"first_name": "No", "last_name": "Body"},
            headers=auth_headers,
        )
        assert response.status_code == 404

    def test_suppliers_sorted_by_company(self, client, auth_headers):
        for name in ["Zephyr Press", "Acme Books"]:
            client.post("/suppliers", json={"company_name": name}, headers=auth_headers)

        names = [s["company_name"] for s in client.get("/suppliers").json()]
        assert names == ["Acme Books", "Zephyr Press"]

    def test_merchandise_lists_supplier_name(self, client, catalog):
        items = {item["id"]: item for item in client.get("/merchandise").json()}

        assert items[7]["supplier_name"] == "Ace Books"
        assert items[8]["supplier_name"] is None

    def test_merchandise_create_and_direct_stock_correction(self, client, auth_headers):
        created = client.post(
            "/merchandise",
            json={"item_name": "Kindred", "isbn": "9780807083697", "price": "13.99", "item_quantity": 9},
            headers=auth_headers,
        )
        assert created.status_code == 201
        item_id = created.json()["id"]

        updated = client.put(
            f"/merchandise/{item_id}",
            json={"item_name": "Kindred", "price": "13.99", "item_quantity": 12},
            headers=auth_headers,
        )
        assert updated.json()["item_quantity"] == 12
        assert updated.json()["isbn"] is None


def test_reset_db_loads_consistent_seed_data(client, auth_headers):
    response = client.post("/admin/reset-db", headers=auth_headers)
    assert response.status_code == 200

    sales = client.get("/sales").json()
    assert len(sales) == 3

    for sale in sales:
        lines = client.get(f"/salesdetail/{sale['sales_id']}").json()
        line_sum = sum(Decimal(str(line["line_total"])) for line in lines)
        assert Decimal(str(sale["total_amount"])) == line_sum
        assert sale["customer_name"] is not None

    statuses = sorted(r["status"] for r in client.get("/reorders").json())
    assert statuses == ["cancelled", "ordered", "pending", "received"]


class TestReferentialIntegrity:
    """Rows referenced elsewhere cannot be deleted, and unknown references are refused."""

    def test_merchandise_on_a_sale_cannot_be_deleted(self, client, db, catalog, auth_headers):
        sales_id = _create_sale(
            client, auth_headers, [{"item_id": 7, "quantity": 2, "price_each": "10.00"}]
        ).json()["sales_id"]

        response = client.delete("/merchandise/7", headers=auth_headers)

        assert response.status_code == 409
        lines = client.get(f"/salesdetail/{sales_id}").json()
        assert [line["item_id"] for line in lines] == [7]

        # The line item can still be removed and its stock restored
        deleted = client.delete(f"/salesdetail/{lines[0]['sales_detail_id']}", headers=auth_headers)
        assert deleted.status_code == 200
        assert ledger.get_quantity(db, 7) == 50

    def test_merchandise_with_a_reorder_cannot_be_deleted(self, client, catalog, auth_headers):
        client.post("/reorders", json={"item_id": 8, "quantity": 5}, headers=auth_headers)

        assert client.delete("/merchandise/8", headers=auth_headers).status_code == 409
        assert len(client.get("/reorders").json()) == 1

    def test_unreferenced_merchandise_can_be_deleted(self, client, catalog, auth_headers):
        assert client.delete("/merchandise/8", headers=auth_headers).status_code == 204
        assert client.get("/merchandise/8").status_code == 404

    def test_customer_on_a_sale_cannot_be_deleted(self, client, catalog, auth_headers):
        _create_sale(
            client,
            auth_headers,
            [{"item_id": 7, "quantity": 1, "price_each": "10.00"}],
            customer_id=1,
        )

        response = client.delete("/customers/1", headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["detail"] == "Customer is referenced by existing sales"

    def test_deleting_supplier_keeps_its_merchandise(self, client, catalog, auth_headers):
        supplier_id = client.get("/merchandise/7").json()["supplier_id"]

        assert client.delete(f"/suppliers/{supplier_id}", headers=auth_headers).status_code == 204

        item = client.get("/merchandise/7").json()
        assert item["supplier_id"] is None
        assert item["supplier_name"] is None

    def test_sale_with_unknown_customer_is_404(self, client, catalog, auth_headers):
        response = _create_sale(
            client,
            auth_headers,
            [{"item_id": 7, "quantity": 1, "price_each": "10.00"}],
            customer_id=999,
            employee_id=888,
        )

        assert response.status_code == 404
        assert client.get("/sales").json() == []

    def test_header_update_to_unknown_customer_is_404(self, client, catalog, auth_headers):
        sales_id = _create_sale(
            client,
            auth_headers,
            [{"item_id": 7, "quantity": 1, "price_each": "10.00"}],
            customer_id=1,
        ).json()["sales_id"]

        response = client.put(
            f"/sales/{sales_id}", json={"customer_id": 12345}, headers=auth_headers
        )

        assert response.status_code == 404
        assert client.get(f"/sales/{sales_id}").json()["customer_id"] == 1

    def test_reorder_with_unknown_supplier_is_404(self, client, catalog, auth_headers):
        response = client.post(
            "/reorders",
            json={"item_id": 7, "quantity": 5, "supplier_id": 77},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert client.get("/reorders").json() == []

    def test_merchandise_with_unknown_supplier_is_404(self, client, auth_headers):
        response = client.post(
            "/merchandise",
            json={"item_name": "Kindred", "price": "13.99", "supplier_id": 77},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert client.get("/merchandise").json() == []


class TestStoreFailures:
    """CRUD handlers roll back and answer with a JSON error when the store fails."""

    def test_failed_commit_returns_500(self, client, auth_headers, monkeypatch):
        def failing_commit(self):
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(Session, "commit", failing_commit)

        response = client.post(
            "/suppliers", json={"company_name": "Zephyr Press"}, headers=auth_headers
        )

        assert response.status_code == 500
        assert response.json()["detail"] == "Unable to create supplier"

        monkeypatch.undo()
        assert client.get("/suppliers").json() == []


def test_employee_list_route_name(client):
    assert client.app.url_path_for("list_employees") == "/employees"
