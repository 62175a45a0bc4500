import pytest


def test_create_cart_table_is_repeatable(client):
    r1 = client.get("/create-cart-table")
    r2 = client.get("/create-cart-table")
    assert r1.status_code == 200
    assert r1.text == "Cart table created!"
    assert r2.status_code == 200


def test_root_is_plain_text(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")


def test_empty_cart(cart_client):
    r = cart_client.get("/api/cart")
    assert r.status_code == 200
    assert r.json() == []


def test_list_without_table_is_server_error(client):
    r = client.get("/api/cart")
    assert r.status_code == 500
    assert r.json() == {"message": "Error fetching cart"}


def test_add_then_list_returns_submitted_items(cart_client, mug):
    lamp = {"name": "Lamp", "price": "24.50", "quantity": 1, "image": "/img/lamp.jpg", "description": "Desk lamp"}
    r = cart_client.post("/api/cart", json=[mug, lamp])
    assert r.status_code == 201
    assert r.json() == {"message": "Items added successfully", "inserted": 2}

    rows = cart_client.get("/api/cart").json()
    assert len(rows) == 2
    assert all(isinstance(row["id"], int) for row in rows)
    assert len({row["id"] for row in rows}) == 2

    by_name = {row["name"]: row for row in rows}
    assert by_name["Mug"]["price"] == 9.99
    assert by_name["Mug"]["quantity"] == 2
    assert by_name["Mug"]["image"] == "mug.png"
    assert by_name["Mug"]["description"] == "Ceramic mug"
    assert by_name["Lamp"]["price"] == 24.5


@pytest.mark.parametrize(
    "field, value",
    [
        ("price", 0),
        ("quantity", 0),
        ("quantity", -1),
        ("quantity", 1.5),
        ("price", -3),
        ("price", 1.999),
        ("price", "abc"),
        ("name", ""),
        ("description", "   "),
        ("image", None),
    ],
)
def test_batch_with_bad_field_is_rejected_in_full(cart_client, mug, field, value):
    bad = dict(mug, name="Bad")
    bad[field] = value
    r = cart_client.post("/api/cart", json=[mug, bad])
    assert r.status_code == 400
    assert r.json() == {"message": "All fields are required"}
    assert cart_client.get("/api/cart").json() == []


def test_batch_with_missing_field_is_rejected(cart_client, mug):
    del mug["description"]
    r = cart_client.post("/api/cart", json=[mug])
    assert r.status_code == 400
    assert cart_client.get("/api/cart").json() == []


@pytest.mark.parametrize("body", [[], {"name": "Mug"}, "Mug"])
def test_add_requires_non_empty_list(cart_client, body):
    r = cart_client.post("/api/cart", json=body)
    assert r.status_code == 400
    assert r.json()["message"] == "Cart payload must be a non-empty list"


def test_add_without_table_is_server_error(client, mug):
    r = client.post("/api/cart", json=[mug])
    assert r.status_code == 500
    assert r.json() == {"message": "Error inserting into cart"}


def test_delete_removes_only_that_row(add_items, cart_client, mug):
    rows = add_items(mug, dict(mug, name="Cup"))
    target = rows[0]["id"]

    r = cart_client.delete(f"/api/cart/{target}")
    assert r.status_code == 200
    assert r.json() == {"message": "Item removed from cart", "id": target}

    remaining = cart_client.get("/api/cart").json()
    assert [row["id"] for row in remaining] == [rows[1]["id"]]


def test_delete_missing_item_is_not_found(add_items, cart_client, mug):
    rows = add_items(mug)
    r = cart_client.delete("/api/cart/9999")
    assert r.status_code == 404
    assert r.json() == {"message": "Item not found"}
    assert cart_client.get("/api/cart").json() == rows


def test_delete_with_non_integer_id(cart_client):
    r = cart_client.delete("/api/cart/abc")
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid request"


def test_fields_are_stored_exactly_as_sent(add_items, mug):
    rows = add_items(dict(mug, name=" Mug ", description="Ceramic mug\n"))
    assert rows[0]["name"] == " Mug "
    assert rows[0]["description"] == "Ceramic mug\n"


@pytest.mark.parametrize("quantity", [2**31, 2**63])
def test_quantity_past_column_range_is_rejected(cart_client, mug, quantity):
    r = cart_client.post("/api/cart", json=[dict(mug, quantity=quantity)])
    assert r.status_code == 400
    assert r.json() == {"message": "All fields are required"}
    assert cart_client.get("/api/cart").json() == []


@pytest.mark.parametrize("item_id", [0, -1, 2**31, 2**63])
def test_delete_out_of_range_id_is_not_found(add_items, cart_client, mug, item_id):
    rows = add_items(mug)
    r = cart_client.delete(f"/api/cart/{item_id}")
    assert r.status_code == 404
    assert r.json() == {"message": "Item not found"}
    assert cart_client.get("/api/cart").json() == rows


def test_delete_without_table_is_server_error(client):
    r = client.delete("/api/cart/1")
    assert r.status_code == 500
    assert r.json() == {"message": "Error deleting item"}
