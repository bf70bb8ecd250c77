from conftest import bearer


def test_menu_is_public_and_admin_adds_items(client, make_user, login):
    r = client.get("/api/order/menu")
    assert r.status_code == 200
    assert [m["title"] for m in r.json()] == ["Veggie", "Pepperoni", "Margarita"]

    make_user(email="d@x.com", password="pw")
    item = {"title": "Student", "description": "No topping", "image": "pizza9.png", "price": 0.0001}
    r = client.put("/api/order/menu", json=item, headers=bearer(login("d@x.com", "pw")))
    assert r.status_code == 403

    r = client.put("/api/order/menu", json=item, headers=bearer(login("a@jwt.com", "admin")))
    assert r.status_code == 200
    assert r.json()[-1]["title"] == "Student"


def test_diner_places_and_lists_orders(client, make_user, login):
    admin_token = login("a@jwt.com", "admin")
    franchise = client.post("/api/franchise", json={"name": "f", "admins": []}, headers=bearer(admin_token)).json()
    store = client.post(f"/api/franchise/{franchise['id']}/store", json={"name": "s"}, headers=bearer(admin_token)).json()

    make_user(email="d@x.com", password="pw")
    token = login("d@x.com", "pw")
    order = {
        "franchiseId": franchise["id"],
        "storeId": store["id"],
        "items": [{"menuId": 1, "description": "Veggie", "price": 0.0038}],
    }
    r = client.post("/api/order", json=order, headers=bearer(token))
    assert r.status_code == 200
    assert r.json()["order"]["items"][0]["menuId"] == 1

    r = client.get("/api/order", headers=bearer(token))
    assert r.status_code == 200
    assert len(r.json()["orders"]) == 1
    assert r.json()["page"] == 1


def test_orders_require_authentication(client):
    assert client.get("/api/order").status_code == 401
    assert client.post("/api/order", json={"franchiseId": 1, "storeId": 1, "items": []}).status_code == 401
