import pytest


def regular_order(artwork_id, **overrides):
    payload = {
        "order_type": "regular",
        "artwork_id": artwork_id,
        "customer_name": "Priya Sen",
        "customer_email": "Priya.Sen@Gmail.com",
        "customer_phone": "98765-43210",
        "delivery_address": "12 Lake Road, Kolkata",
        "order_details": {"size": "A4", "notes": "Gift wrap please"},
    }
    payload.update(overrides)
    return payload


def test_place_regular_order(client, auth_headers, create_artwork):
    artwork = create_artwork(title="Monsoon")
    response = client.post("/api/orders/", json=regular_order(artwork["id"], customer_phone="9876543210"))
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["message"]
    assert body["whatsapp_url"].startswith("https://wa.me/919436357001?text=")

    order = client.get(f"/api/orders/{body['order_id']}", headers=auth_headers).json()
    assert order["status"] == "Pending"
    assert order["order_type"] == "regular"
    assert order["artwork_title"] == "Monsoon"
    assert order["order_details"]["artwork"] == "Monsoon"
    assert order["order_details"]["size"] == "A4"


def test_phone_and_email_are_normalized(client, auth_headers, create_artwork):
    artwork = create_artwork()
    order_id = client.post("/api/orders/", json=regular_order(artwork["id"])).json()["order_id"]
    order = client.get(f"/api/orders/{order_id}", headers=auth_headers).json()
    assert order["customer_phone"] == "9876543210"
    assert order["customer_email"] == "priya.sen@gmail.com"


@pytest.mark.parametrize("email", ["priya@yahoo.com", "priya@gmail.co", "not-an-email"])
def test_non_gmail_address_is_rejected(client, create_artwork, email):
    artwork = create_artwork()
    response = client.post("/api/orders/", json=regular_order(artwork["id"], customer_email=email))
    assert response.status_code == 400
    assert response.json()["error"] == "Validation failed"


def test_phone_must_have_ten_digits(client, create_artwork):
    artwork = create_artwork()
    response = client.post("/api/orders/", json=regular_order(artwork["id"], customer_phone="12345"))
    assert response.status_code == 400
    assert response.json()["details"] == [
        {"field": "customer_phone", "message": "Value error, Phone number must be exactly 10 digits"}
    ]


def test_country_code_is_not_stripped(client, create_artwork):
    artwork = create_artwork()
    response = client.post("/api/orders/", json=regular_order(artwork["id"], customer_phone="+91 98765-43210"))
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "customer_phone"


def test_custom_order_error_fields_are_unprefixed(client):
    response = client.post(
        "/api/orders/",
        json={
            "order_type": "custom",
            "customer_name": "Priya Sen",
            "customer_email": "priya@gmail.com",
            "customer_phone": "9876543210",
            "order_details": {"idea": ""},
        },
    )
    assert response.status_code == 400
    fields = [d["field"] for d in response.json()["details"]]
    assert "order_details.idea" in fields
    assert not any(f.startswith("custom") for f in fields)


def test_regular_order_needs_existing_artwork(client):
    response = client.post("/api/orders/", json=regular_order(4242))
    assert response.status_code == 400
    assert response.json()["error"] == "Artwork not found"

    payload = regular_order(None)
    del payload["artwork_id"]
    assert client.post("/api/orders/", json=payload).status_code == 400


def test_custom_order(client, auth_headers):
    payload = {
        "order_type": "custom",
        "customer_name": "Arjun",
        "customer_email": "arjun@gmail.com",
        "customer_phone": "9123456789",
        "order_details": {"idea": "A portrait of my grandmother", "medium": "Watercolour"},
    }
    response = client.post("/api/orders/", json=payload)
    assert response.status_code == 201
    order = client.get(f"/api/orders/{response.json()['order_id']}", headers=auth_headers).json()
    assert order["order_details"] == {"idea": "A portrait of my grandmother", "medium": "Watercolour"}
    assert order["artwork_id"] is None

    payload["order_details"] = {"medium": "Oil"}
    assert client.post("/api/orders/", json=payload).status_code == 400


def test_bulk_order_requires_org_details(client):
    payload = {
        "order_type": "bulk",
        "customer_name": "School Office",
        "customer_email": "office@gmail.com",
        "customer_phone": "9000000001",
        "order_details": {"orgName": "Green Valley School", "itemType": "Badges", "quantity": 200},
    }
    assert client.post("/api/orders/", json=payload).status_code == 201

    payload["order_details"] = {"orgName": "Green Valley School"}
    assert client.post("/api/orders/", json=payload).status_code == 400


def test_unknown_order_type(client):
    response = client.post("/api/orders/", json={"order_type": "wholesale", "customer_name": "X"})
    assert response.status_code == 400


def test_order_admin_routes_require_token(client):
    assert client.get("/api/orders/").status_code == 401
    assert client.get("/api/orders/stats/summary").status_code == 401
    response = client.get("/api/orders/", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 403


def test_status_update_filters_and_stats(client, auth_headers, create_artwork):
    artwork = create_artwork()
    first = client.post("/api/orders/", json=regular_order(artwork["id"])).json()["order_id"]
    client.post("/api/orders/", json={
        "order_type": "custom",
        "customer_name": "Arjun",
        "customer_email": "arjun@gmail.com",
        "customer_phone": "9123456789",
        "order_details": {"idea": "Family portrait"},
    })

    response = client.patch(f"/api/orders/{first}/status", json={"status": "Completed"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "Completed"

    # Any status may follow any other
    response = client.patch(f"/api/orders/{first}/status", json={"status": "Pending"}, headers=auth_headers)
    assert response.json()["status"] == "Pending"
    client.patch(f"/api/orders/{first}/status", json={"status": "Cancelled"}, headers=auth_headers)

    response = client.patch(f"/api/orders/{first}/status", json={"status": "Shipped"}, headers=auth_headers)
    assert response.status_code == 400
    assert client.patch("/api/orders/999/status", json={"status": "Pending"}, headers=auth_headers).status_code == 404

    cancelled = client.get("/api/orders/", params={"status": "Cancelled"}, headers=auth_headers).json()
    assert [o["id"] for o in cancelled] == [first]
    custom = client.get("/api/orders/", params={"type": "custom"}, headers=auth_headers).json()
    assert len(custom) == 1 and custom[0]["order_type"] == "custom"

    stats = client.get("/api/orders/stats/summary", headers=auth_headers).json()
    assert stats == {
        "total_orders": 2,
        "regular_orders": 1,
        "custom_orders": 1,
        "bulk_orders": 0,
        "pending_orders": 1,
        "completed_orders": 0,
        "cancelled_orders": 1,
    }


def test_delete_order(client, auth_headers, create_artwork):
    artwork = create_artwork()
    order_id = client.post("/api/orders/", json=regular_order(artwork["id"])).json()["order_id"]
    assert client.delete(f"/api/orders/{order_id}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/orders/{order_id}", headers=auth_headers).status_code == 404
    assert client.delete(f"/api/orders/{order_id}", headers=auth_headers).status_code == 404


def test_order_survives_artwork_deletion(client, auth_headers, create_artwork):
    artwork = create_artwork()
    order_id = client.post("/api/orders/", json=regular_order(artwork["id"])).json()["order_id"]
    client.delete(f"/api/artworks/{artwork['id']}", headers=auth_headers)

    order = client.get(f"/api/orders/{order_id}", headers=auth_headers).json()
    assert order["artwork_id"] is None
    assert order["order_details"]["artwork"] == "Sunset"
