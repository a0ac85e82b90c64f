from datetime import timedelta

import pytest

from storefront.core import security
from tests.conftest import ADMIN_CREDENTIALS


def test_login_with_wrong_password(client):
    response = client.post("/api/admin/login", json={"username": "admin", "password": "wrong"})
    assert response.status_code == 401
    body = response.json()
    assert "token" not in body
    assert body["error"] == "Invalid credentials"


def test_login_and_verify(client):
    response = client.post("/api/admin/login", json=ADMIN_CREDENTIALS)
    assert response.status_code == 200
    body = response.json()
    assert body["admin"]["username"] == "admin"

    verify = client.get("/api/admin/verify", headers={"Authorization": f"Bearer {body['token']}"})
    assert verify.status_code == 200
    assert verify.json() == {"valid": True, "admin": {"id": body["admin"]["id"], "username": "admin", "email": None}}


def test_token_claims(admin_token):
    payload = security.decode_token(admin_token)
    assert payload.role == "admin"
    assert payload.username == "admin"
    assert payload.sub == str(payload.id)


def test_verify_without_token(client):
    response = client.get("/api/admin/verify")
    assert response.status_code == 401


def test_expired_token_is_401(client):
    token = security.create_access_token(
        subject=1, claims={"id": 1, "username": "admin"}, expires_delta=timedelta(seconds=-10)
    )
    response = client.get("/api/admin/verify", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert "expired" in response.json()["error"].lower()


def test_tampered_token_is_403(client, admin_token):
    response = client.get("/api/admin/verify", headers={"Authorization": f"Bearer {admin_token}x"})
    assert response.status_code == 403


def test_token_without_admin_role_is_403(client):
    from jose import jwt
    from storefront.core.config import settings

    token = jwt.encode({"sub": "1", "id": 1, "role": "customer"}, settings.SECRET_KEY, algorithm="HS256")
    response = client.get("/api/admin/verify", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403


@pytest.fixture
def google_claims(monkeypatch):
    claims = {"sub": "1098765", "email": "Owner@gmail.com", "email_verified": True}

    def fake_verify(credential):
        if credential != "good-credential":
            raise ValueError("Token used too late")
        return claims

    monkeypatch.setattr(security, "verify_google_id_token", fake_verify)
    return claims


def test_google_login(client, google_claims):
    response = client.post("/api/admin/google-login", json={"credential": "good-credential"})
    assert response.status_code == 200
    body = response.json()
    assert body["admin"] == {"id": "1098765", "username": None, "email": "owner@gmail.com"}

    verify = client.get("/api/admin/verify", headers={"Authorization": f"Bearer {body['token']}"})
    assert verify.json()["admin"]["email"] == "owner@gmail.com"


def test_google_login_rejects_bad_token(client, google_claims):
    response = client.post("/api/admin/google-login", json={"credential": "forged"})
    assert response.status_code == 401


def test_google_login_rejects_unlisted_or_unverified(client, google_claims):
    google_claims["email"] = "stranger@gmail.com"
    assert client.post("/api/admin/google-login", json={"credential": "good-credential"}).status_code == 403

    google_claims["email"] = "owner@gmail.com"
    google_claims["email_verified"] = False
    assert client.post("/api/admin/google-login", json={"credential": "good-credential"}).status_code == 403


def test_change_password(client, auth_headers):
    weak = client.post(
        "/api/admin/change-password",
        json={"current_password": ADMIN_CREDENTIALS["password"], "new_password": "alllowercase1"},
        headers=auth_headers,
    )
    assert weak.status_code == 400

    wrong = client.post(
        "/api/admin/change-password",
        json={"current_password": "nope", "new_password": "N3wPassword"},
        headers=auth_headers,
    )
    assert wrong.status_code == 401

    ok = client.post(
        "/api/admin/change-password",
        json={"current_password": ADMIN_CREDENTIALS["password"], "new_password": "N3wPassword"},
        headers=auth_headers,
    )
    assert ok.status_code == 200

    assert client.post("/api/admin/login", json=ADMIN_CREDENTIALS).status_code == 401
    assert client.post("/api/admin/login", json={"username": "admin", "password": "N3wPassword"}).status_code == 200


def test_change_password_for_google_session(client, google_claims):
    token = client.post("/api/admin/google-login", json={"credential": "good-credential"}).json()["token"]
    response = client.post(
        "/api/admin/change-password",
        json={"current_password": "whatever", "new_password": "N3wPassword"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 404


def test_dashboard_stats(client, auth_headers, create_artwork, create_artist):
    create_artist()
    artwork = create_artwork()
    for i in range(6):
        client.post("/api/orders/", json={
            "order_type": "regular",
            "artwork_id": artwork["id"],
            "customer_name": f"Customer {i}",
            "customer_email": f"customer{i}@gmail.com",
            "customer_phone": "9876543210",
        })

    stats = client.get("/api/admin/dashboard/stats", headers=auth_headers).json()
    assert stats["total_artworks"] == 1
    assert stats["total_orders"] == 6
    assert stats["pending_orders"] == 6
    assert stats["total_categories"] == 5
    assert stats["total_artists"] == 1
    assert stats["total_feedback"] == 0
    assert [o["customer_name"] for o in stats["recent_orders"]] == [f"Customer {i}" for i in range(5, 0, -1)]


def test_health_and_security_headers(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "OK"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
