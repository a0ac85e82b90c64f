from tests.conftest import image_file


def test_create_artwork_keeps_photo_order(client, create_artwork):
    artwork = create_artwork(photos=("front", "back"), labels=("Front view", "Back view"))

    response = client.get(f"/api/artworks/{artwork['id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "Paintings"
    assert [p["label"] for p in body["photos"]] == ["Front view", "Back view"]
    assert [p["public_id"] for p in body["photos"]] == [
        "chitravaani/artworks/front",
        "chitravaani/artworks/back",
    ]
    assert body["photos"][0]["url"].startswith("https://res.cloudinary.com/")


def test_missing_labels_default_to_photo_number(client, create_artwork):
    artwork = create_artwork(photos=("a", "b", "c"), labels=("Detail",))
    assert [p["label"] for p in artwork["photos"]] == ["Detail", "Photo 2", "Photo 3"]


def test_create_artwork_with_unknown_category(client, auth_headers, fake_cloudinary):
    response = client.post(
        "/api/artworks/",
        data={"title": "Lost", "category": "Sculpture", "price": "500"},
        files=[image_file("x")],
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert "Invalid category" in response.json()["error"]
    assert fake_cloudinary.uploads == []


def test_create_artwork_requires_photos(client, auth_headers):
    response = client.post(
        "/api/artworks/",
        data={"title": "Nothing", "category": "Paintings", "price": "500"},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_create_artwork_caps_photo_count(client, auth_headers, fake_cloudinary):
    response = client.post(
        "/api/artworks/",
        data={"title": "Too many", "category": "Paintings", "price": "500"},
        files=[image_file(f"p{i}") for i in range(11)],
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert "At most 10 photos" in response.json()["error"]
    assert fake_cloudinary.uploads == []


def test_create_artwork_accepts_ten_photos(client, create_artwork):
    artwork = create_artwork(photos=tuple(f"p{i}" for i in range(10)))
    assert len(artwork["photos"]) == 10


def test_create_artwork_rejects_non_images(client, auth_headers):
    response = client.post(
        "/api/artworks/",
        data={"title": "Doc", "category": "Paintings", "price": "500"},
        files=[("photos", ("notes.pdf", b"%PDF-1.4", "application/pdf"))],
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert "Only image files" in response.json()["error"]


def test_create_artwork_rejects_large_images(client, auth_headers):
    big = b"0" * (10 * 1024 * 1024 + 1)
    response = client.post(
        "/api/artworks/",
        data={"title": "Huge", "category": "Paintings", "price": "500"},
        files=[("photos", ("huge.jpg", big, "image/jpeg"))],
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert "10 MB" in response.json()["error"]


def test_list_filters_and_artist_name(client, create_artwork, create_artist):
    artist = create_artist(name="Ravi Kumar")
    create_artwork(title="River", category="Paintings", artist_id=str(artist["id"]))
    create_artwork(title="Owl", category="Badges")

    everything = client.get("/api/artworks/").json()
    assert [a["title"] for a in everything] == ["Owl", "River"]  # newest first

    paintings = client.get("/api/artworks/", params={"category": "Paintings"}).json()
    assert [a["title"] for a in paintings] == ["River"]
    assert paintings[0]["artist_name"] == "Ravi Kumar"

    by_artist = client.get("/api/artworks/", params={"artist_id": artist["id"]}).json()
    assert [a["title"] for a in by_artist] == ["River"]


def test_update_artwork(client, auth_headers, create_artwork):
    artwork = create_artwork()
    response = client.put(
        f"/api/artworks/{artwork['id']}",
        json={"price": "₹2,000", "category": "Clay Work"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["price"] == "₹2,000"
    assert body["category"] == "Clay Work"
    assert body["title"] == "Sunset"

    response = client.put(f"/api/artworks/{artwork['id']}", json={"category": "Nope"}, headers=auth_headers)
    assert response.status_code == 400


def test_delete_artwork_removes_photos(client, auth_headers, create_artwork, fake_cloudinary):
    artwork = create_artwork(photos=("one", "two"))

    response = client.delete(f"/api/artworks/{artwork['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert fake_cloudinary.destroyed == ["chitravaani/artworks/one", "chitravaani/artworks/two"]
    assert client.get(f"/api/artworks/{artwork['id']}").status_code == 404
    assert client.delete(f"/api/artworks/{artwork['id']}", headers=auth_headers).status_code == 404


def test_delete_artwork_survives_storage_failure(client, auth_headers, create_artwork, monkeypatch):
    import cloudinary.uploader

    artwork = create_artwork()

    def broken_destroy(public_id, **kwargs):
        raise RuntimeError("cloudinary is down")

    monkeypatch.setattr(cloudinary.uploader, "destroy", broken_destroy)
    response = client.delete(f"/api/artworks/{artwork['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert client.get(f"/api/artworks/{artwork['id']}").status_code == 404


def test_missing_artwork_is_404(client):
    response = client.get("/api/artworks/12345")
    assert response.status_code == 404
    assert response.json() == {"error": "Artwork not found"}
