def test_create_and_list_artists(client, create_artist, create_artwork):
    first = create_artist(name="Meera Das", location="Agartala", instagram="")
    second = create_artist(name="Ravi Kumar")
    create_artwork(artist_id=str(first["id"]))

    assert first["instagram"] is None

    artists = client.get("/api/artists/").json()
    assert [a["name"] for a in artists] == ["Ravi Kumar", "Meera Das"]
    counts = {a["name"]: a["artwork_count"] for a in artists}
    assert counts == {"Ravi Kumar": 0, "Meera Das": 1}
    assert second["profile_image_url"] is None


def test_duplicate_artist_name(client, auth_headers, create_artist):
    create_artist(name="Meera Das")
    response = client.post("/api/artists/", data={"name": "Meera Das"}, headers=auth_headers)
    assert response.status_code == 400


def test_artist_name_too_short(client, auth_headers):
    response = client.post("/api/artists/", data={"name": "M"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "name"


def test_update_artist_field_lengths(client, auth_headers, create_artist):
    artist = create_artist()
    response = client.put(f"/api/artists/{artist['id']}", data={"website": "x" * 300}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "website"

    response = client.put(f"/api/artists/{artist['id']}", data={"location": "  Shantiniketan  "}, headers=auth_headers)
    assert response.status_code == 200, response.text
    assert response.json()["location"] == "Shantiniketan"


def test_artist_with_profile_image(client, auth_headers, fake_cloudinary):
    response = client.post(
        "/api/artists/",
        data={"name": "Anita Roy"},
        files={"profile_image": ("me.jpg", b"portrait", "image/jpeg")},
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.json()["profile_image_url"].endswith("chitravaani/artists/portrait.jpg")


def test_update_artist_replaces_image(client, auth_headers, fake_cloudinary):
    created = client.post(
        "/api/artists/",
        data={"name": "Anita Roy"},
        files={"profile_image": ("me.jpg", b"old", "image/jpeg")},
        headers=auth_headers,
    ).json()

    response = client.put(
        f"/api/artists/{created['id']}",
        data={"style": "Madhubani"},
        files={"profile_image": ("new.jpg", b"new", "image/jpeg")},
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Anita Roy"
    assert body["style"] == "Madhubani"
    assert body["profile_image_url"].endswith("chitravaani/artists/new.jpg")
    assert fake_cloudinary.destroyed == ["chitravaani/artists/old"]


def test_update_artist_duplicate_name(client, auth_headers, create_artist):
    create_artist(name="Meera Das")
    other = create_artist(name="Ravi Kumar")
    response = client.put(f"/api/artists/{other['id']}", data={"name": "Meera Das"}, headers=auth_headers)
    assert response.status_code == 400


def test_artist_detail(client, create_artist, create_artwork):
    artist = create_artist()
    create_artwork(title="Lotus", artist_id=str(artist["id"]), photos=("p1", "p2"))

    response = client.get(f"/api/artists/{artist['id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["artist"]["name"] == "Meera Das"
    assert len(body["artworks"]) == 1
    assert body["artworks"][0]["category"] == "Paintings"
    assert len(body["artworks"][0]["photos"]) == 2

    assert client.get("/api/artists/999").status_code == 404


def test_delete_artist_keeps_artworks(client, auth_headers, create_artist, create_artwork):
    artist = create_artist()
    artwork = create_artwork(artist_id=str(artist["id"]))
    assert artwork["artist_id"] == artist["id"]

    response = client.delete(f"/api/artists/{artist['id']}", headers=auth_headers)
    assert response.status_code == 200

    assert client.get(f"/api/artists/{artist['id']}").status_code == 404
    remaining = client.get(f"/api/artworks/{artwork['id']}").json()
    assert remaining["artist_id"] is None
    assert remaining["artist_name"] is None
