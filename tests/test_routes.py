import pytest

from conftest import PNG_BYTES

SHOE = {
    "article_code": "SH001-AIRM",
    "rating": 4,
    "category": "sneaker",
    "price": 99.9,
    "discount_rate": 0.1,
    "available": True,
    "release_date": "2022-03-01",
    "homepage": "https://acme.example/air-max",
    "tags": ["SPORT"],
    "model": {"label": "Air Max", "color": "white"},
    "images": [{"caption": "Front view", "content_type": "image/png"}],
}

UPDATE = {"rating": 5, "price": 89.9, "category": "Sneaker", "tags": ["SPORT", "VINTAGE"]}


@pytest.fixture
def shoe_id(client, user_headers):
    response = client.post("/rest", json=SHOE, headers=user_headers)
    assert response.status_code == 201
    return int(response.headers["Location"].rsplit("/", 1)[1])


# ---- READ ----

def test_get_by_id(client, shoe_id):
    response = client.get(f"/rest/{shoe_id}")

    assert response.status_code == 200
    assert response.headers["ETag"] == '"0"'
    body = response.json()
    assert body["article_code"] == "SH001-AIRM"
    assert body["category"] == "Sneaker"
    assert body["release_date"] == "2022-03-01"
    assert body["model"] == {"label": "Air Max", "color": "white"}
    assert body["images"] == [{"caption": "Front view", "content_type": "image/png"}]


@pytest.mark.parametrize("header", ['"0"', 'W/"0"', '"3", "0"', "*"])
def test_get_by_id_not_modified(client, shoe_id, header):
    response = client.get(f"/rest/{shoe_id}", headers={"If-None-Match": header})

    assert response.status_code == 304


def test_get_by_id_with_other_version(client, shoe_id):
    response = client.get(f"/rest/{shoe_id}", headers={"If-None-Match": '"1"'})

    assert response.status_code == 200


@pytest.mark.parametrize("path", ["/rest/9999", "/rest/abc", "/rest/0"])
def test_get_by_id_not_found(client, path):
    assert client.get(path).status_code == 404


def test_search(client, shoe_id):
    response = client.get("/rest", params={"model": "air", "sport": "true"})

    assert response.status_code == 200
    body = response.json()
    assert [shoe["id"] for shoe in body["content"]] == [shoe_id]
    assert body["page"] == {"size": 5, "number": 0, "total_elements": 1, "total_pages": 1}


def test_search_without_params(client, shoe_id):
    response = client.get("/rest", params={"page": "1", "size": "10"})

    assert response.status_code == 200
    assert response.json()["page"]["size"] == 10


def test_search_count_only(client, shoe_id):
    response = client.get("/rest", params={"only": "count"})

    assert response.json() == {"count": 1}


@pytest.mark.parametrize("params", [{"colour": "red"}, {"category": "boot"}, {"model": "gel"}, {"size": "200"}])
def test_search_not_found(client, shoe_id, params):
    assert client.get("/rest", params=params).status_code == 404


# ---- CREATE ----

def test_create_requires_token(client):
    assert client.post("/rest", json=SHOE).status_code == 401


def test_create_sets_location(client, user_headers, mailer):
    response = client.post("/rest", json=SHOE, headers=user_headers)

    assert response.status_code == 201
    assert response.headers["Location"].startswith("http://testserver/rest/")
    assert len(mailer.sent) == 1


def test_create_duplicate_article_code(client, shoe_id, user_headers):
    response = client.post("/rest", json=SHOE, headers=user_headers)

    assert response.status_code == 422
    assert "SH001-AIRM" in response.json()["detail"]


@pytest.mark.parametrize("field, value", [
    ("rating", 6),
    ("price", -1),
    ("discount_rate", 1),
    ("category", "boot"),
    ("tags", ["SPORT", "sport"]),
    ("homepage", "not a url"),
])
def test_create_invalid_body(client, user_headers, field, value):
    response = client.post("/rest", json={**SHOE, field: value}, headers=user_headers)

    assert response.status_code == 422


# ---- UPDATE ----

def test_update(client, shoe_id, user_headers):
    response = client.put(f"/rest/{shoe_id}", json=UPDATE, headers={**user_headers, "If-Match": '"0"'})

    assert response.status_code == 204
    assert response.headers["ETag"] == '"1"'
    assert client.get(f"/rest/{shoe_id}").json()["rating"] == 5


def test_update_without_if_match(client, shoe_id, user_headers):
    response = client.put(f"/rest/{shoe_id}", json=UPDATE, headers=user_headers)

    assert response.status_code == 428


def test_update_with_malformed_version(client, shoe_id, user_headers):
    response = client.put(f"/rest/{shoe_id}", json=UPDATE, headers={**user_headers, "If-Match": "abc"})

    assert response.status_code == 412


def test_update_with_outdated_version(client, shoe_id, user_headers):
    client.put(f"/rest/{shoe_id}", json=UPDATE, headers={**user_headers, "If-Match": '"0"'})
    client.put(f"/rest/{shoe_id}", json=UPDATE, headers={**user_headers, "If-Match": '"1"'})

    response = client.put(f"/rest/{shoe_id}", json=UPDATE, headers={**user_headers, "If-Match": '"1"'})

    assert response.status_code == 412


def test_update_unknown_shoe(client, user_headers):
    response = client.put("/rest/9999", json=UPDATE, headers={**user_headers, "If-Match": '"0"'})

    assert response.status_code == 404


# ---- DELETE ----

def test_delete_requires_admin(client, shoe_id, user_headers):
    assert client.delete(f"/rest/{shoe_id}", headers=user_headers).status_code == 403


def test_delete(client, shoe_id, admin_headers):
    assert client.delete(f"/rest/{shoe_id}", headers=admin_headers).status_code == 204
    assert client.get(f"/rest/{shoe_id}").status_code == 404
    assert client.delete(f"/rest/{shoe_id}", headers=admin_headers).status_code == 204


# ---- FILES ----

def test_upload_and_download_file(client, shoe_id, user_headers):
    response = client.post(
        f"/rest/{shoe_id}",
        files={"file": ("shoe.png", PNG_BYTES, "image/png")},
        headers=user_headers,
    )
    assert response.status_code == 204
    assert response.headers["Location"].endswith(f"/rest/file/{shoe_id}")

    download = client.get(f"/rest/file/{shoe_id}")
    assert download.status_code == 200
    assert download.content == PNG_BYTES
    assert download.headers["content-type"] == "image/png"
    assert 'filename="shoe.png"' in download.headers["content-disposition"]


def test_upload_rejects_mime_type(client, shoe_id, user_headers):
    response = client.post(
        f"/rest/{shoe_id}",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=user_headers,
    )

    assert response.status_code == 415


def test_upload_for_unknown_shoe(client, user_headers):
    response = client.post("/rest/9999", files={"file": ("shoe.png", PNG_BYTES, "image/png")}, headers=user_headers)

    assert response.status_code == 404


def test_download_without_file(client, shoe_id):
    assert client.get(f"/rest/file/{shoe_id}").status_code == 404
