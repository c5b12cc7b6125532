"""HTTP tests covering routing, auth, status codes and the response envelope."""

import pytest

from conftest import PNG_BYTES, PNG_DATA

SAMPLE_POST = {
    "title_fr": "Nouvel album",
    "title_de": "Neues Album",
    "content_fr": "Sortie le 1er mai.",
    "content_de": "Erscheint am 1. Mai.",
}

SAMPLE_CONCERT = {
    "city": "Lausanne",
    "event_date": "2025-09-01T20:00:00Z",
    "venue": "Les Docks",
    "event_url": "https://example.com/tickets",
}


def _add_pictures(client, auth_headers, count):
    ids = []
    for _ in range(count):
        resp = client.post("/api/carousel", json={"picture64": PNG_DATA}, headers=auth_headers)
        assert resp.status_code == 201
        ids.append(resp.json()["data"]["id"])
    return ids


# --- info ---

def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_api_info_lists_endpoints(client):
    resp = client.get("/api")
    assert resp.status_code == 200
    assert resp.json()["endpoints"]["carousel"] == "/api/carousel"


# --- auth ---

@pytest.mark.parametrize(
    "method, path",
    [
        ("post", "/api/posts"),
        ("put", "/api/posts/1"),
        ("delete", "/api/posts/1"),
        ("post", "/api/concerts"),
        ("delete", "/api/concerts/1"),
        ("post", "/api/carousel"),
        ("put", "/api/carousel/position/1"),
        ("delete", "/api/carousel/1"),
    ],
)
def test_write_routes_require_token(client, method, path):
    resp = client.request(method.upper(), path, json={})
    assert resp.status_code == 401
    assert resp.json() == {"message": "No token provided", "errors": ["No token provided"]}


def test_invalid_token_rejected(client):
    resp = client.post("/api/posts", json=SAMPLE_POST, headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid or expired token"


def test_static_admin_token_accepted(client, app_settings, monkeypatch):
    monkeypatch.setattr(app_settings, "admin_static_token", "static-secret")
    resp = client.post("/api/posts", json=SAMPLE_POST, headers={"Authorization": "Bearer static-secret"})
    assert resp.status_code == 201


# --- posts ---

def test_list_posts_empty(client):
    resp = client.get("/api/posts")
    assert resp.status_code == 200
    assert resp.json() == {"data": [], "message": "Posts retrieved successfully"}


def test_post_lifecycle(client, auth_headers):
    resp = client.post("/api/posts", json=SAMPLE_POST, headers=auth_headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Post created successfully"
    assert body["data"]["image_url"] == "temp"
    post_id = body["data"]["id"]

    resp = client.put(
        f"/api/posts/{post_id}",
        json={**SAMPLE_POST, "title_fr": "  Tournée  "},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["title_fr"] == "Tournée"

    resp = client.get(f"/api/posts/{post_id}")
    assert resp.status_code == 200
    assert resp.json()["data"]["title_fr"] == "Tournée"

    resp = client.delete(f"/api/posts/{post_id}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Post deleted successfully"}

    assert client.get(f"/api/posts/{post_id}").status_code == 404


def test_create_post_validation_errors(client, auth_headers):
    resp = client.post("/api/posts", json={"title_fr": "  "}, headers=auth_headers)
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Validation failed"
    assert "French title is required" in body["errors"]
    assert len(body["errors"]) == 4


def test_post_image_is_served(client, auth_headers):
    resp = client.post("/api/posts", json={**SAMPLE_POST, "img64": PNG_DATA}, headers=auth_headers)
    image_url = resp.json()["data"]["image_url"]
    assert image_url.startswith("/images/post-")
    served = client.get(image_url)
    assert served.status_code == 200
    assert served.content == PNG_BYTES


def test_invalid_post_id(client):
    resp = client.get("/api/posts/abc")
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid post ID", "errors": ["Post ID must be a valid number"]}


def test_missing_post(client, auth_headers):
    assert client.get("/api/posts/999").json()["message"] == "Post not found"
    resp = client.put("/api/posts/999", json=SAMPLE_POST, headers=auth_headers)
    assert resp.status_code == 404
    assert client.delete("/api/posts/999", headers=auth_headers).status_code == 404


def test_malformed_json_is_a_bad_request(client, auth_headers):
    resp = client.post(
        "/api/posts",
        content="{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Validation failed"


# --- concerts ---

def test_concert_lifecycle(client, auth_headers):
    resp = client.post("/api/concerts", json=SAMPLE_CONCERT, headers=auth_headers)
    assert resp.status_code == 201
    concert = resp.json()["data"]
    assert concert["event_date"] == "2025-09-01T20:00:00"
    assert concert["event_name"] is None

    resp = client.put(
        f"/api/concerts/{concert['id']}",
        json={**SAMPLE_CONCERT, "venue": "", "event_name": "Festival de la Cité"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["venue"] is None

    listed = client.get("/api/concerts").json()["data"]
    assert [item["id"] for item in listed] == [concert["id"]]

    assert client.delete(f"/api/concerts/{concert['id']}", headers=auth_headers).status_code == 200
    assert client.delete(f"/api/concerts/{concert['id']}", headers=auth_headers).status_code == 404


def test_concert_with_empty_fields(client, auth_headers):
    resp = client.post(
        "/api/concerts",
        json={"city": "", "venue": "", "event_name": "", "event_url": ""},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert "City is required" in errors
    assert "Event URL is required" in errors
    assert errors.count("Either venue or event name is required") == 2


def test_invalid_concert_id(client):
    resp = client.get("/api/concerts/1x")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid concert ID"


# --- carousel ---

def test_carousel_add_and_list(client, auth_headers):
    ids = _add_pictures(client, auth_headers, 3)
    resp = client.get("/api/carousel")
    assert resp.status_code == 200
    pictures = resp.json()["data"]
    assert [picture["id"] for picture in pictures] == ids
    assert [picture["position"] for picture in pictures] == [1, 2, 3]


def test_carousel_add_requires_picture(client, auth_headers):
    resp = client.post("/api/carousel", json={}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["errors"] == ["Picture data is required"]


def test_carousel_switch_positions(client, auth_headers):
    ids = _add_pictures(client, auth_headers, 3)
    resp = client.put(f"/api/carousel/position/{ids[0]}", json={"direction": "right"}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Picture positions switched successfully"}
    order = [picture["id"] for picture in client.get("/api/carousel").json()["data"]]
    assert order == [ids[1], ids[0], ids[2]]


def test_carousel_switch_at_edge(client, auth_headers):
    ids = _add_pictures(client, auth_headers, 3)
    resp = client.put(f"/api/carousel/position/{ids[0]}", json={"direction": "left"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Cannot move picture left. No picture found at target position."


def test_carousel_switch_invalid_direction(client, auth_headers):
    resp = client.put("/api/carousel/position/1", json={"direction": "up"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["errors"] == ['Direction must be either "left" or "right"']


def test_carousel_change_image(client, auth_headers):
    ids = _add_pictures(client, auth_headers, 3)
    resp = client.put(f"/api/carousel/{ids[1]}", json={"picture64": PNG_DATA}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["position"] == 2
    assert client.put("/api/carousel/77", json={"picture64": PNG_DATA}, headers=auth_headers).status_code == 404


def test_carousel_delete_respects_minimum(client, auth_headers):
    ids = _add_pictures(client, auth_headers, 4)
    resp = client.delete(f"/api/carousel/{ids[1]}", headers=auth_headers)
    assert resp.status_code == 200
    assert [picture["position"] for picture in client.get("/api/carousel").json()["data"]] == [1, 2, 3]

    resp = client.delete(f"/api/carousel/{ids[0]}", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "You need at least 3 pictures in the carousel"


def test_get_missing_picture(client):
    resp = client.get("/api/carousel/5")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Picture not found", "errors": ["Picture not found"]}


# --- identifiers outside the SQLite INTEGER range ---

def test_oversized_post_id_is_a_bad_request(client):
    resp = client.get("/api/posts/99999999999999999999")
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid post ID", "errors": ["Post ID must be a valid number"]}


def test_oversized_picture_id_is_a_bad_request(client, auth_headers):
    resp = client.put(
        "/api/carousel/position/99999999999999999999",
        json={"direction": "left"},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid picture ID"
