import pytest


@pytest.mark.parametrize("code, message", [
    (400, "Bad request."),
    (401, "Unauthorized."),
    (403, "Forbidden."),
    (404, "This route does not exist."),
    (405, "This request method is not allowed."),
    (426, "Upgrade required."),
    (429, "Too many requests."),
    (500, "Internal server error."),
    (503, "Service currently unavailable."),
])
def test_error_route_with_code(client, code, message):
    response = client.get(f"/error?code={code}")

    assert response.status_code == code
    assert response.json() == {"status": "error", "message": message}


def test_error_route_without_code(client):
    response = client.get("/error")

    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "Bad request."}


def test_error_route_with_unknown_code(client):
    response = client.get("/error?code=418")

    assert response.status_code == 500
    assert response.json() == {"status": "error", "message": "Unknown error."}


def test_error_route_with_invalid_code(client):
    response = client.get("/error?code=abc")

    assert response.status_code == 400
    assert response.json()["status"] == "error"


def test_not_found_error_route(client):
    response = client.get("/error/notfound")

    assert response.status_code == 404
    assert response.json() == {"status": "error", "message": "This route does not exist!"}


def test_unknown_route(client, auth_headers):
    response = client.get("/api/product/unknown", headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"status": "error", "message": "This route does not exist."}


def test_unknown_route_outside_api(client):
    response = client.get("/catalog/unknown")

    assert response.status_code == 404
    assert response.json() == {"status": "error", "message": "This route does not exist."}
