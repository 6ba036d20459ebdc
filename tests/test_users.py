from fastapi import status

from contact_api.auth import verify_password


def test_get_current_user(client, auth_headers):
    response = client.get("/api/users/current", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"] == {"username": "test", "name": "test"}


def test_update_name_keeps_password(client, auth_headers, user, db_session):
    response = client.patch(
        "/api/users/current", json={"name": "renamed"}, headers=auth_headers
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["name"] == "renamed"

    db_session.refresh(user)
    assert user.name == "renamed"
    assert verify_password("test", user.password)


def test_update_password_is_hashed(client, auth_headers, user, db_session):
    response = client.patch(
        "/api/users/current", json={"password": "changed"}, headers=auth_headers
    )
    assert response.status_code == status.HTTP_200_OK

    db_session.refresh(user)
    assert user.password != "changed"
    assert verify_password("changed", user.password)
    assert user.name == "test"


def test_update_rejects_invalid_payload(client, auth_headers):
    response = client.patch(
        "/api/users/current", json={"name": ""}, headers=auth_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"]


def test_logout_invalidates_token(client, auth_headers, user, db_session):
    response = client.delete("/api/users/current", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"] == "OK"

    db_session.refresh(user)
    assert user.token is None

    again = client.get("/api/users/current", headers=auth_headers)
    assert again.status_code == status.HTTP_401_UNAUTHORIZED
