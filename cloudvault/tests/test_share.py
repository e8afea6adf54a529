import re

import pytest

from cloudvault.errors import UpstreamError
from cloudvault.services import share as share_service


def test_share_link_round_trip(client, auth_headers, uploaded_file):
    response = client.post(f"/api/share/{uploaded_file['id']}", headers=auth_headers)

    assert response.status_code == 200, response.text
    data = response.json()
    token = data["share"]["token"]
    assert re.fullmatch(r"[0-9a-f]{40}", token)
    assert data["share"]["permission"] == "view"
    assert data["share"]["owner_id"] == 1
    assert data["shareUrl"] == f"http://localhost:5000/api/share/access/{token}"

    response = client.get(f"/api/share/access/{token}")
    assert response.status_code == 200
    assert response.json()["permission"] == "view"
    assert response.json()["file"] == uploaded_file


def test_share_link_works_for_any_caller(client, auth_headers, other_headers, uploaded_file):
    token = client.post(f"/api/share/{uploaded_file['id']}", headers=auth_headers).json()["share"]["token"]

    client.post("/api/auth/logout", headers=auth_headers)

    response = client.get(f"/api/share/access/{token}", headers=other_headers)
    assert response.status_code == 200
    assert response.json()["file"]["id"] == uploaded_file["id"]


@pytest.mark.parametrize("token", ["wrong-token", "0" * 40, "%25"])
def test_unknown_token(client, token):
    response = client.get(f"/api/share/access/{token}")

    assert response.status_code == 404
    assert response.json() == {"error": "Invalid share link", "code": "not_found"}


def test_tokens_are_unique_per_link(client, auth_headers, uploaded_file):
    first = client.post(f"/api/share/{uploaded_file['id']}", headers=auth_headers).json()["share"]["token"]
    second = client.post(f"/api/share/{uploaded_file['id']}", headers=auth_headers).json()["share"]["token"]

    assert first != second
    links = client.get(f"/api/share/file/{uploaded_file['id']}", headers=auth_headers).json()
    assert {link["token"] for link in links} == {first, second}


def test_only_owner_can_share(client, other_headers, uploaded_file):
    response = client.post(f"/api/share/{uploaded_file['id']}", headers=other_headers)
    assert response.status_code == 404

    response = client.get(f"/api/share/file/{uploaded_file['id']}", headers=other_headers)
    assert response.status_code == 404


def test_share_requires_auth(client, uploaded_file):
    assert client.post(f"/api/share/{uploaded_file['id']}").status_code == 401


def test_revoke_share_link(client, auth_headers, other_headers, uploaded_file):
    token = client.post(f"/api/share/{uploaded_file['id']}", headers=auth_headers).json()["share"]["token"]

    assert client.delete(f"/api/share/{token}", headers=other_headers).status_code == 404
    assert client.get(f"/api/share/access/{token}").status_code == 200

    response = client.delete(f"/api/share/{token}", headers=auth_headers)
    assert response.status_code == 200
    assert client.get(f"/api/share/access/{token}").status_code == 404
    assert client.delete(f"/api/share/{token}", headers=auth_headers).status_code == 404


def test_trashed_file_link_is_dormant_until_restore(client, auth_headers, uploaded_file):
    token = client.post(f"/api/share/{uploaded_file['id']}", headers=auth_headers).json()["share"]["token"]

    client.delete(f"/api/files/{uploaded_file['id']}/trash", headers=auth_headers)
    assert client.get(f"/api/share/access/{token}").status_code == 404

    client.put(f"/api/files/{uploaded_file['id']}/restore", headers=auth_headers)
    assert client.get(f"/api/share/access/{token}").status_code == 200


def test_link_dies_with_permanent_delete(client, auth_headers, uploaded_file):
    token = client.post(f"/api/share/{uploaded_file['id']}", headers=auth_headers).json()["share"]["token"]

    client.delete(f"/api/files/{uploaded_file['id']}/permanent", headers=auth_headers)

    assert client.get(f"/api/share/access/{token}").status_code == 404


def test_token_collision_is_retried(db, client, auth_headers, uploaded_file, monkeypatch):
    tokens = iter(["a" * 40, "a" * 40, "b" * 40])
    monkeypatch.setattr(share_service, "generate_share_token", lambda: next(tokens))

    first = share_service.create_share_link(db, 1, uploaded_file["id"])
    second = share_service.create_share_link(db, 1, uploaded_file["id"])

    assert first.token == "a" * 40
    assert second.token == "b" * 40


def test_token_collision_gives_up(db, client, auth_headers, uploaded_file, monkeypatch):
    monkeypatch.setattr(share_service, "generate_share_token", lambda: "c" * 40)
    share_service.create_share_link(db, 1, uploaded_file["id"])

    with pytest.raises(UpstreamError):
        share_service.create_share_link(db, 1, uploaded_file["id"])


def test_generated_tokens_carry_20_random_bytes():
    token = share_service.generate_share_token()

    assert len(bytes.fromhex(token)) == 20
