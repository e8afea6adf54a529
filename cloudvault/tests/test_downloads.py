from cloudvault.errors import UpstreamError
from conftest import upload


def test_signed_url_only_for_owner(client, auth_headers, other_headers, storage):
    saved = upload(client, auth_headers, name="report.pdf")

    response = client.get(f"/api/files/{saved['id']}/signed-url", headers=other_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "File not found"
    assert storage.signed == []

    response = client.get(f"/api/files/{saved['id']}/signed-url", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["expiresIn"] == 600
    assert data["signedUrl"].startswith(f"http://storage.test/uploads/{saved['file_path']}")
    assert storage.signed == [(saved["file_path"], 600)]


def test_signed_url_for_missing_file(client, auth_headers):
    response = client.get("/api/files/999/signed-url", headers=auth_headers)
    assert response.status_code == 404


def test_signed_url_requires_auth(client, uploaded_file):
    response = client.get(f"/api/files/{uploaded_file['id']}/signed-url")
    assert response.status_code == 401


def test_signed_url_is_fresh_each_request(client, auth_headers, uploaded_file, storage):
    client.get(f"/api/files/{uploaded_file['id']}/signed-url", headers=auth_headers)
    client.get(f"/api/files/{uploaded_file['id']}/signed-url", headers=auth_headers)

    assert len(storage.signed) == 2


def test_signed_url_storage_failure(client, auth_headers, uploaded_file, storage, monkeypatch):
    def broken(key, expires_in):
        raise UpstreamError("Signed URL generation failed: connection refused")

    monkeypatch.setattr(storage, "signed_url", broken)

    response = client.get(f"/api/files/{uploaded_file['id']}/signed-url", headers=auth_headers)
    assert response.status_code == 500
    assert response.json()["code"] == "upstream_error"


def test_download_redirects_to_signed_url(client, auth_headers, uploaded_file):
    response = client.get(f"/api/files/{uploaded_file['id']}/download", headers=auth_headers,
                          follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"].startswith(f"http://storage.test/uploads/{uploaded_file['file_path']}")
    assert "X-Amz-Expires=600" in response.headers["location"]


def test_download_foreign_file(client, other_headers, uploaded_file):
    response = client.get(f"/api/files/{uploaded_file['id']}/download", headers=other_headers,
                          follow_redirects=False)

    assert response.status_code == 404
    assert "location" not in response.headers


def test_grantee_still_cannot_sign(client, auth_headers, other_headers, uploaded_file):
    client.post("/api/permissions/add", json={"file_id": uploaded_file["id"], "user_id": 2, "role": "editor"},
                headers=auth_headers)

    response = client.get(f"/api/files/{uploaded_file['id']}/signed-url", headers=other_headers)
    assert response.status_code == 404
