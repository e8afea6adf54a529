import pytest
from sqlalchemy.dialects import postgresql

from cloudvault.services.search import fulltext_query, websearch_terms
from conftest import upload


@pytest.fixture
def library(client, auth_headers, other_headers):
    files = {name: upload(client, auth_headers, name=name, content=b"x", content_type="text/plain")
             for name in ["Annual Report 2023.pdf", "annual_budget.xlsx", "holiday photo.jpg", "100%_done.txt"]}
    upload(client, other_headers, name="annual secret.pdf")
    trashed = upload(client, auth_headers, name="annual old.pdf")
    client.delete(f"/api/files/{trashed['id']}/trash", headers=auth_headers)
    return files


def test_search_files_is_case_insensitive_and_scoped(client, auth_headers, library):
    response = client.get("/api/search/files?q=ANNUAL", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["query"] == "ANNUAL"
    assert [f["file_name"] for f in data["results"]] == ["annual_budget.xlsx", "Annual Report 2023.pdf"]
    assert set(data) == {"query", "results"}


def test_search_files_pagination(client, auth_headers, library):
    data = client.get("/api/search/files?q=annual&limit=1&offset=1", headers=auth_headers).json()
    assert [f["file_name"] for f in data["results"]] == ["Annual Report 2023.pdf"]


def test_search_wildcards_match_literally(client, auth_headers, library):
    data = client.get("/api/search/files", params={"q": "%"}, headers=auth_headers).json()
    assert [f["file_name"] for f in data["results"]] == ["100%_done.txt"]

    data = client.get("/api/search/files", params={"q": "t_2"}, headers=auth_headers).json()
    assert data["results"] == []


def test_search_query_is_trimmed(client, auth_headers, library):
    data = client.get("/api/search/files", params={"q": "  holiday  "}, headers=auth_headers).json()
    assert data["query"] == "holiday"
    assert len(data["results"]) == 1


@pytest.mark.parametrize("path", ["/api/search/files", "/api/search/folders", "/api/search/fulltext"])
@pytest.mark.parametrize("query", ["", "?q=", "?q=%20%20"])
def test_search_requires_query(client, auth_headers, path, query):
    response = client.get(f"{path}{query}", headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "q required"


def test_search_requires_auth(client):
    assert client.get("/api/search/files?q=a").status_code == 401


def test_search_folders(client, auth_headers, other_headers):
    client.post("/api/folders", json={"name": "Tax Returns"}, headers=auth_headers)
    client.post("/api/folders", json={"name": "Photos"}, headers=auth_headers)
    client.post("/api/folders", json={"name": "tax other"}, headers=other_headers)

    data = client.get("/api/search/folders?q=tax", headers=auth_headers).json()
    assert data["query"] == "tax"
    assert [folder["name"] for folder in data["results"]] == ["Tax Returns"]


def test_fulltext_requires_every_term(client, auth_headers, library):
    data = client.get("/api/search/fulltext", params={"q": "annual report"}, headers=auth_headers).json()

    assert data["query"] == "annual report"
    assert [f["file_name"] for f in data["results"]] == ["Annual Report 2023.pdf"]


def test_fulltext_excludes_negated_terms(client, auth_headers, library):
    data = client.get("/api/search/fulltext", params={"q": "annual -budget"}, headers=auth_headers).json()
    assert [f["file_name"] for f in data["results"]] == ["Annual Report 2023.pdf"]


def test_websearch_terms():
    assert websearch_terms('"annual report" or -draft -') == (["annual", "report"], ["draft"])
    assert websearch_terms("or") == ([], [])


def test_fulltext_response_carries_message(client, auth_headers, library):
    data = client.get("/api/search/fulltext", params={"q": "holiday"}, headers=auth_headers).json()
    assert data["message"] == "Full text search results"


def test_fulltext_query_on_postgresql(db):
    query = fulltext_query(db, 1, "annual -draft", "postgresql")
    sql = str(query.statement.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}))

    assert "to_tsvector('simple', files.file_name) @@ websearch_to_tsquery('simple', 'annual -draft')" in sql
    assert "files.owner_id = 1" in sql
    assert "files.is_deleted IS false" in sql
    assert "ILIKE" not in sql.upper()


def test_fulltext_query_without_required_terms(db):
    assert fulltext_query(db, 1, "-draft", "sqlite") is None
