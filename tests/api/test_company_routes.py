"""Company Routes — REST surface over CompanyService.

Tests cover:
    - POST/GET/PATCH/DELETE happy path with status codes
    - Field errors -> 400 INVALID_FIELD, duplicate GST -> 409 CONFLICT
    - Missing record -> 404, empty PATCH -> 400 NO_FIELDS_TO_UPDATE
    - Malformed body -> 400 INVALID_PAYLOAD
    - search, validate and gst-exists endpoints
"""

GST = "27ABCDE1234F1Z5"
COMPANY = {"company_name": "Acme Traders", "gst_no": GST, "state_code": "27"}


async def _create(client, body=COMPANY):
    return await client.post("/api/v1/companies", json=body)


async def test_create_returns_201(client):
    response = await _create(client, {**COMPANY, "company_name": "  Acme Traders "})
    assert response.status_code == 201
    data = response.json()
    assert data["id"] == 1
    assert data["company_name"] == "Acme Traders"
    assert data["created_at"] == data["updated_at"]


async def test_get_and_list(client):
    created = (await _create(client)).json()
    assert (await client.get(f"/api/v1/companies/{created['id']}")).json() == created
    assert (await client.get("/api/v1/companies")).json() == [created]


async def test_invalid_field_returns_400(client):
    response = await _create(client, {**COMPANY, "gst_no": "123"})
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INVALID_FIELD"
    assert error["message"] == "GST number must be 15 characters and follow GST format"
    assert error["context"]["field"] == "gst_no"


async def test_duplicate_gst_returns_409(client):
    await _create(client)
    response = await _create(client, {**COMPANY, "company_name": "Other"})
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


async def test_missing_field_returns_invalid_payload(client):
    response = await client.post("/api/v1/companies", json={"company_name": "Acme"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PAYLOAD"


async def test_get_missing_returns_404(client):
    response = await client.get("/api/v1/companies/9")
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Company with id 9 not found"


async def test_patch_updates_only_supplied_fields(client):
    created = (await _create(client)).json()
    response = await client.patch(
        f"/api/v1/companies/{created['id']}", json={"state_code": "29"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["state_code"] == "29"
    assert data["company_name"] == created["company_name"]


async def test_empty_patch_returns_400(client):
    created = (await _create(client)).json()
    response = await client.patch(f"/api/v1/companies/{created['id']}", json={})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "NO_FIELDS_TO_UPDATE"


async def test_delete_returns_204_then_404(client):
    created = (await _create(client)).json()
    response = await client.delete(f"/api/v1/companies/{created['id']}")
    assert response.status_code == 204
    response = await client.delete(f"/api/v1/companies/{created['id']}")
    assert response.status_code == 404


async def test_search(client):
    await _create(client)
    response = await client.get("/api/v1/companies/search", params={"q": "ACME"})
    assert len(response.json()) == 1
    response = await client.get("/api/v1/companies/search", params={"q": "globex"})
    assert response.json() == []


async def test_validate_does_not_persist(client):
    response = await client.post("/api/v1/companies/validate", json=COMPANY)
    assert response.json()["valid"] is True
    assert (await client.get("/api/v1/companies")).json() == []


async def test_validate_update_reports_error(client):
    response = await client.post(
        "/api/v1/companies/validate-update", json={"company_name": ""},
    )
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Company name cannot be empty"


async def test_gst_exists(client):
    created = (await _create(client)).json()
    response = await client.get("/api/v1/companies/gst-exists", params={"gst_no": GST})
    assert response.json() == {"gst_no": GST, "exists": True}
    response = await client.get(
        "/api/v1/companies/gst-exists",
        params={"gst_no": GST, "exclude_id": created["id"]},
    )
    assert response.json()["exists"] is False
