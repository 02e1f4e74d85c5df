import pytest


@pytest.fixture
def stocked_client(test_client):
    test_client.post(
        "/api/components",
        json={"name": "CL10A106KP8NNNC", "category": "Capacitors", "quantity": 12,
              "specifications": {"capacitance": "10uF"}},
    )
    return test_client


def test_csv_export(stocked_client):
    response = stocked_client.get("/api/export/csv")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="inventory-export-' in response.headers["content-disposition"]
    assert response.text.splitlines()[0].startswith('"ID","Name","Description"')
    assert "CL10A106KP8NNNC" in response.text


def test_xls_export(stocked_client):
    response = stocked_client.get("/api/export/xls")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/vnd.ms-excel"
    assert "<th>Min Stock Level</th>" in response.text


def test_json_backup_roundtrip(stocked_client):
    backup = stocked_client.get("/api/export/json")
    assert backup.status_code == 200
    assert backup.json()["components"][0]["specifications"] == {"capacitance": "10uF"}

    response = stocked_client.post(
        "/api/import/file", files={"file": ("backup.json", backup.content, "application/json")}
    )
    assert response.status_code == 200, response.text
    assert response.json()["data"]["updated_count"] == 1
    assert len(stocked_client.get("/api/components").json()["data"]) == 1


def test_unknown_export_format(test_client):
    assert test_client.get("/api/export/pdf").status_code == 422
