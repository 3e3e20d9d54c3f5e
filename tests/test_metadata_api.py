from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from config_hub.models import ConfigRecord


def test_static_category_returns_defaults(client: TestClient) -> None:
    response = client.get("/metadata/recon_type")

    assert response.status_code == 200
    assert response.json() == ["count_check", "sum_check", "amount_check", "data_check"]


def test_file_delimiter_keeps_tab(client: TestClient) -> None:
    assert "\t" in client.get("/metadata/file_delimiter").json()


def test_dynamic_category_merges_stored_values(client: TestClient, db_session: Session) -> None:
    db_session.add_all(
        [
            ConfigRecord(execution_layer="silver", source_system="SAP"),
            ConfigRecord(execution_layer="Platinum", source_system=" SAP "),
            ConfigRecord(execution_layer=None, source_system="Workday"),
        ]
    )
    db_session.commit()

    layers = client.get("/metadata/execution_layer").json()
    assert layers == ["Bronze", "Silver", "Gold", "Platinum"]

    systems = client.get("/metadata/source_system").json()
    assert systems == ["SAP", "Workday"]


def test_unknown_category_returns_404(client: TestClient) -> None:
    response = client.get("/metadata/favourite_colour")

    assert response.status_code == 404
    assert response.json() == {"error": "Unknown metadata category: favourite_colour"}
