from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from config_hub.models import ConfigRecord


def _create_pipeline(db: Session, **overrides) -> ConfigRecord:
    values = {
        "execution_layer": "Bronze",
        "source_system": "SAP",
        "source_type": "Table",
        "source_table_name": "orders",
        "target_table_name": "bronze_orders",
        "active_flag": "Y",
    }
    values.update(overrides)
    pipeline = ConfigRecord(**values)
    db.add(pipeline)
    db.commit()
    db.refresh(pipeline)
    return pipeline


def test_create_pipeline_applies_flag_defaults(client: TestClient) -> None:
    response = client.post(
        "/pipelines",
        json={
            "executionLayer": "Silver",
            "sourceSystem": "Salesforce",
            "connectionId": 7,
            "sourceTableName": "accounts",
            "targetTableName": "silver_accounts",
            "loadType": "SCD2",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["configKey"] > 0
    assert body["connectionId"] == 7
    assert body["activeFlag"] == "Y"
    assert body["enableDynamicSchema"] == "N"
    assert body["fullDataRefreshFlag"] == "N"


def test_create_pipeline_rejects_overlong_values(client: TestClient) -> None:
    response = client.post("/pipelines", json={"sourceTableName": "x" * 31})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid pipeline data"


def test_list_pipelines_filters(client: TestClient, db_session: Session) -> None:
    _create_pipeline(db_session)
    _create_pipeline(
        db_session,
        execution_layer="Gold",
        source_system="Workday",
        source_table_name="workers",
        target_table_name="gold_workers",
        active_flag="N",
    )

    all_rows = client.get("/pipelines").json()
    assert [row["sourceTableName"] for row in all_rows] == ["workers", "orders"]

    gold = client.get("/pipelines", params={"executionLayer": "gold"}).json()
    assert [row["sourceTableName"] for row in gold] == ["workers"]

    sap = client.get("/pipelines", params={"sourceSystem": "sap"}).json()
    assert [row["sourceTableName"] for row in sap] == ["orders"]

    inactive = client.get("/pipelines", params={"status": "inactive"}).json()
    assert [row["sourceTableName"] for row in inactive] == ["workers"]

    searched = client.get("/pipelines", params={"search": "BRONZE_"}).json()
    assert [row["sourceTableName"] for row in searched] == ["orders"]


def test_update_and_delete_pipeline(client: TestClient, db_session: Session) -> None:
    pipeline = _create_pipeline(db_session)

    updated = client.put(
        f"/pipelines/{pipeline.config_key}",
        json={"loadType": "Incremental", "fullDataRefreshFlag": "Y"},
    )
    assert updated.status_code == 200
    assert updated.json()["loadType"] == "Incremental"
    assert updated.json()["fullDataRefreshFlag"] == "Y"
    assert updated.json()["sourceTableName"] == "orders"

    deleted = client.delete(f"/pipelines/{pipeline.config_key}")
    assert deleted.json() == {"success": True, "message": "Pipeline deleted successfully"}

    missing = client.get(f"/pipelines/{pipeline.config_key}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Pipeline not found"}


def test_temporary_tables_are_distinct_and_sorted(client: TestClient, db_session: Session) -> None:
    _create_pipeline(db_session, temporary_target_table="tmp_orders")
    _create_pipeline(db_session, temporary_target_table="tmp_accounts")
    _create_pipeline(db_session, temporary_target_table="tmp_orders")
    _create_pipeline(db_session, temporary_target_table="")
    _create_pipeline(db_session, temporary_target_table=None)

    response = client.get("/temporary-tables")

    assert response.status_code == 200
    assert response.json() == ["tmp_accounts", "tmp_orders"]
