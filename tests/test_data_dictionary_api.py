from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from config_hub.models import DataDictionaryRecord


def _create_entry(db: Session, **overrides) -> DataDictionaryRecord:
    values = {
        "config_key": 1,
        "execution_layer": "Bronze",
        "schema_name": "sales",
        "table_name": "orders",
        "attribute_name": "order_id",
        "data_type": "integer",
        "active_flag": "Y",
    }
    values.update(overrides)
    entry = DataDictionaryRecord(**values)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def test_create_entry_truncates_to_column_widths(client: TestClient) -> None:
    response = client.post(
        "/data-dictionary",
        json={
            "configKey": 3,
            "executionLayer": "Silver",
            "tableName": "t" * 80,
            "attributeName": "a" * 150,
            "dataType": "varchar",
            "columnDescription": "d" * 200,
            "isPrimaryKey": "N",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert len(body["tableName"]) == 50
    assert len(body["attributeName"]) == 100
    assert len(body["columnDescription"]) == 150
    assert body["activeFlag"] == "Y"
    assert body["insertDate"] is not None


def test_create_entry_requires_core_fields(client: TestClient) -> None:
    response = client.post("/data-dictionary", json={"executionLayer": "Bronze"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid data dictionary data"
    fields = {detail["field"] for detail in body["details"]}
    assert {"configKey", "attributeName", "dataType"} <= fields


def test_list_entries_filters(client: TestClient, db_session: Session) -> None:
    _create_entry(db_session)
    _create_entry(db_session, config_key=2, execution_layer="Gold", attribute_name="revenue", column_description="Net revenue")

    assert [row["attributeName"] for row in client.get("/data-dictionary").json()] == ["revenue", "order_id"]

    by_layer = client.get("/data-dictionary", params={"executionLayer": "GOLD"}).json()
    assert [row["attributeName"] for row in by_layer] == ["revenue"]

    by_config = client.get("/data-dictionary", params={"configKey": 1}).json()
    assert [row["attributeName"] for row in by_config] == ["order_id"]

    by_description = client.get("/data-dictionary", params={"search": "net"}).json()
    assert [row["attributeName"] for row in by_description] == ["revenue"]


def test_update_and_delete_entry(client: TestClient, db_session: Session) -> None:
    entry = _create_entry(db_session)

    updated = client.put(
        f"/data-dictionary/{entry.data_dictionary_key}",
        json={"dataType": "bigint", "isNotNull": "Y"},
    )
    assert updated.status_code == 200
    assert updated.json()["dataType"] == "bigint"
    assert updated.json()["isNotNull"] == "Y"
    assert updated.json()["attributeName"] == "order_id"

    deleted = client.delete(f"/data-dictionary/{entry.data_dictionary_key}")
    assert deleted.json()["success"] is True

    missing = client.get(f"/data-dictionary/{entry.data_dictionary_key}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Data dictionary entry not found"}


def test_update_rejects_null_required_fields(client: TestClient, db_session: Session) -> None:
    entry = _create_entry(db_session)

    response = client.put(
        f"/data-dictionary/{entry.data_dictionary_key}",
        json={"attributeName": None, "dataType": None},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid data dictionary data"
    assert {detail["field"] for detail in body["details"]} == {"attributeName", "dataType"}

    cleared_optional = client.put(f"/data-dictionary/{entry.data_dictionary_key}", json={"columnDescription": None})
    assert cleared_optional.status_code == 200
