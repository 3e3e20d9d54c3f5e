from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from config_hub.models import AuditRecord, ErrorRecord


@pytest.fixture()
def run_history(db_session: Session) -> None:
    db_session.add_all(
        [
            AuditRecord(
                code_name="bronze_orders_load",
                run_id="run-1",
                status="SUCCESS",
                start_time=datetime(2024, 3, 1, 8, 0, 0),
                end_time=datetime(2024, 3, 1, 8, 2, 30),
            ),
            AuditRecord(
                code_name="silver_orders_merge",
                run_id="run-2",
                status="FAILED",
                start_time=datetime(2024, 3, 2, 9, 0, 0),
                end_time=datetime(2024, 3, 2, 9, 0, 45),
            ),
            AuditRecord(
                code_name="gold_revenue_mart",
                run_id="run-3",
                status="RUNNING",
                start_time=datetime(2024, 3, 3, 10, 0, 0),
            ),
            AuditRecord(
                code_name="data_quality_checks",
                run_id="run-4",
                status="SUCCESS",
                start_time=datetime(2024, 3, 4, 11, 0, 0),
                end_time=datetime(2024, 3, 4, 11, 0, 10),
            ),
            AuditRecord(
                code_name="ingest_customers",
                run_id="run-5",
                status="SCHEDULED",
                start_time=datetime(2024, 3, 5, 12, 0, 0),
            ),
        ]
    )
    db_session.add_all(
        [
            ErrorRecord(code_name="silver_orders_merge", execution_time=datetime(2024, 3, 2, 9, 0, 45), error_details="duplicate key"),
            ErrorRecord(code_name="bronze_orders_load", execution_time=datetime(2024, 2, 1, 7, 0, 0), error_details="timeout"),
        ]
    )
    db_session.commit()


def test_metrics_count_runs_by_status(client: TestClient, run_history) -> None:
    response = client.get("/dashboard/metrics")

    assert response.status_code == 200
    assert response.json() == {
        "totalPipelines": 5,
        "successfulRuns": 2,
        "failedRuns": 1,
        "scheduledRuns": 1,
        "runningRuns": 1,
    }


def test_metrics_respect_date_range(client: TestClient, run_history) -> None:
    response = client.get(
        "/dashboard/metrics",
        params={"startDate": "2024-03-02T00:00:00", "endDate": "2024-03-03T23:59:59"},
    )

    body = response.json()
    assert body["totalPipelines"] == 2
    assert body["failedRuns"] == 1
    assert body["runningRuns"] == 1


def test_dag_summary_groups_by_layer(client: TestClient, run_history) -> None:
    body = client.get("/dashboard/dag-summary").json()

    assert body["bronze"] == {"total": 2, "success": 1, "failed": 0}
    assert body["silver"] == {"total": 1, "success": 0, "failed": 1}
    assert body["gold"] == {"total": 1, "success": 0, "failed": 0}
    assert body["dataQuality"] == {"total": 1, "success": 1, "failed": 0}
    assert body["reconciliation"] == {"total": 0, "success": 0, "failed": 0}


def test_dag_runs_are_paged_newest_first(client: TestClient, run_history) -> None:
    first = client.get("/dashboard/dags", params={"page": 1, "limit": 2}).json()

    assert first["total"] == 5
    assert first["page"] == 1
    assert first["limit"] == 2
    assert [run["dagName"] for run in first["data"]] == ["ingest_customers", "data_quality_checks"]
    assert first["data"][0]["layer"] == "Bronze"
    assert first["data"][1]["layer"] == "Quality"
    assert first["data"][1]["duration"] == 10

    third = client.get("/dashboard/dags", params={"page": 3, "limit": 2}).json()
    assert [run["dagName"] for run in third["data"]] == ["bronze_orders_load"]
    assert third["data"][0]["duration"] == 150


def test_dag_runs_filters_and_sorting(client: TestClient, run_history) -> None:
    failed = client.get("/dashboard/dags", params={"status": "failed"}).json()
    assert [run["runId"] for run in failed["data"]] == ["run-2"]

    silver = client.get("/dashboard/dags", params={"layer": "silver"}).json()
    assert [run["dagName"] for run in silver["data"]] == ["silver_orders_merge"]

    searched = client.get("/dashboard/dags", params={"search": "orders"}).json()
    assert searched["total"] == 2

    by_name = client.get("/dashboard/dags", params={"sortBy": "dagName", "sortOrder": "asc", "limit": 10}).json()
    assert [run["dagName"] for run in by_name["data"]] == sorted(run["dagName"] for run in by_name["data"])


def test_dag_runs_reject_bad_sort_order(client: TestClient) -> None:
    response = client.get("/dashboard/dags", params={"sortOrder": "sideways"})

    assert response.status_code == 400


def test_error_logs_newest_first_with_range(client: TestClient, run_history) -> None:
    all_errors = client.get("/dashboard/errors").json()
    assert [error["errorDetails"] for error in all_errors] == ["duplicate key", "timeout"]

    march = client.get(
        "/dashboard/errors",
        params={"startDate": "2024-03-01T00:00:00Z", "endDate": "2024-03-31T23:59:59Z"},
    ).json()
    assert [error["codeName"] for error in march] == ["silver_orders_merge"]


@pytest.mark.parametrize("layer", ["dataQuality", "data_quality", "data quality", "Quality"])
def test_dag_runs_layer_filter_accepts_summary_keys(client: TestClient, run_history, layer: str) -> None:
    body = client.get("/dashboard/dags", params={"layer": layer}).json()

    assert [run["dagName"] for run in body["data"]] == ["data_quality_checks"]
    assert body["data"][0]["layer"] == "Quality"


def test_dag_runs_unknown_layer_matches_nothing(client: TestClient, run_history) -> None:
    body = client.get("/dashboard/dags", params={"layer": "platinum"}).json()

    assert body["total"] == 0
    assert body["data"] == []
