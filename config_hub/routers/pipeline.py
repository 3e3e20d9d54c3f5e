from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from config_hub.database import get_db
from config_hub.models import ConfigRecord
from config_hub.routers.common import apply_updates, normalize_payload
from config_hub.schemas import DeleteResult, PipelineCreate, PipelineRead, PipelineUpdate

router = APIRouter(prefix="/pipelines", tags=["Pipelines"])

_STATUS_FLAGS = {"active": "Y", "inactive": "N", "y": "Y", "n": "N"}


def _get_pipeline_or_404(config_key: int, db: Session) -> ConfigRecord:
    pipeline = db.get(ConfigRecord, config_key)
    if not pipeline:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pipeline not found")
    return pipeline


@router.get("", response_model=list[PipelineRead])
def list_pipelines(
    search: Optional[str] = Query(None, max_length=200),
    execution_layer: Optional[str] = Query(None, alias="executionLayer"),
    source_system: Optional[str] = Query(None, alias="sourceSystem"),
    pipeline_status: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
) -> list[PipelineRead]:
    stmt = select(ConfigRecord)

    term = (search or "").strip().lower()
    if term:
        pattern = f"%{term}%"
        stmt = stmt.where(
            or_(
                func.lower(ConfigRecord.source_table_name).like(pattern),
                func.lower(ConfigRecord.target_table_name).like(pattern),
                func.lower(ConfigRecord.source_system).like(pattern),
                func.lower(ConfigRecord.target_system).like(pattern),
            )
        )
    if execution_layer and execution_layer.lower() != "all":
        stmt = stmt.where(func.lower(ConfigRecord.execution_layer) == execution_layer.lower())
    if source_system and source_system.lower() != "all":
        stmt = stmt.where(func.lower(ConfigRecord.source_system) == source_system.lower())
    if pipeline_status and pipeline_status.lower() != "all":
        flag = _STATUS_FLAGS.get(pipeline_status.lower(), pipeline_status)
        stmt = stmt.where(ConfigRecord.active_flag == flag)

    stmt = stmt.order_by(ConfigRecord.config_key.desc())
    return db.execute(stmt).scalars().all()


@router.post("", response_model=PipelineRead, status_code=status.HTTP_201_CREATED)
def create_pipeline(payload: PipelineCreate, db: Session = Depends(get_db)) -> PipelineRead:
    # Unset flags fall back to the column defaults.
    pipeline = ConfigRecord(**normalize_payload(payload.model_dump(exclude_none=True)))
    db.add(pipeline)
    db.commit()
    db.refresh(pipeline)
    return pipeline


@router.get("/{config_key}", response_model=PipelineRead)
def get_pipeline(config_key: int, db: Session = Depends(get_db)) -> PipelineRead:
    return _get_pipeline_or_404(config_key, db)


@router.put("/{config_key}", response_model=PipelineRead)
def update_pipeline(
    config_key: int, payload: PipelineUpdate, db: Session = Depends(get_db)
) -> PipelineRead:
    pipeline = _get_pipeline_or_404(config_key, db)
    apply_updates(pipeline, payload.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(pipeline)
    return pipeline


@router.delete("/{config_key}", response_model=DeleteResult)
def delete_pipeline(config_key: int, db: Session = Depends(get_db)) -> DeleteResult:
    pipeline = _get_pipeline_or_404(config_key, db)
    db.delete(pipeline)
    db.commit()
    return DeleteResult(message="Pipeline deleted successfully")


temporary_tables_router = APIRouter(prefix="/temporary-tables", tags=["Pipelines"])


@temporary_tables_router.get("", response_model=list[str])
def list_temporary_tables(db: Session = Depends(get_db)) -> list[str]:
    column = ConfigRecord.temporary_target_table
    stmt = select(column).where(column.is_not(None), column != "").distinct().order_by(column)
    return db.execute(stmt).scalars().all()
