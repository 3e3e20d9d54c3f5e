from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from config_hub.database import get_db
from config_hub.models import DataQualityConfig
from config_hub.routers.common import apply_updates, normalize_payload
from config_hub.schemas import (
    DataQualityConfigCreate,
    DataQualityConfigRead,
    DataQualityConfigUpdate,
    DeleteResult,
)

router = APIRouter(prefix="/data-quality-configs", tags=["Data Quality"])


def _get_config_or_404(data_quality_key: int, db: Session) -> DataQualityConfig:
    config = db.get(DataQualityConfig, data_quality_key)
    if not config:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Data quality config not found"
        )
    return config


@router.get("", response_model=list[DataQualityConfigRead])
def list_data_quality_configs(
    search: Optional[str] = Query(None, max_length=200),
    config_key: Optional[int] = Query(None, alias="configKey"),
    execution_layer: Optional[str] = Query(None, alias="executionLayer"),
    validation_type: Optional[str] = Query(None, alias="validationType"),
    db: Session = Depends(get_db),
) -> list[DataQualityConfigRead]:
    stmt = select(DataQualityConfig)

    term = (search or "").strip().lower()
    if term:
        pattern = f"%{term}%"
        stmt = stmt.where(
            or_(
                func.lower(DataQualityConfig.table_name).like(pattern),
                func.lower(DataQualityConfig.attribute_name).like(pattern),
            )
        )
    if config_key is not None:
        stmt = stmt.where(DataQualityConfig.config_key == config_key)
    if execution_layer and execution_layer.lower() != "all":
        stmt = stmt.where(func.lower(DataQualityConfig.execution_layer) == execution_layer.lower())
    if validation_type and validation_type.lower() != "all":
        stmt = stmt.where(DataQualityConfig.validation_type == validation_type.upper())

    stmt = stmt.order_by(DataQualityConfig.data_quality_key.desc())
    return db.execute(stmt).scalars().all()


@router.post("", response_model=DataQualityConfigRead, status_code=status.HTTP_201_CREATED)
def create_data_quality_config(
    payload: DataQualityConfigCreate, db: Session = Depends(get_db)
) -> DataQualityConfigRead:
    config = DataQualityConfig(**normalize_payload(payload.model_dump()))
    db.add(config)
    db.commit()
    db.refresh(config)
    return config


@router.get("/{data_quality_key}", response_model=DataQualityConfigRead)
def get_data_quality_config(
    data_quality_key: int, db: Session = Depends(get_db)
) -> DataQualityConfigRead:
    return _get_config_or_404(data_quality_key, db)


@router.put("/{data_quality_key}", response_model=DataQualityConfigRead)
def update_data_quality_config(
    data_quality_key: int,
    payload: DataQualityConfigUpdate,
    db: Session = Depends(get_db),
) -> DataQualityConfigRead:
    config = _get_config_or_404(data_quality_key, db)
    apply_updates(config, payload.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(config)
    return config


@router.delete("/{data_quality_key}", response_model=DeleteResult)
def delete_data_quality_config(
    data_quality_key: int, db: Session = Depends(get_db)
) -> DeleteResult:
    config = _get_config_or_404(data_quality_key, db)
    db.delete(config)
    db.commit()
    return DeleteResult(message="Data quality config deleted successfully")
