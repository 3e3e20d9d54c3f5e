from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from config_hub.database import get_db
from config_hub.models import ReconciliationConfig
from config_hub.routers.common import apply_updates, normalize_payload
from config_hub.schemas import (
    DeleteResult,
    ReconciliationConfigCreate,
    ReconciliationConfigRead,
    ReconciliationConfigUpdate,
)

router = APIRouter(prefix="/reconciliation-configs", tags=["Reconciliation"])


def _get_config_or_404(recon_key: int, db: Session) -> ReconciliationConfig:
    config = db.get(ReconciliationConfig, recon_key)
    if not config:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Reconciliation config not found"
        )
    return config


@router.get("", response_model=list[ReconciliationConfigRead])
def list_reconciliation_configs(
    search: Optional[str] = Query(None, max_length=200),
    config_key: Optional[int] = Query(None, alias="configKey"),
    execution_layer: Optional[str] = Query(None, alias="executionLayer"),
    recon_type: Optional[str] = Query(None, alias="reconType"),
    db: Session = Depends(get_db),
) -> list[ReconciliationConfigRead]:
    stmt = select(ReconciliationConfig)

    term = (search or "").strip().lower()
    if term:
        pattern = f"%{term}%"
        stmt = stmt.where(
            or_(
                func.lower(ReconciliationConfig.source_table).like(pattern),
                func.lower(ReconciliationConfig.target_table).like(pattern),
            )
        )
    if config_key is not None:
        stmt = stmt.where(ReconciliationConfig.config_key == config_key)
    if execution_layer and execution_layer.lower() != "all":
        stmt = stmt.where(
            func.lower(ReconciliationConfig.execution_layer) == execution_layer.lower()
        )
    if recon_type and recon_type.lower() != "all":
        stmt = stmt.where(func.lower(ReconciliationConfig.recon_type) == recon_type.lower())

    stmt = stmt.order_by(ReconciliationConfig.recon_key.desc())
    return db.execute(stmt).scalars().all()


@router.post("", response_model=ReconciliationConfigRead, status_code=status.HTTP_201_CREATED)
def create_reconciliation_config(
    payload: ReconciliationConfigCreate, db: Session = Depends(get_db)
) -> ReconciliationConfigRead:
    config = ReconciliationConfig(**normalize_payload(payload.model_dump()))
    db.add(config)
    db.commit()
    db.refresh(config)
    return config


@router.get("/{recon_key}", response_model=ReconciliationConfigRead)
def get_reconciliation_config(
    recon_key: int, db: Session = Depends(get_db)
) -> ReconciliationConfigRead:
    return _get_config_or_404(recon_key, db)


@router.put("/{recon_key}", response_model=ReconciliationConfigRead)
def update_reconciliation_config(
    recon_key: int,
    payload: ReconciliationConfigUpdate,
    db: Session = Depends(get_db),
) -> ReconciliationConfigRead:
    config = _get_config_or_404(recon_key, db)
    apply_updates(config, payload.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(config)
    return config


@router.delete("/{recon_key}", response_model=DeleteResult)
def delete_reconciliation_config(recon_key: int, db: Session = Depends(get_db)) -> DeleteResult:
    config = _get_config_or_404(recon_key, db)
    db.delete(config)
    db.commit()
    return DeleteResult(message="Reconciliation config deleted successfully")
