from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from config_hub.database import get_db
from config_hub.models import DataDictionaryRecord
from config_hub.routers.common import apply_updates
from config_hub.schemas import (
    DataDictionaryCreate,
    DataDictionaryRead,
    DataDictionaryUpdate,
    DeleteResult,
)

router = APIRouter(prefix="/data-dictionary", tags=["Data Dictionary"])


def _get_entry_or_404(data_dictionary_key: int, db: Session) -> DataDictionaryRecord:
    entry = db.get(DataDictionaryRecord, data_dictionary_key)
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Data dictionary entry not found"
        )
    return entry


@router.get("", response_model=list[DataDictionaryRead])
def list_data_dictionary(
    search: Optional[str] = Query(None, max_length=200),
    execution_layer: Optional[str] = Query(None, alias="executionLayer"),
    config_key: Optional[int] = Query(None, alias="configKey"),
    db: Session = Depends(get_db),
) -> list[DataDictionaryRead]:
    stmt = select(DataDictionaryRecord)

    term = (search or "").strip().lower()
    if term:
        pattern = f"%{term}%"
        stmt = stmt.where(
            or_(
                func.lower(DataDictionaryRecord.attribute_name).like(pattern),
                func.lower(DataDictionaryRecord.table_name).like(pattern),
                func.lower(DataDictionaryRecord.column_description).like(pattern),
            )
        )
    if execution_layer and execution_layer.lower() != "all":
        stmt = stmt.where(
            func.lower(DataDictionaryRecord.execution_layer) == execution_layer.lower()
        )
    if config_key is not None:
        stmt = stmt.where(DataDictionaryRecord.config_key == config_key)

    stmt = stmt.order_by(DataDictionaryRecord.data_dictionary_key.desc())
    return db.execute(stmt).scalars().all()


@router.post("", response_model=DataDictionaryRead, status_code=status.HTTP_201_CREATED)
def create_data_dictionary_entry(
    payload: DataDictionaryCreate, db: Session = Depends(get_db)
) -> DataDictionaryRead:
    entry = DataDictionaryRecord(**payload.model_dump())
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


@router.get("/{data_dictionary_key}", response_model=DataDictionaryRead)
def get_data_dictionary_entry(
    data_dictionary_key: int, db: Session = Depends(get_db)
) -> DataDictionaryRead:
    return _get_entry_or_404(data_dictionary_key, db)


@router.put("/{data_dictionary_key}", response_model=DataDictionaryRead)
def update_data_dictionary_entry(
    data_dictionary_key: int,
    payload: DataDictionaryUpdate,
    db: Session = Depends(get_db),
) -> DataDictionaryRead:
    entry = _get_entry_or_404(data_dictionary_key, db)
    apply_updates(entry, payload.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(entry)
    return entry


@router.delete("/{data_dictionary_key}", response_model=DeleteResult)
def delete_data_dictionary_entry(
    data_dictionary_key: int, db: Session = Depends(get_db)
) -> DeleteResult:
    entry = _get_entry_or_404(data_dictionary_key, db)
    db.delete(entry)
    db.commit()
    return DeleteResult(message="Data dictionary entry deleted successfully")
