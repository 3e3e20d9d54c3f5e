from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from config_hub.database import get_db
from config_hub.services.metadata_lookup import UnknownLookupCategory, get_lookup_values

router = APIRouter(prefix="/metadata", tags=["Metadata"])


@router.get("/{category}", response_model=list[str])
def get_metadata_options(category: str, db: Session = Depends(get_db)) -> list[str]:
    try:
        return get_lookup_values(db, category)
    except UnknownLookupCategory as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
