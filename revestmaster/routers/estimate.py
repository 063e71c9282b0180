from fastapi import APIRouter, HTTPException

from .. import schemas
from ..calculators.tiling import compute
from ..errors import InvalidInput

router = APIRouter(prefix="/estimate", tags=["estimate"])


@router.post("/", response_model=schemas.MaterialResult)
def estimate(spec: schemas.RoomSpec):
    """Stateless estimate. Nothing is saved."""
    try:
        return compute(spec)
    except InvalidInput as e:
        raise HTTPException(status_code=422, detail=str(e))
