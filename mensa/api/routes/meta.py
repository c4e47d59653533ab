from fastapi import APIRouter, Depends

from mensa.api.dependencies import get_catalog
from mensa.api.responses import send_result
from mensa.domain.Catalog import Catalog

router = APIRouter(prefix="/meta")


@router.get("/legend")
def get_legend(catalog: Catalog = Depends(get_catalog)):
    return send_result([item.model_dump() for item in catalog.legend])
