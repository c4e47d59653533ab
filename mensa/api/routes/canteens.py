from fastapi import APIRouter, Depends

from mensa.api.dependencies import get_catalog
from mensa.api.errors import NotFoundError
from mensa.api.responses import send_result
from mensa.domain.Catalog import Canteen, Catalog

router = APIRouter(prefix="/canteens")


def _require_canteen(catalog: Catalog, canteen_id: str) -> Canteen:
    canteen = catalog.get_canteen(canteen_id)
    if canteen is None:
        raise NotFoundError("canteen")
    return canteen


@router.get("")
def list_canteens(catalog: Catalog = Depends(get_catalog)):
    return send_result([canteen.model_dump() for canteen in catalog.canteens])


@router.get("/{canteen_id}")
def get_canteen(canteen_id: str, catalog: Catalog = Depends(get_catalog)):
    return send_result(_require_canteen(catalog, canteen_id).model_dump())


@router.get("/{canteen_id}/lines")
def get_canteen_lines(canteen_id: str, catalog: Catalog = Depends(get_catalog)):
    canteen = _require_canteen(catalog, canteen_id)
    return send_result([line.model_dump() for line in canteen.lines])


@router.get("/{canteen_id}/lines/{line_id}")
def get_canteen_line(canteen_id: str, line_id: str, catalog: Catalog = Depends(get_catalog)):
    _require_canteen(catalog, canteen_id)
    line = catalog.get_line(canteen_id, line_id)
    if line is None:
        raise NotFoundError("line")
    return send_result(line.model_dump())
