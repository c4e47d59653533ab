from fastapi import APIRouter

from mensa.api.responses import send_result

router = APIRouter()


@router.get("/")
def api_status():
    """API status: an empty data object while the service is up."""
    return send_result({})
