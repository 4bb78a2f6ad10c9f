"""Identifier routes: generate, inspect, derive."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from core.errors import InvalidTidError
from internal.logging import get_logger
from tid.identifier import Tid
from ui.auth import basic_security, check_credentials
from utils.timestamp import format_timestamp

router = APIRouter(prefix="/api/v1/tids", tags=["tids"])

MAX_BATCH = 100

# Set by app.py
_codec_config = None


def init(codec_config):
    """Initialize with the codec section of the config."""
    global _codec_config
    _codec_config = codec_config


class DeriveRequest(BaseModel):
    seed: str
    keyed: bool = False


def _bad_request(exc):
    get_logger().warn("Rejected tid input", error=exc, error_id=exc.error_id, **exc.context)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                         detail={"error": exc.args[0], "error_id": exc.error_id})


@router.post("")
async def generate(version: int = Query(None, ge=0, le=15), count: int = Query(1, ge=1, le=MAX_BATCH)):
    """Generate identifiers, of the configured default version unless given."""
    if version is None:
        version = _codec_config.default_version
    try:
        tids = [Tid.generate(version) for _ in range(count)]
    except InvalidTidError as exc:
        raise _bad_request(exc)
    return {
        "timestamp": format_timestamp(),
        "tids": [tid.to_dict() for tid in tids],
    }


@router.post("/derive")
async def derive(body: DeriveRequest, credentials=Depends(basic_security)):
    """Deterministic version 0 ID from a seed; keyed derivation requires basic auth."""
    if not body.keyed:
        return Tid.derive(body.seed).to_dict()

    check_credentials(credentials)
    if not _codec_config.secret:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                            detail="No derivation secret configured")
    return Tid.derive(body.seed, _codec_config.secret).to_dict()


@router.get("/int/{value}")
async def inspect_int(value: int):
    """Validate an integer form and return its fields."""
    try:
        return Tid.from_int(value).to_dict()
    except InvalidTidError as exc:
        raise _bad_request(exc)


@router.get("/{text}")
async def inspect(text: str):
    """Parse a string form and return its fields."""
    try:
        return Tid.from_string(text).to_dict()
    except InvalidTidError as exc:
        raise _bad_request(exc)
