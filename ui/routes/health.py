"""Health and observability routes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from core.health import Status
from tid.versions import VERSION_CONFIGS
from utils.timestamp import format_timestamp, now_seconds

router = APIRouter(prefix="/api/v1", tags=["health"])

# Set by app.py
_health_checker = None
_codec_config = None


def init(health_checker, codec_config):
    """Initialize with health checker and codec config references."""
    global _health_checker, _codec_config
    _health_checker = health_checker
    _codec_config = codec_config


@router.get("/health")
async def health():
    """Health check with component status."""
    report = await _health_checker.check()
    status_code = 200 if report.status != Status.FAIL else 503
    return JSONResponse(content=report.to_dict(), status_code=status_code)


@router.get("/heartbeat")
async def heartbeat():
    """Lightweight heartbeat for frequent polling."""
    return {
        "status": "ok",
        "timestamp": format_timestamp(),
        "epoch_s": now_seconds(),
        "default_version": _codec_config.default_version,
        "versions": sorted(VERSION_CONFIGS),
    }
