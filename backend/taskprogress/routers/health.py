from datetime import datetime, timezone

from fastapi import APIRouter

from .. import __version__
from ..settings import settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
	return {
		"status": "healthy",
		"timestamp": datetime.now(timezone.utc).isoformat(),
		"version": __version__,
		"strategy": settings.scoring_strategy,
	}
