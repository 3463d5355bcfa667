import logging

from fastapi import FastAPI

from . import models  # noqa: F401  registers tables on Base
from .db import Base, engine, get_db
from .settings import settings
from .routers import health, auth, progress
from .routers.auth import ensure_seed_user

logging.basicConfig(
	level=getattr(logging, settings.log_level.upper(), logging.INFO),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Task Progress API")
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(progress.router)


@app.get("/info")
def root():
	return {"status": "ok", "scoring_strategy": settings.scoring_strategy}


@app.on_event("startup")
async def startup_event():
	# Initialize DB schema
	Base.metadata.create_all(bind=engine)
	db = next(get_db())
	try:
		ensure_seed_user(db)
	finally:
		db.close()
	logger.info("Task Progress API ready (strategy=%s)", settings.scoring_strategy)
