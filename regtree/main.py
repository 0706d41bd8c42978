from fastapi import FastAPI

from regtree import config
from regtree.api.parts import router as parts_router
from regtree.utils.logging import configure_logging, get_logger

configure_logging(config.LOG_LEVEL, config.LOG_FILE)
logger = get_logger(__name__)

app = FastAPI(title="CFR Regulation Tree", description="Converts CFR XML volumes into labeled regulation trees")
logger.info("CFR Regulation Tree API initialized")

app.include_router(parts_router)


@app.get("/")
async def root():
    return {"message": "Welcome to the CFR Regulation Tree API"}
