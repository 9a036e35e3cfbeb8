"""FastAPI app serving the scene catalog and preview styles"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studio.design_templates import SCENE_BACKGROUNDS
from studio.routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"✓ Scene catalog loaded: {', '.join(SCENE_BACKGROUNDS)}")
    yield
    logger.info("Shutting down...")


app = FastAPI(title="Product Pic Studio", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(router, prefix="/api")
