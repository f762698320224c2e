"""FastAPI application setup module."""
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tenderbook.settings import settings
from tenderbook.endpoints.tenders import router as tenders_router
from tenderbook.endpoints.transactions import router as transactions_router
from tenderbook.endpoints.summary import router as summary_router
from tenderbook.endpoints.reports import router as reports_router
from tenderbook.exceptions.api_exception import store_error_handler
from tenderbook.exceptions.store_exception import StoreError
from tenderbook.services.entity_store import EntityStore, get_store

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A failed load leaves the store empty; the service still starts
    result = await get_store().load()
    if not result.ok:
        logger.warning("Starting with empty collections: %s", result.error)
    yield


app = FastAPI(
    title="Tenderbook API",
    description="Tender and transaction bookkeeping backed by a remote document store",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(StoreError, store_error_handler)

# Include routers
app.include_router(tenders_router)
app.include_router(transactions_router)
app.include_router(summary_router)
app.include_router(reports_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/store/reload", tags=["admin"])
async def reload_store(store: EntityStore = Depends(get_store)):
    """Discard in-memory state and load the document store again."""
    result = await store.load()
    return {
        "loaded": result.ok,
        "error": result.error,
        "tenders": len(result.tenders),
        "transactions": len(result.transactions),
    }
