import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from devconnector.core.config import API_HOST, API_PORT, DEBUG_MODE
from devconnector.core.errors import DevConnectorError, StoreError
from devconnector.db.mongo import setup_collections
from . import users, profile, posts

logging.basicConfig(level=logging.DEBUG if DEBUG_MODE else logging.INFO,
                    format='%(asctime)s [%(levelname)s] %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_collections()
    yield


app = FastAPI(title="DevConnector API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router)
app.include_router(profile.router)
app.include_router(posts.router)


@app.exception_handler(DevConnectorError)
async def devconnector_error_handler(request: Request, exc: DevConnectorError):
    return JSONResponse(status_code=exc.status_code, content=exc.errors)


@app.exception_handler(PyMongoError)
async def store_error_handler(request: Request, exc: PyMongoError):
    # Surfaced like a missing document; the log line is what tells an outage apart.
    logger.error(f"[✗] Store failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
    err = StoreError()
    return JSONResponse(status_code=err.status_code, content=err.errors)


@app.get("/")
def root():
    return {"message": "DevConnector API"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
