from fastapi import FastAPI, Request
import uuid
import time
from coda import __version__
from coda.api.endpoints import decode
from coda.common.logging_config import setup_logging, get_logger

# Initialize Structured Logging
setup_logging()
logger = get_logger("api.main")

app = FastAPI(title="CODA Decoder API", version=__version__)


# Middleware for Request ID and Logging
@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    request_id = str(uuid.uuid4())
    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path}",
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )

    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(
            f"Request failed: {str(e)}",
            request_id=request_id,
            process_time_ms=round((time.time() - start_time) * 1000, 2),
            exc_info=True,
        )
        raise

    logger.info(
        f"Request completed: {request.method} {request.url.path} - Status: {response.status_code}",
        request_id=request_id,
        status_code=response.status_code,
        process_time_ms=round((time.time() - start_time) * 1000, 2),
    )
    response.headers["X-Request-ID"] = request_id
    return response


# Include Routers
app.include_router(decode.router, prefix="/api/decode", tags=["Decode"])


@app.get("/api/health")
def health_check():
    return {"status": "ok", "app": "CODA Decoder"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8010)
