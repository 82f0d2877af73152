from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from api.routes import pool, users, difficulty
from api.schemas import HealthResponse

app = FastAPI(
    title="maxhash Dashboard API",
    description="Pool and miner statistics read from the ckpool log directory.",
    version="1.0.0",
    default_response_class=ORJSONResponse
)

# CORS Configuration
# Public stats are read-only, so any origin may fetch them.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Register Routers
app.include_router(pool.router, prefix="/v1", tags=["Pool"])
app.include_router(users.router, prefix="/v1", tags=["Users"])
app.include_router(difficulty.router, prefix="/v1", tags=["Formatting"])

@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """
    Simple health check endpoint.
    """
    return {"status": "ok", "service": "maxhash-dashboard"}

if __name__ == "__main__":
    import logging
    import uvicorn

    from config import (
        API_HOST, API_PORT, LOG_FORMAT, METRICS_PORT,
        load_log_level, validate_settings,
    )
    from src.observability import configure_logging, start_metrics_server

    configure_logging(load_log_level(), LOG_FORMAT)
    validate_settings()
    start_metrics_server(METRICS_PORT)

    logging.getLogger(__name__).info("HTTP server listening on %s:%d", API_HOST, API_PORT)
    uvicorn.run("api.main:app", host=API_HOST, port=API_PORT, log_config=None)
