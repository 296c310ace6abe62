import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.candles import router as candles_router
from app.config import API_HOST, API_PORT, CORS_ORIGINS, LOG_LEVEL
from app.exceptions import CandleServiceError
from app.utils.time import to_iso, utc_now

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(
    title="Paper Trading Candle Service",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,  # Dashboard URL
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CandleServiceError)
async def candle_error_handler(request: Request, exc: CandleServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


app.include_router(candles_router)

@app.get("/health")
def health_check():
    return {"status": "ok", "timestamp": to_iso(utc_now())}


def run():
    uvicorn.run(app, host=API_HOST, port=API_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
