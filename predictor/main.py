from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from predictor.config import get_settings
from predictor.errors import PredictionError, prediction_error_handler, unhandled_error_handler
from predictor.middleware.correlation import CorrelationMiddleware
from predictor.routes import predict
from predictor.utils.logger import apply_level, logger

settings = get_settings()
apply_level(settings.log_level)

app = FastAPI(title=settings.app_name, version=settings.app_version)
app.add_exception_handler(PredictionError, prediction_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

# CORS - comma separated origins from config
allowed_origins = [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Correlation-ID"],
    expose_headers=["X-Correlation-ID"],
)
app.add_middleware(CorrelationMiddleware)

@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting {settings.app_name} {settings.app_version}...")
    if not settings.has_openai_credentials:
        logger.warning("OPENAI_API_KEY is not set; /api/predict will answer 500 until it is configured")
    logger.info(f"Backend ready at http://{settings.backend_host}:{settings.backend_port}")

# Health check endpoint (minimal response to prevent information disclosure)
@app.get("/health")
async def health_check():
    return {"status": "ok"}

@app.get("/")
async def root():
    return {"status": "ok"}

app.include_router(predict.router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "predictor.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.debug
    )
