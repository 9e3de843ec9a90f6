from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import ingestion_api
from app.middleware.middlewareLogger import LoggerMiddleware
from config import config


def init_application() -> FastAPI:
    app = FastAPI(
        title="Doculan Ingest",
        description="Document ingestion by upload or PDF link",
    )

    # Routers
    app.include_router(ingestion_api.router, tags=["Document Ingestion"])

    # Middleware
    app.add_middleware(LoggerMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_HOSTS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = init_application()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
