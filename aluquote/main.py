from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import estimates, projects, quotations

logger = logging.getLogger("aluquote")

# Create tables (saved projects and quotations)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Aluminium Window Estimator",
    description=f"Window and door weight, cost and quotation estimates for {settings.COMPANY_NAME}",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(estimates.router, prefix="/api")
app.include_router(projects.router, prefix="/api")
app.include_router(quotations.router, prefix="/api")


@app.get("/health")
def health():
    return {
        "status": "ok",
        "app": "aluquote",
        "company": {
            "name": settings.COMPANY_NAME,
            "phone": settings.COMPANY_PHONE,
            "email": settings.COMPANY_EMAIL,
        },
    }


@app.on_event("startup")
def log_startup():
    logger.info("Estimator ready for %s (database: %s)", settings.COMPANY_NAME, settings.DATABASE_URL)
