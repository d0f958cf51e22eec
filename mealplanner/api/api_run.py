from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from mealplanner.domain.errors import (
    IngredientNotFoundError,
    InvalidStepOrderError,
    MealNotFoundError,
    PlanGenerationError,
    StepNotFoundError,
)
from mealplanner.infra.db import get_db, init_db, ping

# Routers
from mealplanner.api.routes import meals, mealplan, steps

# Logging
logger = logging.getLogger("mealplanner")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database tables ready")
    yield


# Initialize FastAPI app
app = FastAPI(title="Meal Planner API", lifespan=lifespan)

# The frontend dev server runs on a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(meals.router)
app.include_router(mealplan.router)
app.include_router(steps.router)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request payload"
    first = errors[0]
    msg = str(first.get("msg", "Invalid request payload"))
    if msg.startswith("Value error, "):
        return msg[len("Value error, "):]
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    return f"Invalid request payload: {field} {msg}".replace("  ", " ").strip()


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": _validation_message(exc)})


@app.exception_handler(MealNotFoundError)
@app.exception_handler(StepNotFoundError)
@app.exception_handler(IngredientNotFoundError)
async def not_found_handler(request: Request, exc: Exception):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidStepOrderError)
async def step_order_handler(request: Request, exc: InvalidStepOrderError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(PlanGenerationError)
async def plan_generation_handler(request: Request, exc: PlanGenerationError):
    logger.error("Meal plan generation failed on %s: %s", exc.day, exc.reason)
    return JSONResponse(status_code=500, content={"detail": f"Error generating meal plan: {exc}"})


@app.exception_handler(OperationalError)
async def database_unavailable_handler(request: Request, exc: OperationalError):
    logger.error("Database unavailable during %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"detail": "Database connection failed. Please check that the database is running."},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error during %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/api/health")
def health(db: Session = Depends(get_db)):
    if not ping(db):
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ok"}
