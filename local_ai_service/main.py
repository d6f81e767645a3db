import logging
from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from .catalog import EXERCISE_CATALOG, resolve_catalog
from .errors import MalformedOutputError, PlanServiceError
from .model_client import ModelClient
from .normalize import normalize_plan, session_template
from .recovery import recover_plan
from .schemas import PlanRequest, WorkoutSummaryRequest
from .stats import summarize_session
from .util import User, build_prompt, get_valid_splits
from .validation import validate_plan_exercises

# --- FastAPI App Initialization ---
app = FastAPI(
    title="Local AI Service",
    description="Generates one-week workout plans with a locally hosted language model.",
    version="1.0.0",
)

# Configure logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger("uvicorn")  # Use uvicorn's logger

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

_model_client: Optional[ModelClient] = None


def get_model_client() -> ModelClient:
    ## one shared client per process; requests share nothing else
    global _model_client
    if _model_client is None:
        _model_client = ModelClient()
    return _model_client


def get_user_from_request(request: PlanRequest) -> User:
    return User(
        goal=request.goal,
        experience=request.experience,
        equipment=request.equipment,
        days=request.days,
        duration=request.duration,
        split=request.split,
    )


def _request_catalog(request: PlanRequest) -> list:
    available = [ex.model_dump() for ex in request.available_exercises or []]
    return resolve_catalog(available)


# --- Error Handlers ---

@app.exception_handler(PlanServiceError)
async def plan_service_error_handler(request: Request, exc: PlanServiceError):
    logger.error(f"{request.method} {request.url.path} failed ({type(exc).__name__}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = [f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg')}" for err in exc.errors()]
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"error": "; ".join(messages)})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} failed unexpectedly: {exc}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Internal server error"})


# --- API Endpoints ---

@app.get("/health", summary="Liveness check")
async def health_api():
    return {"status": "ok", "model": config.MODEL_NAME}


@app.get("/exercises", summary="Get the built-in exercise catalog")
async def get_exercises_api():
    return JSONResponse(content=EXERCISE_CATALOG)


@app.get("/splits", summary="Get the split options for a weekly frequency")
async def get_splits_api(days: int = Query(3, ge=1, le=7)):
    return JSONResponse(content=get_valid_splits(days))


@app.post("/generate-prompt", summary="Render the plan prompt without calling the model")
async def generate_prompt_api(request: PlanRequest):
    user = get_user_from_request(request)
    prompt, day_names = build_prompt(user, _request_catalog(request))
    return JSONResponse(content={"prompt": prompt, "day_names": day_names})


@app.post("/generate-plan", summary="Generate a one-week workout plan")
async def generate_plan_api(request: PlanRequest, client: ModelClient = Depends(get_model_client)):
    user = get_user_from_request(request)
    catalog = _request_catalog(request)
    logger.info(f"Generating plan for: {user.experience} {user.goal} ({user.days} days) - Split: {user.split}")

    logger.info("[State] Building Prompt")
    prompt, day_names = build_prompt(user, catalog)

    logger.info(f"[State] Awaiting Model ({client.model}, timeout {client.timeout:g}s)")
    raw = await client.complete(prompt)

    logger.info("[State] Recovering Output")
    obj = recover_plan(raw, repair=config.MODEL_JSON_REPAIR)
    plan = normalize_plan(obj)
    plan = validate_plan_exercises(plan, catalog, mode=config.CATALOG_VALIDATION, day_names=day_names)

    logger.info(f"[State] Done: {len(plan.days)} days, {len(plan.exercise_names())} exercises")
    return JSONResponse(content=plan.model_dump())


@app.post("/normalize-plan", summary="Convert a stored plan of any known shape to the canonical one")
async def normalize_plan_api(payload: Dict[str, Any] = Body(...)):
    try:
        plan = normalize_plan(payload)
    except MalformedOutputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return JSONResponse(content={
        "plan": plan.model_dump(),
        "sessions": [session_template(day) for day in plan.days],
    })


@app.post("/workout-summary", summary="Volume, PRs and fatigue for a logged session")
async def workout_summary_api(request: WorkoutSummaryRequest):
    summary = summarize_session(request.exercises, request.history)
    return JSONResponse(content=summary.model_dump())


# --- Main entry point for Uvicorn ---
def run():
    import uvicorn
    uvicorn.run(
        app,
        host=config.WEB_HOST,
        port=config.WEB_PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
# uvicorn local_ai_service.main:app --host 0.0.0.0 --port 3000
