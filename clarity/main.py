import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clarity.config import get_settings
from clarity.reading import ReadingGenerationFailed
from clarity.routes.agent_routes import router as agent_router
from clarity.routes.card_routes import router as card_router
from clarity.routes.question_routes import router as question_router
from clarity.routes.reading_routes import router as reading_router

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("clarity.main")

app = FastAPI(title="Spiritual Clarity", version="0.1.0")

app.include_router(reading_router)
app.include_router(question_router)
app.include_router(agent_router)
app.include_router(card_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError):
    log.info("rejected request path=%s errors=%d", request.url.path, len(exc.errors()))
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": "Invalid request data", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(ReadingGenerationFailed)
async def reading_failed(request: Request, exc: ReadingGenerationFailed):
    # provider detail is logged by the pipeline, never returned
    return JSONResponse(status_code=500, content={"success": False, "error": "Failed to generate reading"})


@app.get("/health")
def health():
    return {"ok": True}
