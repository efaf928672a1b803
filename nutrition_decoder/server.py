"""HTTP backend — POST /api/analyzeImage on FastAPI."""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from nutrition_decoder.analyzer import NutritionAnalyzer
from nutrition_decoder.constants import (
    API_ROUTE,
    ERR_INVALID_BODY,
    ERR_NO_IMAGES,
    HEALTH_ROUTE,
    MSG_ANALYSIS_FAILED,
)
from nutrition_decoder.errors import AnalysisError, ValidationError
from nutrition_decoder.request_builder import images_from_wire

logger = logging.getLogger(__name__)


class ImageSource(BaseModel):
    type: str = "base64"
    media_type: Optional[str] = None
    data: Optional[str] = None


class ImageBlock(BaseModel):
    type: str = "image"
    source: Optional[ImageSource] = None


class AnalyzeBody(BaseModel):
    images: Optional[list[ImageBlock]] = None
    model: Optional[str] = None


def _error(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def create_app(analyzer: NutritionAnalyzer) -> FastAPI:
    app = FastAPI(title="Nutrition Label Decoder")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.state.analyzer = analyzer

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        match any(tuple(error["loc"][1:2]) == ("images",) for error in exc.errors()):
            case True:
                return _error(400, ERR_NO_IMAGES)
            case False:
                return _error(400, ERR_INVALID_BODY)

    @app.exception_handler(AnalysisError)
    async def _analysis_error(request: Request, exc: AnalysisError) -> JSONResponse:
        logger.error(MSG_ANALYSIS_FAILED, exc)
        match exc:
            case ValidationError():
                return _error(400, str(exc))
            case _:
                return _error(500, str(exc))

    @app.get(HEALTH_ROUTE)
    async def healthz() -> dict:
        return {"status": "ok", "backend": app.state.analyzer.backend.name}

    @app.post(API_ROUTE)
    async def analyze_image(body: AnalyzeBody) -> dict:
        images = images_from_wire([block.model_dump() for block in body.images or []])
        result = await app.state.analyzer.analyze_encoded(images, body.model)
        return result.to_dict()

    return app
