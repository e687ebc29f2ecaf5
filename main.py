from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ConfigDict
from pydantic_settings import BaseSettings
from typing import Optional
import logging
import traceback

from dummy_image import Edit, ImageGenerator, build_state, resolve
from dummy_image.generator import encode_image
from dummy_image.api_models import (
    OptionsResponse, ResolveRequest, SpecPayload, StateResponse
)
from dummy_image.presets import (
    FONT_FAMILIES, FONT_SIZE_RANGE,
    get_aspect_ratio_options, get_gradient_options, get_resolution_options
)
from dummy_image.spec import BackgroundType, TextPosition

# Logging setup
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

class Settings(BaseSettings):
    preview_max_size: int = 400  # Longest preview edge
    export_format: str = "PNG"  # PNG, JPEG or WEBP
    font_dir: Optional[str] = None  # Extra directory with font files

    model_config = ConfigDict(env_file=".env", extra="ignore")

settings = Settings()
app = FastAPI(title="Dummy Image Generator", version="1.0.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def make_generator(payload: SpecPayload) -> ImageGenerator:
    state = build_state(
        payload.values(),
        selected_resolution=payload.selected_resolution,
        selected_aspect_ratio=payload.selected_aspect_ratio,
    )
    return ImageGenerator(
        state=state,
        preview_max_size=settings.preview_max_size,
        export_format=settings.export_format,
        font_dir=settings.font_dir,
    )


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "dummy-image"}

@app.get("/")
async def root():
    return {
        "service": "Dummy Image Generator",
        "version": "1.0.0",
        "description": "Placeholder images with procedural backgrounds and text overlays",
        "endpoints": ["/options", "/resolve", "/preview", "/export", "/health"],
        "config": {
            "preview_max_size": settings.preview_max_size,
            "export_format": settings.export_format,
        }
    }


@app.get("/options", response_model=OptionsResponse)
async def get_options():
    """
    Get available form options.

    Returns presets, aspect ratios, positions, styles, gradients and fonts.
    """
    return OptionsResponse(
        resolutions=get_resolution_options(),
        aspect_ratios=get_aspect_ratio_options(),
        positions=[{"value": p.value, "label": p.label} for p in TextPosition],
        styles=[{"value": s.value, "label": s.name.title()} for s in BackgroundType],
        gradients=get_gradient_options(),
        fonts=FONT_FAMILIES,
        font_size_range=list(FONT_SIZE_RANGE),
    )


@app.post("/resolve", response_model=StateResponse)
async def resolve_edit(request: ResolveRequest):
    """
    Apply one form edit to the current values.

    Returns the resolved state, including selection labels and the
    derived aspect ratio.
    """
    current = build_state(
        request.current.values(),
        selected_resolution=request.current.selected_resolution,
        selected_aspect_ratio=request.current.selected_aspect_ratio,
    )
    state = resolve(current, Edit(request.edit.field, request.edit.value))
    return StateResponse.from_state(state, settings.preview_max_size)


@app.post("/preview")
async def preview(payload: SpecPayload):
    """Render the scaled-down preview as PNG."""
    try:
        generator = make_generator(payload)
        if not generator.refresh_preview():
            raise HTTPException(status_code=503, detail="No frame produced")

        image = generator.preview_image()
        return Response(
            content=encode_image(image, format="PNG"),
            media_type="image/png",
            headers={"X-Preview-Scale": f"{generator.preview_scale:.6f}"}
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Preview error: {e}")
        logger.error(f"Traceback:\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=f"Preview failed: {e}")


@app.post("/export")
async def export(payload: SpecPayload, format: Optional[str] = None):
    """
    Render the full-size image for download.

    Args:
        payload: Form values
        format: PNG, JPEG or WEBP (defaults to the configured format)

    Returns:
        Encoded image named image_{width}_{height}.<ext>
    """
    try:
        generator = make_generator(payload)
        try:
            result = generator.export(format=format)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        if result is None:
            raise HTTPException(status_code=503, detail="No frame produced")

        logger.info(f"Export served: {result.filename}")
        return Response(
            content=result.data,
            media_type=result.media_type,
            headers={"Content-Disposition": f'attachment; filename="{result.filename}"'}
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Export error: {e}")
        logger.error(f"Traceback:\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=f"Export failed: {e}")
