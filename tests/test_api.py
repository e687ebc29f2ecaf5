import io

import pytest
from httpx import AsyncClient, ASGITransport
from PIL import Image

from main import app


@pytest.mark.asyncio
async def test_health_endpoint():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_options_endpoint():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/options")

    assert response.status_code == 200
    data = response.json()
    assert len(data["resolutions"]) == 7
    assert [r["label"] for r in data["aspect_ratios"]][-1] == "Custom"
    assert len(data["positions"]) == 9
    assert {"value": "waves", "label": "Waves"} in data["styles"]
    assert data["font_size_range"] == [16, 120]


@pytest.mark.asyncio
async def test_resolve_preset_selection():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/resolve", json={
            "current": {"style": "dots", "overlay_text": "Hi"},
            "edit": {"field": "resolution", "value": "Full HD (1920×1080)"}
        })

    assert response.status_code == 200
    data = response.json()
    assert data["width"] == 1920
    assert data["height"] == 1080
    assert data["selected_resolution"] == "Full HD (1920×1080)"
    assert data["selected_aspect_ratio"] == "16:9"
    assert data["aspect_ratio_display"] == "16:9 (1.78)"
    assert data["style"] == "dots"
    assert data["filename"] == "image_1920_1080.png"


@pytest.mark.asyncio
async def test_resolve_coerces_bad_width():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/resolve", json={
            "current": {"width": 1920, "height": 1080, "selected_resolution": "Full HD (1920×1080)"},
            "edit": {"field": "width", "value": "abc"}
        })

    assert response.status_code == 200
    data = response.json()
    assert data["width"] == 1
    assert data["selected_resolution"] == "Custom"


@pytest.mark.asyncio
async def test_resolve_validation():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/resolve", json={
            "current": {}  # Missing edit
        })

    assert response.status_code == 422  # Validation error


@pytest.mark.asyncio
async def test_preview_endpoint():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/preview", json={"width": 800, "height": 600, "style": "grid"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert float(response.headers["x-preview-scale"]) == 0.5
    assert Image.open(io.BytesIO(response.content)).size == (400, 300)


@pytest.mark.asyncio
async def test_export_endpoint():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/export", json={
            "width": 800,
            "height": 600,
            "style": "waves",
            "overlay_text": "Line one\\nLine two",
        })

    assert response.status_code == 200
    assert 'filename="image_800_600.png"' in response.headers["content-disposition"]
    assert Image.open(io.BytesIO(response.content)).size == (800, 600)


@pytest.mark.asyncio
async def test_export_unknown_format():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.post("/export?format=gif", json={})

    assert response.status_code == 400
