"""Small aiohttp UI and JSON endpoint for checking puzzles."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from aiohttp import web
from jinja2 import Environment, FileSystemLoader, select_autoescape

from .config import Settings
from .filler import fill_missing_numbers
from .grid import PuzzleFormatError, copy_grid, parse_puzzle
from .validator import ValidationError, check_puzzle_async

log = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATE_ENV = Environment(
    loader=FileSystemLoader(str(BASE_DIR)),
    autoescape=select_autoescape(),
)


async def run_check(text: str, settings: Settings) -> Dict[str, object]:
    """Parse, validate, then fill a copy of the puzzle."""
    grid = parse_puzzle(text)
    size = len(grid)
    report = await check_puzzle_async(size, grid, settings)

    filled_grid = copy_grid(grid)
    filled_cells = 0
    if not report.complete:
        filled_cells = fill_missing_numbers(
            filled_grid,
            size,
            passes=settings.fill_passes,
            stop_when_stable=settings.stop_when_stable,
        )
    return {
        "size": size,
        "complete": report.complete,
        "valid": report.valid,
        "duplicate_units": report.duplicate_units,
        "incomplete_units": report.incomplete_units,
        "grid": grid,
        "filled_grid": filled_grid,
        "filled_cells": filled_cells,
    }


def create_app(settings: Optional[Settings] = None) -> web.Application:
    settings = (settings or Settings()).validate()
    template = TEMPLATE_ENV.get_template("ui_template.html")

    def render_page(
        puzzle_text: str = "",
        result: Optional[Dict[str, object]] = None,
        message: Optional[str] = None,
        status: int = 200,
    ) -> web.Response:
        return web.Response(
            text=template.render(puzzle_text=puzzle_text, result=result, message=message),
            content_type="text/html",
            status=status,
        )

    async def handle_index(_: web.Request) -> web.Response:
        return render_page()

    async def handle_check(request: web.Request) -> web.Response:
        form = await request.post()
        puzzle_text = str(form.get("puzzle", ""))
        try:
            result = await run_check(puzzle_text, settings)
        except PuzzleFormatError as exc:
            return render_page(puzzle_text, message=str(exc), status=400)
        except ValidationError as exc:
            log.warning("Validation failed: %s", exc)
            return render_page(puzzle_text, message=str(exc), status=503)
        return render_page(puzzle_text, result=result)

    async def handle_api_check(request: web.Request) -> web.Response:
        puzzle_text = await request.text()
        try:
            result = await run_check(puzzle_text, settings)
        except PuzzleFormatError as exc:
            log.info("Rejected puzzle: %s", exc)
            return web.json_response({"error": str(exc)}, status=400)
        except ValidationError as exc:
            log.warning("Validation failed: %s", exc)
            return web.json_response({"error": str(exc)}, status=503)
        return web.json_response(result)

    web_app = web.Application()
    web_app.router.add_get("/", handle_index)
    web_app.router.add_post("/check", handle_check)
    web_app.router.add_post("/api/check", handle_api_check)
    return web_app
