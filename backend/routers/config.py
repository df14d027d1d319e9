"""Configuration API endpoints"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import aiohttp
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from services.config_manager import ConfigManager

router = APIRouter()

BASELINE_SOURCES = ("git", "http", "none")


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    baseline: dict | None = None
    uriMappings: list[dict[str, str]] | None = None
    layout: dict | None = None
    server: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    baseline: dict
    uriMappings: list[dict[str, str]]
    layout: dict
    server: dict


class ValidateResponse(BaseModel):
    """Validation response"""

    valid: bool
    message: str
    source: str


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()
    return ConfigResponse(
        baseline=config.get("baseline", {}),
        uriMappings=config.get("uriMappings", []),
        layout=config.get("layout", {}),
        server=config.get("server", {}),
    )


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration; takes effect when the backend restarts"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    # Update only provided fields
    if request.baseline:
        source = request.baseline.get("source")
        if source is not None and source not in BASELINE_SOURCES:
            raise HTTPException(status_code=400, detail=f"Unknown baseline source: {source}")
        current_config["baseline"] = {**current_config.get("baseline", {}), **request.baseline}
    if request.uriMappings is not None:
        if any(not mapping.get("local") for mapping in request.uriMappings):
            raise HTTPException(status_code=400, detail="Every uri mapping needs a 'local' prefix")
        current_config["uriMappings"] = request.uriMappings
    if request.layout:
        layout = {**current_config.get("layout", {}), **request.layout}
        if not isinstance(layout.get("cushion"), int) or layout["cushion"] < 0:
            raise HTTPException(status_code=400, detail="layout.cushion must be a non-negative integer")
        if not isinstance(layout.get("filler"), str) or len(layout["filler"]) != 1:
            raise HTTPException(status_code=400, detail="layout.filler must be a single character")
        tab_size = layout.get("tabSize", 4)
        if not isinstance(tab_size, int) or isinstance(tab_size, bool) or tab_size < 1:
            raise HTTPException(status_code=400, detail="layout.tabSize must be a positive integer")
        current_config["layout"] = layout
    if request.server:
        current_config["server"] = {**current_config.get("server", {}), **request.server}

    config_manager.save_config(current_config)

    return {"status": "success", "message": "Configuration updated"}


async def check_git_repository(repo_root: str) -> tuple[bool, str]:
    """Check that repo_root is inside a git work tree"""
    root = repo_root or str(Path.cwd())
    try:
        process = await asyncio.create_subprocess_exec(
            "git",
            "rev-parse",
            "--is-inside-work-tree",
            cwd=root,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        return False, f"Cannot run git in {root}: {e}"

    stdout, stderr = await process.communicate()
    if process.returncode != 0 or stdout.decode().strip() != "true":
        return False, f"Not a git repository: {root} ({stderr.decode(errors='replace').strip()})"
    return True, f"Git repository found at {root}"


async def check_http_endpoint(url_template: str, timeout_seconds: float) -> tuple[bool, str]:
    """Check that the host serving baseline files answers"""
    if not url_template:
        return False, "baseline.urlTemplate is not configured"

    url = url_template.split("{", 1)[0]
    try:
        async with aiohttp.ClientSession() as session:
            async with session.head(url, timeout=aiohttp.ClientTimeout(total=timeout_seconds)) as response:
                if response.status < 500:
                    return True, f"Endpoint reachable (HTTP {response.status})"
                return False, f"Endpoint error (HTTP {response.status})"
    except aiohttp.ClientError as e:
        return False, f"Network error: {str(e)}"
    except asyncio.TimeoutError:
        return False, f"Timed out after {timeout_seconds}s"


@router.post("/validate", response_model=ValidateResponse)
async def validate_config() -> ValidateResponse:
    """Validate that the configured baseline source can be used"""
    config = ConfigManager.get_instance().get_config()
    baseline = config.get("baseline", {})
    source = baseline.get("source", "git")

    if source == "git":
        valid, message = await check_git_repository(baseline.get("repoRoot", ""))
    elif source == "http":
        valid, message = await check_http_endpoint(baseline.get("urlTemplate", ""), baseline.get("timeout", 10))
    elif source == "none":
        valid, message = True, "No baseline source; regions are shown without drift correction"
    else:
        valid, message = False, f"Unknown baseline source: {source}"

    return ValidateResponse(valid=valid, message=message, source=source)
