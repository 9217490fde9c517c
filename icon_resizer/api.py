from __future__ import annotations

import asyncio
import logging
import os
from typing import List

from fastapi import FastAPI, File, Form, Header, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from pydantic import BaseModel

from . import config as srv_cfg
from .exporter import ExportResult, export_icons, export_screenshots, try_load_image
from .imaging import ImageLoadError, load_image
from .output import OutputFolderError, resolve_output_folder
from .sizes import (IconSize, Mode, parse_mode, parse_orientation, parse_platform,
                    sizes_for)

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)

# --- Setup ---
app = FastAPI(title="Icon Resizer API")

# Restrict CORS to local host by default. Set `ALLOW_ORIGINS` to a
# comma-separated list (or pass --allow-origins) to loosen restrictions.
default_origins = ["http://localhost:8000", "http://127.0.0.1:8000"]
if getattr(srv_cfg, 'ALLOW_ORIGINS', None):
    default_origins = [o.strip() for o in srv_cfg.ALLOW_ORIGINS.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=default_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class OutputFile(BaseModel):
    name: str
    url: str | None = None


class ExportResponse(BaseModel):
    mode: str
    platform: str
    output_folder: str
    count: int
    message: str
    files: List[OutputFile]
    manifests: List[str]
    failed: List[str]
    skipped: List[str]


def _require_token(x_upload_token: str | None):
    """Require an upload token when UPLOAD_TOKEN is set.

    This helper raises a HTTPException(403) if the header doesn't match the
    configured token. If no token is configured, it is a no-op.
    """
    token = srv_cfg.UPLOAD_TOKEN
    if token and x_upload_token != token:
        raise HTTPException(status_code=403, detail='Forbidden')


def _check_image_name(filename: str | None):
    if not filename or not filename.lower().endswith(srv_cfg.IMAGE_EXTENSIONS):
        raise HTTPException(status_code=400, detail=f"Invalid file type: {filename}")


def _parse(parser, value):
    try:
        return parser(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _resolve_folder(output_dir: str | None, default: str) -> str:
    """Pick the output folder. The HTTP client plays the folder picker: when the
    default is unusable we answer 409 and it retries with `output_dir`."""
    if output_dir:
        try:
            return resolve_output_folder(output_dir)
        except OutputFolderError as e:
            raise HTTPException(status_code=400, detail=str(e))
    try:
        return resolve_output_folder(default)
    except OutputFolderError as e:
        raise HTTPException(
            status_code=409,
            detail=f"{e}. Choose another folder and send it as output_dir.",
        )


def _output_url(path: str) -> str | None:
    root = os.path.abspath(srv_cfg.OUTPUT_FOLDER)
    path = os.path.abspath(path)
    if os.path.commonpath([root, path]) != root:
        return None
    rel_path = os.path.relpath(path, root)
    return f"/output/{rel_path.replace(os.sep, '/')}"


def _to_response(result: ExportResult) -> ExportResponse:
    files = [
        OutputFile(name=os.path.relpath(p, result.output_folder).replace(os.sep, '/'), url=_output_url(p))
        for p in result.files
    ]
    return ExportResponse(
        mode=result.mode.value,
        platform=result.platform.value,
        output_folder=result.output_folder,
        count=result.count,
        message=result.message,
        files=files,
        manifests=result.manifests,
        failed=result.failed,
        skipped=result.skipped,
    )


def _describe(entry) -> dict:
    if isinstance(entry, IconSize):
        return {
            "name": entry.name,
            "filename": entry.filename,
            "pixels": entry.pixels,
            "idiom": entry.idiom,
            "scale": entry.scale_label,
            "size": entry.size,
        }
    return {"name": entry.name, "width": entry.width, "height": entry.height, "label": entry.label}


# --- Routes ---
@app.get("/")
def root():
    return {"status": "Icon Resizer API running"}


@app.get("/sizes/")
def list_sizes(mode: str = "icons", platform: str = "both", orientation: str = "portrait"):
    """Return the size table for a (mode, platform) selection."""
    mode_ = _parse(parse_mode, mode)
    platform_ = _parse(parse_platform, platform)
    orientation_ = _parse(parse_orientation, orientation)
    entries = sizes_for(mode_, platform_, orientation_)
    body = {
        "mode": mode_.value,
        "platform": platform_.value,
        "sizes": [_describe(e) for e in entries],
    }
    if mode_ is Mode.SCREENSHOTS:
        body["orientation"] = orientation_.value
    return body


@app.post("/icons/", response_model=ExportResponse)
async def create_icons(file: UploadFile = File(...), platform: str = Form("both"),
                       output_dir: str | None = Form(None), resample: str | None = Form(None),
                       x_upload_token: str | None = Header(None)):
    """
    Upload a source image (ideally a 1024x1024 PNG) and generate every app
    icon size for the selected platform(s), with Contents.json manifests.
    """
    _require_token(x_upload_token)
    _check_image_name(file.filename)
    selection = _parse(parse_platform, platform)

    data = await file.read()
    try:
        img = await run_in_threadpool(load_image, data)
    except ImageLoadError as e:
        raise HTTPException(status_code=400, detail=str(e))

    folder = _resolve_folder(output_dir, srv_cfg.icons_folder())
    try:
        result = await run_in_threadpool(export_icons, img, selection, folder, resample)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OSError as e:
        logger.exception(f"Icon export to {folder} failed")
        raise HTTPException(status_code=500, detail=f"Failed to write icons: {e}")

    logger.info(f"{result.message} ({file.filename} → {folder})")
    return _to_response(result)


@app.post("/screenshots/", response_model=ExportResponse)
async def create_screenshots(files: List[UploadFile] = File(...), platform: str = Form("ios"),
                             fit: str | None = Form(None), output_dir: str | None = Form(None),
                             resample: str | None = Form(None),
                             x_upload_token: str | None = Header(None)):
    """
    Upload one or more screenshots. Each one is matched to the portrait or
    landscape table by its own orientation.
    """
    _require_token(x_upload_token)
    selection = _parse(parse_platform, platform)

    skipped = []
    accepted = []
    for file in files:
        if file.filename and file.filename.lower().endswith(srv_cfg.IMAGE_EXTENSIONS):
            accepted.append(file)
        else:
            skipped.append(file.filename or "")

    # Read every upload, then decode them all on the thread pool; nothing is
    # exported until the last one has finished.
    payloads = await asyncio.gather(*(f.read() for f in accepted))
    outcomes = await asyncio.gather(*(run_in_threadpool(try_load_image, d) for d in payloads))

    named = []
    for file, (img, error) in zip(accepted, outcomes):
        if img is None:
            logger.warning(f"Skipping {file.filename}: {error}")
            skipped.append(file.filename)
        else:
            named.append((file.filename, img))

    if not named:
        raise HTTPException(status_code=400, detail="No valid images uploaded")

    folder = _resolve_folder(output_dir, srv_cfg.screenshots_folder())
    try:
        result = await run_in_threadpool(export_screenshots, named, selection, folder, resample, fit)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OSError as e:
        logger.exception(f"Screenshot export to {folder} failed")
        raise HTTPException(status_code=500, detail=f"Failed to write screenshots: {e}")

    result.skipped.extend(skipped)
    logger.info(f"{result.message} → {folder}")
    return _to_response(result)


@app.get("/output/{file_path:path}")
def get_output_file(file_path: str, x_upload_token: str | None = Header(None)):
    """Serve a generated file from the configured output folder."""
    _require_token(x_upload_token)
    root = os.path.abspath(srv_cfg.OUTPUT_FOLDER)
    full_path = os.path.abspath(os.path.join(root, file_path))
    if os.path.commonpath([root, full_path]) != root or not os.path.isfile(full_path):
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(full_path)
