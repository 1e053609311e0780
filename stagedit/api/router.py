"""Editor API endpoints.

Thin JSON layer over :class:`~stagedit.service.EditorService`. Decode
failures are client errors (400), encode failures server errors (500).
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from stagedit import __version__
from stagedit.exceptions import DecodeError, EncodeError
from stagedit.models import ApplyRequest, ExportRequest, ImageInfo
from stagedit.service import EditorService

api_router = APIRouter()


def get_service(request: Request) -> EditorService:
    """Returns the service attached to the application."""
    return request.app.state.editor_service


class OpenImageRequest(BaseModel):
    path: str


class RecentFilesBody(BaseModel):
    files: list[str]


class RecentFileAdd(BaseModel):
    path: str


def _raise_http(error: Exception) -> None:
    if isinstance(error, DecodeError):
        raise HTTPException(status_code=400, detail=str(error)) from error
    raise HTTPException(status_code=500, detail=str(error)) from error


@api_router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@api_router.post("/images/open", response_model=ImageInfo)
def open_image(body: OpenImageRequest, service: EditorService = Depends(get_service)):
    """Decode an image and return its size and a PNG preview."""
    try:
        return service.open_image(body.path)
    except DecodeError as e:
        _raise_http(e)


@api_router.post("/images/export")
def export_image(body: ExportRequest, service: EditorService = Depends(get_service)):
    """Run the full pipeline and write the result to the requested path."""
    try:
        return {"path": service.export(body)}
    except (DecodeError, EncodeError) as e:
        _raise_http(e)


@api_router.post("/images/apply", response_model=ImageInfo)
def apply_edits(body: ApplyRequest, service: EditorService = Depends(get_service)):
    """Run the pipeline into the applied slot and return the preview."""
    try:
        return service.apply_preview(body)
    except (DecodeError, EncodeError) as e:
        _raise_http(e)


@api_router.get("/images/applied-path")
def get_applied_path(service: EditorService = Depends(get_service)):
    """Location of the applied slot."""
    return {"path": str(service.get_applied_path())}


@api_router.get("/recent-files")
def get_recent_files(service: EditorService = Depends(get_service)):
    """Recently opened files, most recent first."""
    return {"files": service.get_recent_files()}


@api_router.put("/recent-files")
def set_recent_files(body: RecentFilesBody, service: EditorService = Depends(get_service)):
    """Replace the recent files list."""
    try:
        service.set_recent_files(body.files)
    except EncodeError as e:
        _raise_http(e)
    return {"files": body.files}


@api_router.post("/recent-files")
def add_recent_file(body: RecentFileAdd, service: EditorService = Depends(get_service)):
    """Move a path to the front of the recent files list."""
    try:
        return {"files": service.add_recent_file(body.path)}
    except EncodeError as e:
        _raise_http(e)
