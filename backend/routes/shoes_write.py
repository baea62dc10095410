# backend/routes/shoes_write.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Header, HTTPException, Request, Response, UploadFile
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from routes.shoes import full_url, parse_id
from schemas.shoe import ShoeCreate, ShoeUpdate
from services.shoe_write_service import ShoeWriteService
from utils.mailer import Mailer, get_mailer
from utils.tokenJWT import CurrentUser, role_required

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rest", tags=["Shoes"])

# Accepted upload types
MIME_TYPES = {"image/png", "image/jpeg", "video/mp4", "video/webm", "video/quicktime"}


# =========================
# CREATE
# =========================
@router.post("", status_code=201)
def create_shoe(
    data: ShoeCreate,
    request: Request,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
    current_user: CurrentUser = Depends(role_required("admin", "user")),
):
    shoe_id = ShoeWriteService(db, mailer=mailer).create(data)
    location = full_url(request, f"/rest/{shoe_id}")
    logger.debug("create_shoe: location=%s", location)
    return Response(status_code=201, headers={"Location": location})


# =========================
# FILE UPLOAD
# =========================
@router.post("/{shoe_id}", status_code=204)
def add_file(
    shoe_id: str,
    request: Request,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(role_required("admin", "user")),
):
    sid = parse_id(shoe_id)
    if file.content_type not in MIME_TYPES:
        raise HTTPException(status_code=415, detail=f"Invalid MIME type {file.content_type}")

    try:
        data = file.file.read()
    finally:
        file.file.close()
    if len(data) > settings.MAX_FILE_SIZE:
        raise HTTPException(status_code=413, detail="File too large")

    shoe_file = ShoeWriteService(db).add_file(sid, data, file.filename, len(data))
    logger.debug("add_file: id=%s, mimetype=%s", shoe_file.id, shoe_file.mimetype)

    location = full_url(request, f"/rest/file/{sid}")
    return Response(status_code=204, headers={"Location": location})


# =========================
# UPDATE (If-Match)
# =========================
@router.put("/{shoe_id}", status_code=204)
def update_shoe(
    shoe_id: str,
    data: ShoeUpdate,
    if_match: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(role_required("admin", "user")),
):
    sid = parse_id(shoe_id)
    if if_match is None:
        raise HTTPException(status_code=428, detail='Header "If-Match" is missing')

    new_version = ShoeWriteService(db).update(sid, data, if_match)
    logger.debug("update_shoe: version=%d", new_version)
    return Response(status_code=204, headers={"ETag": f'"{new_version}"'})


# =========================
# DELETE
# =========================
@router.delete("/{shoe_id}", status_code=204)
def delete_shoe(
    shoe_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(role_required("admin")),
):
    ShoeWriteService(db).delete(parse_id(shoe_id))
    return Response(status_code=204)
