# backend/routes/shoes.py
import logging
import math
import re
from typing import List, Optional, Union
from urllib.parse import urljoin

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from database import get_db
from schemas.shoe import CountOut, PageInfo, ShoeDetailOut, ShoeOut, ShoePage
from services.pageable import Pageable, create_pageable
from services.shoe_service import ShoeService, Slice

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rest", tags=["Shoes"])

ID_PATTERN = re.compile(r"^[1-9]\d{0,10}$")

# Query parameters that are not search criteria
PAGING_PARAMS = {"page", "size", "only"}


# ---- HELPERS ----
def parse_id(raw: str) -> int:
    """Path ids that are not positive integers are answered with 404."""
    if not ID_PATTERN.match(raw):
        raise HTTPException(status_code=404, detail=f"The shoe id {raw} is invalid.")
    return int(raw)


def full_url(request: Request, path: str) -> str:
    return urljoin(str(request.base_url), path.lstrip("/"))


def _normalize_if_none_match(header: Optional[str]) -> List[str]:
    if header is None:
        return []
    tags = []
    for etag in header.split(","):
        etag = etag.strip()
        if etag.startswith("W/"):
            etag = etag[2:]
        if len(etag) >= 2 and etag.startswith('"') and etag.endswith('"'):
            etag = etag[1:-1]
        tags.append(etag)
    return tags


def _create_page(shoe_slice: Slice, pageable: Pageable) -> ShoePage:
    total = shoe_slice.total_elements
    total_pages = math.ceil(total / pageable.size) if pageable.size else 0
    return ShoePage(
        content=[ShoeOut.model_validate(shoe) for shoe in shoe_slice.content],
        page=PageInfo(
            size=pageable.size,
            number=pageable.number,
            total_elements=total,
            total_pages=total_pages,
        ),
    )


# =========================
# SEARCH
# =========================
@router.get("", response_model=Union[ShoePage, CountOut])
def get_shoes(
    request: Request,
    page: Optional[str] = Query(None),
    size: Optional[str] = Query(None),
    only: Optional[str] = Query(None, description="'count' returns only the number of shoes"),
    db: Session = Depends(get_db),
):
    service = ShoeService(db)
    if only is not None:
        count = service.count()
        logger.debug("get_shoes: count=%d", count)
        return CountOut(count=count)

    search_params = {k: v for k, v in request.query_params.items() if k not in PAGING_PARAMS}
    logger.debug("get_shoes: search_params=%s, page=%s, size=%s", search_params, page, size)

    pageable = create_pageable(page, size)
    shoe_slice = service.find(search_params, pageable)
    return _create_page(shoe_slice, pageable)


# =========================
# FILE DOWNLOAD
# =========================
@router.get("/file/{shoe_id}")
def get_file(shoe_id: str, db: Session = Depends(get_db)):
    shoe_file = ShoeService(db).find_file_by_shoe_id(parse_id(shoe_id))
    if shoe_file is None:
        raise HTTPException(status_code=404, detail="No file found.")

    return Response(
        content=shoe_file.data,
        media_type=shoe_file.mimetype or "image/png",
        headers={"Content-Disposition": f'inline; filename="{shoe_file.filename}"'},
    )


# =========================
# SINGLE SHOE
# =========================
@router.get("/{shoe_id}", response_model=ShoeDetailOut)
def get_shoe(
    shoe_id: str,
    response: Response,
    if_none_match: Optional[str] = Header(None),
    db: Session = Depends(get_db),
):
    shoe = ShoeService(db).find_by_id(parse_id(shoe_id), with_images=True)

    etags = _normalize_if_none_match(if_none_match)
    if "*" in etags or str(shoe.version) in etags:
        logger.debug("get_shoe: not modified")
        return Response(status_code=304)

    response.headers["ETag"] = f'"{shoe.version}"'
    return ShoeDetailOut.model_validate(shoe)
