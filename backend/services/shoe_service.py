# backend/services/shoe_service.py
import logging
from typing import Dict, Iterable, List, NamedTuple, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from models.shoe import Shoe, ShoeCategory, ShoeFile
from services.exceptions import NotFoundError
from services.pageable import Pageable
from services.search_params import SEARCH_PARAM_NAMES, TAG_FLAGS
from services.where_builder import build_where

logger = logging.getLogger(__name__)


class Slice(NamedTuple):
    """One page of shoes plus the number of all shoes in the catalog."""

    content: List[Shoe]
    total_elements: int


class ShoeService:
    """Read access to shoes. Reading needs no transaction."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, shoe_id: int, with_images: bool = False) -> Shoe:
        logger.debug("find_by_id: id=%s, with_images=%s", shoe_id, with_images)

        query = self.db.query(Shoe)
        if with_images:
            query = query.options(selectinload(Shoe.images))
        shoe = query.filter(Shoe.id == shoe_id).first()
        if shoe is None:
            logger.debug("find_by_id: no shoe with id %s", shoe_id)
            raise NotFoundError(f"There is no shoe with the id {shoe_id}.")

        logger.debug("find_by_id: shoe=%r", shoe)
        return shoe

    def find_file_by_shoe_id(self, shoe_id: int) -> Optional[ShoeFile]:
        logger.debug("find_file_by_shoe_id: shoe_id=%s", shoe_id)
        shoe_file = self.db.query(ShoeFile).filter(ShoeFile.shoe_id == shoe_id).first()
        if shoe_file is None:
            logger.debug("find_file_by_shoe_id: no file found")
            return None

        logger.debug(
            "find_file_by_shoe_id: id=%s, byte_length=%d, filename=%s, mimetype=%s",
            shoe_file.id, len(shoe_file.data), shoe_file.filename, shoe_file.mimetype,
        )
        return shoe_file

    def find(self, search_params: Optional[Dict[str, object]], pageable: Pageable) -> Slice:
        """Search shoes page by page.

        No search parameters lists all shoes. Unknown parameter names or an
        unknown category raise NotFoundError, as does an empty result.
        """
        logger.debug("find: search_params=%s, pageable=%s", search_params, pageable)

        if not search_params:
            return self._find_all(pageable)

        if not self._check_keys(search_params.keys()) or not self._check_enums(search_params):
            logger.debug("find: invalid search parameters")
            raise NotFoundError("Invalid search parameters")

        where = build_where(search_params)
        shoes = (
            self.db.query(Shoe)
            .filter(where)
            .order_by(Shoe.id)
            .offset(pageable.skip)
            .limit(pageable.size)
            .all()
        )
        if not shoes:
            logger.debug("find: no shoes found")
            raise NotFoundError(f"No shoes found: {search_params}, page {pageable.number}")

        return Slice(content=shoes, total_elements=self.count())

    def count(self) -> int:
        count = self.db.query(func.count(Shoe.id)).scalar()
        logger.debug("count: %d", count)
        return count

    def _find_all(self, pageable: Pageable) -> Slice:
        shoes = (
            self.db.query(Shoe)
            .order_by(Shoe.id)
            .offset(pageable.skip)
            .limit(pageable.size)
            .all()
        )
        if not shoes:
            logger.debug("_find_all: no shoes found")
            raise NotFoundError(f'Invalid page "{pageable.number}"')
        return Slice(content=shoes, total_elements=self.count())

    def _check_keys(self, keys: Iterable[str]) -> bool:
        valid = True
        for key in keys:
            if key not in SEARCH_PARAM_NAMES and key not in TAG_FLAGS:
                logger.debug("_check_keys: invalid search parameter %r", key)
                valid = False
        return valid

    def _check_enums(self, search_params: Dict[str, object]) -> bool:
        category = search_params.get("category")
        logger.debug("_check_enums: category=%s", category)
        return category is None or category in [c.value for c in ShoeCategory]
