# backend/services/shoe_write_service.py
import logging
from typing import Any, Dict, Optional

import filetype
from sqlalchemy.orm import Session

from database import transaction
from models.shoe import Image, Shoe, ShoeFile, ShoeModel
from schemas.shoe import ShoeCreate, ShoeUpdate
from services.exceptions import ArticleCodeExistsError, NotFoundError, VersionOutdatedError
from services.shoe_service import ShoeService
from services.version_tag import VersionTag
from utils.mailer import Mailer

logger = logging.getLogger(__name__)


class ShoeWriteService:
    """Creates, updates and deletes shoes. Every write runs in one transaction."""

    def __init__(self, db: Session, read_service: Optional[ShoeService] = None, mailer: Optional[Mailer] = None):
        self.db = db
        self.read_service = read_service or ShoeService(db)
        self.mailer = mailer or Mailer()

    def create(self, data: ShoeCreate) -> int:
        """Store a new shoe with its model and images and return the new id.

        Raises ArticleCodeExistsError if the article code is taken.
        """
        logger.debug("create: data=%s", data)
        self._validate_create(data.article_code)

        shoe = Shoe(
            version=0,
            article_code=data.article_code,
            rating=data.rating,
            category=data.category,
            price=data.price,
            discount_rate=data.discount_rate,
            available=data.available,
            release_date=data.release_date,
            homepage=data.homepage,
            tags=list(data.tags or []),
            model=ShoeModel(label=data.model.label, color=data.model.color),
            images=[Image(caption=i.caption, content_type=i.content_type) for i in data.images or []],
        )
        with transaction(self.db):
            self.db.add(shoe)
            self.db.flush()
            shoe_id = shoe.id
            label = shoe.model.label

        self._send_mail(shoe_id, label)
        logger.debug("create: id=%s", shoe_id)
        return shoe_id

    def add_file(self, shoe_id: int, data: bytes, filename: str, size: int) -> ShoeFile:
        """Store a binary file for an existing shoe, replacing any previous one."""
        logger.debug("add_file: shoe_id=%s, filename=%s, size=%d", shoe_id, filename, size)

        with transaction(self.db):
            if self.db.get(Shoe, shoe_id) is None:
                logger.debug("add_file: no shoe with id %s", shoe_id)
                raise NotFoundError(f"There is no shoe with the id {shoe_id}.")

            self.db.query(ShoeFile).filter(ShoeFile.shoe_id == shoe_id).delete()

            mimetype = filetype.guess_mime(data)
            logger.debug("add_file: mimetype=%s", mimetype)

            shoe_file = ShoeFile(data=data, filename=filename, mimetype=mimetype, shoe_id=shoe_id)
            self.db.add(shoe_file)
            self.db.flush()
            logger.debug(
                "add_file: id=%s, byte_length=%d, filename=%s, mimetype=%s",
                shoe_file.id, len(data), filename, mimetype,
            )

        return shoe_file

    def update(self, shoe_id: Optional[int], data: ShoeUpdate, version: str) -> int:
        """Update a shoe under optimistic locking and return its new version.

        version is the quoted tag sent by the client, e.g. '"3"'.
        """
        logger.debug("update: id=%s, data=%s, version=%s", shoe_id, data, version)
        if shoe_id is None:
            logger.debug("update: no valid id")
            raise NotFoundError(f"There is no shoe with the id {shoe_id}.")

        shoe = self._validate_update(shoe_id, version)

        with transaction(self.db):
            for field, value in self._update_values(data).items():
                setattr(shoe, field, value)
            shoe.version = shoe.version + 1
            new_version = shoe.version

        logger.debug("update: new_version=%d", new_version)
        return new_version

    def delete(self, shoe_id: int) -> None:
        logger.debug("delete: id=%s", shoe_id)
        with transaction(self.db):
            shoe = self.db.get(Shoe, shoe_id)
            if shoe is not None:
                self.db.delete(shoe)

    def _validate_create(self, article_code: Optional[str]) -> None:
        logger.debug("_validate_create: article_code=%s", article_code)
        if article_code is None:
            return

        count = self.db.query(Shoe).filter(Shoe.article_code == article_code).count()
        if count > 0:
            logger.debug("_validate_create: article code exists: %s", article_code)
            raise ArticleCodeExistsError(article_code)

    def _validate_update(self, shoe_id: int, version: str) -> Shoe:
        tag = VersionTag.parse(version)
        shoe = self.read_service.find_by_id(shoe_id)

        # Older tags are rejected; equal and newer ones pass.
        if tag.value < shoe.version:
            logger.debug("_validate_update: version=%d, stored=%d", tag.value, shoe.version)
            raise VersionOutdatedError(tag.value)
        return shoe

    def _update_values(self, data: ShoeUpdate) -> Dict[str, Any]:
        values = data.model_dump()
        values["tags"] = list(values.get("tags") or [])
        return values

    def _send_mail(self, shoe_id: int, label: str) -> None:
        subject = f"New shoe {shoe_id}"
        body = f"The shoe with the model <strong>{label}</strong> has been created"
        try:
            self.mailer.send(subject, body)
        except Exception as e:
            # The shoe is already committed; a lost notification is only logged.
            logger.exception("Failed to send notification for shoe %s: %s", shoe_id, e)
