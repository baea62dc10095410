# backend/services/where_builder.py
import logging
import re
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import String, and_, cast, or_, true
from sqlalchemy.sql.expression import ColumnElement

from models.shoe import Shoe, ShoeCategory, ShoeModel
from services.search_params import TAG_FLAGS

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


# ---- PARSERS ----
# Each parser returns None when the value cannot be used; the field is then dropped.

def _text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _leading_int(value: Any) -> Optional[int]:
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def _decimal(value: Any) -> Optional[Decimal]:
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _boolean(value: Any) -> bool:
    return str(value).lower() == "true"


def _date(value: Any) -> Optional[date]:
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


# field name -> (parser, predicate)
FIELDS: Dict[str, Tuple[Callable[[Any], Any], Callable[[Any], ColumnElement]]] = {
    "model": (_text, lambda v: Shoe.model.has(ShoeModel.label.icontains(v, autoescape=True))),
    "article_code": (_text, lambda v: Shoe.article_code == v),
    "rating": (_leading_int, lambda v: Shoe.rating >= v),
    "price": (_decimal, lambda v: Shoe.price <= v),
    "category": (ShoeCategory.from_text, lambda v: Shoe.category == v),
    "available": (_boolean, lambda v: Shoe.available == v),
    "release_date": (_date, lambda v: Shoe.release_date >= v),
    "homepage": (_text, lambda v: Shoe.homepage == v),
}


def requested_tags(params: Mapping[str, Any]) -> List[str]:
    """Canonical tags of all tag flags set to true."""
    tags = []
    for flag, tag in TAG_FLAGS.items():
        value = params.get(flag)
        if value is True or (value is not None and str(value).lower() == "true"):
            tags.append(tag)
    return tags


def _tag_variants(tag: str) -> List[str]:
    return list(dict.fromkeys([tag, tag.lower(), tag.upper(), tag.capitalize()]))


def tags_condition(tags: List[str]) -> ColumnElement:
    """At least one of the tags is stored, in any letter case."""
    serialized = cast(Shoe.tags, String)
    return or_(*[
        serialized.like(f'%"{variant}"%')
        for tag in tags
        for variant in _tag_variants(tag)
    ])


def build_where(params: Mapping[str, Any]) -> ColumnElement:
    """Turn search parameters into a WHERE clause for Shoe queries.

    Example: {"model": "a", "rating": "4", "price": "22.5", "sport": "true"}
    becomes model label contains "a" (any case) AND rating >= 4 AND price <= 22.5 AND tags contain SPORT.
    Unknown names are ignored here; ShoeService.find() rejects them beforehand.
    """
    logger.debug("build_where: params=%s", dict(params))

    conditions = []
    for name, value in params.items():
        field = FIELDS.get(name)
        if field is None:
            continue
        parse, predicate = field
        parsed = parse(value)
        if parsed is None:
            logger.debug("build_where: dropping %s=%r", name, value)
            continue
        conditions.append(predicate(parsed))

    tags = requested_tags(params)
    if tags:
        conditions.append(tags_condition(tags))

    where = and_(true(), *conditions)
    logger.debug("build_where: where=%s", where)
    return where
