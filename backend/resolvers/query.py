# backend/resolvers/query.py
import logging
from typing import List, Optional

import strawberry
from strawberry.types import Info

from resolvers.types import SearchParamsInput, ShoeType, to_shoe_id
from services.pageable import create_pageable
from services.shoe_service import ShoeService

logger = logging.getLogger(__name__)


@strawberry.type
class Query:
    @strawberry.field
    def shoe(self, info: Info, id: strawberry.ID) -> ShoeType:
        logger.debug("shoe: id=%s", id)
        shoe = ShoeService(info.context["db"]).find_by_id(to_shoe_id(id), with_images=True)
        return ShoeType.from_orm(shoe)

    @strawberry.field
    def shoes(self, info: Info, search_params: Optional[SearchParamsInput] = None) -> List[ShoeType]:
        params = search_params.to_search_params() if search_params else None
        logger.debug("shoes: params=%s", params)
        shoe_slice = ShoeService(info.context["db"]).find(params, create_pageable())
        return [ShoeType.from_orm(shoe) for shoe in shoe_slice.content]
