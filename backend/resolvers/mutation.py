# backend/resolvers/mutation.py
import logging
from typing import Any

import strawberry
from strawberry.permission import BasePermission
from strawberry.types import Info

from resolvers.types import CreatePayload, DeletePayload, ShoeInput, ShoeUpdateInput, UpdatePayload, to_shoe_id
from schemas.shoe import ShoeCreate, ShoeUpdate
from services.shoe_write_service import ShoeWriteService
from utils.tokenJWT import decode_token

logger = logging.getLogger(__name__)


def _bearer_token(info: Info):
    auth = info.context["request"].headers.get("Authorization", "")
    scheme, _, token = auth.partition(" ")
    return token if scheme.lower() == "bearer" else None


class _HasRole(BasePermission):
    message = "Missing token with sufficient permissions"
    roles = ()

    def has_permission(self, source: Any, info: Info, **kwargs) -> bool:
        user = decode_token(_bearer_token(info))
        return user is not None and bool(set(user.roles) & set(self.roles))


class IsAdminOrUser(_HasRole):
    roles = ("admin", "user")


class IsAdmin(_HasRole):
    roles = ("admin",)


def _drop_none(values: dict) -> dict:
    return {k: v for k, v in values.items() if v is not None}


def _to_create(data: ShoeInput) -> ShoeCreate:
    values = _drop_none(vars(data))
    values["model"] = vars(data.model)
    if data.images is not None:
        values["images"] = [vars(image) for image in data.images]
    return ShoeCreate(**values)


def _to_update(data: ShoeUpdateInput) -> ShoeUpdate:
    values = _drop_none(vars(data))
    values.pop("id", None)
    values.pop("version", None)
    return ShoeUpdate(**values)


@strawberry.type
class Mutation:
    @strawberry.mutation(permission_classes=[IsAdminOrUser])
    def create(self, info: Info, input: ShoeInput) -> CreatePayload:
        logger.debug("create: input=%s", input)
        service = ShoeWriteService(info.context["db"], mailer=info.context["mailer"])
        shoe_id = service.create(_to_create(input))
        return CreatePayload(id=shoe_id)

    @strawberry.mutation(permission_classes=[IsAdminOrUser])
    def update(self, info: Info, input: ShoeUpdateInput) -> UpdatePayload:
        logger.debug("update: input=%s", input)
        shoe_id = to_shoe_id(input.id)
        version = f'"{input.version}"'
        new_version = ShoeWriteService(info.context["db"]).update(shoe_id, _to_update(input), version)
        return UpdatePayload(version=new_version)

    @strawberry.mutation(permission_classes=[IsAdmin])
    def delete(self, info: Info, id: strawberry.ID) -> DeletePayload:
        logger.debug("delete: id=%s", id)
        ShoeWriteService(info.context["db"]).delete(to_shoe_id(id))
        return DeletePayload(success=True)
