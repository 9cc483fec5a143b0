import logging
from typing import List

from users_api.api.responses import HandlerResponse, response_error, response_ok
from users_api.core.errors import StoreError
from users_api.model.users import HandlerEvent, User, is_id, is_uname
from users_api.repositories.interface import UserRepository

logger = logging.getLogger(__name__)


async def get(event: HandlerEvent, store: UserRepository) -> HandlerResponse:
    """GET /user/get/{id}"""
    try:
        data = await store.get(event.path_parameters.get("id", ""))
    except StoreError as e:
        logger.error("get failed: %s", e.message)
        return response_error(e)
    return response_ok(data)


async def list_users(event: HandlerEvent, store: UserRepository) -> HandlerResponse:
    """GET /user/list"""
    try:
        data = await store.scan()
    except StoreError as e:
        logger.error("scan failed: %s", e.message)
        return response_error(e)
    return response_ok(data)


async def add(
    event: HandlerEvent, store: UserRepository, *, overwrite: bool = True
) -> HandlerResponse:
    """POST /user/add with ``id={id}&uname={uname}``; reports every invalid field."""
    form = event.form()
    errors: List[str] = []
    if not is_id(form):
        errors.append("invalid id")
    if not is_uname(form):
        errors.append("invalid uname")
    if errors:
        logger.warning("add rejected: %s", errors)
        return response_error(errors, 400)

    item = User(id=form["id"], uname=form["uname"]).model_dump()
    try:
        await store.put(item, overwrite=overwrite)
    except StoreError as e:
        logger.error("put failed for id %s: %s", item["id"], e.message)
        return response_error(e)
    logger.info("stored user %s", item["id"])
    return response_ok(item)


async def update(event: HandlerEvent, store: UserRepository) -> HandlerResponse:
    """PUT /user/update/{id} with ``uname={uname}``, only for an existing id."""
    form = event.form()
    if not is_uname(form):
        logger.warning("update rejected: invalid uname")
        return response_error("invalid uname", 400)

    user_id = event.path_parameters.get("id", "")
    try:
        data = await store.update(user_id, {"uname": form["uname"]})
    except StoreError as e:
        logger.error("update failed for id %s: %s", user_id, e.message)
        return response_error(e)
    logger.info("updated user %s", user_id)
    return response_ok(data)


async def remove(event: HandlerEvent, store: UserRepository) -> HandlerResponse:
    """DELETE /user/remove/{id}, answering with the record's prior values."""
    user_id = event.path_parameters.get("id", "")
    try:
        data = await store.delete(user_id)
    except StoreError as e:
        logger.error("delete failed for id %s: %s", user_id, e.message)
        return response_error(e)
    logger.info("removed user %s", user_id)
    return response_ok(data)
