from fastapi import APIRouter, Depends, Request, Response

from users_api.api.responses import HandlerResponse
from users_api.core.config import Settings, get_settings
from users_api.handlers import users as handlers
from users_api.model.users import HandlerEvent
from users_api.repositories.interface import UserRepository

health_router = APIRouter()
router = APIRouter(prefix="/user")


def get_user_repo(request: Request) -> UserRepository:
    return request.app.state.store


async def build_event(request: Request) -> HandlerEvent:
    body = await request.body()
    return HandlerEvent(
        path_parameters=dict(request.path_params),
        headers=dict(request.headers),
        body=body.decode("utf-8", errors="replace") if body else None,
    )


def to_response(result: HandlerResponse) -> Response:
    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=result.headers,
    )


@health_router.get("/health")
async def health(repo: UserRepository = Depends(get_user_repo)):
    await repo.ping()
    return {"status": "ok"}


@router.get("/get/{id}")
async def get_user(
    event: HandlerEvent = Depends(build_event),
    repo: UserRepository = Depends(get_user_repo),
):
    return to_response(await handlers.get(event, repo))


@router.get("/list")
async def list_users(
    event: HandlerEvent = Depends(build_event),
    repo: UserRepository = Depends(get_user_repo),
):
    return to_response(await handlers.list_users(event, repo))


@router.post("/add")
async def add_user(
    event: HandlerEvent = Depends(build_event),
    repo: UserRepository = Depends(get_user_repo),
    settings: Settings = Depends(get_settings),
):
    result = await handlers.add(event, repo, overwrite=not settings.reject_duplicate_ids)
    return to_response(result)


@router.put("/update/{id}")
async def update_user(
    event: HandlerEvent = Depends(build_event),
    repo: UserRepository = Depends(get_user_repo),
):
    return to_response(await handlers.update(event, repo))


@router.delete("/remove/{id}")
async def remove_user(
    event: HandlerEvent = Depends(build_event),
    repo: UserRepository = Depends(get_user_repo),
):
    return to_response(await handlers.remove(event, repo))
