# controller/user_controller.py
from typing import Any, List
from fastapi import APIRouter, Depends
from controller.controller_dependencies import get_user_service, rate_limit_dependencies
from model.api import SaveUserRequest, SuccessResponse
from service.user_service import UserService
from util.constants import InternalURIs

user_router = APIRouter(dependencies=rate_limit_dependencies())


@user_router.get(InternalURIs.USERS_LIST, response_model=List[str])
async def list_users(service: UserService = Depends(get_user_service)) -> List[str]:
    return await service.list_users()


@user_router.post(InternalURIs.USER_SAVE, response_model=SuccessResponse)
async def save_user(
    payload: SaveUserRequest,
    service: UserService = Depends(get_user_service),
) -> SuccessResponse:
    return await service.save_user(payload)


@user_router.get(InternalURIs.USER)
async def get_user(username: str, service: UserService = Depends(get_user_service)) -> Any:
    return await service.get_user(username)


@user_router.delete(InternalURIs.USER, response_model=SuccessResponse)
async def delete_user(
    username: str, service: UserService = Depends(get_user_service)
) -> SuccessResponse:
    return await service.delete_user(username)
