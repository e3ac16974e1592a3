"""Request dependencies: the services built at startup and the caller's training context."""

from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from training_log.core.config import Settings
from training_log.core.constants import MSG_INVALID_TOKEN, MSG_NOT_AUTHENTICATED
from training_log.core.errors import AuthError
from training_log.db.storage import StorageAdapter
from training_log.repositories import MenuRepository, RecordRepository, UserRepository
from training_log.services.auth import AuthService
from training_log.services.schedule import ScheduleResolver

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Services:
    """Everything wired once at startup; shared, stateless across requests."""

    settings: Settings
    storage: StorageAdapter
    users: UserRepository
    menus: MenuRepository
    records: RecordRepository
    schedule: ScheduleResolver
    auth: AuthService


def build_services(storage: StorageAdapter, settings: Settings) -> Services:
    users = UserRepository(storage)
    menus = MenuRepository(storage)
    return Services(
        settings=settings,
        storage=storage,
        users=users,
        menus=menus,
        records=RecordRepository(storage),
        schedule=ScheduleResolver(menus),
        auth=AuthService(users, settings),
    )


@dataclass(frozen=True)
class TrainingContext:
    """Per-request handle: the authenticated user id plus the repositories to use with it."""

    user_id: str
    menus: MenuRepository
    records: RecordRepository
    schedule: ScheduleResolver


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_auth_service(services: Services = Depends(get_services)) -> AuthService:
    return services.auth


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> str:
    """Subject of a valid bearer token; 401 envelope otherwise."""
    if credentials is None:
        raise AuthError(MSG_NOT_AUTHENTICATED)
    return auth.authenticate_token(credentials.credentials)


async def get_context(
    user_id: str = Depends(get_current_user_id),
    services: Services = Depends(get_services),
) -> TrainingContext:
    """Context for a token whose user still exists; a deleted account gets 401."""
    if await services.users.get_by_id(user_id) is None:
        raise AuthError(MSG_INVALID_TOKEN)
    return TrainingContext(
        user_id=user_id,
        menus=services.menus,
        records=services.records,
        schedule=services.schedule,
    )
