from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from infrastructure.database import get_db
from infrastructure.settings import Settings, get_settings
from infrastructure.adapters.repository.postgres_repository import PostgresRepository
from infrastructure.adapters.identity.jwt_identity import JWTIdentityAdapter

from domain.ports.identity import IdentityPort
from domain.ports.repository import RepositoryPort
from domain.services.authorization_service import AuthorizationService
from domain.services.data_admin_service import DataAdminService
from domain.services.import_service import ImportService


# auto_error=False: a missing header must become our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)


def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    return credentials.credentials if credentials else None


def get_repository(db: Session = Depends(get_db)) -> RepositoryPort:
    return PostgresRepository(db)


def get_identity(settings: Settings = Depends(get_settings)) -> IdentityPort:
    return JWTIdentityAdapter(
        secret=settings.supabase_jwt_secret,
        audience=settings.supabase_jwt_audience,
        algorithm=settings.supabase_jwt_algorithm,
    )


def get_authorization_service(
    identity: IdentityPort = Depends(get_identity),
    repo: RepositoryPort = Depends(get_repository),
) -> AuthorizationService:
    return AuthorizationService(identity=identity, repository=repo)


def get_import_service(repo: RepositoryPort = Depends(get_repository)) -> ImportService:
    return ImportService(repository=repo)


def get_data_admin_service(repo: RepositoryPort = Depends(get_repository)) -> DataAdminService:
    return DataAdminService(repository=repo)
