from dataclasses import dataclass

from src.catalog.core.security import AuthorizationGate
from src.catalog.core.services import (
    DbSessionService,
    JwtGeneratorService,
    JwtVerificationService,
    PasswordService,
)
from src.catalog.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    database_service: DbSessionService
    password_service: PasswordService
    jwt_generation_service: JwtGeneratorService
    jwt_verify_service: JwtVerificationService
    authorization_gate: AuthorizationGate
