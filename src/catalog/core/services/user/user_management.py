from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from src.catalog.core.exceptions import Conflict, Forbidden, NotFound, Unauthenticated
from src.catalog.core.services.database.db_session import storage_guard
from src.catalog.core.services.jwt.jwt_gen import JwtGeneratorService
from src.catalog.core.services.password import PasswordService
from src.catalog.entities.core.user import User, UserRepository


class UserManagementService:
    def __init__(
        self,
        db_session: Session,
        password_service: PasswordService,
        token_service: JwtGeneratorService,
    ):
        self._db_session = db_session
        self._password_service = password_service
        self._token_service = token_service
        self._user_repo = UserRepository(db_session)

    def register(self, username: str, password: str) -> tuple[User, str]:
        """Create an account and issue its first access token.

        Raises:
            Conflict: the username is already taken
        """
        user = User(username=username, password_hash=self._password_service.hash(password))
        with storage_guard(self._db_session, "User registration"):
            if self._user_repo.get_by_username(username) is not None:
                raise Conflict("User already exists")
            try:
                created = self._user_repo.create(user)
                self._db_session.commit()
            except IntegrityError as e:
                # Lost a race against a concurrent registration of the same name
                raise Conflict("User already exists") from e

        logger.info("User registered", user_id=created.id)
        return created, self._token_service.issue(created.id)

    def authenticate(self, username: str, password: str) -> tuple[User, str]:
        """Check credentials and issue an access token.

        Unknown usernames and wrong passwords are reported identically.
        """
        with storage_guard(self._db_session, "User lookup"):
            user = self._user_repo.get_by_username(username)
        if user is None or not self._password_service.verify(
            user.password_hash, password
        ):
            logger.info("Login rejected")
            raise Unauthenticated("Invalid credentials")
        if not user.is_active:
            raise Forbidden("Account is disabled")

        logger.info("User logged in", user_id=user.id)
        return user, self._token_service.issue(user.id)

    def deactivate(self, username: str) -> User:
        with storage_guard(self._db_session, "User deactivation"):
            user = self._user_repo.get_by_username(username)
            if user is None:
                raise NotFound("User not found")
            updated = self._user_repo.set_active(user.id, False)
            self._db_session.commit()
        logger.info("User deactivated", user_id=user.id)
        return updated
