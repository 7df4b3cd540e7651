from .db_manage import DbManageService
from .db_session import DbSessionService, storage_guard

__all__ = ["DbManageService", "DbSessionService", "storage_guard"]
