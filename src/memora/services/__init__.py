from src.memora.services.account_service import AccountService
from src.memora.services.auth_service import AuthResult, AuthService

__all__ = ["AccountService", "AuthResult", "AuthService"]
