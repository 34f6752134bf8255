from .accounts import AccountService
from .admin import AdminService
from .cocktails import CocktailService
from .email import EmailDeliveryError, EmailService
from .favorites import FavoriteService
from .follow import FollowService

__all__ = [
    "AccountService",
    "AdminService",
    "CocktailService",
    "EmailDeliveryError",
    "EmailService",
    "FavoriteService",
    "FollowService",
]
