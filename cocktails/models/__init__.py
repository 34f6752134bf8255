from .user import User
from .cocktail import Cocktail
from .like import Like
from .rating import Rating
from .comment import Comment
from .favorite import Favorite
from .follow import Follow
from .audit_log import AuditLog

__all__ = [
    "User",
    "Cocktail",
    "Like",
    "Rating",
    "Comment",
    "Favorite",
    "Follow",
    "AuditLog",
]
