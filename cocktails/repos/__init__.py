from .cocktail_repo import CocktailRepo
from .user_repo import UserRepo

__all__ = ["CocktailRepo", "UserRepo"]
