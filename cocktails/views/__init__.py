from . import admin_views, auth_views, cocktail_views, favorite_views, health_views, user_views

__all__ = [
    'admin_views',
    'auth_views',
    'cocktail_views',
    'favorite_views',
    'health_views',
    'user_views',
]
