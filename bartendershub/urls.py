"""
URL configuration for the bartendershub project.

Everything under /api/ is served by DRF views in the cocktails app and
answers with the JSON envelope. Socket.IO traffic never reaches Django;
the WSGI wrapper in bartendershub.wsgi routes /socket.io/ first.
"""
from django.contrib import admin
from django.urls import include, path

from cocktails.views import admin_views, auth_views, cocktail_views, favorite_views, health_views, user_views

auth_patterns = [
    path('register', auth_views.register, name='register'),
    path('login', auth_views.login, name='login'),
    path('me', auth_views.me, name='me'),
    path('updatedetails', auth_views.update_details, name='update_details'),
    path('updatepassword', auth_views.update_password, name='update_password'),
    path('forgotpassword', auth_views.forgot_password, name='forgot_password'),
    path('resetpassword/<str:token>', auth_views.reset_password, name='reset_password'),
    path('verify/<str:token>', auth_views.verify_email, name='verify_email'),
    path('resend-verification', auth_views.resend_verification, name='resend_verification'),
    path('delete-account', auth_views.delete_account, name='delete_account'),
]

user_patterns = [
    path('profile', user_views.my_profile, name='my_profile'),
    path('<int:user_id>', user_views.user_detail, name='user_detail'),
    path('<int:user_id>/follow', user_views.toggle_follow, name='toggle_follow'),
    path('<int:user_id>/followers', user_views.user_followers, name='user_followers'),
    path('<int:user_id>/following', user_views.user_following, name='user_following'),
    path('<int:user_id>/cocktails', user_views.user_cocktails, name='user_cocktails'),
]

cocktail_patterns = [
    path('<uuid:cocktail_id>', cocktail_views.CocktailDetailView.as_view(), name='cocktail_detail'),
    path('<uuid:cocktail_id>/like', cocktail_views.toggle_like, name='toggle_like'),
    path('<uuid:cocktail_id>/comments', cocktail_views.add_comment, name='add_comment'),
    path('<uuid:cocktail_id>/rating', cocktail_views.rate_cocktail, name='rate_cocktail'),
]

favorite_patterns = [
    path('<uuid:cocktail_id>', favorite_views.remove_favorite, name='remove_favorite'),
    path('<uuid:cocktail_id>/check', favorite_views.favorite_status, name='favorite_status'),
]

admin_patterns = [
    path('seed-status', admin_views.seed_status, name='seed_status'),
    path('seed-classics', admin_views.seed_classics, name='seed_classics'),
    path('cache/invalidate', admin_views.invalidate_cache, name='invalidate_cache'),
    path('metrics', admin_views.metrics, name='metrics'),
    path('audit', admin_views.audit_log, name='audit_log'),
    path('users/bulk', admin_views.bulk_users, name='bulk_users'),
    path('users/<int:user_id>/promote', admin_views.promote_user, name='promote_user'),
    path('users/<int:user_id>/demote', admin_views.demote_user, name='demote_user'),
    path('users/<int:user_id>/verify', admin_views.verify_user, name='verify_user'),
    path('cocktails/bulk', admin_views.bulk_cocktails, name='bulk_cocktails'),
    path('cocktails/<uuid:cocktail_id>/approve', admin_views.approve_cocktail, name='approve_cocktail'),
    path('cocktails/<uuid:cocktail_id>/feature', admin_views.feature_cocktail, name='feature_cocktail'),
    path('cocktails/<uuid:cocktail_id>/unfeature', admin_views.unfeature_cocktail, name='unfeature_cocktail'),
]

urlpatterns = [
    path('django-admin/', admin.site.urls),
    path('', health_views.api_root, name='api_root'),
    path('api/health', health_views.health, name='health'),
    path('verify-email/<str:token>', health_views.verify_email_redirect, name='verify_email_redirect'),
    path('api/auth/', include((auth_patterns, 'auth'))),
    path('api/users', user_views.user_list, name='user_list'),
    path('api/cocktails', cocktail_views.CocktailListView.as_view(), name='cocktail_list'),
    path('api/favorites', favorite_views.favorites, name='favorites'),
    path('api/users/', include((user_patterns, 'users'))),
    path('api/cocktails/', include((cocktail_patterns, 'cocktails'))),
    path('api/favorites/', include((favorite_patterns, 'favorites'))),
    path('api/admin/', include((admin_patterns, 'moderation'))),
]
