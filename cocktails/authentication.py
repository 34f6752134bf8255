import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework import authentication
from rest_framework import exceptions

from .tokens import decode_token

User = get_user_model()


class JWTAuthentication(authentication.BaseAuthentication):
    """DRF authentication backend validating our HS256 bearer tokens."""

    keyword = 'Bearer'

    def get_raw_token(self, request):
        auth_header = request.META.get('HTTP_AUTHORIZATION', '')
        if auth_header.startswith(self.keyword):
            token = auth_header[len(self.keyword):].strip()
            if token:
                return token
        if settings.USE_HTTP_ONLY_COOKIES:
            return request.COOKIES.get('token') or None
        return None

    def authenticate(self, request):
        """Validate the bearer token or auth cookie and return (user, token)."""
        token = self.get_raw_token(request)
        if not token:
            return None

        try:
            payload = decode_token(token)
        except jwt.InvalidTokenError:
            raise exceptions.AuthenticationFailed('Invalid token')

        try:
            user = User.objects.get(pk=payload.get('id'), is_active=True)
        except (User.DoesNotExist, ValueError, TypeError):
            raise exceptions.AuthenticationFailed('User not found')
        return (user, token)

    def authenticate_header(self, request):
        return self.keyword
