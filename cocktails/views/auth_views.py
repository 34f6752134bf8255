"""Authentication endpoints under /api/auth/."""

from django.conf import settings
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated

from cocktails.repos import UserRepo
from cocktails.serializers import (
    AuthUserSerializer,
    DeleteAccountSerializer,
    DetailsUpdateSerializer,
    EmailOnlySerializer,
    LoginSerializer,
    MyProfileSerializer,
    PasswordResetSerializer,
    PasswordUpdateSerializer,
    RegisterSerializer,
)
from cocktails.services import AccountService
from cocktails.throttling import AUTH_THROTTLES
from cocktails.utils.http import success_response

TOKEN_COOKIE = 'token'


def set_auth_cookie(response, token):
    """Mirror the bearer token into an HttpOnly cookie when enabled."""
    if settings.USE_HTTP_ONLY_COOKIES:
        response.set_cookie(
            TOKEN_COOKIE,
            token,
            max_age=settings.JWT_EXPIRE_DAYS * 24 * 60 * 60,
            httponly=True,
            secure=not settings.DEBUG,
            samesite='Lax',
        )
    return response


@api_view(['POST'])
@throttle_classes(AUTH_THROTTLES)
def register(request):
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user, token = AccountService().register(serializer.validated_data)
    response = success_response(
        {'token': token, 'user': AuthUserSerializer(user).data},
        {'message': 'User registered successfully'},
        status=201,
    )
    return set_auth_cookie(response, token)


@api_view(['POST'])
@throttle_classes(AUTH_THROTTLES)
def login(request):
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user, token, needs_verification = AccountService().login(**serializer.validated_data)
    message = 'Login successful (email verification pending)' if needs_verification else 'Login successful'
    response = success_response(
        {'token': token, 'needsVerification': needs_verification, 'user': AuthUserSerializer(user).data},
        {'message': message},
    )
    return set_auth_cookie(response, token)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    user = UserRepo().get_by_id(request.user.pk)
    return success_response({'user': MyProfileSerializer(user, context={'request': request}).data})


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def update_details(request):
    serializer = DetailsUpdateSerializer(request.user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    return success_response({'user': AuthUserSerializer(user).data}, {'message': 'Details updated'})


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def update_password(request):
    serializer = PasswordUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    token = AccountService().update_password(
        request.user,
        serializer.validated_data['currentPassword'],
        serializer.validated_data['newPassword'],
    )
    response = success_response({'token': token}, {'message': 'Password updated successfully'})
    return set_auth_cookie(response, token)


@api_view(['POST'])
def forgot_password(request):
    serializer = EmailOnlySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    message = AccountService().forgot_password(serializer.validated_data['email'])
    return success_response(None, {'message': message})


@api_view(['POST'])
def reset_password(request, token):
    serializer = PasswordResetSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    AccountService().reset_password(token, serializer.validated_data['password'])
    return success_response(None, {'message': 'Password reset successful'})


@api_view(['GET'])
def verify_email(request, token):
    AccountService().verify_email(token)
    return success_response(None, {'message': 'Email verified successfully'})


@api_view(['POST'])
def resend_verification(request):
    serializer = EmailOnlySerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    meta = AccountService().resend_verification(serializer.validated_data['email'])
    return success_response(None, meta)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def delete_account(request):
    """Delete the signed-in account after re-entering the password."""
    serializer = DeleteAccountSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    AccountService().delete_account(request.user, serializer.validated_data['password'])
    response = success_response(None, {'message': 'Account deleted successfully'})
    response.delete_cookie(TOKEN_COOKIE)
    return response
