"""Member directory, profiles and follow endpoints under /api/users/."""

from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated

from cocktails.serializers import (
    CocktailSerializer,
    MyProfileSerializer,
    ProfileUpdateSerializer,
    UserSerializer,
    UserSummarySerializer,
)
from cocktails.services import FollowService
from cocktails.services.follow_read import FollowReadService
from cocktails.services.users import UserService
from cocktails.throttling import UPLOAD_THROTTLES
from cocktails.utils.http import is_truthy, page_meta, parse_pagination, success_response


def _verified_filter(params):
    value = params.get('verified')
    if value in (None, ''):
        return None
    return is_truthy(value)


@api_view(['GET'])
def user_list(request):
    page, limit = parse_pagination(request.query_params, default_limit=20)
    users, total = UserService().directory_page(
        page=page,
        limit=limit,
        verified=_verified_filter(request.query_params),
        search=(request.query_params.get('search') or '').strip() or None,
        sort_by=request.query_params.get('sortBy'),
        viewer=request.user,
    )
    data = UserSerializer(users, many=True, context={'request': request}).data
    return success_response(data, page_meta(total, page, limit, len(data)))


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
@throttle_classes(UPLOAD_THROTTLES)
def my_profile(request):
    """GET returns the signed-in profile; PUT edits it (multipart `avatar` optional)."""
    service = UserService()
    if request.method == 'GET':
        user = service.fetch(request.user.pk)
        return success_response({'user': MyProfileSerializer(user, context={'request': request}).data})

    serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    user = service.update_profile(
        request.user,
        serializer.validated_data,
        avatar_file=request.FILES.get('avatar'),
    )
    return success_response(
        {'user': MyProfileSerializer(user, context={'request': request}).data},
        {'message': 'Profile updated successfully'},
    )


@api_view(['GET'])
def user_detail(request, user_id):
    user, cocktails = UserService().profile_with_cocktails(user_id, viewer=request.user)
    return success_response({
        'user': UserSerializer(user, context={'request': request}).data,
        'cocktails': CocktailSerializer(cocktails, many=True).data,
    })


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def toggle_follow(request, user_id):
    target = UserService().fetch(user_id)
    result = FollowService(request.user).toggle_follow(target)
    message = 'User followed' if result['isFollowing'] else 'User unfollowed'
    return success_response(result, {'message': message})


def _follow_list(request, user_id, page_fn):
    UserService().fetch(user_id)
    page, limit = parse_pagination(request.query_params, default_limit=20)
    users, total = page_fn(user_id, page=page, limit=limit)
    data = UserSummarySerializer(users, many=True).data
    return success_response(data, page_meta(total, page, limit, len(data)))


@api_view(['GET'])
def user_followers(request, user_id):
    return _follow_list(request, user_id, FollowReadService().followers_page)


@api_view(['GET'])
def user_following(request, user_id):
    return _follow_list(request, user_id, FollowReadService().following_page)


@api_view(['GET'])
def user_cocktails(request, user_id):
    page, limit = parse_pagination(request.query_params)
    cocktails, total = UserService().cocktails_page(user_id, page=page, limit=limit)
    data = CocktailSerializer(cocktails, many=True).data
    return success_response(data, page_meta(total, page, limit, len(data)))
