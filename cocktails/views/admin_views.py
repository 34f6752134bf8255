"""Admin-only moderation and diagnostics under /api/admin/."""

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from cocktails.permissions import IsAdmin
from cocktails.serializers import (
    AdminReasonSerializer,
    AuditLogSerializer,
    AuthUserSerializer,
    BulkActionSerializer,
    CocktailSerializer,
)
from cocktails.services import AdminService
from cocktails.utils.http import page_meta, parse_pagination, success_response

ADMIN_PERMISSIONS = [IsAuthenticated, IsAdmin]


def _reason(request):
    serializer = AdminReasonSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data['reason']


def _bulk_input(request):
    serializer = BulkActionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


@api_view(['GET'])
@permission_classes(ADMIN_PERMISSIONS)
def seed_status(request):
    return success_response(AdminService(request.user).seed_status(), {'message': 'System classics seed status'})


@api_view(['POST'])
@permission_classes(ADMIN_PERMISSIONS)
def seed_classics(request):
    result = AdminService(request.user).seed_classics()
    return success_response(result, {'message': 'Classic cocktails seeded'})


@api_view(['POST'])
@permission_classes(ADMIN_PERMISSIONS)
def invalidate_cache(request):
    metrics = AdminService(request.user).invalidate_cache()
    return success_response({'cache': metrics}, {'message': 'Cocktail cache invalidated'})


@api_view(['GET'])
@permission_classes(ADMIN_PERMISSIONS)
def metrics(request):
    return success_response(AdminService(request.user).metrics())


@api_view(['GET'])
@permission_classes(ADMIN_PERMISSIONS)
def audit_log(request):
    page, limit = parse_pagination(request.query_params, default_limit=50)
    service = AdminService(request.user)
    qs = service.audit_log(
        action=request.query_params.get('action'),
        target_type=request.query_params.get('targetType'),
    )
    total = qs.count()
    rows = qs[(page - 1) * limit:page * limit]
    data = AuditLogSerializer(rows, many=True).data
    return success_response(data, page_meta(total, page, limit, len(data)))


def _user_response(user, message):
    return success_response({'user': AuthUserSerializer(user).data}, {'message': message})


def _cocktail_response(cocktail, message):
    return success_response({'cocktail': CocktailSerializer(cocktail).data}, {'message': message})


@api_view(['POST'])
@permission_classes(ADMIN_PERMISSIONS)
def promote_user(request, user_id):
    user = AdminService(request.user).promote(user_id, _reason(request))
    return _user_response(user, 'User promoted to admin')


@api_view(['POST'])
@permission_classes(ADMIN_PERMISSIONS)
def demote_user(request, user_id):
    user = AdminService(request.user).demote(user_id, _reason(request))
    return _user_response(user, 'User demoted')


@api_view(['POST'])
@permission_classes(ADMIN_PERMISSIONS)
def verify_user(request, user_id):
    user = AdminService(request.user).verify(user_id, _reason(request))
    return _user_response(user, 'User verified')


@api_view(['POST'])
@permission_classes(ADMIN_PERMISSIONS)
def approve_cocktail(request, cocktail_id):
    cocktail = AdminService(request.user).approve(cocktail_id, _reason(request))
    return _cocktail_response(cocktail, 'Cocktail approved')


@api_view(['POST'])
@permission_classes(ADMIN_PERMISSIONS)
def feature_cocktail(request, cocktail_id):
    cocktail = AdminService(request.user).feature(cocktail_id, _reason(request))
    return _cocktail_response(cocktail, 'Cocktail featured')


@api_view(['POST'])
@permission_classes(ADMIN_PERMISSIONS)
def unfeature_cocktail(request, cocktail_id):
    cocktail = AdminService(request.user).unfeature(cocktail_id, _reason(request))
    return _cocktail_response(cocktail, 'Cocktail unfeatured')


@api_view(['POST'])
@permission_classes(ADMIN_PERMISSIONS)
def bulk_users(request):
    payload = _bulk_input(request)
    result = AdminService(request.user).bulk_users(payload['ids'], payload['action'], payload['reason'])
    return success_response(result, {'message': f"Bulk {payload['action']} applied"})


@api_view(['POST'])
@permission_classes(ADMIN_PERMISSIONS)
def bulk_cocktails(request):
    payload = _bulk_input(request)
    result = AdminService(request.user).bulk_cocktails(payload['ids'], payload['action'], payload['reason'])
    return success_response(result, {'message': f"Bulk {payload['action']} applied"})
