"""The signed-in user's favorite cocktails under /api/favorites/."""

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from cocktails.serializers import FavoriteInputSerializer, FavoriteSerializer
from cocktails.services import FavoriteService
from cocktails.utils.http import page_meta, parse_pagination, success_response


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def favorites(request):
    service = FavoriteService(request.user)
    if request.method == 'POST':
        serializer = FavoriteInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        favorite = service.add(serializer.validated_data['cocktail'])
        return success_response(
            {'favorite': FavoriteSerializer(favorite).data},
            {'message': 'Added to favorites'},
            status=201,
        )

    page, limit = parse_pagination(request.query_params, default_limit=20)
    rows, total = service.page(page=page, limit=limit)
    data = FavoriteSerializer(rows, many=True).data
    return success_response(data, page_meta(total, page, limit, len(data)))


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def remove_favorite(request, cocktail_id):
    FavoriteService(request.user).remove(cocktail_id)
    return success_response(None, {'message': 'Removed from favorites'})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def favorite_status(request, cocktail_id):
    return success_response({'isFavorite': FavoriteService(request.user).is_favorite(cocktail_id)})
