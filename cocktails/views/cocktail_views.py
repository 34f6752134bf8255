"""Cocktail listing, lifecycle and engagement endpoints under /api/cocktails/."""

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.views import APIView

from cocktails.permissions import IsOwnerOrAdminOrReadOnly, IsVerified
from cocktails.serializers import (
    CocktailDetailSerializer,
    CocktailSerializer,
    CocktailWriteSerializer,
    CommentInputSerializer,
    CommentSerializer,
    RatingInputSerializer,
)
from cocktails.services import CocktailService
from cocktails.services.cache import get_listing, set_listing
from cocktails.throttling import UPLOAD_THROTTLES
from cocktails.utils.http import parse_pagination, success_response

LISTING_PARAMS = ('page', 'limit', 'cursor', 'sortBy', 'category', 'alcoholContent', 'createdBy', 'search')


def _listing_params(query_params):
    return {key: query_params.get(key) for key in LISTING_PARAMS if query_params.get(key)}


class CocktailListView(APIView):
    """GET lists approved cocktails (cached); POST creates one."""
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_classes = UPLOAD_THROTTLES

    def get(self, request):
        params = _listing_params(request.query_params)
        cached = get_listing(params)
        if cached is not None:
            return success_response(cached['data'], cached['meta'])

        page, limit = parse_pagination(params)
        rows, meta = CocktailService().list_page(
            page=page,
            limit=limit,
            cursor=params.get('cursor'),
            sort_by=params.get('sortBy'),
            category=params.get('category'),
            alcohol_content=params.get('alcoholContent'),
            created_by=params.get('createdBy'),
            search=params.get('search'),
        )
        data = CocktailSerializer(rows, many=True).data
        set_listing(params, {'data': data, 'meta': meta})
        return success_response(data, meta)

    def post(self, request):
        serializer = CocktailWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cocktail = CocktailService().create(
            request.user,
            serializer.validated_data,
            image_file=request.FILES.get('image'),
        )
        return success_response(
            {'cocktail': CocktailSerializer(cocktail).data},
            {'message': 'Cocktail created successfully'},
            status=201,
        )


class CocktailDetailView(APIView):
    """Read (counts a view), update or delete one cocktail."""
    permission_classes = [IsAuthenticatedOrReadOnly, IsOwnerOrAdminOrReadOnly]
    throttle_classes = UPLOAD_THROTTLES

    def get_object(self, request, cocktail_id):
        cocktail = CocktailService().fetch(cocktail_id, viewer=request.user)
        self.check_object_permissions(request, cocktail)
        return cocktail

    def get(self, request, cocktail_id):
        service = CocktailService()
        cocktail = self.get_object(request, cocktail_id)
        service.record_view(cocktail)
        data = CocktailDetailSerializer(cocktail, context={'request': request}).data
        return success_response({'cocktail': data})

    def put(self, request, cocktail_id):
        cocktail = self.get_object(request, cocktail_id)
        serializer = CocktailWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        cocktail = CocktailService().update(
            cocktail,
            serializer.validated_data,
            image_file=request.FILES.get('image'),
        )
        return success_response(
            {'cocktail': CocktailSerializer(cocktail).data},
            {'message': 'Cocktail updated successfully'},
        )

    def delete(self, request, cocktail_id):
        cocktail = self.get_object(request, cocktail_id)
        CocktailService().delete(cocktail, request.user)
        return success_response(None, {'message': 'Cocktail deleted successfully'})


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsVerified])
def toggle_like(request, cocktail_id):
    service = CocktailService()
    cocktail = service.fetch(cocktail_id, viewer=request.user)
    result = service.toggle_like(cocktail, request.user)
    return success_response(result, {'message': 'Cocktail liked' if result['isLiked'] else 'Like removed'})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsVerified])
def add_comment(request, cocktail_id):
    serializer = CommentInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    service = CocktailService()
    cocktail = service.fetch(cocktail_id, viewer=request.user)
    comment = service.add_comment(cocktail, request.user, serializer.validated_data['text'])
    return success_response(
        {'comment': CommentSerializer(comment).data, 'commentsCount': cocktail.comments_count},
        {'message': 'Comment added'},
        status=201,
    )


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsVerified])
def rate_cocktail(request, cocktail_id):
    serializer = RatingInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    service = CocktailService()
    cocktail = service.fetch(cocktail_id, viewer=request.user)
    result = service.rate(cocktail, request.user, serializer.validated_data['rating'])
    return success_response(result, {'message': 'Rating saved'})
