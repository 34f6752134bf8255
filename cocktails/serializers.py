import json

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from cocktails.models import AuditLog, Cocktail, Comment, Favorite, Follow, User
from cocktails.models.cocktail import ALCOHOL_CONTENT_CHOICES, CATEGORY_CHOICES, FLAVOR_CHOICES


class JSONListField(serializers.ListField):
    """
    ListField that also accepts a JSON-encoded string.

    Multipart forms send nested lists as a single JSON string. With
    `split_commas` a plain string such as "sour, citrus" is split instead.
    """
    default_error_messages = {
        'invalid_json': 'Value must be a JSON array.',
    }

    def __init__(self, *args, split_commas=False, **kwargs):
        self.split_commas = split_commas
        super().__init__(*args, **kwargs)

    def to_internal_value(self, data):
        if isinstance(data, (list, tuple)) and len(data) == 1 and isinstance(data[0], str):
            if data[0].lstrip().startswith('[') or self.split_commas:
                data = data[0]
        if isinstance(data, str):
            if data.lstrip().startswith('[') or not self.split_commas:
                try:
                    data = json.loads(data)
                except ValueError:
                    self.fail('invalid_json')
            else:
                data = [item.strip() for item in data.split(',') if item.strip()]
        return [dict(item) if isinstance(item, dict) else item for item in super().to_internal_value(data)]


class JSONDictField(serializers.DictField):
    """DictField that also accepts a JSON-encoded object string."""

    def to_internal_value(self, data):
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except ValueError:
                self.fail('not_a_dict', input_type='string')
        return super().to_internal_value(data)


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact author/follower representation."""
    isVerified = serializers.BooleanField(source='is_verified', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'username', 'avatar', 'isVerified']
        read_only_fields = fields


class AuthUserSerializer(serializers.ModelSerializer):
    """User payload returned by the auth endpoints."""
    isVerified = serializers.BooleanField(source='is_verified', read_only=True)
    isAdmin = serializers.BooleanField(source='is_admin', read_only=True)
    country = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'username', 'avatar', 'isVerified', 'isAdmin', 'country']
        read_only_fields = fields

    def get_country(self, obj):
        return obj.country or None


class UserSerializer(serializers.ModelSerializer):
    """Public profile with derived counts and the viewer's follow state."""
    isVerified = serializers.BooleanField(source='is_verified', read_only=True)
    isAdmin = serializers.BooleanField(source='is_admin', read_only=True)
    socialLinks = serializers.JSONField(source='social_links', read_only=True)
    createdAt = serializers.DateTimeField(source='date_joined', read_only=True)
    cocktailsCount = serializers.SerializerMethodField()
    followersCount = serializers.SerializerMethodField()
    followingCount = serializers.SerializerMethodField()
    isFollowing = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'name',
            'username',
            'avatar',
            'bio',
            'speciality',
            'location',
            'country',
            'badges',
            'socialLinks',
            'isVerified',
            'isAdmin',
            'createdAt',
            'cocktailsCount',
            'followersCount',
            'followingCount',
            'isFollowing',
        ]
        read_only_fields = fields

    def get_cocktailsCount(self, obj):
        value = getattr(obj, 'cocktails_count', None)
        return value if value is not None else obj.cocktails.count()

    def get_followersCount(self, obj):
        value = getattr(obj, 'followers_count', None)
        return value if value is not None else obj.follower_relations.count()

    def get_followingCount(self, obj):
        value = getattr(obj, 'following_count', None)
        return value if value is not None else obj.following_relations.count()

    def get_isFollowing(self, obj):
        request = self.context.get('request')
        viewer = getattr(request, 'user', None)
        if not viewer or not viewer.is_authenticated or viewer.pk == obj.pk:
            return False
        annotated = getattr(obj, 'is_following', None)
        if annotated is not None:
            return annotated
        return Follow.objects.filter(follower=viewer, following=obj).exists()


class MyProfileSerializer(UserSerializer):
    """The signed-in user's own profile, including private fields."""
    preferences = serializers.JSONField(read_only=True)

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ['email', 'preferences']
        read_only_fields = fields


class IngredientSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    amount = serializers.CharField(max_length=50)
    unit = serializers.CharField(max_length=30, allow_blank=True, required=False, default='')
    optional = serializers.BooleanField(required=False, default=False)


class InstructionSerializer(serializers.Serializer):
    step = serializers.IntegerField(min_value=1)
    description = serializers.CharField(max_length=500)


class ImageRefSerializer(serializers.Serializer):
    url = serializers.URLField(max_length=500)
    publicId = serializers.CharField(max_length=255)


class CocktailSerializer(serializers.ModelSerializer):
    """Cocktail as returned by listings."""
    prepTime = serializers.IntegerField(source='prep_time', read_only=True)
    glassType = serializers.CharField(source='glass_type', read_only=True)
    image = serializers.SerializerMethodField()
    alcoholContent = serializers.CharField(source='alcohol_content', read_only=True)
    createdBy = UserSummarySerializer(source='created_by', read_only=True)
    isApproved = serializers.BooleanField(source='is_approved', read_only=True)
    isFeatured = serializers.BooleanField(source='is_featured', read_only=True)
    isSystem = serializers.BooleanField(source='is_system', read_only=True)
    likesCount = serializers.IntegerField(source='likes_count', read_only=True)
    averageRating = serializers.FloatField(source='average_rating', read_only=True)
    ratingsCount = serializers.IntegerField(source='ratings_count', read_only=True)
    commentsCount = serializers.IntegerField(source='comments_count', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Cocktail
        fields = [
            'id',
            'name',
            'description',
            'ingredients',
            'instructions',
            'prepTime',
            'servings',
            'glassType',
            'garnish',
            'image',
            'category',
            'tags',
            'alcoholContent',
            'flavor',
            'createdBy',
            'isApproved',
            'isFeatured',
            'isSystem',
            'views',
            'likesCount',
            'averageRating',
            'ratingsCount',
            'commentsCount',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = fields

    def get_image(self, obj):
        return obj.image


class CommentSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Comment
        fields = ['id', 'user', 'text', 'createdAt']
        read_only_fields = ['id', 'user', 'createdAt']


class CocktailDetailSerializer(CocktailSerializer):
    """Single cocktail with comments and the viewer's like/rating state."""
    comments = CommentSerializer(many=True, read_only=True)
    isLiked = serializers.SerializerMethodField()
    userRating = serializers.SerializerMethodField()

    class Meta(CocktailSerializer.Meta):
        fields = CocktailSerializer.Meta.fields + ['comments', 'isLiked', 'userRating']
        read_only_fields = fields

    def _viewer(self):
        request = self.context.get('request')
        viewer = getattr(request, 'user', None)
        return viewer if viewer is not None and viewer.is_authenticated else None

    def get_isLiked(self, obj):
        viewer = self._viewer()
        return bool(viewer) and obj.likes.filter(user=viewer).exists()

    def get_userRating(self, obj):
        viewer = self._viewer()
        if not viewer:
            return None
        rating = obj.ratings.filter(user=viewer).first()
        return rating.rating if rating else None


class CocktailWriteSerializer(serializers.Serializer):
    """Validates cocktail create/update payloads (JSON or multipart)."""
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=500)
    ingredients = JSONListField(child=IngredientSerializer(), allow_empty=False)
    instructions = JSONListField(child=InstructionSerializer(), allow_empty=False)
    prepTime = serializers.IntegerField(source='prep_time', min_value=1)
    servings = serializers.IntegerField(min_value=1, required=False, default=1)
    glassType = serializers.CharField(source='glass_type', max_length=100)
    garnish = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    category = serializers.ChoiceField(choices=CATEGORY_CHOICES, required=False, default='signature')
    tags = JSONListField(
        child=serializers.CharField(max_length=30),
        required=False,
        default=list,
        split_commas=True,
    )
    alcoholContent = serializers.ChoiceField(
        source='alcohol_content', choices=ALCOHOL_CONTENT_CHOICES, required=False, default='medium'
    )
    flavor = serializers.ChoiceField(choices=FLAVOR_CHOICES, required=False, default='sweet')
    image = ImageRefSerializer(required=False)

    def to_internal_value(self, data):
        # multipart sends the image reference as a JSON string; the file itself
        # arrives in request.FILES and is handled by the service
        if hasattr(data, 'getlist'):
            data = {key: (data.getlist(key) if key == 'tags' else data.get(key)) for key in data.keys()}
        image = data.get('image') if isinstance(data, dict) else None
        if image is not None and not isinstance(image, dict):
            data = dict(data)
            data.pop('image')
            if isinstance(image, str) and image.strip():
                try:
                    data['image'] = json.loads(image)
                except ValueError:
                    raise serializers.ValidationError({'image': ['Image must be a JSON object.']})
        return super().to_internal_value(data)

    def validate_instructions(self, value):
        return sorted(value, key=lambda item: item['step'])

    def validate_tags(self, value):
        return [tag.strip() for tag in value if tag and tag.strip()]


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=50)
    email = serializers.EmailField()
    username = serializers.RegexField(
        r'^[a-zA-Z0-9_]{3,20}$',
        error_messages={'invalid': 'Username must be 3-20 letters, numbers, or underscores'},
    )
    password = serializers.CharField(write_only=True)
    country = serializers.RegexField(r'^[A-Za-z]{2}$', required=False, allow_blank=True)

    def validate_email(self, value):
        return value.strip().lower()

    def validate_password(self, value):
        try:
            validate_password(value)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(list(exc.messages))
        return value


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate_email(self, value):
        return value.strip().lower()


class PasswordUpdateSerializer(serializers.Serializer):
    currentPassword = serializers.CharField(write_only=True)
    newPassword = serializers.CharField(write_only=True)

    def validate_newPassword(self, value):
        try:
            validate_password(value)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(list(exc.messages))
        return value


class PasswordResetSerializer(serializers.Serializer):
    password = serializers.CharField(write_only=True)

    def validate_password(self, value):
        try:
            validate_password(value)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(list(exc.messages))
        return value


class EmailOnlySerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate_email(self, value):
        return value.strip().lower()


class DeleteAccountSerializer(serializers.Serializer):
    password = serializers.CharField(write_only=True)


class DetailsUpdateSerializer(serializers.ModelSerializer):
    """Account details editable through /auth/updatedetails."""

    class Meta:
        model = User
        fields = ['name', 'email', 'username', 'bio', 'speciality', 'location', 'country']
        extra_kwargs = {field: {'required': False} for field in fields}

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exclude(pk=self.instance.pk).exists():
            raise serializers.ValidationError('Email is already in use')
        return value

    def validate_country(self, value):
        return (value or '').strip().upper()


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """Public profile fields editable through /users/profile."""
    socialLinks = JSONDictField(source='social_links', child=serializers.CharField(allow_blank=True), required=False)
    preferences = JSONDictField(required=False)

    class Meta:
        model = User
        fields = ['name', 'bio', 'speciality', 'location', 'socialLinks', 'preferences']
        extra_kwargs = {
            'name': {'required': False},
            'bio': {'required': False},
            'speciality': {'required': False},
            'location': {'required': False},
        }

    def validate_preferences(self, value):
        visibility = value.get('profileVisibility')
        if visibility is not None and visibility not in ('public', 'private'):
            raise serializers.ValidationError('profileVisibility must be public or private')
        if 'emailNotifications' in value and not isinstance(value['emailNotifications'], bool):
            raise serializers.ValidationError('emailNotifications must be a boolean')
        merged = dict(self.instance.preferences or {}) if self.instance else {}
        merged.update(value)
        return merged


class CommentInputSerializer(serializers.Serializer):
    text = serializers.CharField(max_length=500, trim_whitespace=True)


class RatingInputSerializer(serializers.Serializer):
    rating = serializers.IntegerField(
        min_value=1,
        max_value=5,
        error_messages={
            'min_value': 'Rating must be between 1 and 5',
            'max_value': 'Rating must be between 1 and 5',
        },
    )


class FavoriteSerializer(serializers.ModelSerializer):
    cocktail = CocktailSerializer(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Favorite
        fields = ['id', 'cocktail', 'createdAt']
        read_only_fields = fields


class FavoriteInputSerializer(serializers.Serializer):
    cocktail = serializers.UUIDField()


class AuditLogSerializer(serializers.ModelSerializer):
    actor = UserSummarySerializer(read_only=True)
    targetType = serializers.CharField(source='target_type', read_only=True)
    targetId = serializers.CharField(source='target_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = AuditLog
        fields = ['id', 'actor', 'action', 'targetType', 'targetId', 'reason', 'meta', 'createdAt']
        read_only_fields = fields


class AdminReasonSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class BulkActionSerializer(AdminReasonSerializer):
    ids = serializers.ListField(child=serializers.CharField(max_length=64), allow_empty=False, max_length=500)
    action = serializers.CharField(max_length=32)
