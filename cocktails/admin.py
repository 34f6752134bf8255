from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from cocktails.models import AuditLog, Cocktail, Comment, User
from cocktails.services.cache import invalidate_cocktail_cache


class CommentInline(admin.TabularInline):
    """Show comments directly on the cocktail page in Admin."""
    model = Comment
    extra = 0
    readonly_fields = ['user', 'text', 'created_at']


@admin.register(Cocktail)
class CocktailAdmin(admin.ModelAdmin):
    """Admin configuration for cocktails with moderation actions."""
    list_display = ('name', 'created_by', 'category', 'is_approved', 'is_featured', 'likes_count', 'created_at')
    list_filter = ('is_approved', 'is_featured', 'is_system', 'category')
    search_fields = ('name', 'description', 'created_by__username')
    readonly_fields = ('views', 'likes_count', 'average_rating', 'ratings_count', 'comments_count')
    actions = ['approve_cocktails', 'unapprove_cocktails']
    inlines = [CommentInline]

    @admin.action(description='Approve selected cocktails')
    def approve_cocktails(self, request, queryset):
        queryset.update(is_approved=True)
        invalidate_cocktail_cache()

    @admin.action(description='Hide selected cocktails (Unapprove)')
    def unapprove_cocktails(self, request, queryset):
        queryset.update(is_approved=False)
        invalidate_cocktail_cache()


@admin.register(User)
class BartenderAdmin(UserAdmin):
    """Stock user admin plus the verification and admin flags."""
    list_display = ('username', 'email', 'name', 'is_verified', 'is_admin', 'date_joined')
    list_filter = ('is_verified', 'is_admin', 'is_staff')
    fieldsets = UserAdmin.fieldsets + (
        ('Bartender profile', {'fields': ('bio', 'speciality', 'location', 'country', 'avatar', 'badges')}),
        ('Flags', {'fields': ('is_verified', 'is_admin')}),
    )


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ('action', 'target_type', 'target_id', 'actor', 'created_at')
    list_filter = ('action', 'target_type')
    readonly_fields = ('actor', 'action', 'target_type', 'target_id', 'reason', 'meta', 'created_at')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
