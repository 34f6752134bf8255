from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from cocktails.models import Cocktail, Follow
from cocktails.services.cache import invalidate_cocktail_cache
from cocktails.services.realtime import realtime_service


@receiver(post_save, sender=Cocktail)
@receiver(post_delete, sender=Cocktail)
def invalidate_listing_on_cocktail_change(sender, instance, **kwargs):
    """Any cocktail write makes cached listings stale."""
    invalidate_cocktail_cache()


@receiver(post_save, sender=Cocktail)
def announce_new_cocktail(sender, instance, created, **kwargs):
    """Push the author's new cocktail count to the community room."""
    if not created:
        return
    author_id = instance.created_by_id
    realtime_service.broadcast_member_update(
        author_id,
        {"cocktailsCount": Cocktail.objects.filter(created_by_id=author_id).count()},
    )


@receiver(post_save, sender=Follow)
@receiver(post_delete, sender=Follow)
def announce_follower_count(sender, instance, **kwargs):
    if kwargs.get("created") is False:
        return
    target_id = instance.following_id
    realtime_service.broadcast_member_update(
        target_id,
        {"followersCount": Follow.objects.filter(following_id=target_id).count()},
    )
