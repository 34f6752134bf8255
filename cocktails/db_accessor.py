from typing import Any, Mapping, Optional, Sequence, Tuple, Type
from django.db.models import Model, QuerySet


class DB_Accessor:
    """Generic data accessor wrapping the queryset operations repos share."""

    def __init__(self, model: Type[Model]) -> None:
        self.model = model

    def queryset(self) -> QuerySet:
        return self.model.objects.all()

    def list(
        self,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Sequence[str] = (),
        limit: Optional[int] = None,
        offset: int = 0,
        qs: Optional[QuerySet] = None,
    ) -> QuerySet:
        """Return a filtered, ordered and sliced queryset."""
        qs = self.queryset() if qs is None else qs
        if filters:
            qs = qs.filter(**filters)
        if order_by:
            qs = qs.order_by(*order_by)
        return self._apply_slice(qs, offset=offset, limit=limit)

    def _apply_slice(self, qs: QuerySet, *, offset: int = 0, limit: Optional[int] = None) -> QuerySet:
        if not (offset or limit is not None):
            return qs
        start = max(0, int(offset))
        end = None if limit is None else start + max(0, int(limit))
        return qs[start:end]

    def paginate(self, qs: QuerySet, *, page: int, limit: int) -> Tuple[list, int]:
        """Return one page of objects plus the unsliced total."""
        total = qs.count()
        items = list(self._apply_slice(qs, offset=(page - 1) * limit, limit=limit))
        return items, total

    def get(self, **lookup: Any) -> Model:
        """Fetch a single object matching the lookup."""
        return self.model.objects.get(**lookup)

    def first(self, **lookup: Any) -> Optional[Model]:
        return self.model.objects.filter(**lookup).first()

    def exists(self, **lookup: Any) -> bool:
        return self.model.objects.filter(**lookup).exists()

    def count(self, **lookup: Any) -> int:
        return self.model.objects.filter(**lookup).count()

    def create(self, **data: Any) -> Model:
        """Create and return a new object."""
        return self.model.objects.create(**data)

    def update(self, lookup: Mapping[str, Any], **data: Any) -> int:
        """Update objects matching lookup; return count updated."""
        return self.model.objects.filter(**lookup).update(**data)

    def delete(self, **lookup: Any) -> int:
        """Delete objects matching lookup; return count deleted."""
        count, _ = self.model.objects.filter(**lookup).delete()
        return count
