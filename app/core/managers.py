"""
Custom QuerySet and Manager classes for soft-deletable models.

Usage:
    from core.managers import SoftDeleteManager

    class Chat(SoftDeleteMixin, BaseModel):
        objects = SoftDeleteManager()   # Default: excludes deleted
        all_objects = models.Manager()  # Includes deleted

    Chat.objects.all()            # Only live chats
    Chat.objects.deleted()        # Only deleted chats
    Chat.objects.with_deleted()   # Everything

Related:
    - core.model_mixins.SoftDeleteMixin: Model mixin for soft delete fields
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class SoftDeleteQuerySet(models.QuerySet):
    """
    QuerySet that provides soft delete operations.

    delete() marks rows as deleted instead of removing them; use
    hard_delete() for a real DELETE.
    """

    def delete(self) -> tuple[int, dict[str, int]]:
        """
        Soft delete all objects in queryset.

        Returns:
            Tuple of (count, {model_label: count}) matching Django's delete()
        """
        instances = list(self.filter(is_deleted=False))
        for instance in instances:
            if hasattr(instance, "on_soft_delete"):
                instance.on_soft_delete()

        count = self.filter(is_deleted=False).update(
            is_deleted=True, deleted_at=timezone.now()
        )
        return count, {self.model._meta.label: count}

    def hard_delete(self) -> tuple[int, dict[str, int]]:
        """Permanently delete all objects in queryset."""
        return super().delete()

    def restore(self) -> int:
        """Restore all soft-deleted objects in queryset."""
        instances = list(self.filter(is_deleted=True))
        for instance in instances:
            if hasattr(instance, "on_restore"):
                instance.on_restore()

        return self.filter(is_deleted=True).update(is_deleted=False, deleted_at=None)

    def deleted(self) -> SoftDeleteQuerySet:
        return self.filter(is_deleted=True)

    def active(self) -> SoftDeleteQuerySet:
        return self.filter(is_deleted=False)


class SoftDeleteManager(models.Manager):
    """
    Manager that filters out soft-deleted records by default.

    Always pair with a plain models.Manager (all_objects) so admin pages
    and data migrations can still reach deleted rows.
    """

    def get_queryset(self) -> SoftDeleteQuerySet:
        return SoftDeleteQuerySet(self.model, using=self._db).filter(is_deleted=False)

    def deleted(self) -> SoftDeleteQuerySet:
        return SoftDeleteQuerySet(self.model, using=self._db).filter(is_deleted=True)

    def with_deleted(self) -> SoftDeleteQuerySet:
        return SoftDeleteQuerySet(self.model, using=self._db)
