from __future__ import annotations

import logging

from .. import schemas
from .context import ServiceContext
from .internal import ensure, require_value

logger = logging.getLogger(__name__)


class CategoryService:
    """카테고리 생성/수정/보관 (보관은 soft, 삭제 없음)"""

    def __init__(self, ctx: ServiceContext):
        self.ctx = ctx
        self.repos = ctx.repos

    def create_category(self, data: schemas.CategoryCreate) -> schemas.Category:
        name = (data.name or "").strip()
        ensure(bool(name), "Category name is required")

        category = schemas.Category(
            id=self.ctx.ids.next(),
            name=name,
            kind=data.kind,
            icon=data.icon,
            color=data.color,
            archived_at=None,
        )
        self.repos.categories.insert(category)
        return category

    def update_category(self, category_id: str, patch: schemas.CategoryUpdate) -> schemas.Category:
        existing = self.get_category(category_id)

        changes = patch.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        updated = existing.model_copy(update=changes)
        ensure(bool(updated.name), "Category name is required")

        self.repos.categories.update(updated)
        return updated

    def archive_category(self, category_id: str) -> schemas.Category:
        existing = self.get_category(category_id)
        # 이미 보관된 카테고리는 그대로 (archived_at 유지)
        if existing.archived_at:
            return existing

        archived_at = self.ctx.clock.now()
        self.repos.categories.archive(category_id, archived_at)
        logger.info("category archived id=%s", category_id)
        return existing.model_copy(update={"archived_at": archived_at})

    def get_category(self, category_id: str) -> schemas.Category:
        return require_value(self.repos.categories.get_by_id(category_id), f"Category not found: {category_id}")

    def list_categories(self, include_archived: bool = False) -> list[schemas.Category]:
        return self.repos.categories.list(include_archived)
