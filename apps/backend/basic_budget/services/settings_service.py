from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError

from .. import schemas
from ..core.errors import ValidationError
from .context import ServiceContext

logger = logging.getLogger(__name__)


class SettingsService:
    """앱 설정 (단일 행) 조회/수정"""

    def __init__(self, ctx: ServiceContext):
        self.ctx = ctx
        self.repos = ctx.repos

    def get_settings(self) -> schemas.Settings:
        return self.repos.settings.get()

    def update_settings(self, patch: schemas.SettingsUpdate | dict) -> schemas.Settings:
        try:
            data = patch if isinstance(patch, schemas.SettingsUpdate) else schemas.SettingsUpdate.model_validate(patch)
        except PydanticValidationError as exc:
            raise ValidationError(f"Invalid settings: {exc.errors()[0]['msg']}", exc) from exc

        changes = data.model_dump(exclude_unset=True)
        # 명시적 None 은 biweekly_anchor_date 만 허용 (기준일 해제)
        changes = {k: v for k, v in changes.items() if v is not None or k == "biweekly_anchor_date"}
        if not changes:
            return self.repos.settings.get()

        updated = self.repos.settings.update(changes)
        logger.info("settings updated fields=%s", sorted(changes))
        return updated
