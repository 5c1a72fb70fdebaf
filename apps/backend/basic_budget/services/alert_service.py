"""
알림(Alert) 서비스

평가 규칙 (카테고리별, 보관되지 않았고 규칙이 활성화된 경우만):
1. 초과 지출 → 열린 overspent 알림이 없으면 생성 (threshold 100), 이 카테고리의
   approaching_limit 평가는 건너뜀
2. 지출/기간 예산 × 100 >= approaching_limit_percent → 열린 approaching_limit
   알림이 없으면 생성

같은 유형의 알림은 열린(미해제) 상태인 동안 카테고리당 최대 1개입니다.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .. import schemas
from ..domain.types import date_str
from ..models import AlertType
from .context import ServiceContext
from .internal import ensure, require_value
from .summary import build_category_summary

logger = logging.getLogger(__name__)

OVERSPENT_THRESHOLD_PERCENT = 100


def should_create_approaching_alert(spent_cents: int, budgeted_cents: int, threshold_percent: int) -> bool:
    if budgeted_cents <= 0:
        return False
    return (spent_cents / budgeted_cents) * 100 >= threshold_percent


def has_open_alert_type(alerts: Iterable[schemas.Alert], alert_type: AlertType) -> bool:
    return any(a.type == alert_type and a.is_open for a in alerts)


class AlertService:
    def __init__(self, ctx: ServiceContext):
        self.ctx = ctx
        self.repos = ctx.repos

    def _new_alert(self, category_id: str, period_id: str, alert_type: AlertType, threshold: int) -> schemas.Alert:
        alert = schemas.Alert(
            id=self.ctx.ids.next(),
            category_id=category_id,
            period_id=period_id,
            type=alert_type,
            threshold_percent=threshold,
            triggered_at=self.ctx.clock.now(),
            dismissed_at=None,
        )
        self.repos.alerts.insert(alert)
        logger.info("alert raised type=%s category=%s period=%s", alert_type.value, category_id, period_id)
        return alert

    def evaluate_alerts(self, period_id: str, date: str) -> list[schemas.Alert]:
        """
        기간 알림 평가

        Returns:
            해당 기간의 전체 알림 (triggered_at 내림차순)
        """
        date = date_str(date)
        period = require_value(self.repos.periods.get_by_id(period_id), f"Period not found: {period_id}")
        settings = self.repos.settings.get()

        for budget in self.repos.budgets.get_by_period(period_id):
            category = self.repos.categories.get_by_id(budget.category_id)
            if category is None or category.archived_at:
                continue

            rule = self.repos.alerts.get_rule(category.id)
            if not rule.enabled:
                continue

            summary = build_category_summary(self.ctx, period, category, budget, date, settings.week_start)
            open_alerts = self.repos.alerts.list_open_by_period_and_category(period_id, category.id)

            if summary.left_to_spend.is_overspent:
                if not has_open_alert_type(open_alerts, AlertType.OVERSPENT):
                    self._new_alert(category.id, period_id, AlertType.OVERSPENT, OVERSPENT_THRESHOLD_PERCENT)
                continue

            if should_create_approaching_alert(
                summary.spent_cents,
                summary.budgeted_period_cents,
                rule.approaching_limit_percent,
            ) and not has_open_alert_type(open_alerts, AlertType.APPROACHING_LIMIT):
                self._new_alert(category.id, period_id, AlertType.APPROACHING_LIMIT, rule.approaching_limit_percent)

        return self.repos.alerts.list_by_period(period_id)

    def list_alerts(self, period_id: str) -> list[schemas.Alert]:
        require_value(self.repos.periods.get_by_id(period_id), f"Period not found: {period_id}")
        return self.repos.alerts.list_by_period(period_id)

    def list_open_alerts(self, period_id: str) -> list[schemas.Alert]:
        return [a for a in self.list_alerts(period_id) if a.is_open]

    def dismiss_alert(self, alert_id: str) -> schemas.Alert:
        alert = require_value(self.repos.alerts.get_by_id(alert_id), f"Alert not found: {alert_id}")
        if alert.dismissed_at:
            return alert

        dismissed_at = self.ctx.clock.now()
        self.repos.alerts.dismiss(alert_id, dismissed_at)
        return alert.model_copy(update={"dismissed_at": dismissed_at})

    def get_alert_rules(self, category_id: str) -> schemas.AlertRule:
        return self.repos.alerts.get_rule(category_id)

    def set_alert_rule(self, rule: schemas.AlertRule) -> schemas.AlertRule:
        ensure(1 <= rule.approaching_limit_percent <= 100, "approaching_limit_percent must be between 1 and 100")
        require_value(self.repos.categories.get_by_id(rule.category_id), f"Category not found: {rule.category_id}")
        self.repos.alerts.set_rule(rule)
        return rule
