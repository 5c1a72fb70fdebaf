"""
CategoryService / TransactionService 테스트
"""

import pytest

from basic_budget import schemas
from basic_budget.core.errors import NotFoundError, ValidationError
from basic_budget.models import CategoryKind, TransactionSource, TransactionStatus
from conftest import make_category, make_period, spend


class TestCategoryService:
    def test_name_is_trimmed(self, services):
        category = make_category(services, "  Rent  ", CategoryKind.NEED)
        assert category.name == "Rent"

    def test_empty_name_rejected(self, services):
        with pytest.raises(ValidationError):
            make_category(services, "   ")
        assert services.categories.list_categories(include_archived=True) == []

    def test_update(self, services):
        category = make_category(services, "Fun", CategoryKind.WANT)

        updated = services.categories.update_category(
            category.id, schemas.CategoryUpdate(name=" Hobbies ", color="#ff0000")
        )

        assert updated.name == "Hobbies"
        assert updated.color == "#ff0000"
        assert updated.kind == CategoryKind.WANT
        assert services.categories.get_category(category.id).name == "Hobbies"

    def test_update_to_blank_name_rejected(self, services):
        category = make_category(services)
        with pytest.raises(ValidationError):
            services.categories.update_category(category.id, schemas.CategoryUpdate(name=" "))

    def test_archive_is_idempotent(self, services):
        category = make_category(services)

        first = services.categories.archive_category(category.id)
        second = services.categories.archive_category(category.id)

        assert first.archived_at is not None
        assert second.archived_at == first.archived_at
        assert services.categories.list_categories() == []
        assert len(services.categories.list_categories(include_archived=True)) == 1

    def test_missing_category(self, services):
        with pytest.raises(NotFoundError):
            services.categories.archive_category("missing")
        with pytest.raises(NotFoundError):
            services.categories.get_category("missing")


class TestTransactionService:
    @pytest.fixture
    def seeded(self, services):
        return make_period(services), make_category(services)

    def test_add_defaults(self, services, seeded):
        period, category = seeded

        tx = spend(services, period, category, 1200, merchant="Cafe")

        assert tx.amount_cents == -1200
        assert tx.source == TransactionSource.MANUAL
        assert tx.status == TransactionStatus.POSTED
        assert tx.external_id is None
        assert tx.created_at == tx.updated_at
        assert tx.deleted_at is None

    def test_add_requires_references(self, services, seeded):
        period, category = seeded
        with pytest.raises(NotFoundError):
            services.transactions.add_transaction(
                schemas.TransactionCreate(date="2026-04-02", amount_cents=-1, category_id="nope", period_id=period.id)
            )
        with pytest.raises(NotFoundError):
            services.transactions.add_transaction(
                schemas.TransactionCreate(date="2026-04-02", amount_cents=-1, category_id=category.id, period_id="nope")
            )

    def test_zero_amount_rejected(self, services, seeded):
        period, category = seeded
        with pytest.raises(ValidationError):
            services.transactions.add_transaction(
                schemas.TransactionCreate(date="2026-04-02", amount_cents=0, category_id=category.id, period_id=period.id)
            )

    def test_impossible_date_rejected(self, seeded):
        period, category = seeded
        with pytest.raises(ValueError):
            schemas.TransactionCreate(date="2026-02-30", amount_cents=-100, category_id=category.id, period_id=period.id)
        with pytest.raises(ValueError):
            schemas.TransactionUpdate(date="2026-4-02")

    def test_update_partial(self, services, seeded):
        period, category = seeded
        other = make_category(services, "Fun")
        tx = spend(services, period, category, 1200, merchant="Cafe")

        updated = services.transactions.update_transaction(
            tx.id,
            schemas.TransactionUpdate(amount_cents=-1500, category_id=other.id, merchant=None),
        )

        assert updated.amount_cents == -1500
        assert updated.category_id == other.id
        assert updated.merchant is None
        assert updated.date == tx.date
        assert updated.updated_at > tx.updated_at
        assert services.transactions.get_transaction(tx.id).merchant is None

    def test_update_unset_fields_untouched(self, services, seeded):
        period, category = seeded
        tx = spend(services, period, category, 1200, merchant="Cafe")

        updated = services.transactions.update_transaction(tx.id, schemas.TransactionUpdate(note="lunch"))

        assert updated.merchant == "Cafe"
        assert updated.note == "lunch"

    def test_update_with_missing_category(self, services, seeded):
        period, category = seeded
        tx = spend(services, period, category, 1200)
        with pytest.raises(NotFoundError):
            services.transactions.update_transaction(tx.id, schemas.TransactionUpdate(category_id="nope"))
        assert services.transactions.get_transaction(tx.id).category_id == category.id

    def test_soft_delete_excluded_everywhere(self, services, seeded):
        period, category = seeded
        keep = spend(services, period, category, 1000)
        gone = spend(services, period, category, 5000)

        services.transactions.delete_transaction(gone.id)

        with pytest.raises(NotFoundError):
            services.transactions.get_transaction(gone.id)
        with pytest.raises(NotFoundError):
            services.transactions.delete_transaction(gone.id)
        assert [t.id for t in services.transactions.list_transactions()] == [keep.id]
        assert services.context.repos.transactions.sum_spent_in_period(period.id, category.id) == 1000

    def test_list_filters_and_order(self, services, seeded):
        period, category = seeded
        other = make_category(services, "Fun")
        a = spend(services, period, category, 100, date="2026-04-02")
        b = spend(services, period, category, 200, date="2026-04-10")
        c = spend(services, period, other, 300, date="2026-04-10")

        all_ids = [t.id for t in services.transactions.list_transactions()]
        assert all_ids == [c.id, b.id, a.id]

        ranged = services.transactions.list_transactions(
            schemas.TransactionFilter(category_id=category.id, start_date="2026-04-05", end_date="2026-04-30")
        )
        assert [t.id for t in ranged] == [b.id]

    def test_sums_ignore_income(self, services, seeded):
        period, category = seeded
        spend(services, period, category, 1000, date="2026-04-02")
        spend(services, period, category, 2000, date="2026-04-14")
        services.transactions.add_transaction(
            schemas.TransactionCreate(date="2026-04-14", amount_cents=700, category_id=category.id, period_id=period.id)
        )

        repo = services.context.repos.transactions
        assert repo.sum_spent_in_period(period.id) == 3000
        assert repo.sum_spent_in_date_range(period.id, category.id, "2026-04-13", "2026-04-19") == 2000
