from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from budgetkeeper.db import BudgetRepository
from budgetkeeper.models import Budget, Expense
from budgetkeeper.services import total_monthly_expenses


def test_save_new_budget_reports_success(budget_repo, sample_budget):
    result = budget_repo.save(sample_budget)

    assert result.success
    assert result.inserted is True
    assert result.id == sample_budget.id


def test_save_twice_succeeds_both_times(budget_repo, sample_budget):
    first = budget_repo.save(sample_budget)
    first_saved = budget_repo.get_by_id(sample_budget.id).last_saved_date

    second = budget_repo.save(sample_budget)
    reloaded = budget_repo.get_by_id(sample_budget.id)

    assert first.success
    assert second.success
    assert second.inserted is False
    assert reloaded.id == sample_budget.id
    assert reloaded.last_saved_date > first_saved


def test_save_stamps_last_saved_date(store):
    stamp = datetime(2024, 5, 1, 12, 30)
    repo = BudgetRepository(store, clock=lambda: stamp)
    budget = Budget()

    repo.save(budget)

    assert budget.last_saved_date == stamp
    assert repo.get_by_id(budget.id).last_saved_date == stamp


def test_round_trip_preserves_aggregate(budget_repo, sample_budget):
    budget_repo.save(sample_budget)

    loaded = budget_repo.get_by_id(sample_budget.id)

    assert loaded.annual_salary == Decimal("60000")
    assert loaded.created_date == sample_budget.created_date
    assert [e.bill_name for e in loaded.expenses] == ["Rent", "Phone", "Streaming"]
    assert loaded.expenses[0].due_day == 1
    assert loaded.incomes[1].income_type == "freelance"
    assert loaded.credit_cards[0].name == "Visa"
    assert loaded.online_services[0].institution == "PayPal"


def test_edit_and_save_recomputes_totals(budget_repo, sample_budget):
    budget_repo.save(sample_budget)
    loaded = budget_repo.get_by_id(sample_budget.id)
    loaded.expenses.append(Expense("Gym", "Gym Co", "Visa", Decimal("20.00")))
    budget_repo.save(loaded)

    reloaded = budget_repo.get_by_id(sample_budget.id)

    assert total_monthly_expenses(reloaded) == Decimal("1600.00")


def test_stored_document_has_no_derived_totals(store, budget_repo, sample_budget):
    budget_repo.save(sample_budget)

    raw = store.with_collection("Budget", lambda c: c.find_by_id(sample_budget.id))

    assert not any("total" in key for key in raw)


def test_get_all_orders_by_creation_date(budget_repo):
    later = Budget(created_date=datetime(2024, 2, 1))
    earlier = Budget(created_date=datetime(2023, 6, 1))
    budget_repo.save(later)
    budget_repo.save(earlier)

    assert [b.id for b in budget_repo.get_all()] == [earlier.id, later.id]


def test_get_latest_uses_last_saved_not_created(budget_repo):
    old = Budget(created_date=datetime(2020, 1, 1))
    new = Budget(created_date=datetime(2024, 1, 1))
    budget_repo.save(new)
    budget_repo.save(old)  # saved most recently

    assert budget_repo.get_latest().id == old.id


def test_get_latest_empty_returns_none(budget_repo):
    assert budget_repo.get_latest() is None


def test_get_by_id_missing_returns_none(budget_repo):
    assert budget_repo.get_by_id("missing") is None


def test_create_saves_empty_budget(budget_repo):
    budget = budget_repo.create(annual_salary=Decimal("48000"))

    loaded = budget_repo.get_by_id(budget.id)
    assert loaded.annual_salary == Decimal("48000")
    assert loaded.expenses == []
    assert loaded.bank_accounts == []


def test_delete(budget_repo, sample_budget):
    budget_repo.save(sample_budget)

    assert budget_repo.delete(sample_budget.id).success
    assert budget_repo.get_by_id(sample_budget.id) is None


def test_delete_missing_returns_failure(budget_repo):
    result = budget_repo.delete("does-not-exist")
    assert result.success is False


def test_concurrent_saves_all_land(store):
    def save_one(n):
        repo = BudgetRepository(store)
        return repo.save(Budget(annual_salary=Decimal(n)))

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(save_one, range(8)))

    assert all(r.success for r in results)
    loaded = BudgetRepository(store).get_all()
    assert len(loaded) == 8
    assert {b.id for b in loaded} == {r.id for r in results}
    raw = store.with_collection("Budget", lambda c: c.all())
    assert sorted(Budget.from_dict(doc).annual_salary for doc in raw) == [
        Decimal(n) for n in range(8)
    ]


def test_aware_created_date_loads_as_local_naive(budget_repo):
    aware = Budget(created_date=datetime(2024, 1, 1, tzinfo=timezone.utc))
    naive = Budget(created_date=datetime(2023, 6, 1))
    budget_repo.save(aware)
    budget_repo.save(naive)

    loaded = budget_repo.get_all()

    assert [b.id for b in loaded] == [naive.id, aware.id]
    assert all(b.created_date.tzinfo is None for b in loaded)
    assert budget_repo.get_latest().id == naive.id


def test_aware_created_date_keeps_the_instant(budget_repo):
    stamp = datetime(2024, 1, 1, 9, 0, tzinfo=timezone(timedelta(hours=5)))
    budget = Budget(created_date=stamp)
    budget_repo.save(budget)

    loaded = budget_repo.get_by_id(budget.id)

    assert loaded.created_date == stamp.astimezone().replace(tzinfo=None)
