from datetime import date

from budgetkeeper.config import APP_STATE_COLLECTION, APP_STATE_ID
from budgetkeeper.db import CacheRepository
from budgetkeeper.models import AppState


def _document_count(store):
    return store.with_collection(APP_STATE_COLLECTION, lambda c: len(c.all()))


def test_get_creates_default_for_current_month(store, cache_repo):
    state = cache_repo.get()

    assert state.id == APP_STATE_ID
    assert (state.selected_month, state.selected_year) == (3, 2024)
    assert _document_count(store) == 1


def test_get_returns_persisted_state(cache_repo):
    cache_repo.save(AppState(selected_month=11, selected_year=2022))

    state = cache_repo.get()

    assert (state.selected_month, state.selected_year) == (11, 2022)


def test_save_overwrites_singleton(store, cache_repo):
    cache_repo.get()
    first = cache_repo.save(AppState(selected_month=1, selected_year=2023))
    second = cache_repo.save(
        AppState(id="something-else", selected_month=2, selected_year=2023)
    )

    assert first.success and second.success
    assert _document_count(store) == 1
    assert cache_repo.get().selected_month == 2


def test_reset_points_back_at_today(store):
    today = {"value": date(2024, 3, 15)}
    repo = CacheRepository(store, today=lambda: today["value"])
    repo.save(AppState(selected_month=7, selected_year=2021))

    today["value"] = date(2025, 1, 2)
    result = repo.reset()

    assert result.success
    state = repo.get()
    assert (state.selected_month, state.selected_year) == (1, 2025)
    assert _document_count(store) == 1


def test_reset_without_existing_state(store, cache_repo):
    assert cache_repo.reset().success
    assert _document_count(store) == 1
