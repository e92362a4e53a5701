"""Tests for container wiring."""

import asyncio

from smartchef.config import Settings
from smartchef.containers import AppContainer, build_container
from tests.conftest import FixedClock, make_log


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.analytics is not None
    assert container.dish_service is None
    asyncio.run(container.close_resources())


def test_build_container_with_dish_source(settings: Settings) -> None:
    container = build_container(
        settings.model_copy(update={"dish_source_url": "https://dishes.example"})
    )

    assert container.dish_service is not None
    asyncio.run(container.close_resources())


def test_default_medium_persists_to_data_dir(settings: Settings) -> None:
    first = build_container(settings, clock=FixedClock())
    entry = make_log()
    first.nutrition_logs.append(entry)

    second = build_container(settings, clock=FixedClock())

    assert second.nutrition_logs.list_all() == [entry]
    assert (settings.data_dir / "smartchef_nutrition_logs.json").exists()


def test_clear_nutrition_data(container: AppContainer) -> None:
    container.nutrition_logs.append(make_log())

    container.clear_nutrition_data()

    assert container.nutrition_logs.list_all() == []
    assert container.diet_plans.get() is None
