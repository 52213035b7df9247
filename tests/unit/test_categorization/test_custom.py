import pytest

from statement_compare.categorization import CustomCategoryRegistry, categorize
from statement_compare.core.exceptions import CategoryError


def test_add_and_list_custom_categories():
    registry = CustomCategoryRegistry()
    assert registry.add("  Pets ") == "Pets"
    registry.add("Childcare")
    registry.add("Pets")

    assert registry.names() == ["Pets", "Childcare"]
    assert "Pets" in registry
    assert len(registry) == 2


def test_seeded_from_constructor():
    registry = CustomCategoryRegistry(["Gifts", "Travel"])
    assert list(registry) == ["Gifts", "Travel"]


def test_remove_custom_category():
    registry = CustomCategoryRegistry(["Pets"])
    assert registry.remove("Pets") is True
    assert registry.remove("Pets") is False
    assert registry.names() == []


def test_empty_name_rejected():
    registry = CustomCategoryRegistry()
    with pytest.raises(CategoryError) as exc_info:
        registry.add("   ")
    assert exc_info.value.error_code == "API_001"


def test_builtin_name_rejected():
    registry = CustomCategoryRegistry()
    with pytest.raises(CategoryError):
        registry.add("Groceries")


def test_is_known_covers_builtin_and_custom():
    registry = CustomCategoryRegistry(["Pets"])
    assert registry.is_known("groceries")
    assert registry.is_known("Pets")
    assert not registry.is_known("Boats")


def test_custom_categories_never_change_classification():
    before = categorize("PETSMART #221")
    registry = CustomCategoryRegistry(["Pets", "petsmart"])
    assert "petsmart" in registry
    assert categorize("PETSMART #221") == before == "shopping"
