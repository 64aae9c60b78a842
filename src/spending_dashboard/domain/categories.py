from typing import Any

UNCATEGORIZED = "Uncategorized"


def normalize_category_list(value: Any) -> list[str]:
    """Deduplicate a stored category list, keeping first-seen order."""
    if not value or not isinstance(value, list):
        return []
    categories: list[str] = []
    seen = set()
    for item in value:
        if not isinstance(item, str):
            continue
        if item and item not in seen:
            categories.append(item)
            seen.add(item)
    return categories


def add_category(existing: list[str], category: str) -> list[str]:
    if not category or category in existing:
        return existing
    return [*existing, category]


def remove_category(existing: list[str], category: str) -> list[str]:
    if category not in existing:
        return existing
    return [c for c in existing if c != category]


def category_label(category: str) -> str:
    return category or UNCATEGORIZED
