import pytest

from fakes import FakeClassifier
from smartspend.models.records import Category
from smartspend.services.categorizer import (
    CategoryResolver, default_category, fallback_categorize, keyword_category,
)


@pytest.mark.parametrize("name, expected", [
    ("Starbucks Coffee", "Food & Dining"),
    ("Uber", "Transportation"),
    ("Amazon order", "Shopping"),
    ("Walmart run", "Groceries"),
    ("Internet", "Utilities"),
    ("Netflix", "Entertainment"),
    ("Pharmacy", "Health & Medical"),
    ("Hotel Booking", "Travel"),
])
def test_keywords(categories, name, expected):
    assert keyword_category(name, categories).name == expected


def test_keyword_table_order_wins(categories):
    # "flight" is listed under Transportation before Travel
    assert keyword_category("Flight to Rome", categories).name == "Transportation"
    # "gas bill" contains "gas", which Transportation claims first
    assert keyword_category("Gas Bill", categories).name == "Transportation"


def test_keyword_needs_the_category_to_exist():
    cats = [Category(id=1, name="Misc", is_default=True)]
    assert keyword_category("coffee", cats) is None
    assert fallback_categorize("coffee", cats).name == "Misc"


def test_default_category(categories):
    assert default_category(categories).name == "Entertainment"
    cats = [Category(id=1, name="A"), Category(id=2, name="B", is_default=True)]
    assert default_category(cats).name == "B"


def test_default_category_without_flagged_default():
    cats = [Category(id=1, name="A"), Category(id=2, name="B")]
    assert default_category(cats).name == "A"


def test_default_category_empty():
    with pytest.raises(ValueError):
        default_category([])


@pytest.mark.asyncio
async def test_no_classifier_uses_keywords(categories):
    resolver = CategoryResolver()
    assert not resolver.ai_enabled
    assert (await resolver.resolve("Uber", categories)).name == "Transportation"
    assert (await resolver.resolve("Mystery box", categories)).name == "Entertainment"


@pytest.mark.asyncio
async def test_classifier_answer_wins(categories):
    classifier = FakeClassifier(answer="  groceries \n")
    resolver = CategoryResolver(classifier)
    assert resolver.ai_enabled
    assert (await resolver.resolve("Starbucks Coffee", categories)).name == "Groceries"
    assert classifier.calls == [("Starbucks Coffee", [c.name for c in categories])]


@pytest.mark.asyncio
async def test_classifier_first_line_only(categories):
    resolver = CategoryResolver(FakeClassifier(answer="Travel\nbecause it is a hotel"))
    assert (await resolver.resolve("Hilton", categories)).name == "Travel"


@pytest.mark.asyncio
async def test_unknown_answer_goes_to_default_not_keywords(categories):
    resolver = CategoryResolver(FakeClassifier(answer="Coffee Shops"))
    assert (await resolver.resolve("Starbucks Coffee", categories)).name == "Entertainment"


@pytest.mark.asyncio
async def test_classifier_failure_falls_back_to_keywords(categories):
    resolver = CategoryResolver(FakeClassifier(error=RuntimeError("rate limited")))
    assert (await resolver.resolve("Starbucks Coffee", categories)).name == "Food & Dining"


@pytest.mark.asyncio
async def test_resolve_without_categories():
    with pytest.raises(ValueError):
        await CategoryResolver().resolve("Coffee", [])


@pytest.mark.asyncio
async def test_suggest_emoji():
    assert await CategoryResolver().suggest_emoji("Pets") == "📝"
    assert await CategoryResolver(FakeClassifier(emoji=" 🐶 ")).suggest_emoji("Pets") == "🐶"
    assert await CategoryResolver(FakeClassifier(emoji="")).suggest_emoji("Pets") == "📝"
    assert await CategoryResolver(FakeClassifier(emoji="a dog emoji")).suggest_emoji("Pets") == "📝"
    failing = CategoryResolver(FakeClassifier(error=RuntimeError("down")))
    assert await failing.suggest_emoji("Pets") == "📝"
