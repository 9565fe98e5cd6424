import pytest

from models.product_record import CATEGORIES, ProductDraft, parse_price
from services.prompts import description_prompt, support_prompt


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("85", 85.0),
        (" 12.50 ", 12.5),
        ("0", 0.0),
        ("", None),
        (None, None),
        ("abc", None),
        ("inf", None),
    ],
)
def test_parse_price(raw, expected):
    assert parse_price(raw) == expected


def test_categories_are_the_fixed_set():
    assert len(CATEGORIES) == 10
    assert "Glass Art" in CATEGORIES
    assert "Leather Goods" in CATEGORIES


def test_support_prompt_quotes_customer_message():
    prompt = support_prompt("Do you offer gift wrap?")
    assert 'Customer message: "Do you offer gift wrap?"' in prompt
    assert "Customization and special requests" in prompt


def test_description_prompt_formats_price():
    prompt = description_prompt(ProductDraft(name="Mug", category="Pottery", price="24.99"))
    assert "- Price: $24.99" in prompt
    assert "emotional connection" in prompt
