from toolbox_website.catalog import load_catalog
from toolbox_website.seo_utils import canonical_url
from toolbox_website.seo_utils import generate_breadcrumb_list
from toolbox_website.seo_utils import generate_meta_description
from toolbox_website.seo_utils import generate_meta_title
from toolbox_website.seo_utils import generate_tool_schema


def test_canonical_url_joins_without_trailing_slash():
    assert canonical_url("https://example.com/toolbox/", "/") == "https://example.com/toolbox"
    assert canonical_url("https://example.com", "/tools/bmi-calculator/") == "https://example.com/tools/bmi-calculator"


def test_generate_meta_title_includes_category_when_it_fits():
    assert generate_meta_title("BMI Calculator", "Calculator") == "BMI Calculator - Free Online Calculator | Toolbox"


def test_generate_meta_title_drops_category_when_too_long():
    title = generate_meta_title("Loan Amortization Schedule", "Calculation Tools For Everyone")
    assert title == "Loan Amortization Schedule | Toolbox"
    assert len(generate_meta_title("x" * 100)) == 60


def test_generate_meta_description_truncates_at_sentence_boundary():
    description = "First sentence here. " + "Second sentence that is quite long " * 6
    result = generate_meta_description("Tool", description, max_length=60)
    assert result == "First sentence here..."


def test_generate_meta_description_fallback_for_empty_description():
    assert generate_meta_description("Word Counter", "").startswith("Use Word Counter online for free")


def test_generate_breadcrumb_list_positions_and_urls():
    breadcrumbs = generate_breadcrumb_list(
        [{"name": "Home", "url": ""}, {"name": "PDF Tools", "url": "category/pdf"}],
        "https://example.com",
    )
    items = breadcrumbs["itemListElement"]
    assert [item["position"] for item in items] == [1, 2]
    assert items[0]["item"] == "https://example.com"
    assert items[1]["item"] == "https://example.com/category/pdf"


def test_generate_tool_schema_lists_features():
    tool = load_catalog().by_id("bmi-calculator")
    schema = generate_tool_schema(tool, "https://example.com")
    assert schema["@type"] == "SoftwareApplication"
    assert schema["url"] == "https://example.com/tools/bmi-calculator"
    assert schema["featureList"] == tool.features
    assert schema["offers"]["price"] == "0"
