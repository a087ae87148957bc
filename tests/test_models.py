"""Unit tests for data models and rule loading."""

from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

from showtime.errors import RuleEngineUnavailable
from showtime.models.movie import Movie
from showtime.models.rules import DEFAULT_RULES_PATH, CatalogRules, load_default_rules


class TestMovie:
    """Tests for Movie model."""

    def test_minimal_creation(self) -> None:
        """Movie requires only title and price."""
        movie = Movie(title="A", price=Decimal("9.99"))
        assert movie.title == "A"
        assert movie.price == Decimal("9.99")
        assert movie.image_url == ""
        assert movie.purchase_url is None

    def test_is_frozen(self) -> None:
        """Movie records are immutable."""
        movie = Movie(title="A", price=Decimal("1.00"))
        with pytest.raises(ValidationError):
            movie.title = "B"

    def test_negative_price_rejected(self) -> None:
        """Price must be >= 0."""
        with pytest.raises(ValidationError):
            Movie(title="A", price=Decimal("-1"))

    def test_empty_title_rejected(self) -> None:
        """Title must not be empty."""
        with pytest.raises(ValidationError):
            Movie(title="", price=Decimal("1"))

    def test_is_free(self) -> None:
        """is_free is true only for zero price."""
        assert Movie(title="A", price=Decimal("0.00")).is_free is True
        assert Movie(title="A", price=Decimal("0.01")).is_free is False


class TestCatalogRules:
    """Tests for CatalogRules loading."""

    def test_bundled_rules_load(self) -> None:
        """Bundled YAML loads with the iTunes paths first."""
        rules = CatalogRules.from_yaml(DEFAULT_RULES_PATH)
        assert rules.entries_paths == ["feed.entry", "results"]
        assert rules.field_paths["title"][0] == "im:name.label"
        assert "free" in rules.free_labels
        assert rules.image_pick == "last"

    def test_load_default_rules_env_override(self, tmp_path: Path, monkeypatch) -> None:
        """SHOWTIME_RULES_PATH replaces the bundled rules."""
        path = tmp_path / "rules.yaml"
        path.write_text("entries_paths: items\nfields:\n  title: name\n  price: cost\n")
        monkeypatch.setenv("SHOWTIME_RULES_PATH", str(path))
        rules = load_default_rules()
        assert rules.entries_paths == ["items"]
        assert rules.field_paths == {"title": ["name"], "price": ["cost"]}

    def test_flat_and_nested_layouts(self, tmp_path: Path) -> None:
        """Nested decode/filter sections and flat keys are both accepted."""
        path = tmp_path / "rules.yaml"
        path.write_text("decode:\n  entries_paths: [data]\nfree_labels: [Gratis]\n")
        rules = CatalogRules.from_yaml(path)
        assert rules.entries_paths == ["data"]
        assert rules.free_labels == ["gratis"]

    def test_missing_file_raises_unavailable(self, tmp_path: Path) -> None:
        """Missing file raises RuleEngineUnavailable."""
        with pytest.raises(RuleEngineUnavailable):
            CatalogRules.from_yaml(tmp_path / "nope.yaml")

    def test_invalid_yaml_raises_unavailable(self, tmp_path: Path) -> None:
        """Malformed YAML raises RuleEngineUnavailable."""
        path = tmp_path / "rules.yaml"
        path.write_text("fields: [unclosed\n")
        with pytest.raises(RuleEngineUnavailable):
            CatalogRules.from_yaml(path)

    def test_non_utf8_file_raises_unavailable(self, tmp_path: Path) -> None:
        """Bytes that are not UTF-8 raise RuleEngineUnavailable."""
        path = tmp_path / "rules.yaml"
        path.write_bytes(b"decode:\n  entries_paths: [\xff\xfe]\n")
        with pytest.raises(RuleEngineUnavailable):
            CatalogRules.from_yaml(path)

    def test_invalid_schema_raises_unavailable(self, tmp_path: Path) -> None:
        """Schema violations raise RuleEngineUnavailable."""
        path = tmp_path / "rules.yaml"
        path.write_text("image_pick: middle\n")
        with pytest.raises(RuleEngineUnavailable):
            CatalogRules.from_yaml(path)

    def test_non_mapping_raises_unavailable(self, tmp_path: Path) -> None:
        """A YAML list at top level is rejected."""
        path = tmp_path / "rules.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(RuleEngineUnavailable):
            CatalogRules.from_yaml(path)
