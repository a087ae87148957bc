"""Catalog rules: where entries live in the feed and how fields map."""

import os
from pathlib import Path
from typing import Literal

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for rules loading. Run: poetry install"
    ) from e
from pydantic import BaseModel, Field, ValidationError, field_validator

from showtime.errors import RuleEngineUnavailable

DEFAULT_RULES_PATH = Path(__file__).resolve().parent.parent / "data" / "catalog_rules.yaml"


class CatalogRules(BaseModel):
    """Decode and filter rules for a catalog feed."""

    entries_paths: list[str] = Field(
        default_factory=lambda: ["feed.entry", "results"],
        description="Dotted paths to the entry list, tried in order",
    )
    field_paths: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Canonical field -> candidate dotted paths inside one entry",
    )
    required_fields: list[str] = Field(default_factory=lambda: ["title", "price"])
    free_labels: list[str] = Field(default_factory=lambda: ["free"])
    image_pick: Literal["first", "last"] = "last"
    image_field: str = "image_url"
    price_field: str = "price"

    @field_validator("entries_paths")
    @classmethod
    def _non_empty_paths(cls, v: list[str]) -> list[str]:
        paths = [p.strip() for p in v if p and p.strip()]
        if not paths:
            raise ValueError("entries_paths must name at least one path")
        return paths

    @field_validator("free_labels")
    @classmethod
    def _lower_labels(cls, v: list[str]) -> list[str]:
        return [label.lower().strip() for label in v]

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CatalogRules":
        """
        Load rules from a YAML file. Supports a nested `decode`/`filter`
        layout or flat top-level keys.
        Raises RuleEngineUnavailable when the file is missing or invalid.
        """
        try:
            data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        except (OSError, UnicodeDecodeError, RecursionError, yaml.YAMLError) as e:
            raise RuleEngineUnavailable(f"Unable to read rules file {path}: {e}") from e
        if not isinstance(data, dict):
            raise RuleEngineUnavailable(f"Rules file {path} must contain a mapping")

        decode = data.get("decode", {}) or {}
        filters = data.get("filter", {}) or {}
        if not isinstance(decode, dict) or not isinstance(filters, dict):
            raise RuleEngineUnavailable(f"Rules file {path}: 'decode' and 'filter' must be mappings")

        def _get(key: str, nested: dict, default=None):
            return nested.get(key, data.get(key, default))

        flat: dict = {}
        for key, yaml_key, nested in (
            ("entries_paths", "entries_paths", decode),
            ("field_paths", "fields", decode),
            ("required_fields", "required_fields", decode),
            ("image_pick", "image_pick", decode),
            ("image_field", "image_field", decode),
            ("free_labels", "free_labels", filters),
            ("price_field", "price_field", filters),
        ):
            value = _get(yaml_key, nested)
            if value is not None:
                flat[key] = value
        # A single path may be written as a plain string
        if isinstance(flat.get("entries_paths"), str):
            flat["entries_paths"] = [flat["entries_paths"]]
        if isinstance(flat.get("field_paths"), dict):
            flat["field_paths"] = {
                name: [paths] if isinstance(paths, str) else paths
                for name, paths in flat["field_paths"].items()
            }
        try:
            return cls.model_validate(flat)
        except ValidationError as e:
            raise RuleEngineUnavailable(f"Invalid rules in {path}: {e}") from e


def rules_path_from_env() -> Path:
    """Rules file path: SHOWTIME_RULES_PATH if set, else the bundled default."""
    env_path = os.environ.get("SHOWTIME_RULES_PATH")
    return Path(env_path) if env_path else DEFAULT_RULES_PATH


def load_default_rules() -> CatalogRules:
    """Load the bundled rules (or the SHOWTIME_RULES_PATH override)."""
    return CatalogRules.from_yaml(rules_path_from_env())
