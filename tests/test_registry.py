"""Tests for boardz/services/registry.py: the component registry."""

from __future__ import annotations

import pytest

from boardz.errors import (
    DuplicateNameError,
    InvalidNameError,
    InvalidTypeError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from boardz.models import ComponentType


def _definition(**overrides):
    definition = {
        "name": "favorite_color",
        "label": "Favorite color",
        "type": "text",
        "required": False,
        "placeholder": "Blue",
        "options": None,
    }
    definition.update(overrides)
    return definition


# ── Create ───────────────────────────────────────────────────────────────


class TestCreate:
    def test_creates_component(self, services, fake_supabase):
        component = services.registry.create(_definition())
        assert component.name == "favorite_color"
        assert component.type is ComponentType.TEXT
        assert component.id
        assert len(fake_supabase.tables["custom_components"]) == 1

    def test_label_and_placeholder_are_sanitized(self, services):
        component = services.registry.create(_definition(label=" <b>Color</b> ", placeholder=None))
        assert component.label == "bColor/b"
        assert component.placeholder == ""

    def test_invalid_name(self, services, fake_supabase):
        with pytest.raises(InvalidNameError) as excinfo:
            services.registry.create(_definition(name="Invalid-Name!"))
        assert excinfo.value.errors == {
            "name": "Component name must contain only lowercase letters and underscores",
        }
        assert fake_supabase.writes("custom_components") == []

    def test_name_too_short(self, services):
        with pytest.raises(InvalidNameError) as excinfo:
            services.registry.create(_definition(name="a"))
        assert excinfo.value.message == "Component name must be at least 2 characters"

    def test_duplicate_name(self, services, fake_supabase, add_component):
        add_component("phone", "phone")
        with pytest.raises(DuplicateNameError) as excinfo:
            services.registry.create(_definition(name="phone", type="phone"))
        assert excinfo.value.message == "Component name already exists"
        assert fake_supabase.writes("custom_components") == []

    def test_field_errors_reported_together(self, services):
        with pytest.raises(ValidationError) as excinfo:
            services.registry.create(_definition(label="", type="color", required="yes"))
        assert set(excinfo.value.errors) == {"label", "type", "required"}

    def test_options_must_be_strings(self, services):
        with pytest.raises(ValidationError) as excinfo:
            services.registry.create(_definition(options=["a", 2]))
        assert "options" in excinfo.value.errors

    def test_non_dict_payload(self, services):
        with pytest.raises(ValidationError) as excinfo:
            services.registry.create(None)
        assert excinfo.value.errors == {"general": "Invalid component data"}


# ── Read ─────────────────────────────────────────────────────────────────


class TestFindAll:
    def test_newest_first(self, services, add_component):
        add_component("first_field")
        add_component("second_field")
        assert [c.name for c in services.registry.find_all()] == ["second_field", "first_field"]

    def test_served_from_cache_until_expiry(self, services, add_component, clock):
        add_component("first_field")
        assert len(services.registry.find_all()) == 1

        add_component("second_field")
        assert len(services.registry.find_all()) == 1

        clock.advance(11)
        assert len(services.registry.find_all()) == 2

    def test_create_invalidates_cache(self, services, add_component):
        add_component("first_field")
        services.registry.find_all()
        services.registry.create(_definition())
        assert len(services.registry.find_all()) == 2

    def test_unknown_stored_type_is_a_store_failure(self, services, add_component):
        add_component("mystery", "color")
        with pytest.raises(UpstreamError) as excinfo:
            services.registry.find_all()
        assert isinstance(excinfo.value.__cause__, InvalidTypeError)
        assert "color" not in excinfo.value.message

    def test_store_failure(self, services, fake_supabase):
        fake_supabase.failing_tables.add("custom_components")
        with pytest.raises(UpstreamError):
            services.registry.find_all()

    def test_missing_names_keeps_order(self, services, add_component):
        add_component("phone", "phone")
        assert services.registry.missing_names(["zeta", "phone", "alpha"]) == ["zeta", "alpha"]


# ── Update / delete ──────────────────────────────────────────────────────


class TestUpdateDelete:
    def test_update_label(self, services, add_component):
        row = add_component("nickname")
        updated = services.registry.update(row["id"], {"label": "Preferred name", "id": "999"})
        assert updated.label == "Preferred name"
        assert updated.id == row["id"]

    def test_update_to_existing_name(self, services, add_component):
        add_component("phone", "phone")
        row = add_component("nickname")
        with pytest.raises(DuplicateNameError):
            services.registry.update(row["id"], {"name": "phone"})

    def test_update_invalid_type(self, services, add_component):
        row = add_component("nickname")
        with pytest.raises(ValidationError) as excinfo:
            services.registry.update(row["id"], {"type": "color"})
        assert excinfo.value.errors == {"type": "Invalid component type"}

    def test_update_missing(self, services):
        with pytest.raises(NotFoundError):
            services.registry.update("404", {"label": "x"})

    def test_delete(self, services, add_component, fake_supabase):
        row = add_component("nickname")
        assert services.registry.delete(row["id"]) is True
        assert fake_supabase.tables["custom_components"] == []

    def test_delete_missing(self, services):
        with pytest.raises(NotFoundError):
            services.registry.delete("404")


class TestComponentType:
    def test_parse_known_type(self):
        assert ComponentType.parse("address") is ComponentType.ADDRESS

    def test_parse_unknown_type(self):
        with pytest.raises(InvalidTypeError) as excinfo:
            ComponentType.parse("color")
        assert excinfo.value.message == "Invalid component type: color"
