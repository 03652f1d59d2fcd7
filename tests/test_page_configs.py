"""Tests for boardz/services/page_configs.py: page layout store and default setup."""

from __future__ import annotations

import pytest

from boardz.errors import ConflictError, EmptyPageError, UnknownComponentError, ValidationError


# ── Upsert ───────────────────────────────────────────────────────────────


class TestUpsert:
    def test_stores_components_in_order(self, services, add_component):
        add_component("nickname")
        add_component("website", "url")

        page_config = services.page_configs.upsert(2, ["website", "nickname"])

        assert page_config.page == 2
        assert page_config.components == ["website", "nickname"]
        assert services.page_configs.get_for_page(2).components == ["website", "nickname"]

    def test_replaces_existing_list(self, services, add_component, set_page, fake_supabase):
        add_component("nickname")
        add_component("website", "url")
        set_page(2, ["nickname"])

        services.page_configs.upsert(2, ["website"])

        rows = fake_supabase.tables["page_components"]
        assert len(rows) == 1
        assert rows[0]["components"] == ["website"]

    def test_required_page_cannot_be_emptied(self, services, fake_supabase):
        with pytest.raises(EmptyPageError) as excinfo:
            services.page_configs.upsert(2, [])
        assert excinfo.value.message == "Page 2 must have at least one component"
        assert fake_supabase.writes("page_components") == []

    def test_optional_page_may_be_empty(self, services):
        assert services.page_configs.upsert(4, []).components == []

    def test_unknown_component(self, services, add_component, fake_supabase):
        add_component("nickname")
        with pytest.raises(UnknownComponentError) as excinfo:
            services.page_configs.upsert(3, ["nickname", "unknown_x"])
        assert excinfo.value.names == ["unknown_x"]
        assert excinfo.value.message == "Invalid components: unknown_x"
        assert fake_supabase.writes("page_components") == []

    def test_malformed_request(self, services):
        with pytest.raises(ValidationError) as excinfo:
            services.page_configs.upsert("2", ["ok", " "])
        assert set(excinfo.value.errors) == {"page", "component_1"}

    def test_components_must_be_a_list(self, services):
        with pytest.raises(ValidationError) as excinfo:
            services.page_configs.upsert(2, "nickname")
        assert excinfo.value.errors == {"components": "Components must be an array of strings"}

    def test_upsert_invalidates_cached_configs(self, services, add_component, set_page):
        add_component("nickname")
        add_component("website", "url")
        set_page(2, ["nickname"])
        assert services.page_configs.get_for_page(2).components == ["nickname"]

        services.page_configs.upsert(2, ["website"])
        assert services.page_configs.get_for_page(2).components == ["website"]


class TestGetAll:
    def test_ordered_by_page(self, services, set_page):
        set_page(3, ["b"])
        set_page(2, ["a"])
        assert [pc.page for pc in services.page_configs.get_all()] == [2, 3]

    def test_missing_page(self, services):
        assert services.page_configs.get_for_page(2) is None


# ── Default setup ────────────────────────────────────────────────────────


class TestInitializeDefaults:
    def test_prefers_special_components(self, services, add_component, fake_supabase):
        for name, type_ in [("phone", "phone"), ("aboutMe", "textarea"),
                            ("birthdate", "date"), ("address", "address")]:
            add_component(name, type_)

        assert services.page_configs.initialize_defaults() == {"initialized": [2, 3]}

        stored = {row["page"]: row["components"] for row in fake_supabase.tables["page_components"]}
        assert stored == {2: ["aboutMe"], 3: ["address"]}

    def test_birthdate_when_no_about_me(self, services, add_component):
        add_component("birthdate", "date")
        add_component("address", "address")
        services.page_configs.initialize_defaults()
        assert services.page_configs.get_for_page(2).components == ["birthdate"]
        assert services.page_configs.get_for_page(3).components == ["address"]

    def test_second_page_takes_an_unused_component(self, services, add_component):
        add_component("older_field")
        add_component("newer_field")
        services.page_configs.initialize_defaults()
        assert services.page_configs.get_for_page(2).components == ["newer_field"]
        assert services.page_configs.get_for_page(3).components == ["older_field"]

    def test_single_component_goes_on_both_pages(self, services, add_component):
        add_component("nickname")
        services.page_configs.initialize_defaults()
        assert services.page_configs.get_for_page(2).components == ["nickname"]
        assert services.page_configs.get_for_page(3).components == ["nickname"]

    def test_is_idempotent(self, services, add_component, fake_supabase):
        add_component("nickname")
        services.page_configs.initialize_defaults()
        writes = len(fake_supabase.writes("page_components"))

        assert services.page_configs.initialize_defaults() == {"initialized": []}
        assert len(fake_supabase.writes("page_components")) == writes

    def test_leaves_configured_pages_alone(self, services, add_component, set_page):
        add_component("nickname")
        add_component("address", "address")
        set_page(2, ["address"])

        assert services.page_configs.initialize_defaults() == {"initialized": [3]}
        assert services.page_configs.get_for_page(2).components == ["address"]

    def test_empty_registry(self, services):
        with pytest.raises(ConflictError) as excinfo:
            services.page_configs.initialize_defaults()
        assert excinfo.value.message == "No components available for default setup"
