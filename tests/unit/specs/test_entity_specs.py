"""
Tests for FieldSpec, EntitySpec and the SpecsRepository layout.
"""
import pytest

from play_scraper.infrastructure.specs import (
    EntitySpec,
    FieldKind,
    FieldSpec,
    Index,
    SpecsRepository,
    path,
)


class TestFieldSpec:
    """Tests for FieldSpec."""

    def test_defaults(self):
        spec = FieldSpec("title", path("ds:5", 0))

        assert spec.kind is FieldKind.STRING
        assert spec.default is None
        assert spec.element_path == ()

    def test_element_path_coerced(self):
        spec = FieldSpec("shots", path("ds:5", 0), FieldKind.STRING_LIST, (), element_path=(3, 2))

        assert spec.element_path == (Index(3), Index(2))


class TestEntitySpec:
    """Tests for EntitySpec validation and rebasing."""

    def test_rejects_duplicate_field_names(self):
        with pytest.raises(ValueError):
            EntitySpec(
                name="dup",
                data_source="ds:1",
                fields=(
                    FieldSpec("a", path("ds:1", 0)),
                    FieldSpec("a", path("ds:1", 1)),
                ),
            )

    def test_items_must_use_entity_data_source(self):
        with pytest.raises(ValueError):
            EntitySpec(
                name="bad",
                data_source="ds:1",
                fields=(),
                items=path("ds:2", 0),
            )

    def test_field_lookup(self):
        spec = EntitySpec(
            name="one",
            data_source="ds:1",
            fields=[FieldSpec("a", path("ds:1", 0))],
        )

        assert spec.field_names == ("a",)
        assert spec.field_spec("a").name == "a"
        assert not spec.is_collection
        with pytest.raises(KeyError):
            spec.field_spec("b")

    def test_rebase_moves_own_fields_only(self):
        spec = EntitySpec(
            name="list",
            data_source="ds:3",
            items=path("ds:3", 1, 2, 0),
            fields=(
                FieldSpec("a", path("ds:3", 0)),
                FieldSpec("b", path("ds:8", 0)),
            ),
        )

        rebased = spec.rebase("ds:7", name="other")

        assert rebased.name == "other"
        assert rebased.data_source == "ds:7"
        assert rebased.items == path("ds:7", 1, 2, 0)
        assert rebased.field_spec("a").path == path("ds:7", 0)
        assert rebased.field_spec("b").path == path("ds:8", 0)


class TestSpecsRepository:
    """Tests for the store layout shipped with the scraper."""

    def test_details_title_position(self):
        spec = SpecsRepository().get_app_details_spec()

        assert spec.data_source == "ds:5"
        assert spec.field_spec("title").path == path("ds:5", 1, 2, 0, 0)

    def test_details_app_size_from_own_block(self):
        spec = SpecsRepository().get_app_details_spec()

        assert spec.field_spec("app_size").path.data_source == "ds:8"

    def test_collection_specs(self):
        specs = SpecsRepository()

        assert specs.get_app_list_spec().items == path("ds:3", 1, 2, 0)
        assert specs.get_search_result_spec().items == path("ds:3", 0, 1, 0, 0, 0)
        assert specs.get_similar_apps_spec().data_source == "ds:7"
        assert specs.get_app_review_spec().items == path("ds:11", 0)
        assert specs.get_permission_spec().items == path("ds:3", 2)

    def test_same_instance_every_call(self):
        specs = SpecsRepository()

        assert specs.get_app_details_spec() is specs.get_app_details_spec()

    def test_list_specs_share_fields(self):
        specs = SpecsRepository()

        assert specs.get_app_list_spec().field_names == specs.get_search_result_spec().field_names
