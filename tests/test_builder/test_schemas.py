"""Tests for routedoc.builder.schemas -- type expansion into schema models.

Covers:
- Self-referential and mutually recursive types terminate
- Known models are neither re-expanded nor replaced
- Containers, optionals and mappings are walked
- Required fields and property kinds
- Custom serializers and field serializers
- Schema name collisions
"""

from __future__ import annotations

import datetime
from typing import Optional

from sample_api import (
    Address,
    Category,
    Color,
    Employee,
    Legacy,
    Manager,
    Post,
    Priority,
    TreeNode,
    User,
)

from routedoc.builder.schemas import (
    DEFAULT_FORMATS,
    collect_models,
    definitions_by_name,
    find_name_collisions,
    make_model,
    type_to_property,
)
from routedoc.models import (
    ArrayProperty,
    MapProperty,
    PrimitiveProperty,
    RefProperty,
    SchemaModel,
)


# ------------------------------------------------------------------ #
# collect_models
# ------------------------------------------------------------------ #


class TestCollectModels:
    def test_primitive_has_no_models(self) -> None:
        assert collect_models(int, {}) == {}
        assert collect_models(None, {}) == {}

    def test_nested_models_in_order(self) -> None:
        models = collect_models(User, {})
        assert list(models) == ["sample_api.User", "sample_api.Address"]

    def test_self_reference_terminates(self) -> None:
        models = collect_models(TreeNode, {})
        assert list(models) == ["sample_api.TreeNode"]
        node = models["sample_api.TreeNode"]
        assert node.properties["children"] == ArrayProperty(items=RefProperty(ref="TreeNode"))
        assert node.properties["parent"] == RefProperty(ref="TreeNode")

    def test_mutual_recursion_terminates(self) -> None:
        models = collect_models(Employee, {})
        assert list(models) == ["sample_api.Employee", "sample_api.Manager"]

    def test_pydantic_self_reference(self) -> None:
        models = collect_models(Category, {})
        assert list(models) == ["sample_api.Category"]
        assert models["sample_api.Category"].properties["children"] == ArrayProperty(
            items=RefProperty(ref="Category")
        )

    def test_pydantic_model_with_dataclass_field(self) -> None:
        models = collect_models(Post, {})
        assert set(models) == {"sample_api.Post", "sample_api.User", "sample_api.Address"}

    def test_walks_containers(self) -> None:
        assert set(collect_models(list[User], {})) == {"sample_api.User", "sample_api.Address"}
        assert set(collect_models(Optional[Address], {})) == {"sample_api.Address"}
        assert set(collect_models(dict[str, Address], {})) == {"sample_api.Address"}
        assert set(collect_models(set[Manager], {})) == {
            "sample_api.Manager",
            "sample_api.Employee",
        }

    def test_known_models_kept(self) -> None:
        custom = SchemaModel(id="sample_api.Address", name="Address", description="mine")
        models = collect_models(User, {"sample_api.Address": custom})
        assert models["sample_api.Address"] is custom
        assert list(models) == ["sample_api.Address", "sample_api.User"]

    def test_known_not_mutated(self) -> None:
        known: dict[str, SchemaModel] = {}
        collect_models(User, known)
        assert known == {}

    def test_superset_of_known(self) -> None:
        first = collect_models(Address, {})
        second = collect_models(TreeNode, first)
        assert set(second) == {"sample_api.Address", "sample_api.TreeNode"}


# ------------------------------------------------------------------ #
# make_model / type_to_property
# ------------------------------------------------------------------ #


class TestMakeModel:
    def test_user_model(self) -> None:
        model = make_model(User)
        assert model.id == "sample_api.User"
        assert model.name == "User"
        assert model.description == "A registered user."
        assert model.required == ["id", "name", "address", "tags"]
        assert model.properties == {
            "id": PrimitiveProperty(type="integer", format="int64"),
            "name": PrimitiveProperty(type="string"),
            "address": RefProperty(ref="Address"),
            "tags": ArrayProperty(items=PrimitiveProperty(type="string")),
            "nickname": PrimitiveProperty(type="string"),
        }

    def test_generated_dataclass_doc_ignored(self) -> None:
        assert make_model(Address).description is None

    def test_serialised_shape(self) -> None:
        data = make_model(TreeNode).model_dump(by_alias=True, exclude_none=True)
        assert data == {
            "title": "TreeNode",
            "type": "object",
            "properties": {
                "value": {"type": "integer", "format": "int64"},
                "children": {"type": "array", "items": {"$ref": "#/definitions/TreeNode"}},
                "parent": {"$ref": "#/definitions/TreeNode"},
            },
            "required": ["value", "children"],
        }


class TestTypeToProperty:
    def test_string_enum(self) -> None:
        assert type_to_property(Color) == PrimitiveProperty(type="string", enum=["red", "green"])

    def test_int_enum(self) -> None:
        assert type_to_property(Priority) == PrimitiveProperty(
            type="integer", format="int64", enum=[1, 2]
        )

    def test_set_is_unique_array(self) -> None:
        assert type_to_property(set[int]) == ArrayProperty(
            items=PrimitiveProperty(type="integer", format="int64"), unique_items=True
        )

    def test_mapping(self) -> None:
        assert type_to_property(dict[str, float]) == MapProperty(
            additional_properties=PrimitiveProperty(type="number", format="double")
        )

    def test_optional_unwrapped(self) -> None:
        assert type_to_property(Optional[datetime.date]) == PrimitiveProperty(
            type="string", format="date"
        )

    def test_model_is_reference(self) -> None:
        assert type_to_property(User) == RefProperty(ref="User")

    def test_unknown_is_string(self) -> None:
        assert type_to_property(object) == PrimitiveProperty(type="string")


# ------------------------------------------------------------------ #
# SwaggerFormats
# ------------------------------------------------------------------ #


class TestSwaggerFormats:
    def test_field_serializer_overrides_property(self) -> None:
        prop = PrimitiveProperty(type="string", format="iso8601")
        formats = DEFAULT_FORMATS.with_field_serializer(datetime.datetime, prop)
        assert type_to_property(datetime.datetime, formats) == prop
        assert type_to_property(list[datetime.datetime], formats) == ArrayProperty(items=prop)

    def test_field_serializer_stops_expansion(self) -> None:
        formats = DEFAULT_FORMATS.with_field_serializer(Address, PrimitiveProperty(type="string"))
        models = collect_models(User, {}, formats)
        assert list(models) == ["sample_api.User"]
        assert models["sample_api.User"].properties["address"] == PrimitiveProperty(type="string")

    def test_serializer_supplies_models(self) -> None:
        custom = SchemaModel(id="sample_api.Address", name="Address", description="custom")
        formats = DEFAULT_FORMATS.with_serializers(Address, custom)
        models = collect_models(User, {}, formats)
        assert models["sample_api.Address"] is custom

    def test_defaults_untouched(self) -> None:
        DEFAULT_FORMATS.with_field_serializer(int, PrimitiveProperty(type="string"))
        assert DEFAULT_FORMATS.field_serializers == {}


# ------------------------------------------------------------------ #
# Names and collisions
# ------------------------------------------------------------------ #


class TestNameCollisions:
    def test_distinct_types_same_name(self) -> None:
        models = [make_model(User), make_model(Legacy.User)]
        assert find_name_collisions(models) == {
            "User": ["sample_api.User", "sample_api.Legacy.User"]
        }

    def test_same_type_twice_is_not_a_collision(self) -> None:
        assert find_name_collisions([make_model(User), make_model(User)]) == {}

    def test_models_without_identity_ignored(self) -> None:
        loaded = SchemaModel(name="User")
        assert find_name_collisions([loaded, make_model(User)]) == {}

    def test_definitions_by_name_last_wins(self) -> None:
        legacy = make_model(Legacy.User)
        by_name = definitions_by_name([make_model(User), legacy])
        assert by_name == {"User": legacy}
