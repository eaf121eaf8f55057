"""Tests for schema classification."""

import pytest
from graphql import build_schema

from sheetgraph.graphql.classifier import (
    Cardinality,
    FieldClassification,
    MutationAction,
    SchemaClassificationError,
    classify,
)


class TestObjectTypes:
    """Test which types are kept and how their fields are classified."""

    def test_only_user_object_types_are_kept(self, person_schema):
        schema = build_schema(
            person_schema
            + """
            enum Color { RED GREEN }
            interface Named { name: String }
            scalar Date
            """
        )

        result = classify(schema)

        assert list(result.object_types) == ["Person"]

    def test_relationship_fields(self, person_schema):
        result = classify(build_schema(person_schema))

        assert result.object_types["Person"].relationships == (
            FieldClassification("father", "Person", Cardinality.ONE, nullable=True),
            FieldClassification("siblings", "Person", Cardinality.MANY, nullable=True),
        )

    def test_non_null_wrappers(self):
        schema = build_schema(
            """
            type Person { id: String! }
            type Product {
                id: String!
                owner: Person
                creator: Person!
                buyers: [Person!]!
            }
            type Query { product(id: String!): Product }
            """
        )

        relationships = classify(schema).object_types["Product"].relationships

        assert [(f.name, f.cardinality, f.nullable) for f in relationships] == [
            ("owner", Cardinality.ONE, True),
            ("creator", Cardinality.ONE, False),
            ("buyers", Cardinality.MANY, False),
        ]
        assert all(f.target_type_name == "Person" for f in relationships)

    def test_scalar_lists_are_not_relationships(self):
        schema = build_schema(
            """
            type Product { id: String! tags: [String] }
            type Query { product: Product }
            """
        )

        assert classify(schema).object_types["Product"].relationships == ()

    def test_unknown_type_reference_fails(self):
        schema = build_schema(
            """
            type Ghost { id: String! }
            type Person { id: String! haunt: Ghost }
            type Query { person: Person }
            """
        )
        del schema.type_map["Ghost"]

        with pytest.raises(SchemaClassificationError, match="Person.haunt"):
            classify(schema)


class TestQueryFields:
    """Test root query classification."""

    def test_find_one_and_find_all(self):
        schema = build_schema(
            """
            type Product { id: Int! }
            type Query {
                product: Product
                products(id: String!): [Product]
            }
            """
        )

        fields = {entry.name: entry for entry in classify(schema).query_fields}

        assert fields["product"].cardinality is Cardinality.ONE
        assert fields["product"].target_type_name == "Product"
        assert fields["products"].cardinality is Cardinality.MANY
        assert fields["products"].target_type_name == "Product"

    def test_scalar_root_fields_are_skipped(self):
        schema = build_schema(
            """
            type Product { id: Int! }
            type Query { version: String product: Product }
            """
        )

        assert [entry.name for entry in classify(schema).query_fields] == ["product"]

    def test_query_type_is_not_an_object_type(self, person_schema):
        result = classify(build_schema(person_schema))

        assert "Query" not in result.object_types
        assert "Mutation" not in result.object_types


class TestMutationFields:
    """Test mutation naming convention."""

    def test_actions(self, person_schema):
        fields = {entry.name: entry for entry in classify(build_schema(person_schema)).mutation_fields}

        assert fields["createPerson"].action is MutationAction.CREATE
        assert fields["updatePerson"].action is MutationAction.UPDATE
        assert fields["deletePerson"].action is MutationAction.DELETE
        assert {entry.type_name for entry in fields.values()} == {"Person"}
        assert fields["createPerson"].input_argument == "person"

    def test_unconventional_names_are_skipped(self):
        schema = build_schema(
            """
            type Person { id: String! }
            type Query { person: Person }
            type Mutation {
                archivePerson(id: String!): Person
                createperson(id: String!): Person
                createPerson(person: String): Person
            }
            """
        )

        names = [entry.name for entry in classify(schema).mutation_fields]

        assert names == ["createPerson"]

    def test_unknown_type_suffix_is_skipped(self):
        schema = build_schema(
            """
            type Person { id: String! }
            type Query { person: Person }
            type Mutation { createSession(session: String): Person }
            """
        )

        assert classify(schema).mutation_fields == ()

    def test_lower_camel_input_argument(self):
        schema = build_schema(
            """
            type BlogPost { id: String! }
            input BlogPostInput { id: String }
            type Query { blogPost: BlogPost }
            type Mutation {
                createBlogPost(blogPost: BlogPostInput): BlogPost
                updateBlogPost(blogpost: BlogPostInput): BlogPost
            }
            """
        )

        fields = {entry.name: entry for entry in classify(schema).mutation_fields}

        assert fields["createBlogPost"].input_argument == "blogPost"
        assert fields["updateBlogPost"].input_argument == "blogpost"

    def test_no_mutation_type(self):
        schema = build_schema("type Query { hello: String }")

        result = classify(schema)

        assert result.mutation_fields == ()
        assert result.object_types == {}
