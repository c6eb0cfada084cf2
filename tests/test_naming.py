"""
Tests for the naming rules: identifier classification, case conversion and
singularization.
"""

from unittest import TestCase

from prisma_name_mapper.domain.naming import (
    NamingPolicy,
    InflectNamingPolicy,
    needs_transform,
    split_words,
    singularize,
    to_camel_case,
    to_pascal_case,
    transform_field_name,
    transform_table_name,
)


class TestNeedsTransform(TestCase):
    """Only identifiers without upper-case characters are renamed"""

    def test_snake_case_needs_transform(self):
        assert needs_transform("user_id")
        assert needs_transform("order_items")

    def test_plain_lower_needs_transform(self):
        assert needs_transform("email")
        assert needs_transform("address2")

    def test_mixed_case_is_left_alone(self):
        assert not needs_transform("userId")
        assert not needs_transform("OrderItem")
        assert not needs_transform("user_ID")


class TestCaseConversion(TestCase):

    def test_split_words_on_delimiters(self):
        assert split_words("order_items") == ["order", "items"]
        assert split_words("_prisma-migrations") == ["prisma", "migrations"]

    def test_split_words_on_case_boundaries(self):
        assert split_words("userId") == ["user", "Id"]
        assert split_words("XMLHttpRequest") == ["XML", "Http", "Request"]

    def test_camel_case(self):
        assert to_camel_case("user_id") == "userId"
        assert to_camel_case("created_at") == "createdAt"
        assert to_camel_case("address_line_1") == "addressLine1"

    def test_camel_case_single_word_unchanged(self):
        assert to_camel_case("id") == "id"
        assert to_camel_case("email") == "email"

    def test_pascal_case(self):
        assert to_pascal_case("order_item") == "OrderItem"
        assert to_pascal_case("user") == "User"


class TestSingularize(TestCase):

    def test_regular_plural(self):
        assert singularize("users") == "user"

    def test_ies_plural(self):
        assert singularize("categories") == "category"

    def test_only_last_word_is_singularized(self):
        assert singularize("order_items") == "order_item"

    def test_already_singular(self):
        assert singularize("user") == "user"

    def test_singular_words_ending_in_s_are_kept(self):
        for word in ("address", "class", "process", "status", "analysis", "alias", "bus", "campus", "canvas"):
            with self.subTest(word=word):
                assert singularize(word) == word

    def test_uncountable_words_are_kept(self):
        assert singularize("news") == "news"
        assert singularize("user_data") == "user_data"

    def test_plural_of_singular_words_ending_in_s(self):
        assert singularize("analyses") == "analysis"
        assert singularize("statuses") == "status"
        assert singularize("email_aliases") == "email_alias"


class TestTransformNames(TestCase):

    def test_table_name_is_singular_pascal_case(self):
        assert transform_table_name("order_items") == "OrderItem"
        assert transform_table_name("categories") == "Category"
        assert transform_table_name("user") == "User"

    def test_table_name_ending_in_s_keeps_its_s(self):
        assert transform_table_name("address") == "Address"
        assert transform_table_name("order_status") == "OrderStatus"
        assert transform_table_name("analyses") == "Analysis"

    def test_field_name_is_camel_case(self):
        assert transform_field_name("user_id") == "userId"


class UpperSnakePolicy(NamingPolicy):
    """Alternate policy used to check the walker does not hardcode naming"""

    def transform_table_name(self, raw):
        return raw.upper()

    def transform_field_name(self, raw):
        return raw.upper()


class TestNamingPolicy(TestCase):

    def test_inflect_policy(self):
        policy = InflectNamingPolicy()
        assert policy.transform_table_name("order_items") == "OrderItem"
        assert policy.transform_field_name("user_id") == "userId"
        assert policy.needs_transform("user_id")

    def test_custom_policy_keeps_default_classifier(self):
        policy = UpperSnakePolicy()
        assert policy.transform_field_name("user_id") == "USER_ID"
        assert not policy.needs_transform("USER_ID")
