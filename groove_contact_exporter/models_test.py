"""Unit tests for models module."""

from .models import BodySearch, Contact, TagSearch, total_pages


def describe_total_pages():

    def it_rounds_up_partial_pages():
        assert total_pages(125) == 3

    def it_handles_exact_multiples():
        assert total_pages(100) == 2

    def it_handles_zero():
        assert total_pages(0) == 0

    def it_accepts_a_page_size():
        assert total_pages(11, page_size=5) == 3


def describe_Contact():

    def it_reads_api_fields():
        c = Contact.from_api({"id": "1", "firstName": "Ann", "lastName": "Lee", "email": "a@x.com", "name": "Ann Lee"})
        assert c == Contact("Ann", "Lee", "a@x.com")

    def it_defaults_missing_fields_to_none():
        c = Contact.from_api({"email": "a@x.com"})
        assert c.first_name is None
        assert c.last_name is None

    def it_orders_dict_keys_for_export():
        assert list(Contact("a", "b", "c").to_dict()) == ["firstName", "lastName", "email"]

    def it_compares_structurally():
        assert Contact("a", None, "x") == Contact("a", None, "x")


def describe_search_specs():

    def it_tags_each_variant_with_its_kind():
        assert BodySearch("x").kind == "body"
        assert TagSearch("x").kind == "tag"
