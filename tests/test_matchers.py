"""Tests for the lexical matching rules."""

from pathlib import Path

import pytest

from classtree_cli import matchers


class TestDeclarations:
    def test_declares_class_on_word_boundaries(self):
        assert matchers.declares_class("export default class Card extends X {}", "Card")
        assert not matchers.declares_class("class CardHeader {}", "Card")
        assert not matchers.declares_class("subclass Card {}", "Card")

    def test_declares_class_is_case_sensitive(self):
        assert not matchers.declares_class("class card {}", "Card")

    def test_declares_class_escapes_name(self):
        assert not matchers.declares_class("class AxB {}", "A.B")

    def test_declared_classes_in_text_order(self):
        text = "class One {}\nconst x = 1;\nclass Two extends One {}"
        assert matchers.declared_classes(text) == ["One", "Two"]

    def test_markup_name_matches_ignores_case(self):
        assert matchers.markup_name_matches(Path("lwc/myCard/mycard.html"), "MyCard")
        assert not matchers.markup_name_matches(Path("lwc/myCard/other.html"), "MyCard")


class TestRelationships:
    def test_extends_matches_every_subclass(self):
        text = "class Circle extends Shape {}\nclass Square  extends  Shape {}\nclass Dot extends Point {}"
        assert matchers.extends_matches(text, "Shape") == ["Circle", "Square"]

    def test_extends_requires_token_boundary(self):
        assert matchers.extends_matches("class A extends ShapeBase {}", "Shape") == []

    @pytest.mark.parametrize(
        "source",
        [
            "class Child(Parent):\n    pass\n",
            "class Child(mixins.Loggable, Parent):\n    pass\n",
            "class Child(Parent[int], metaclass=Meta):\n    pass\n",
        ],
    )
    def test_python_base_matches(self, source):
        assert matchers.python_base_matches(source, "Parent") == ["Child"]

    def test_python_base_ignores_keyword_arguments(self):
        source = "class Child(Base, metaclass=Parent):\n    pass\n"
        assert matchers.python_base_matches(source, "Parent") == []

    def test_mentions_is_plain_substring(self):
        assert matchers.mentions("// see BaseCard docs", "BaseCard")
        assert matchers.mentions("MyBaseCardX", "BaseCard")
        assert not matchers.mentions("basecard", "BaseCard")


class TestTags:
    def test_find_tags_returns_each_occurrence(self):
        line = '<div><c-badge></c-badge><c-badge label="x"></c-badge><c-card-header/></div>'
        assert matchers.find_tags(line, "c") == ["<c-badge>", "<c-badge>", "<c-card-header>"]

    def test_find_tags_ignores_closing_and_standard_tags(self):
        assert matchers.find_tags("</c-badge><lightning-card></lightning-card>", "c") == []

    def test_find_tags_with_other_prefix(self):
        assert matchers.find_tags("<lightning-card title='x'>", "lightning") == ["<lightning-card>"]

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("import cardHeader from 'c/cardHeader';", "cardHeader"),
            ('import { helper, other } from "c/utils";', "utils"),
            ("import * as api from 'c/api';", "api"),
            ("import { LightningElement } from 'lwc';", None),
            ("// c/cardHeader is imported elsewhere", None),
        ],
    )
    def test_imported_component(self, line, expected):
        assert matchers.imported_component(line, "c") == expected

    @pytest.mark.parametrize(
        "ident, expected",
        [
            ("cardHeader", "card-header"),
            ("badge", "badge"),
            ("myCardList2", "my-card-list2"),
            ("myHTMLWidget", "my-h-t-m-l-widget"),
            ("MyCard", "my-card"),
        ],
    )
    def test_kebab_case(self, ident, expected):
        assert matchers.kebab_case(ident) == expected
