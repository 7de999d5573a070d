"""Unit tests for FilterCompiler."""

from __future__ import annotations

import copy

import pytest

from mongo_datasource import CompilerOptions, FilterCompiler, compile_filter
from mongo_datasource.exceptions import FilterExpressionError, UnknownOperatorError
from mongo_datasource.expression import parse_filter_expression


class TestCompileOperators:
    """Operator clauses as sent by the GraphQL layer."""

    @pytest.mark.parametrize(
        ("request_filter", "expected"),
        [
            (
                {"firstname": {"contains": "dump"}},
                {"firstname": {"$regex": "dump", "$options": "i"}},
            ),
            (
                {"firstname": {"notContains": "dump"}},
                {"firstname": {"$not": {"$regex": "dump", "$options": "i"}}},
            ),
            (
                {"firstname": {"startsWith": "dump"}},
                {"firstname": {"$regex": "^dump", "$options": "i"}},
            ),
            (
                {"firstname": {"endsWith": "dump"}},
                {"firstname": {"$regex": "dump$", "$options": "i"}},
            ),
            ({"firstname": {"exists": "1"}}, {"firstname": {"$exists": 1}}),
            ({"firstname": {"exists": "0"}}, {"firstname": {"$exists": 0}}),
            ({"firstname": {"eq": "dumbo"}}, {"firstname": "dumbo"}),
            ({"firstname": {"ne": "dumbo"}}, {"firstname": {"$ne": "dumbo"}}),
            ({"firstname": {"le": 2}}, {"firstname": {"$lte": 2}}),
            ({"firstname": {"lt": 2.2}}, {"firstname": {"$lt": 2.2}}),
            ({"firstname": {"ge": 2}}, {"firstname": {"$gte": 2}}),
            ({"firstname": {"gt": 2.2}}, {"firstname": {"$gt": 2.2}}),
            (
                {"firstname": {"in": ["trump", "dumbo"]}},
                {"firstname": {"$in": ["trump", "dumbo"]}},
            ),
            ({"age": {"between": [18, 65]}}, {"age": {"$gte": 18, "$lte": 65}}),
        ],
    )
    def test_compile(self, compiler, request_filter, expected):
        assert compiler.compile(request_filter) == expected

    def test_literal_is_equality_shorthand(self, compiler):
        assert compiler.compile({"firstname": "dumbo", "age": 3}) == {
            "firstname": "dumbo",
            "age": 3,
        }

    @pytest.mark.parametrize(
        ("request_filter", "expected"),
        [
            ({"age": {"contains": 42}}, {"age": 42}),
            ({"age": {"notContains": 42}}, {"age": 42}),
            ({"age": {"startsWith": 4}}, {"age": 4}),
            ({"age": {"endsWith": [2]}}, {"age": [2]}),
            ({"age": {"between": [1]}}, {"age": [1]}),
            ({"age": {"between": "1-5"}}, {"age": "1-5"}),
            ({"firstname": {"in": "dumbo"}}, {"firstname": "dumbo"}),
            ({"firstname": {"exists": "yes"}}, {"firstname": {"$exists": 0}}),
            ({"firstname": {"exists": True}}, {"firstname": {"$exists": 1}}),
        ],
    )
    def test_ill_typed_operand_is_lenient(self, compiler, request_filter, expected):
        assert compiler.compile(request_filter) == expected

    def test_unknown_operator_passes_through(self, compiler):
        assert compiler.compile({"age": {"almost": 42}}) == {"age": 42}

    def test_nested_mapping_value_is_an_operator_clause(self, compiler):
        # "k" is read as an operator name, so only its operand survives
        assert compiler.compile({"meta": {"k": [1]}}) == {"meta": [1]}

    def test_begins_with_alias(self, compiler):
        assert compiler.compile({"firstname": {"beginsWith": "dump"}}) == {
            "firstname": {"$regex": "^dump", "$options": "i"}
        }


class TestCompileLogical:
    def test_or(self, compiler):
        request = {"or": [{"firstname": {"ne": "dumbo"}}, {"lastname": {"eq": "trump"}}]}
        assert compiler.compile(request) == {
            "$or": [{"firstname": {"$ne": "dumbo"}}, {"lastname": "trump"}]
        }

    def test_and(self, compiler):
        request = {"and": [{"firstname": {"ne": "dumbo"}}, {"lastname": {"eq": "trump"}}]}
        assert compiler.compile(request) == {
            "$and": [{"firstname": {"$ne": "dumbo"}}, {"lastname": "trump"}]
        }

    def test_nested_logical_with_fields(self, compiler):
        request = {
            "status": "active",
            "or": [
                {"a": {"ne": 1}},
                {"and": [{"b": {"eq": 2}}, {"c": {"between": [1, 3]}}]},
            ],
        }
        assert compiler.compile(request) == {
            "status": "active",
            "$or": [
                {"a": {"$ne": 1}},
                {"$and": [{"b": 2}, {"c": {"$gte": 1, "$lte": 3}}]},
            ],
        }

    @pytest.mark.parametrize("operator", ["and", "or"])
    def test_empty_logical_list_is_skipped(self, compiler, operator):
        assert compiler.compile({operator: []}) == {}
        assert compiler.compile({"a": 1, operator: []}) == {"a": 1}

    def test_non_mapping_branch_is_dropped(self, compiler):
        assert compiler.compile({"or": [{"a": {"eq": 1}}, 5, None]}) == {
            "$or": [{"a": 1}]
        }

    def test_logical_list_without_mapping_branches_is_skipped(self, compiler):
        assert compiler.compile({"or": [5, "x"], "b": 2}) == {"b": 2}


class TestCompileInvariants:
    def test_empty_filter_compiles_to_empty_dict(self, compiler):
        assert compiler.compile({}) == {}
        assert compiler.compile(None) == {}
        assert not compiler.compile({})

    def test_compile_is_deterministic(self, compiler):
        request = {"or": [{"a": {"in": [1, 2]}}, {"b": {"contains": "x"}}]}
        assert compiler.compile(request) == compiler.compile(request)

    def test_input_is_not_mutated(self, compiler):
        request = {
            "tags": {"in": ["a", "b"]},
            "or": [{"meta": {"eq": {"k": [1]}}}],
        }
        snapshot = copy.deepcopy(request)
        compiler.compile(request)
        assert request == snapshot

    def test_output_does_not_alias_input(self, compiler):
        values = ["a", "b"]
        literal = [{"k": 1}]
        operand = {"k": [1]}
        result = compiler.compile(
            {"tags": {"in": values}, "meta": literal, "doc": {"eq": operand}}
        )

        result["tags"]["$in"].append("c")
        result["meta"][0]["k"] = 2
        result["doc"]["k"].append(2)

        assert values == ["a", "b"]
        assert literal == [{"k": 1}]
        assert operand == {"k": [1]}

    def test_parsed_expression_compiles_the_same(self, compiler):
        request = {"age": {"between": [18, 65]}, "name": "x"}
        parsed = parse_filter_expression(request)
        assert compiler.compile(parsed) == compiler.compile(request)


class TestStrictCompiler:
    def test_unknown_operator_raises(self, strict_compiler):
        with pytest.raises(UnknownOperatorError, match="Unknown operator: 'almost'"):
            strict_compiler.compile({"age": {"almost": 42}})

    def test_malformed_between_raises(self, strict_compiler):
        with pytest.raises(FilterExpressionError):
            strict_compiler.compile({"age": {"between": [1]}})

    def test_empty_logical_list_raises(self, strict_compiler):
        with pytest.raises(FilterExpressionError, match="non-empty list"):
            strict_compiler.compile({"or": []})

    def test_valid_filter_compiles(self, strict_compiler):
        assert strict_compiler.compile({"age": {"gt": 1}}) == {"age": {"$gt": 1}}


class TestCompileFilterFunction:
    def test_default_options(self):
        assert compile_filter({"firstname": {"contains": "dump"}}) == {
            "firstname": {"$regex": "dump", "$options": "i"}
        }

    def test_custom_options(self):
        result = compile_filter(
            {"firstname": {"contains": "a+b"}}, CompilerOptions(escape_regex=True)
        )
        assert result == {"firstname": {"$regex": r"a\+b", "$options": "i"}}

    def test_compiler_exposes_configuration(self):
        options = CompilerOptions(strict=True)
        compiler = FilterCompiler(options)
        assert compiler.options is options
        assert compiler.table.has(compiler.table.resolve("eq"))
