"""Round-trip serialization tests for Kripke models and formula trees."""

from __future__ import annotations

import json

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from epistemic_mpl.logic.formula import Common, Distributed, Know, Nec, Neg, Prop, group
from epistemic_mpl.logic.parser import parse
from epistemic_mpl.model.kripke import KripkeModel
from epistemic_mpl.serialization import (
    formula_from_json,
    formula_to_json,
    model_from_dict,
    model_from_string,
    model_to_dict,
    model_to_string,
)
from epistemic_mpl.types import InvalidFormula, ModelFormatError


@pytest.fixture
def mixed_model() -> KripkeModel:
    """Tombstone, multi-proposition valuation, multi-target and multi-agent relations."""
    model = KripkeModel()
    model.add_world({"q": True, "p": True})
    model.add_world({"r": True})
    model.add_world()
    model.add_world({"p": True})
    model.add_transition(0, 0, "a")
    model.add_transition(0, 2, "a")
    model.add_transition(0, 3, ["b", "c"])
    model.add_transition(2, 0, "b")
    model.add_transition(3, 3, "a")
    model.add_transition(3, 0, "a")
    model.remove_world(1)
    return model


# ── Model wire format ──────────────────────────────────────────────────


class TestModelString:
    def test_encoding(self, mixed_model: KripkeModel) -> None:
        assert model_to_string(mixed_model) == "Ap,qSa0,2b3c3;;ASb0;ApSa3,0;"

    def test_documented_example(self) -> None:
        model = model_from_string("AqSa0,2;;AS;")
        assert model.list_worlds() == [frozenset({"q"}), None, frozenset()]
        assert model.successors(0, "a") == (0, 2)

    def test_roundtrip(self, mixed_model: KripkeModel) -> None:
        restored = model_from_string(model_to_string(mixed_model))
        assert restored == mixed_model
        assert len(restored) == 4
        assert restored.list_worlds()[1] is None
        for world in mixed_model.live_worlds():
            for agent in mixed_model.all_agents():
                assert set(restored.successors(world, agent)) == set(
                    mixed_model.successors(world, agent)
                )

    def test_all_agents_restored(self, mixed_model: KripkeModel) -> None:
        restored = model_from_string(model_to_string(mixed_model))
        assert restored.all_agents() == frozenset({"a", "b", "c"})
        assert restored.successors(0, "c") == (3,)

    def test_order_and_duplicates_preserved(self) -> None:
        model = model_from_string("ASa1,1,0;AS;")
        assert model.successors(0, "a") == (1, 1, 0)

    def test_empty_model(self) -> None:
        assert model_to_string(KripkeModel()) == ""
        assert len(model_from_string("")) == 0

    def test_trailing_tombstones_kept(self) -> None:
        model = model_from_string("AS;;;")
        assert model.list_worlds() == [frozenset(), None, None]
        assert model_to_string(model) == "AS;;;"

    @pytest.mark.parametrize(
        "text",
        [
            "AS",  # missing terminator
            "ApS",
            "Sa1;",
            "Ap,S;",
            "ApSa;",  # agent without targets
            "ApS1;",  # targets without agent
            "AP S;",
            "ApSa0,;",
            "ASa5;",  # target out of range
            "ASa1;;",  # target is a deleted world
        ],
    )
    def test_malformed_rejected(self, text: str) -> None:
        with pytest.raises(ModelFormatError):
            model_from_string(text)

    def test_failed_load_leaves_model_unchanged(self, mixed_model: KripkeModel) -> None:
        before = mixed_model.copy()
        with pytest.raises(ModelFormatError):
            mixed_model.load_string("ASa9;")
        assert mixed_model == before

    def test_load_string_replaces_worlds(self, mixed_model: KripkeModel) -> None:
        mixed_model.load_string("ApSa0;")
        assert mixed_model.list_worlds() == [frozenset({"p"})]
        assert mixed_model.to_string() == "ApSa0;"

    def test_unencodable_names(self) -> None:
        model = KripkeModel()
        model.add_world({"Rain": True})
        with pytest.raises(ModelFormatError):
            model_to_string(model)

        model = KripkeModel()
        model.add_world()
        model.add_transition(0, 0, "agent1")
        with pytest.raises(ModelFormatError):
            model_to_string(model)

    def test_parsed_agent_with_digits_needs_dict_form(self) -> None:
        formula = parse("a1 ? p")
        model = KripkeModel()
        model.add_world()
        model.add_world({"p": True})
        model.add_transition(0, 1, formula.agent.name)
        with pytest.raises(ModelFormatError, match="a1"):
            model_to_string(model)
        assert model_from_dict(model_to_dict(model)) == model


# ── Model dict form ────────────────────────────────────────────────────


class TestModelDict:
    def test_roundtrip(self, mixed_model: KripkeModel) -> None:
        d = model_to_dict(mixed_model)
        json.dumps(d)
        assert model_from_dict(d) == mixed_model

    def test_shape(self, mixed_model: KripkeModel) -> None:
        d = model_to_dict(mixed_model)
        assert d["worlds"][1] is None
        assert d["worlds"][0] == {"valuation": ["p", "q"], "successors": {"a": [0, 2], "b": [3], "c": [3]}}

    def test_any_agent_names(self) -> None:
        model = KripkeModel()
        model.add_world({"Rain": True})
        model.add_transition(0, 0, "agent 1")
        assert model_from_dict(model_to_dict(model)) == model

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"worlds": 3},
            {"worlds": [{"valuation": [], "successors": {"a": [4]}}]},
            {"worlds": [{"valuation": [], "successors": {"a": [-1]}}]},
            {"worlds": [{"valuation": [], "successors": {"a": ["x"]}}]},
        ],
    )
    def test_malformed_rejected(self, data: dict) -> None:
        with pytest.raises(ModelFormatError):
            model_from_dict(data)


# ── Formula JSON form ──────────────────────────────────────────────────


class TestFormulaJson:
    def test_shapes(self) -> None:
        assert formula_to_json(Prop("p")) == {"prop": "p"}
        assert formula_to_json(Neg(Prop("p"))) == {"neg": {"prop": "p"}}
        assert formula_to_json(Know("a", Prop("p"))) == {"know": [{"prop": "a"}, {"prop": "p"}]}
        assert formula_to_json(Common(group("a", "b"), Prop("p"))) == {
            "common": [{"group": [{"prop": "a"}, {"prop": "b"}]}, {"prop": "p"}]
        }

    @pytest.mark.parametrize(
        "formula",
        [
            parse("~(p | q) <-> []<>r"),
            parse("a ? b ? (p -> q)"),
            parse("a,b,c ?E p & q"),
            Distributed(group("a", "b"), Nec(Prop("p"))),
        ],
    )
    def test_roundtrip(self, formula) -> None:
        data = formula_to_json(formula)
        json.dumps(data)
        assert formula_from_json(data) == formula

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"foo": {"prop": "p"}},
            {"prop": "p", "neg": {"prop": "q"}},
            {"prop": 3},
            {"neg": [{"prop": "p"}, {"prop": "q"}]},
            {"conj": {"prop": "p"}},
            {"conj": [{"prop": "p"}]},
            {"know": [{"conj": [{"prop": "a"}, {"prop": "b"}]}, {"prop": "p"}]},
            {"conj": [{"group": [{"prop": "a"}, {"prop": "b"}]}, {"prop": "p"}]},
            "p",
        ],
    )
    def test_invalid_rejected(self, data) -> None:
        with pytest.raises(InvalidFormula):
            formula_from_json(data)


# ── Properties ─────────────────────────────────────────────────────────


@st.composite
def encodable_models(draw: st.DrawFn) -> KripkeModel:
    size = draw(st.integers(min_value=0, max_value=6))
    model = KripkeModel()
    for _ in range(size):
        model.add_world(draw(st.sets(st.sampled_from(["p", "q", "r1", "s_t"]))))
    for _ in range(draw(st.integers(0, size * 3))):
        source = draw(st.integers(0, max(size - 1, 0)))
        target = draw(st.integers(0, max(size - 1, 0)))
        model.add_transition(source, target, draw(st.sampled_from(["a", "b", "Bob"])))
    for index in draw(st.sets(st.integers(0, max(size - 1, 0)), max_size=2)):
        model.remove_world(index)
    return model


@settings(max_examples=100, deadline=None)
@given(encodable_models())
def test_string_roundtrip_property(model: KripkeModel) -> None:
    assert model_from_string(model_to_string(model)) == model
