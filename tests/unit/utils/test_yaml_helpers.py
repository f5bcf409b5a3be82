import pytest

from yankee_swap.utils.yaml_helpers import expand_dotted_keys


def test_expand_dotted_keys_nests_and_merges():
    raw = {"sim.n_players": 4, "sim": {"seed": 2}, "io.results_dir": "out", "top": 1}
    assert expand_dotted_keys(raw) == {
        "sim": {"n_players": 4, "seed": 2},
        "io": {"results_dir": "out"},
        "top": 1,
    }


def test_expand_dotted_keys_recurses_into_values():
    assert expand_dotted_keys({"sim": {"a.b": 1}}) == {"sim": {"a": {"b": 1}}}


def test_expand_dotted_keys_refuses_scalar_parent():
    with pytest.raises(TypeError):
        expand_dotted_keys({"sim": 3, "sim.n_players": 4})
