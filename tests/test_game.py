"""Tests for the Prisoner's Dilemma payoff model."""

import itertools

import pytest

from ipd_elo.game import Choice, Weights, max_diff, outcome, parse_weights


class TestChoice:
    """Test Choice helpers."""

    def test_from_bool(self):
        assert Choice.from_bool(True) is Choice.COLLABORATE
        assert Choice.from_bool(False) is Choice.DEFECT

    def test_hashable(self):
        """Choices can be used as dictionary keys."""
        counts = {Choice.DEFECT: 1, Choice.COLLABORATE: 2}
        assert counts[Choice.COLLABORATE] == 2


class TestOutcome:
    """Test payoff lookup."""

    def test_default_table(self):
        """Default weights give the expected payoffs for all four cases."""
        w = Weights()
        assert w.outcome(Choice.DEFECT, Choice.DEFECT) == (2, 2)
        assert w.outcome(Choice.DEFECT, Choice.COLLABORATE) == (3, 0)
        assert w.outcome(Choice.COLLABORATE, Choice.DEFECT) == (0, 3)
        assert w.outcome(Choice.COLLABORATE, Choice.COLLABORATE) == (1, 1)

    def test_mirror_symmetry(self):
        """Swapping the choices swaps the payoffs."""
        w = Weights(defect_defect=1, defect_collab=(5, 2), collab_collab=4)
        for a, b in itertools.product(Choice, repeat=2):
            pa, pb = w.outcome(a, b)
            assert w.outcome(b, a) == (pb, pa)

    def test_module_function(self):
        """outcome() delegates to the weights."""
        w = Weights()
        assert outcome(w, Choice.DEFECT, Choice.COLLABORATE) == (3, 0)


class TestMaxDiff:
    """Test the normalization denominator."""

    def test_default(self):
        assert max_diff(Weights()) == 3

    def test_reversed_pair(self):
        """The gap is absolute."""
        assert Weights(defect_collab=(1, 6)).max_diff() == 5

    def test_degenerate(self):
        """Equal defect/collaborate payoffs give zero."""
        assert Weights(defect_collab=(4, 4)).max_diff() == 0


class TestValidate:
    """Test weight validation."""

    def test_default_valid(self):
        Weights().validate()

    def test_degenerate_rejected(self):
        with pytest.raises(ValueError, match="Degenerate"):
            Weights(defect_collab=(2, 2)).validate()

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            Weights(defect_defect=-1).validate()

    @pytest.mark.parametrize(
        "weights",
        [
            Weights(defect_collab=(3.5, 0)),
            Weights(defect_defect=2.0),
            Weights(collab_collab=True),
            Weights(defect_collab=("3", "0")),
        ],
    )
    def test_non_integer_rejected(self, weights):
        """Every payoff must be a plain integer."""
        with pytest.raises(ValueError, match="integer"):
            weights.validate()

    def test_pair_required(self):
        with pytest.raises(ValueError, match="pair"):
            Weights(defect_collab=3).validate()


class TestParseWeights:
    """Test command-line weight parsing."""

    def test_default_string(self):
        w = parse_weights("2,3-0,1")
        assert w == Weights()
        assert w.to_string() == "2,3-0,1"

    def test_multi_digit(self):
        w = parse_weights("10,25-3,7")
        assert w.defect_defect == 10
        assert w.defect_collab == (25, 3)
        assert w.collab_collab == 7

    @pytest.mark.parametrize("text", ["", "2,3,0,1", "a,3-0,1", "2,-3-0,1", "2;3-0;1"])
    def test_malformed(self, text):
        """Malformed strings name the expected format."""
        with pytest.raises(ValueError, match="dd,dcw-dcl,cc"):
            parse_weights(text)


class TestWeightsDict:
    """Test mapping conversion used by YAML configs."""

    def test_from_dict(self):
        w = Weights.from_dict(
            {"defect_defect": 1, "defect_collab": [5, 0], "collab_collab": 3}
        )
        assert w.defect_collab == (5, 0)
        assert w.to_dict()["defect_collab"] == [5, 0]

    def test_partial_dict_keeps_defaults(self):
        assert Weights.from_dict({"collab_collab": 4}).defect_collab == (3, 0)

    def test_unknown_field(self):
        with pytest.raises(ValueError, match="Unknown"):
            Weights.from_dict({"temptation": 5})
