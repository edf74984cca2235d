# tests/bioenergetic/test_parameters.py
"""Tests for the parameter bundle and its builder."""

import numpy as np
import pytest

from bioenergetic.models import (
    LinearMortality,
    ParameterError,
    Productivity,
    model_parameters,
    trophic_rank,
)
from bioenergetic.models.parameters import DEFAULT_EXTINCTION_EPSILON, per_consumer
from bioenergetic.models.rates import exponential_ba_attackr, exponential_ba_handlingt


class TestTrophicRank:
    """Tests for prey-averaged trophic level."""

    def test_chain(self, chain_A):
        np.testing.assert_allclose(trophic_rank(chain_A), [3.0, 2.0, 1.0])

    def test_omnivory(self, omnivory_A):
        """Test an omnivore sits between its prey levels plus one."""
        np.testing.assert_allclose(trophic_rank(omnivory_A), [2.5, 2.0, 1.0, 1.0])


class TestModelParameters:
    """Tests for model_parameters defaults and derived quantities."""

    def test_sizes(self, chain_parameters):
        assert chain_parameters.S == 3
        assert chain_parameters.num_producers == 1
        assert chain_parameters.state_size == 3
        assert chain_parameters.productivity is Productivity.SPECIES

    def test_default_bodymass_from_trophic_rank(self, chain_A):
        """Test body masses Z^(TL - 1)."""
        p = model_parameters(chain_A, Z=10.0)
        np.testing.assert_allclose(p.bodymass, [100.0, 10.0, 1.0])

    def test_explicit_bodymass(self, chain_A):
        p = model_parameters(chain_A, bodymass=[3.0, 2.0, 1.0])
        np.testing.assert_array_equal(p.bodymass, [3.0, 2.0, 1.0])

    def test_derived_consumption_rates(self, chain_parameters):
        """Test y = 1/handling time and Gamma = 1/(attack * handling)."""
        np.testing.assert_allclose(chain_parameters.y, [8.0, 8.0, 0.0])
        np.testing.assert_allclose(chain_parameters.half_saturation, [0.5, 0.5, 0.0])
        np.testing.assert_allclose(chain_parameters.gamma_h, [0.5, 0.5, 0.0])

    def test_vertebrate_consumption_rate(self, chain_A):
        p = model_parameters(chain_A, vertebrates=[True, False, False])
        assert p.y[0] == pytest.approx(4.0)

    def test_efficiency_by_resource_role(self, chain_parameters):
        """Test herbivory and carnivory efficiencies on links only."""
        expected = np.array([[0.0, 0.85, 0.0], [0.0, 0.0, 0.45], [0.0, 0.0, 0.0]])
        np.testing.assert_array_equal(chain_parameters.efficiency, expected)

    def test_homogeneous_preferences(self, omnivory_parameters):
        w = omnivory_parameters.w
        np.testing.assert_allclose(w[0], [0.0, 0.5, 0.5, 0.0])
        np.testing.assert_allclose(w[2], 0.0)

    def test_nutrient_state(self, chain_A):
        """Test two extra state entries under nutrient limitation."""
        p = model_parameters(chain_A, productivity="nutrients")
        assert p.n_nutrients == 2
        assert p.state_size == 5

    def test_mortality_rate_coerced(self, chain_A):
        p = model_parameters(chain_A, mortality=0.2)
        assert isinstance(p.mortality, LinearMortality)
        assert p.mortality.rate == 0.2

    def test_default_extinction_epsilon(self, chain_parameters):
        assert chain_parameters.extinction_epsilon == DEFAULT_EXTINCTION_EPSILON
        assert chain_parameters.extinction_epsilon == 100 * np.finfo(float).eps

    def test_link_rates_reduced_per_consumer(self, omnivory_A):
        """Test link-level handling time becomes a per-consumer mean."""
        p = model_parameters(
            omnivory_A,
            bodymass=np.ones(4),
            handlingtime=exponential_ba_handlingt(),
            attackrate=exponential_ba_attackr(),
        )
        assert p.y.shape == (4,)
        assert p.y[0] == pytest.approx(np.exp(-9.66))
        np.testing.assert_array_equal(p.y[2:], 0.0)

    def test_rewiring_flag(self, chain_A):
        p = model_parameters(chain_A, cost_matrix=np.ones((3, 3)))
        assert p.rewiring
        assert not model_parameters(chain_A).rewiring


class TestImmutability:
    """Tests that bundles are read-only."""

    def test_arrays_read_only(self, chain_parameters):
        for array in (chain_parameters.x, chain_parameters.y, chain_parameters.w, chain_parameters.A):
            assert not array.flags.writeable
            with pytest.raises(ValueError):
                array[0] = 1.0

    def test_fields_frozen(self, chain_parameters):
        with pytest.raises(AttributeError):
            chain_parameters.K = 2.0

    def test_input_not_aliased(self, chain_A):
        """Test later edits to caller arrays do not leak into the bundle."""
        bodymass = np.array([3.0, 2.0, 1.0])
        p = model_parameters(chain_A, bodymass=bodymass)
        bodymass[0] = 100.0
        assert p.bodymass[0] == 3.0


class TestValidation:
    """Tests for malformed inputs."""

    def test_non_square(self):
        with pytest.raises(ParameterError, match="square"):
            model_parameters(np.zeros((2, 3)))

    def test_non_binary(self):
        with pytest.raises(ParameterError, match="0/1"):
            model_parameters([[0, 2], [0, 0]])

    def test_no_producer(self):
        with pytest.raises(ParameterError, match="no producer"):
            model_parameters([[0, 1], [1, 0]])

    def test_unknown_productivity(self, chain_A):
        with pytest.raises(ParameterError, match="Unknown productivity"):
            model_parameters(chain_A, productivity="logistic")

    def test_bodymass_length(self, chain_A):
        with pytest.raises(ParameterError, match="bodymass"):
            model_parameters(chain_A, bodymass=[1.0, 1.0])

    def test_negative_bodymass(self, chain_A):
        with pytest.raises(ParameterError, match="non-negative"):
            model_parameters(chain_A, bodymass=[1.0, -1.0, 1.0])

    def test_supply_length(self, chain_A):
        with pytest.raises(ParameterError, match="supply"):
            model_parameters(chain_A, supply=[1.0, 1.0, 1.0])

    def test_cost_matrix_shape(self, chain_A):
        with pytest.raises(ParameterError, match="cost_matrix"):
            model_parameters(chain_A, cost_matrix=np.ones((2, 2)))

    def test_disconnected_consumer(self):
        """Test consumers feeding only on each other have no trophic rank."""
        A = [[0, 1, 0], [1, 0, 0], [0, 0, 0]]
        with pytest.raises(ParameterError, match="trophic rank"):
            model_parameters(A)

    @pytest.mark.parametrize("value", [0.0, -0.1, 1.5])
    def test_herbivore_efficiency_range(self, chain_A, value):
        """Test assimilation efficiency must lie in (0, 1]."""
        with pytest.raises(ParameterError, match="e_herbivore"):
            model_parameters(chain_A, e_herbivore=value)

    @pytest.mark.parametrize("value", [0.0, 1.01])
    def test_carnivore_efficiency_range(self, chain_A, value):
        with pytest.raises(ParameterError, match="e_carnivore"):
            model_parameters(chain_A, e_carnivore=value)

    def test_efficiency_of_one_accepted(self, chain_A):
        p = model_parameters(chain_A, e_herbivore=1.0, e_carnivore=1.0)
        assert p.efficiency.max() == 1.0

    @pytest.mark.parametrize("value", [0.0, -1.0])
    def test_non_positive_carrying_capacity(self, chain_A, value):
        with pytest.raises(ParameterError, match="Carrying capacity"):
            model_parameters(chain_A, K=value)

    @pytest.mark.parametrize("name", ["K1", "K2"])
    def test_non_positive_half_saturation(self, chain_A, name):
        with pytest.raises(ParameterError, match="K1 and K2"):
            model_parameters(chain_A, productivity="nutrients", **{name: 0.0})

    def test_negative_half_saturation_entry(self, chain_A):
        """Test a single non-positive species entry is rejected."""
        with pytest.raises(ParameterError, match="K1 and K2"):
            model_parameters(chain_A, K2=[0.15, 0.15, -0.15])

    def test_negative_turnover(self, chain_A):
        with pytest.raises(ParameterError, match="Turnover rate D"):
            model_parameters(chain_A, productivity="nutrients", D=-0.1)

    def test_zero_turnover_accepted(self, chain_A):
        assert model_parameters(chain_A, D=0.0).D == 0.0

    def test_negative_hill_exponent(self, chain_A):
        with pytest.raises(ParameterError, match="exponent h"):
            model_parameters(chain_A, h=-1.0)

    def test_negative_interference(self, chain_A):
        with pytest.raises(ParameterError, match="Interference c"):
            model_parameters(chain_A, c=-0.5)

    def test_negative_interference_entry(self, chain_A):
        with pytest.raises(ParameterError, match="Interference c"):
            model_parameters(chain_A, c=[0.0, 0.5, -0.5])

    def test_parameter_error_is_value_error(self):
        assert issubclass(ParameterError, ValueError)


class TestPerConsumer:
    """Tests for link-to-species reduction."""

    def test_mean_over_links(self, omnivory_A):
        rate = np.arange(16, dtype=float).reshape(4, 4)
        reduced = per_consumer(rate, omnivory_A.astype(bool))
        np.testing.assert_allclose(reduced, [1.5, 6.5, 0.0, 0.0])

    def test_non_finite_zeroed(self, chain_A):
        reduced = per_consumer(np.array([np.inf, 2.0, 3.0]), chain_A.astype(bool))
        np.testing.assert_array_equal(reduced, [0.0, 2.0, 0.0])
