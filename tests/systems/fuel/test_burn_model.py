"""Tests for the burn model and aggregate tank distribution."""

import math

import pytest

from fuelsim.systems.fuel.base import TankModel
from fuelsim.systems.fuel.burn_model import (
    CENTER_TANK_CAPACITY,
    MAX_PAYLOAD,
    WING_TANK_CAPACITY,
    SimulationState,
    calculate_fuel_burn,
    simulate_fuel_burn,
)


class TestCalculateFuelBurn:
    """Test the burn rate formula."""

    def test_reference_point(self):
        """Test half thrust at 10000 ft with no payload."""
        assert calculate_fuel_burn(0.5, 0.5, 10000.0, 0.0) == 0.375

    def test_max_payload_constant(self):
        """Test MAX_PAYLOAD is MTOW less full aggregate tank weight."""
        assert MAX_PAYLOAD == pytest.approx(149400.0)

    def test_engines_off_no_payload(self):
        """Test zero inputs give zero burn."""
        assert calculate_fuel_burn(0.0, 0.0, 0.0, 0.0) == 0.0

    def test_full_thrust_sea_level(self):
        """Test full thrust at sea level burns 1.0 without payload."""
        assert calculate_fuel_burn(1.0, 1.0, 0.0, 0.0) == pytest.approx(1.0)

    def test_ceiling_removes_engine_term(self):
        """Test engine contribution vanishes at 40000 ft."""
        assert calculate_fuel_burn(1.0, 1.0, 40000.0, 0.0) == pytest.approx(0.0)

    def test_payload_term(self):
        """Test payload adds payload / MAX_PAYLOAD * 0.5."""
        rate = calculate_fuel_burn(0.0, 0.0, 0.0, 319.0)
        assert rate == pytest.approx(319.0 / MAX_PAYLOAD * 0.5)

    def test_higher_altitude_burns_less(self):
        """Test burn decreases with altitude."""
        low = calculate_fuel_burn(0.8, 0.8, 5000.0, 100.0)
        high = calculate_fuel_burn(0.8, 0.8, 35000.0, 100.0)
        assert high < low

    def test_higher_thrust_burns_more(self):
        """Test burn increases with spool levels."""
        assert calculate_fuel_burn(0.9, 0.9, 10000.0, 0.0) > calculate_fuel_burn(
            0.1, 0.1, 10000.0, 0.0
        )

    @pytest.mark.parametrize("n1", [0.0, 0.33, 1.0])
    @pytest.mark.parametrize("altitude", [0.0, 20000.0, 40000.0])
    @pytest.mark.parametrize("payload", [0.0, 150.0, 319.0])
    def test_finite_and_non_negative_over_domain(self, n1, altitude, payload):
        """Test in-domain inputs give a finite, non-negative rate."""
        rate = calculate_fuel_burn(n1, 1.0 - n1, altitude, payload)
        assert math.isfinite(rate)
        assert rate >= 0.0
        assert rate <= 1.0 + 319.0 / MAX_PAYLOAD * 0.5


class TestSimulateFuelBurn:
    """Test the 50/25/25 distribution across aggregate tanks."""

    def test_distribution_shares(self):
        """Test center takes half and each wing a quarter."""
        state = SimulationState()
        simulate_fuel_burn(state, 0.375)

        assert state.center_tank_volume == 99999.8125
        assert state.left_wing_tank_volume == 55999.90625
        assert state.right_wing_tank_volume == 55999.90625

    def test_shares_sum_to_burn_rate(self):
        """Test total removed equals the burn rate when nothing clamps."""
        state = SimulationState()
        before = state.total_fuel
        simulate_fuel_burn(state, 8.0)
        assert before - state.total_fuel == pytest.approx(8.0)

    def test_floor_at_zero(self):
        """Test volumes never go negative."""
        state = SimulationState(
            center_tank_volume=0.1, left_wing_tank_volume=0.0, right_wing_tank_volume=5.0
        )
        simulate_fuel_burn(state, 10.0)

        assert state.center_tank_volume == 0.0
        assert state.left_wing_tank_volume == 0.0
        assert state.right_wing_tank_volume == 2.5

    def test_empty_tanks_stay_empty(self):
        """Test repeated burns on empty tanks keep them at zero."""
        state = SimulationState(
            center_tank_volume=0.0, left_wing_tank_volume=0.0, right_wing_tank_volume=0.0
        )
        for _ in range(10):
            simulate_fuel_burn(state, 1.0)

        assert state.center_tank_volume == 0.0
        assert state.left_wing_tank_volume == 0.0
        assert state.right_wing_tank_volume == 0.0

    def test_no_ceiling_clamp(self):
        """Test volumes above nominal capacity are left alone."""
        state = SimulationState(center_tank_volume=CENTER_TANK_CAPACITY + 500.0)
        simulate_fuel_burn(state, 0.0)
        assert state.center_tank_volume == CENTER_TANK_CAPACITY + 500.0

    def test_does_not_touch_time_or_rate(self):
        """Test time_elapsed and fuel_burn_rate are left to the caller."""
        state = SimulationState()
        simulate_fuel_burn(state, 0.375)
        assert state.time_elapsed == 0.0
        assert state.fuel_burn_rate == 0.0


class TestSimulationState:
    """Test the aggregate state container."""

    def test_launch_defaults(self):
        """Test defaults match the control panel launch state."""
        state = SimulationState()
        assert state.n1_level == 0.5
        assert state.n2_level == 0.5
        assert state.altitude == 10000.0
        assert state.payload == 0.0
        assert state.center_tank_volume == CENTER_TANK_CAPACITY
        assert state.left_wing_tank_volume == WING_TANK_CAPACITY
        assert state.right_wing_tank_volume == WING_TANK_CAPACITY

    def test_fuel_state_snapshot(self):
        """Test snapshot is tagged aggregate and sums volumes."""
        fuel_state = SimulationState().to_fuel_state()

        assert fuel_state.model is TankModel.AGGREGATE
        assert fuel_state.total_volume == 212000.0
        assert set(fuel_state.volumes) == {"center", "left_wing", "right_wing"}
        assert fuel_state.warnings == []
        assert fuel_state.failures == []

    def test_low_fuel_warning(self):
        """Test LOW_FUEL below the configured fraction of capacity."""
        state = SimulationState(
            center_tank_volume=1000.0, left_wing_tank_volume=1000.0, right_wing_tank_volume=1000.0
        )
        assert "LOW_FUEL" in state.to_fuel_state(0.1).warnings

    def test_exhausted_failure(self):
        """Test FUEL_EXHAUSTED when all tanks are empty."""
        state = SimulationState(
            center_tank_volume=0.0, left_wing_tank_volume=0.0, right_wing_tank_volume=0.0
        )
        assert "FUEL_EXHAUSTED" in state.to_fuel_state().failures
