import pytest
from shuttle.services.pricing import VEHICLE_NAMES, VEHICLE_RATES, calculate_price, lookup_vehicle
from shuttle.core.enums import TripType, VehicleClass
from shuttle.core.errors import ConfigError


class TestPricingFormula:
    """Test the core pricing formula with all vehicle classes"""

    @pytest.mark.parametrize("vehicle,rate", [
        ("premier-sedan", 8.0),
        ("luxury-sedan", 12.0),
        ("suv", 15.0),
        ("van-7-seater", 18.0),
        ("van-14-seater", 25.0),
        ("minibus", 30.0),
    ])
    @pytest.mark.parametrize("distance", [0.0, 1.0, 12.3, 42.5, 480.75])
    def test_single_trip_formula(self, vehicle, rate, distance):
        res = calculate_price(distance, vehicle, "single")

        assert res.total_price == 50 + distance * rate
        assert res.distance_charge == distance * rate
        assert res.vehicle_rate == rate
        assert res.is_return_trip is False

    @pytest.mark.parametrize("vehicle", [v.value for v in VehicleClass])
    @pytest.mark.parametrize("distance", [0.0, 7.7, 42.5, 300.0])
    def test_return_trip_doubles_distance_charge(self, vehicle, distance):
        rate = VEHICLE_RATES[VehicleClass(vehicle)]
        res = calculate_price(distance, vehicle, "return")

        assert res.total_price == 50 + distance * rate * 2
        assert res.distance_charge == distance * rate * 2
        assert res.is_return_trip is True

    def test_suv_pricing(self):
        res = calculate_price(42.5, VehicleClass.SUV, TripType.SINGLE)

        # 50 + 42.5 * 15 = 687.5
        assert res.total_price == 687.5
        assert res.base_fee == 50.0
        assert res.vehicle_name == "SUV"

    def test_minibus_return_pricing(self):
        res = calculate_price(100.0, VehicleClass.MINIBUS, TripType.RETURN)

        # 50 + 100 * 30 * 2 = 6050
        assert res.total_price == 6050.0
        assert res.distance_charge == 6000.0

    def test_zero_distance_is_base_fee(self):
        res = calculate_price(0.0, "premier-sedan")
        assert res.total_price == 50.0
        assert res.distance_charge == 0.0

    def test_default_trip_type_is_single(self):
        assert calculate_price(10.0, "suv") == calculate_price(10.0, "suv", "single")

    def test_no_internal_rounding(self):
        res = calculate_price(10.333, "luxury-sedan")
        assert res.total_price == 50 + 10.333 * 12
        assert res.total_price != round(res.total_price, 2)


class TestPriceBreakdown:

    def test_breakdown_adds_to_total(self):
        res = calculate_price(55.5, "van-14-seater", "return")
        assert res.base_fee + res.distance_charge == res.total_price

    def test_pricing_is_idempotent(self):
        first = calculate_price(33.3, "van-7-seater", "return")
        second = calculate_price(33.3, "van-7-seater", "return")
        assert first == second

    def test_breakdown_names_match_table(self):
        for vehicle in VehicleClass:
            res = calculate_price(1.0, vehicle)
            assert res.vehicle == vehicle
            assert res.vehicle_name == VEHICLE_NAMES[vehicle]


class TestVehicleLookup:

    def test_rate_table_is_closed(self):
        assert set(VEHICLE_RATES) == set(VehicleClass)

    @pytest.mark.parametrize("vehicle", ["SUV", "Suv", "premier sedan", "bus", "", "van-7-Seater"])
    def test_unknown_or_miscased_vehicle_rejected(self, vehicle):
        with pytest.raises(ConfigError):
            calculate_price(10.0, vehicle)

    def test_lookup_returns_enum(self):
        assert lookup_vehicle("minibus") is VehicleClass.MINIBUS

    def test_unknown_trip_type_rejected(self):
        with pytest.raises(ConfigError):
            calculate_price(10.0, "suv", "roundtrip")

    def test_negative_distance_rejected(self):
        with pytest.raises(ConfigError):
            calculate_price(-1.0, "suv")
