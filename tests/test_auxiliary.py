import pytest

from hvac_templates.core import f_to_c
from hvac_templates.auxiliary import (
    add_elevator,
    elevator_lift_power,
    elevator_fan_power,
    elevator_lighting_power,
    add_exhaust_fan,
    add_data_center_load,
    add_refrigeration
)


@pytest.fixture
def space(model, make_zone):
    make_zone('Core', floor_size=10.0)
    return model.getSpaceByName('Core Space').get()


class TestElevatorPower:

    @pytest.mark.parametrize('standard, elevator_type, building_type, expected', [
        ('DOE Ref Pre-1980', 'Traction', None, 18537.0),
        ('DOE Ref 1980-2004', 'Hydraulic', None, 14610.0),
        ('DOE Ref 1980-2004', 'Hydraulic', 'MidriseApartment', 16055.0),
        ('90.1-2010', 'Traction', None, 20370.0),
        ('90.1-2013', 'Hydraulic', 'MidriseApartment', 16055.0),
        ('90.1-2013', 'Paternoster', None, 16055.0)
    ])
    def test_lift_power(self, standard, elevator_type, building_type, expected):
        assert elevator_lift_power(standard, elevator_type, building_type) == pytest.approx(expected)

    def test_fan_power(self):
        assert elevator_fan_power() == pytest.approx(0.33 * 6.66 * 4.25 * 8.0)

    def test_lighting_power(self):
        area_ft2 = 6.66 * 4.25
        target_lm = 30.0 / 0.75 * area_ft2
        expected = target_lm * 0.7 / 10.0 + target_lm * 0.3 / 35.0
        assert elevator_lighting_power() == pytest.approx(expected)


class TestAddElevator:

    def test_doe_ref_models_lift_motors_only(self, model, space):
        equipment = add_elevator(
            model, 'DOE Ref 1980-2004', space, 2, 'Traction', 'Elevator Operation', None, None
        )
        assert equipment.nameString() == '2 Elevator Lift Motors'
        assert equipment.multiplier() == pytest.approx(2.0)
        assert equipment.electricEquipmentDefinition().designLevel().get() == pytest.approx(18537.0)
        assert equipment.schedule().get().nameString() == 'Elevator Operation'
        assert len(model.getElectricEquipments()) == 1

    def test_code_vintage_adds_fans_and_lights(self, model, space):
        add_elevator(
            model, '90.1-2013', space, 3, 'Hydraulic',
            'Elevator Operation', 'Elevator Lights Fan', 'Elevator Lights Fan'
        )
        names = sorted(e.nameString() for e in model.getElectricEquipments())
        assert names == ['3 Elevator Fans', '3 Elevator Lift Motors', '3 Elevator Lights']
        fans = model.getElectricEquipmentByName('3 Elevator Fans').get()
        assert fans.electricEquipmentDefinition().designLevel().get() == pytest.approx(elevator_fan_power())
        assert fans.space().get().nameString() == 'Core Space'


class TestExhaustFan:

    def test_one_fan_per_zone(self, model, make_zone):
        zones = [make_zone('Kitchen'), make_zone('Laundry')]
        fans = add_exhaust_fan(
            model, 'HotelLarge ALWAYS_ON', 0.5, 'HotelLarge Kitchen_Exhaust_SCH',
            'HotelLarge Kitchen_Balanced_Exhaust_SCH', zones
        )
        assert sorted(f.nameString() for f in fans) == ['Kitchen Exhaust Fan', 'Laundry Exhaust Fan']
        fan = fans[0]
        assert fan.systemAvailabilityManagerCouplingMode() == 'Decoupled'
        assert fan.availabilitySchedule().get().nameString() == 'HotelLarge ALWAYS_ON'
        assert fan.flowFractionSchedule().get().nameString() == 'HotelLarge Kitchen_Exhaust_SCH'
        assert fan.balancedExhaustFractionSchedule().get().nameString() == (
            'HotelLarge Kitchen_Balanced_Exhaust_SCH'
        )
        assert fan.thermalZone().is_initialized()

    def test_optional_schedules(self, model, make_zone):
        fans = add_exhaust_fan(model, None, 0.2, None, None, [make_zone('Toilet')])
        assert not fans[0].flowFractionSchedule().is_initialized()
        assert not fans[0].balancedExhaustFractionSchedule().is_initialized()


class TestDataCenterLoad:

    def test_load(self, model, space):
        equipment = add_data_center_load(model, space, 1500.0)
        assert equipment.nameString() == 'Data Center Load'
        definition = equipment.electricEquipmentDefinition()
        assert definition.wattsperSpaceFloorArea().get() == pytest.approx(1500.0)
        assert equipment.space().get().nameString() == 'Core Space'
        assert equipment.getDesignLevel(space.floorArea(), space.numberOfPeople()) == pytest.approx(150000.0)


class TestRefrigeration:

    def _add(self, model, zone, case_type, standard='90.1-2013'):
        return add_refrigeration(
            model, standard, case_type, 734.0, 3.0, 69.0, 33.0,
            'Refrigeration Case Lighting', 410.0, 'Refrigeration Restocking',
            1.5, None, 350.0, None, zone
        )

    def test_walkin_freezer(self, model, make_zone):
        zone = make_zone('Kitchen')
        ref_sys = self._add(model, zone, 'Walkin Freezer')
        cases = ref_sys.cases()
        assert len(cases) == 1
        ref_case = cases[0]
        assert ref_case.nameString() == 'Kitchen Walkin Freezer'
        assert ref_case.caseOperatingTemperature() == pytest.approx(f_to_c(-9.4))
        assert ref_case.caseDefrostType() == 'Electric'
        assert ref_case.caseCreditFractionSchedule().is_initialized()
        assert ref_case.latentCaseCreditCurve().nameString() == (
            'Single Shelf Horizontal Latent Energy Multiplier_After2004'
        )
        assert len(ref_sys.compressors()) == 1
        assert ref_sys.refrigerationCondenser().is_initialized()
        assert ref_sys.suctionPipingZone().get().nameString() == 'Kitchen'

    def test_display_case(self, model, make_zone):
        zone = make_zone('Sales')
        ref_sys = self._add(model, zone, 'Display Case')
        ref_case = ref_sys.cases()[0]
        assert ref_case.nameString() == 'Sales Display Case'
        assert ref_case.caseOperatingTemperature() == pytest.approx(f_to_c(35.6))
        assert not ref_case.caseCreditFractionSchedule().is_initialized()
        assert ref_case.latentCaseCreditCurve().nameString() == 'Multi Shelf Vertical Latent Energy Multiplier'

    def test_unknown_case_type(self, model, make_zone):
        assert self._add(model, make_zone('Kitchen'), 'Ice Machine') is False
        assert len(model.getRefrigerationSystems()) == 0
