import pytest

from hvac_templates.prototypes import (
    large_hotel_add_extra_equip_kitchen,
    large_hotel_custom_hvac_tweaks,
    exhaust_fan_space_types
)

SPACE_TYPE_MAP = {
    'Kitchen': ['Kitchen_Flr_6'],
    'Laundry': ['Laundry_Flr_1'],
    'Banquet': ['Banquet_Flr_6']
}


@pytest.fixture
def hotel(model, make_zone):
    for space_type, space_names in SPACE_TYPE_MAP.items():
        for space_name in space_names:
            make_zone(f"{space_name} ZN", standards_space_type=space_type, space_name=space_name)
    return model


class TestKitchenEquipment:

    def test_reach_in_units(self, hotel):
        equipment = large_hotel_add_extra_equip_kitchen(hotel, '90.1-2013')
        assert [e.nameString() for e in equipment] == ['Kitchen_Reach-in-Freezer', 'Kitchen_Reach-in-Refrigerator']
        freezer = equipment[0]
        assert freezer.electricEquipmentDefinition().designLevel().get() == pytest.approx(457.7)
        assert freezer.spaceType().get().nameString() == 'Kitchen_Flr_6 ZN Kitchen'
        assert freezer.schedule().get().nameString() == 'HotelLarge ALWAYS_ON'

    def test_none_in_doe_reference_hotel(self, hotel):
        assert large_hotel_add_extra_equip_kitchen(hotel, 'DOE Ref 1980-2004') == []

    def test_missing_kitchen(self, model):
        assert large_hotel_add_extra_equip_kitchen(model, '90.1-2013') == []

    def test_kitchen_without_space_type(self, model, make_zone):
        make_zone('Kitchen ZN', space_name='Kitchen_Flr_6')
        assert large_hotel_add_extra_equip_kitchen(model, '90.1-2013') == []


class TestExhaustFanSpaceTypes:

    @pytest.mark.parametrize('template, expected', [
        ('90.1-2004', ['Kitchen', 'Laundry']),
        ('90.1-2007', ['Kitchen', 'Laundry']),
        ('90.1-2010', ['Banquet', 'Kitchen', 'Laundry']),
        ('DOE Ref 1980-2004', ['Banquet', 'Kitchen', 'Laundry'])
    ])
    def test_space_types(self, template, expected):
        assert exhaust_fan_space_types(template) == expected


class TestCustomHVACTweaks:

    def test_exhaust_fans(self, hotel):
        assert large_hotel_custom_hvac_tweaks(hotel, '90.1-2013', SPACE_TYPE_MAP) is True
        names = sorted(f.nameString() for f in hotel.getFanZoneExhausts())
        assert names == ['Banquet_Flr_6 Exhaust Fan', 'Kitchen_Flr_6 Exhaust Fan', 'Laundry_Flr_1 Exhaust Fan']
        kitchen_fan = hotel.getFanZoneExhaustByName('Kitchen_Flr_6 Exhaust Fan').get()
        assert kitchen_fan.fanEfficiency() == pytest.approx(0.338)
        assert kitchen_fan.pressureRise() == pytest.approx(125.0)
        assert kitchen_fan.endUseSubcategory() == 'Zone Exhaust Fans'
        assert kitchen_fan.balancedExhaustFractionSchedule().get().nameString() == (
            'HotelLarge Kitchen_Balanced_Exhaust_SCH'
        )
        laundry_fan = hotel.getFanZoneExhaustByName('Laundry_Flr_1 Exhaust Fan').get()
        assert not laundry_fan.balancedExhaustFractionSchedule().is_initialized()

    def test_exhaust_fan_equipment_only_where_powered(self, hotel):
        large_hotel_custom_hvac_tweaks(hotel, '90.1-2013', SPACE_TYPE_MAP)
        equipment = hotel.getElectricEquipmentByName('Kitchen_Flr_6 Exhaust Fan Equipment').get()
        definition = equipment.electricEquipmentDefinition()
        assert definition.designLevel().get() == pytest.approx(1474.0)
        assert definition.fractionLost() == pytest.approx(1.0)
        assert not hotel.getElectricEquipmentByName('Laundry_Flr_1 Exhaust Fan Equipment').is_initialized()

    def test_kitchen_and_laundry_sizing(self, hotel):
        large_hotel_custom_hvac_tweaks(hotel, '90.1-2013', SPACE_TYPE_MAP)
        kitchen_zone = hotel.getThermalZoneByName('Kitchen_Flr_6 ZN').get()
        assert kitchen_zone.sizingZone().coolingMinimumAirFlowFraction() == pytest.approx(0.7)
        laundry_zone = hotel.getThermalZoneByName('Laundry_Flr_1 ZN').get()
        assert laundry_zone.sizingZone().coolingMinimumAirFlow() == pytest.approx(0.23567919336)

    def test_older_template_skips_banquet(self, hotel):
        assert large_hotel_custom_hvac_tweaks(hotel, '90.1-2007', SPACE_TYPE_MAP) is True
        assert not hotel.getFanZoneExhaustByName('Banquet_Flr_6 Exhaust Fan').is_initialized()

    def test_missing_space(self, hotel):
        space_type_map = {'Kitchen': ['Kitchen_Flr_5']}
        assert large_hotel_custom_hvac_tweaks(hotel, '90.1-2013', space_type_map) is False

    def test_unknown_building_type(self, hotel):
        assert large_hotel_custom_hvac_tweaks(hotel, '90.1-2013', SPACE_TYPE_MAP, building_type='Motel') is False
