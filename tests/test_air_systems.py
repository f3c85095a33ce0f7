import pytest

from hvac_templates.core import f_to_c
from hvac_templates.plant_loops import add_hw_loop, add_chw_loop, add_hp_loop
from hvac_templates.air_systems import (
    add_vav_reheat,
    add_vav_pfp_boxes,
    add_pvav,
    add_cav,
    add_psz_ac,
    add_data_center_hvac,
    add_split_AC,
    add_doas
)


@pytest.fixture
def hot_water_loop(model):
    return add_hw_loop(model, 'NaturalGas')


@pytest.fixture
def chilled_water_loop(model):
    return add_chw_loop(model, '90.1-2013', 'const_pri', 'AirCooled', 'WithCondenser', 'Scroll', 100.0)


@pytest.fixture
def zones(make_zone):
    return [make_zone('Zone 1'), make_zone('Zone 2')]


def _oa_controller(air_loop):
    return air_loop.airLoopHVACOutdoorAirSystem().get().getControllerOutdoorAir()


class TestVAVReheat:

    def test_system(self, model, hot_water_loop, chilled_water_loop, zones):
        air_loop = add_vav_reheat(
            model, '90.1-2013', None, hot_water_loop, chilled_water_loop, zones,
            'Office HVAC Operation', 'Office Min OA Damper', 0.62, 0.91, 1109.0
        )
        assert air_loop.nameString() == '2 Zone VAV'
        assert len(air_loop.thermalZones()) == 2
        assert air_loop.availabilitySchedule().nameString() == 'Office HVAC Operation'
        fans = model.getFanVariableVolumes()
        assert len(fans) == 1
        assert fans[0].pressureRise() == pytest.approx(1109.0)
        assert fans[0].endUseSubcategory() == 'VAV system Fans'
        assert model.getCoilHeatingWaterByName('2 Zone VAV Main Htg Coil').is_initialized()
        assert model.getCoilCoolingWaterByName('2 Zone VAV Clg Coil').is_initialized()
        assert model.getScheduleRulesetByName('Supply Air Temp - 55.04F').is_initialized()

    def test_reheat_terminals(self, model, hot_water_loop, chilled_water_loop, zones):
        add_vav_reheat(
            model, '90.1-2013', 'Core VAV', hot_water_loop, chilled_water_loop, zones,
            None, None, 0.62, 0.91, 1109.0
        )
        terminals = model.getAirTerminalSingleDuctVAVReheats()
        assert sorted(t.nameString() for t in terminals) == ['Zone 1 VAV Term', 'Zone 2 VAV Term']
        for terminal in terminals:
            assert terminal.damperHeatingAction() == 'Reverse'
            assert terminal.zoneMinimumAirFlowMethod() == 'Constant'
        coil = model.getCoilHeatingWaterByName('Zone 1 Rht Coil').get()
        assert coil.ratedOutletAirTemperature() == pytest.approx(f_to_c(104.0))
        assert coil.plantLoop().get().nameString() == 'Hot Water Loop'

    def test_second_system_keeps_first_dampers(self, model, hot_water_loop, chilled_water_loop, zones):
        add_vav_reheat(
            model, '90.1-2004', 'Old VAV', hot_water_loop, chilled_water_loop, zones[:1],
            None, None, 0.62, 0.91, 1109.0
        )
        add_vav_reheat(
            model, '90.1-2013', 'New VAV', hot_water_loop, chilled_water_loop, zones[1:],
            None, None, 0.62, 0.91, 1109.0
        )
        old_terminal = model.getAirTerminalSingleDuctVAVReheatByName('Zone 1 VAV Term').get()
        new_terminal = model.getAirTerminalSingleDuctVAVReheatByName('Zone 2 VAV Term').get()
        assert old_terminal.damperHeatingAction() == 'Normal'
        assert new_terminal.damperHeatingAction() == 'Reverse'

    def test_zone_sizing(self, model, hot_water_loop, chilled_water_loop, zones):
        add_vav_reheat(
            model, '90.1-2013', None, hot_water_loop, chilled_water_loop, zones,
            None, None, 0.62, 0.91, 1109.0, building_type='SecondarySchool'
        )
        sizing_zone = zones[0].sizingZone()
        assert sizing_zone.coolingDesignAirFlowMethod() == 'DesignDay'
        assert sizing_zone.zoneHeatingDesignSupplyAirTemperature() == pytest.approx(f_to_c(104.0))

    def test_large_hotel_economizer(self, model, hot_water_loop, chilled_water_loop, zones):
        air_loop = add_vav_reheat(
            model, '90.1-2013', None, hot_water_loop, chilled_water_loop, zones,
            None, None, 0.62, 0.91, 1109.0, building_type='LargeHotel'
        )
        assert _oa_controller(air_loop).getEconomizerControlType() == 'DifferentialEnthalpy'
        coil = model.getCoilHeatingWaterByName('2 Zone VAV Main Htg Coil').get()
        assert coil.ratedInletAirTemperature() == pytest.approx(f_to_c(62.0))

    def test_damper_schedule_not_on_controller(self, model, hot_water_loop, chilled_water_loop, zones):
        air_loop = add_vav_reheat(
            model, '90.1-2013', None, hot_water_loop, chilled_water_loop, zones,
            None, 'Office Min OA Damper', 0.62, 0.91, 1109.0
        )
        assert model.getScheduleRulesetByName('Office Min OA Damper').is_initialized()
        assert not _oa_controller(air_loop).minimumOutdoorAirSchedule().is_initialized()

    def test_return_plenum(self, model, hot_water_loop, chilled_water_loop, zones, make_zone):
        plenum = make_zone('Plenum')
        add_vav_reheat(
            model, '90.1-2013', None, hot_water_loop, chilled_water_loop, zones,
            None, None, 0.62, 0.91, 1109.0, return_plenum=plenum
        )
        assert len(model.getAirLoopHVACReturnPlenums()) == 1

    def test_missing_loop(self, model, hot_water_loop, zones):
        assert add_vav_reheat(
            model, '90.1-2013', None, hot_water_loop, None, zones, None, None, 0.62, 0.91, 1109.0
        ) is False
        assert len(model.getAirLoopHVACs()) == 0


class TestVAVPFPBoxes:

    def test_system(self, model, chilled_water_loop, zones):
        air_loop = add_vav_pfp_boxes(
            model, '90.1-2013', None, chilled_water_loop, zones, None, None, 0.62, 0.91, 1109.0
        )
        assert air_loop.nameString() == '2 Zone VAV with PFP Boxes and Reheat'
        assert len(model.getAirTerminalSingleDuctParallelPIUReheats()) == 2
        pfp_fan = model.getFanConstantVolumeByName('Zone 1 PFP Term Fan').get()
        assert pfp_fan.pressureRise() == pytest.approx(300.0)
        assert model.getCoilHeatingElectricByName('Zone 2 Rht Coil').is_initialized()
        assert model.getCoilHeatingElectricByName('2 Zone VAV with PFP Boxes and Reheat Htg Coil').is_initialized()

    def test_missing_loop(self, model, zones):
        assert add_vav_pfp_boxes(model, '90.1-2013', None, None, zones, None, None, 0.62, 0.91, 1109.0) is False


class TestPVAV:

    def test_gas_and_electric_reheat(self, model, zones):
        air_loop = add_pvav(model, '90.1-2010', None, zones, None, None)
        assert air_loop.nameString() == '2 Zone PVAV'
        assert model.getCoilHeatingGasByName('2 Zone PVAV Main Htg Coil').is_initialized()
        assert model.getCoilHeatingElectricByName('Zone 1 Rht Coil').is_initialized()
        assert model.getCoilCoolingDXTwoSpeedByName('2 Zone PVAV Clg Coil').is_initialized()
        assert model.getControllerOutdoorAirByName('2 Zone PVAV OA Controller').is_initialized()
        assert model.getControllerMechanicalVentilationByName('2 Zone PVAV Ventilation Controller').is_initialized()
        assert len(model.getAirTerminalSingleDuctVAVReheats()) == 2

    def test_hot_water(self, model, hot_water_loop, zones):
        add_pvav(model, '90.1-2010', 'Floor 1 PVAV', zones, None, None, hot_water_loop=hot_water_loop)
        assert model.getCoilHeatingWaterByName('Floor 1 PVAV Main Htg Coil').is_initialized()
        assert model.getCoilHeatingWaterByName('Zone 1 Rht Coil').is_initialized()

    def test_outpatient_keeps_electric_reheat(self, model, hot_water_loop, zones):
        add_pvav(model, '90.1-2010', 'PVAV Outpatient F2 F3', zones, None, None, hot_water_loop=hot_water_loop)
        assert model.getCoilHeatingWaterByName('PVAV Outpatient F2 F3 Main Htg Coil').is_initialized()
        assert model.getCoilHeatingElectricByName('Zone 1 Rht Coil').is_initialized()


class TestCAV:

    def test_system(self, model, hot_water_loop, zones):
        air_loop = add_cav(
            model, '90.1-2013', None, hot_water_loop, zones, None, 'Office Min OA Damper', 0.6, 0.9, 1000.0
        )
        assert air_loop.nameString() == '2 Zone CAV'
        fan = model.getFanConstantVolumeByName('2 Zone CAV Fan').get()
        assert fan.endUseSubcategory() == 'CAV system Fans'
        main_coil = model.getCoilHeatingWaterByName('2 Zone CAV Main Htg Coil').get()
        assert main_coil.ratedInletWaterTemperature() == pytest.approx(f_to_c(152.6))
        assert model.getCoilCoolingDXTwoSpeedByName('2 Zone CAV Clg Coil').is_initialized()
        controller = _oa_controller(air_loop)
        assert controller.minimumFractionofOutdoorAirSchedule().get().nameString() == 'Office Min OA Damper'
        assert controller.controllerMechanicalVentilation().systemOutdoorAirMethod() == 'ZoneSum'
        rht_coil = model.getCoilHeatingWaterByName('Zone 1 Rht Coil').get()
        assert rht_coil.ratedOutletAirTemperature() == pytest.approx(f_to_c(122.0))

    def test_reheat_terminals(self, model, hot_water_loop, zones):
        add_cav(model, '90.1-2004', None, hot_water_loop, zones, None, None, 0.6, 0.9, 1000.0)
        terminal = model.getAirTerminalSingleDuctVAVReheatByName('Zone 2 VAV Term').get()
        assert terminal.damperHeatingAction() == 'Normal'
        assert terminal.maximumReheatAirTemperature() == pytest.approx(f_to_c(122.0))

    def test_missing_loop(self, model, zones):
        assert add_cav(model, '90.1-2013', None, None, zones, None, None, 0.6, 0.9, 1000.0) is False


class TestPSZAC:

    def test_rooftop_unit(self, model, zones):
        air_loops = add_psz_ac(
            model, '90.1-2013', None, None, None, zones, None, None,
            'DrawThrough', 'ConstantVolume', 'Gas', None, 'Single Speed DX AC'
        )
        assert [loop.nameString() for loop in air_loops] == ['Zone 1 PSZ-AC', 'Zone 2 PSZ-AC']
        assert model.getCoilHeatingGasByName('Zone 1 PSZ-AC Gas Htg Coil').is_initialized()
        assert model.getCoilCoolingDXSingleSpeedByName('Zone 1 PSZ-AC 1spd DX AC Clg Coil').is_initialized()
        assert len(model.getAirTerminalSingleDuctConstantVolumeNoReheats()) == 2
        assert len(model.getSetpointManagerSingleZoneReheats()) == 2
        sizing_system = air_loops[0].sizingSystem()
        assert sizing_system.centralHeatingMaximumSystemAirFlowRatio().get() == pytest.approx(1.0)

    def test_pre_1980_gas_efficiency(self, model, zones):
        add_psz_ac(
            model, 'DOE Ref Pre-1980', None, None, None, zones[:1], None, None,
            'DrawThrough', 'ConstantVolume', 'Gas', None, 'Two Speed DX AC'
        )
        coil = model.getCoilHeatingGasByName('Zone 1 PSZ-AC Gas Htg Coil').get()
        assert coil.gasBurnerEfficiency() == pytest.approx(0.78)

    def test_heat_pump(self, model, zones):
        air_loops = add_psz_ac(
            model, '90.1-2013', 'PSZ-HP', None, None, zones[:1], None, None,
            'DrawThrough', 'Cycling', 'Single Speed Heat Pump', 'Electric', 'Single Speed Heat Pump'
        )
        assert air_loops[0].nameString() == 'Zone 1 PSZ-HP'
        assert len(model.getAirLoopHVACUnitaryHeatPumpAirToAirs()) == 1
        assert len(model.getFanOnOffs()) == 1

    def test_water_coils(self, model, hot_water_loop, chilled_water_loop, zones):
        add_psz_ac(
            model, '90.1-2013', None, hot_water_loop, chilled_water_loop, zones[:1], None, None,
            'BlowThrough', 'ConstantVolume', 'Water', None, 'Water'
        )
        assert model.getCoilHeatingWaterByName('Zone 1 PSZ-AC Water Htg Coil').is_initialized()
        assert model.getCoilCoolingWaterByName('Zone 1 PSZ-AC Water Clg Coil').is_initialized()

    @pytest.mark.parametrize('fan_type, heating, supplemental, cooling', [
        ('Variable', 'Gas', None, 'Single Speed DX AC'),
        ('ConstantVolume', 'Steam', None, 'Single Speed DX AC'),
        ('ConstantVolume', 'Gas', 'Oil', 'Single Speed DX AC'),
        ('ConstantVolume', 'Gas', None, 'Evaporative'),
        ('Cycling', 'Single Speed Heat Pump', None, 'Single Speed Heat Pump'),
        ('ConstantVolume', 'Water', None, 'Single Speed DX AC')
    ])
    def test_bad_selection(self, model, zones, fan_type, heating, supplemental, cooling):
        air_loops = add_psz_ac(
            model, '90.1-2013', None, None, None, zones, None, None,
            'DrawThrough', fan_type, heating, supplemental, cooling
        )
        assert air_loops == []
        assert len(model.getAirLoopHVACs()) == 0


class TestDataCenterHVAC:

    def test_heat_pumps(self, model, zones):
        heat_pump_loop = add_hp_loop(model)
        air_loops = add_data_center_hvac(model, '90.1-2013', None, None, heat_pump_loop, zones, None, None)
        assert len(air_loops) == 2
        assert len(model.getAirLoopHVACUnitarySystems()) == 2
        assert len(model.getCoilHeatingWaterToAirHeatPumpEquationFits()) == 2
        assert len(model.getHumidifierSteamElectrics()) == 0

    def test_main_data_center(self, model, hot_water_loop, zones):
        heat_pump_loop = add_hp_loop(model)
        add_data_center_hvac(
            model, '90.1-2013', None, hot_water_loop, heat_pump_loop, zones[:1], None, None,
            main_data_center=True
        )
        assert len(model.getHumidifierSteamElectrics()) == 1
        assert zones[0].zoneControlHumidistat().is_initialized()

    def test_missing_loops(self, model, zones):
        assert add_data_center_hvac(model, '90.1-2013', None, None, None, zones, None, None) == []
        heat_pump_loop = add_hp_loop(model)
        assert add_data_center_hvac(
            model, '90.1-2013', None, None, heat_pump_loop, zones, None, None, main_data_center=True
        ) == []


class TestSplitAC:

    def test_system(self, model, zones):
        air_loop = add_split_AC(
            model, '90.1-2013', None, zones, None, None, None,
            'ConstantVolume', 'Gas', 'Electric', 'Single Speed DX AC'
        )
        assert air_loop.nameString() == 'Zone 1 - Zone 2 SAC'
        assert len(air_loop.thermalZones()) == 2
        assert model.getCoilHeatingGasByName('Zone 1 - Zone 2 SAC Gas Htg Coil').is_initialized()
        assert model.getCoilCoolingDXSingleSpeedByName('Zone 1 - Zone 2 SAC 1spd DX AC Clg Coil').is_initialized()
        controller = _oa_controller(air_loop)
        assert controller.maximumFractionofOutdoorAirSchedule().get().nameString() == (
            'HotelSmall SAC_Econ_MaxOAFrac_Sch'
        )

    def test_meeting_room_runs_on_alternate_schedule(self, model, make_zone):
        zone = make_zone('Meeting Room', standards_space_type='Meeting')
        air_loop = add_split_AC(
            model, '90.1-2013', None, [zone], 'Office HVAC Operation', 'HotelLarge ALWAYS_ON', None,
            'Cycling', 'Single Speed Heat Pump', None, 'Single Speed Heat Pump'
        )
        assert air_loop.availabilitySchedule().nameString() == 'HotelLarge ALWAYS_ON'

    def test_bad_selection(self, model, zones):
        assert add_split_AC(
            model, '90.1-2013', None, zones, None, None, None, 'ConstantVolume', 'Steam', None, None
        ) is False
        assert add_split_AC(
            model, '90.1-2013', None, [], None, None, None, 'ConstantVolume', 'Gas', None, None
        ) is False


class TestDOAS:

    def test_system(self, model, hot_water_loop, chilled_water_loop, zones):
        air_loop = add_doas(
            model, '90.1-2013', None, hot_water_loop, chilled_water_loop, zones,
            None, None, None, 'NoEconomizer'
        )
        assert air_loop.nameString() == '2 DOAS Air Loop HVAC'
        assert air_loop.sizingSystem().allOutdoorAirinCooling()
        assert air_loop.sizingSystem().centralHeatingMaximumSystemAirFlowRatio().get() == pytest.approx(0.3)
        fan_coils = model.getZoneHVACFourPipeFanCoils()
        assert sorted(f.nameString() for f in fan_coils) == ['Zone 1 FCU', 'Zone 2 FCU']
        assert model.getFanConstantVolumeByName('DOAS fan').get().endUseSubcategory() == 'DOAS Fans'
        assert len(model.getSetpointManagerOutdoorAirResets()) == 1
        assert len(model.getAirTerminalSingleDuctConstantVolumeNoReheats()) == 2

    def test_fan_flow_and_large_hotel(self, model, hot_water_loop, chilled_water_loop, zones):
        air_loop = add_doas(
            model, '90.1-2013', 'Floor 3 DOAS', hot_water_loop, chilled_water_loop, zones,
            None, None, 1.5, 'FixedDryBulb', building_type='LargeHotel'
        )
        fan = model.getFanConstantVolumeByName('DOAS fan').get()
        assert fan.maximumFlowRate().get() == pytest.approx(1.5)
        controller = _oa_controller(air_loop)
        assert controller.getEconomizerControlType() == 'FixedDryBulb'
        assert controller.minimumFractionofOutdoorAirSchedule().get().nameString() == (
            'HotelLarge FLR_3_DOAS_OAminOAFracSchedule'
        )

    def test_missing_loop(self, model, hot_water_loop, zones):
        assert add_doas(
            model, '90.1-2013', None, hot_water_loop, None, zones, None, None, None, 'NoEconomizer'
        ) is False
