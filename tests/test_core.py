import pytest
import openstudio

from hvac_templates import Quantity
from hvac_templates.core import (
    Template,
    template_name,
    is_doe_ref,
    vav_damper_action,
    set_vav_damper_action,
    initial_damper_position,
    zone_outdoor_air_per_area,
    to_si,
    f_to_c,
    c_to_f,
    delta_f_to_k,
    ft_h2o_to_pa,
    in_h2o_to_pa,
    ScheduleLibrary,
    add_schedule,
    add_constant_schedule_ruleset,
    add_always_off_schedule,
    add_temperature_type_limits,
    CurveLibrary,
    create_curve,
    add_curve,
    add_loop_pipes,
    add_pump,
    add_scheduled_setpoint,
    apply_zone_sizing,
    add_dx_cooling_coil_single_speed,
    add_dx_cooling_coil_two_speed,
    add_hp_heating_coil,
    add_water_heating_coil
)
from hvac_templates.core.schedules import add_values_to_day_schedule


class TestUnits:

    def test_temperatures(self):
        assert f_to_c(32.0) == pytest.approx(0.0)
        assert f_to_c(180.0) == pytest.approx(82.222, abs=1e-3)
        assert c_to_f(100.0) == pytest.approx(212.0)
        assert delta_f_to_k(20.0) == pytest.approx(11.111, abs=1e-3)

    def test_water_column(self):
        assert in_h2o_to_pa(1.0) == pytest.approx(249.089, rel=1e-4)
        assert ft_h2o_to_pa(1.0) == pytest.approx(12 * 249.089, rel=1e-4)

    def test_inch_water_column_is_a_twelfth_of_a_foot(self):
        assert Quantity(12.0, 'inWC').to('foot_H2O').m == pytest.approx(1.0, rel=1e-3)

    def test_to_si(self):
        assert to_si(Quantity(1.0, 'ft**3/min'), 'm**3/s') == pytest.approx(4.719e-4, rel=1e-3)
        assert to_si(3.5, 'm**3/s') == 3.5


class TestTemplates:

    def test_template_names(self):
        assert template_name(Template.ASHRAE_90_1_2010) == '90.1-2010'
        assert template_name('90.1-2013') == '90.1-2013'
        assert str(Template.NECB_2011) == 'NECB 2011'
        assert is_doe_ref(Template.DOE_REF_PRE_1980)
        assert not is_doe_ref('90.1-2004')

    @pytest.mark.parametrize('standard, action', [
        ('DOE Ref Pre-1980', 'Single Maximum'),
        ('90.1-2004', 'Single Maximum'),
        ('90.1-2007', 'Reverse'),
        ('90.1-2013', 'Reverse')
    ])
    def test_vav_damper_action(self, standard, action):
        assert vav_damper_action(standard) == action

    def test_initial_damper_position(self):
        assert initial_damper_position('90.1-2007', 0.005) == 0.3
        assert initial_damper_position('90.1-2010', 0.0005) == 0.3
        assert initial_damper_position('90.1-2010', 0.005) == 0.7

    def test_zone_without_floor_has_no_outdoor_air(self, make_zone):
        assert zone_outdoor_air_per_area(make_zone()) == 0.0

    def test_zone_outdoor_air_per_area(self, model, make_zone):
        zone = make_zone(floor_size=10.0)
        dsoa = openstudio.model.DesignSpecificationOutdoorAir(model)
        dsoa.setOutdoorAirFlowperFloorArea(0.002)
        zone.spaces()[0].setDesignSpecificationOutdoorAir(dsoa)
        assert zone_outdoor_air_per_area(zone) == pytest.approx(0.002)

    def _vav_reheat_branch(self, model, zone):
        air_loop = openstudio.model.AirLoopHVAC(model)
        coil = openstudio.model.CoilHeatingElectric(model)
        terminal = openstudio.model.AirTerminalSingleDuctVAVReheat(
            model, model.alwaysOnDiscreteSchedule(), coil
        )
        air_loop.addBranchForZone(zone, terminal.to_StraightComponent())
        return air_loop, terminal

    def test_set_vav_damper_action(self, model, make_zone):
        air_loop, terminal = self._vav_reheat_branch(model, make_zone())
        assert set_vav_damper_action(air_loop, '90.1-2004')
        assert terminal.damperHeatingAction() == 'Normal'
        set_vav_damper_action(air_loop, '90.1-2013')
        assert terminal.damperHeatingAction() == 'Reverse'

    def test_damper_action_stays_on_its_own_loop(self, model, make_zone):
        old_loop, old_terminal = self._vav_reheat_branch(model, make_zone('Zone 1'))
        new_loop, new_terminal = self._vav_reheat_branch(model, make_zone('Zone 2'))
        set_vav_damper_action(old_loop, '90.1-2004')
        set_vav_damper_action(new_loop, '90.1-2013')
        assert old_terminal.damperHeatingAction() == 'Normal'
        assert new_terminal.damperHeatingAction() == 'Reverse'


class TestSchedules:

    def test_none_gives_always_on(self, model):
        schedule = add_schedule(model, None)
        assert schedule.nameString() == model.alwaysOnDiscreteSchedule().nameString()

    def test_unknown_name_gives_always_on(self, model):
        schedule = add_schedule(model, 'No Such Schedule')
        assert schedule.nameString() == model.alwaysOnDiscreteSchedule().nameString()
        assert not model.getScheduleRulesetByName('No Such Schedule').is_initialized()

    def test_library_schedule(self, model):
        schedule = add_schedule(model, 'Office HVAC Operation')
        assert schedule.nameString() == 'Office HVAC Operation'
        ruleset = model.getScheduleRulesetByName('Office HVAC Operation').get()
        assert len(ruleset.scheduleRules()) == 2
        assert list(ruleset.winterDesignDaySchedule().values()) == [1.0]

    def test_library_schedule_is_reused(self, model):
        add_schedule(model, 'Office HVAC Operation')
        add_schedule(model, 'Office HVAC Operation')
        names = [s.nameString() for s in model.getScheduleRulesets()]
        assert names.count('Office HVAC Operation') == 1

    def test_register(self, model, tmp_path):
        file_path = tmp_path / 'schedules.csv'
        file_path.write_text(
            'name,category,day_types,start_date,end_date,type,values\n'
            'Half Open,Operation,Default|WntrDsn|SmrDsn,01/01,12/31,Constant,0.5\n'
        )
        assert ScheduleLibrary.register(file_path) == ['Half Open']
        assert 'Half Open' in ScheduleLibrary.names()
        add_schedule(model, 'Half Open')
        ruleset = model.getScheduleRulesetByName('Half Open').get()
        assert list(ruleset.defaultDaySchedule().values()) == [0.5]

    def test_reset_forgets_registered_schedules(self, tmp_path):
        file_path = tmp_path / 'schedules.csv'
        file_path.write_text(
            'name,category,day_types,start_date,end_date,type,values\n'
            'Half Open,Operation,Default,01/01,12/31,Constant,0.5\n'
        )
        ScheduleLibrary.register(file_path)
        ScheduleLibrary.reset()
        assert 'Half Open' not in ScheduleLibrary.names()
        assert 'Always On' in ScheduleLibrary.names()

    def test_constant_schedule_ruleset_reuse(self, model):
        first = add_constant_schedule_ruleset(model, 12.8, 'Supply Air Temp - 55F')
        second = add_constant_schedule_ruleset(model, 12.8, 'Supply Air Temp - 55F')
        assert first.handle() == second.handle()
        third = add_constant_schedule_ruleset(model, 13.0, 'Supply Air Temp - 55F')
        assert third.handle() != first.handle()

    def test_always_off(self, model):
        always_off = add_always_off_schedule(model)
        assert always_off.nameString() == 'ALWAYS_OFF'
        assert list(always_off.defaultDaySchedule().values()) == [0.0]
        assert add_always_off_schedule(model).handle() == always_off.handle()

    def test_temperature_type_limits_reused(self, model):
        limits = add_temperature_type_limits(model)
        assert limits.unitType() == 'Temperature'
        assert add_temperature_type_limits(model).handle() == limits.handle()

    def test_hourly_values_are_merged(self, model):
        day_schedule = openstudio.model.ScheduleDay(model)
        add_values_to_day_schedule(day_schedule, 'Hourly', [0.0] * 6 + [1.0] * 16 + [0.0] * 2)
        assert list(day_schedule.values()) == [0.0, 1.0, 0.0]
        assert [t.totalHours() for t in day_schedule.times()] == pytest.approx([6.0, 22.0, 24.0])


class TestCurves:

    def test_library_lookup(self):
        assert CurveLibrary.get('HP Htg Cap-fT')['form'] == 'Cubic'
        assert CurveLibrary.get('No Such Curve') is None
        assert 'WAHP Htg Cap' in CurveLibrary.names()

    def test_create_curve(self, model):
        curve = create_curve(model, 'HP Htg Cap-fT')
        assert curve.nameString() == 'HP Htg Cap-fT'
        assert curve.coefficient1Constant() == pytest.approx(0.758746)
        assert curve.minimumValueofx() == pytest.approx(-20.0)

    def test_create_curve_with_other_name(self, model):
        curve = create_curve(model, 'HP Htg Cap-fT', name='My Curve')
        assert curve.nameString() == 'My Curve'

    def test_unknown_curve(self, model):
        assert create_curve(model, 'No Such Curve') is None

    def test_add_curve_reuses_model_curve(self, model):
        add_curve(model, 'HP Htg Cap-fT')
        add_curve(model, 'HP Htg Cap-fT')
        assert len(model.getCurveCubics()) == 1

    def test_register(self, model, tmp_path):
        file_path = tmp_path / 'curves.csv'
        file_path.write_text(
            'name,form,coeff_1,coeff_2,coeff_3,coeff_4,coeff_5,coeff_6,coeff_7,coeff_8,coeff_9,coeff_10,'
            'min_x,max_x,min_y,max_y,min_output,max_output\n'
            'Flat,Linear,1.0,0.0,,,,,,,,,0.0,1.0,,,,\n'
        )
        assert CurveLibrary.register(file_path) == ['Flat']
        curve = create_curve(model, 'Flat')
        assert curve.coefficient1Constant() == pytest.approx(1.0)


class TestComponents:

    def test_loop_pipes(self, model):
        plant_loop = openstudio.model.PlantLoop(model)
        plant_loop.setName('Test Loop')
        pipes = add_loop_pipes(model, plant_loop)
        assert len(pipes) == 5
        assert pipes[0].nameString() == 'Test Loop Supply Bypass'
        assert len(model.getPipeAdiabatics()) == 5

    def test_pump(self, model):
        pump = add_pump(model, 'Test Pump', 60.0, motor_efficiency=0.9, part_load_coefficients=(0, 1, 0, 0))
        assert pump.nameString() == 'Test Pump'
        assert pump.ratedPumpHead() == pytest.approx(ft_h2o_to_pa(60.0))
        assert pump.coefficient2ofthePartLoadPerformanceCurve() == 1.0
        assert pump.pumpControlType() == 'Intermittent'
        constant = add_pump(model, 'Constant Pump', 15.0, variable_speed=False)
        assert len(model.getPumpConstantSpeeds()) == 1
        assert constant.ratedPumpHead() == pytest.approx(ft_h2o_to_pa(15.0))

    def test_scheduled_setpoint(self, model):
        plant_loop = openstudio.model.PlantLoop(model)
        manager = add_scheduled_setpoint(
            model, plant_loop.supplyOutletNode(), 60.0, 'Loop Temp - 140F', 'Loop Setpoint Manager'
        )
        assert manager.nameString() == 'Loop Setpoint Manager'
        assert model.getScheduleRulesetByName('Loop Temp - 140F').is_initialized()

    def test_zone_sizing(self, make_zone):
        zone = make_zone()
        sizing_zone = apply_zone_sizing(zone, 14.0, 50.0, 0.008, 0.008)
        assert sizing_zone.zoneCoolingDesignSupplyAirTemperature() == 14.0
        assert sizing_zone.zoneHeatingDesignSupplyAirTemperature() == 50.0
        assert sizing_zone.zoneCoolingDesignSupplyAirHumidityRatio() == 0.008

    def test_dx_coils(self, model):
        single = add_dx_cooling_coil_single_speed(model, 'Single Coil', 'SAC DX Clg')
        assert single.nameString() == 'Single Coil'
        assert model.getCurveBiquadraticByName('SAC DX Clg Cap-fT').is_initialized()
        two = add_dx_cooling_coil_two_speed(model, 'Two Coil')
        assert two.basinHeaterCapacity() == 10
        assert len(model.getCoilCoolingDXTwoSpeeds()) == 1

    def test_hp_heating_coil_with_defrost(self, model):
        coil = add_hp_heating_coil(model, 'HP Coil', with_defrost=True)
        assert coil.defrostStrategy() == 'ReverseCycle'
        assert coil.crankcaseHeaterCapacity() == 50.0
        plain = add_hp_heating_coil(model, 'Plain HP Coil')
        assert plain.nameString() == 'Plain HP Coil'

    def test_water_heating_coil_on_loop(self, model):
        plant_loop = openstudio.model.PlantLoop(model)
        coil = add_water_heating_coil(model, 'HW Coil', plant_loop, 82.0, 11.0, 7.2, 32.0)
        assert coil.plantLoop().is_initialized()
        assert coil.ratedOutletWaterTemperature() == pytest.approx(71.0)
        assert coil.ratedOutletAirTemperature() == pytest.approx(32.0)
