import pytest

from hvac_templates.core import f_to_c
from hvac_templates.plant_loops import add_hw_loop, add_chw_loop, add_cw_loop, add_hp_loop


class TestHotWaterLoop:

    def test_loop(self, model):
        loop = add_hw_loop(model, 'NaturalGas')
        assert loop.nameString() == 'Hot Water Loop'
        assert loop.sizingPlant().loopType() == 'Heating'
        assert loop.sizingPlant().designLoopExitTemperature() == pytest.approx(f_to_c(180.0))
        assert model.getScheduleRulesetByName('Hot Water Loop Temp - 180F').is_initialized()
        assert model.getPumpVariableSpeedByName('Hot Water Loop Pump').is_initialized()
        assert len(model.getPipeAdiabatics()) == 5

    def test_boiler(self, model):
        add_hw_loop(model, 'Electricity')
        boiler = model.getBoilerHotWaterByName('Hot Water Loop Boiler').get()
        assert boiler.fuelType() == 'Electricity'
        assert boiler.plantLoop().get().nameString() == 'Hot Water Loop'

    def test_large_hotel_runs_colder(self, model):
        loop = add_hw_loop(model, 'NaturalGas', building_type='LargeHotel')
        assert loop.sizingPlant().designLoopExitTemperature() == pytest.approx(f_to_c(140.0))
        boiler = model.getBoilerHotWaterByName('Hot Water Loop Boiler').get()
        assert boiler.sizingFactor() == pytest.approx(1.2)
        assert boiler.waterOutletUpperTemperatureLimit() == pytest.approx(95.0)


class TestChilledWaterLoop:

    def test_constant_primary(self, model):
        loop = add_chw_loop(model, '90.1-2010', 'const_pri', 'AirCooled', 'WithCondenser', 'Scroll', 100.0)
        assert loop.nameString() == 'Chilled Water Loop'
        assert loop.sizingPlant().loopType() == 'Cooling'
        assert model.getPumpVariableSpeedByName('Chilled Water Loop Pump').is_initialized()
        chillers = model.getChillerElectricEIRs()
        assert len(chillers) == 1
        assert chillers[0].nameString() == '90.1-2010 AirCooled WithCondenser Scroll Chiller'
        assert chillers[0].condenserType() == 'AirCooled'

    def test_primary_secondary(self, model):
        loop = add_chw_loop(
            model, '90.1-2010', 'const_pri_var_sec', 'WaterCooled', 'WithoutCondenser', 'Centrifugal', 300.0
        )
        assert loop.commonPipeSimulation() == 'CommonPipe'
        assert model.getPumpConstantSpeedByName('Chilled Water Loop Primary Pump').is_initialized()
        assert model.getPumpVariableSpeedByName('Chilled Water Loop Secondary Pump').is_initialized()

    def test_water_cooled_chiller_on_condenser_loop(self, model):
        condenser_loop = add_cw_loop(model)
        add_chw_loop(
            model, '90.1-2013', 'const_pri', 'WaterCooled', 'WithoutCondenser', 'Centrifugal', 300.0,
            condenser_water_loop=condenser_loop
        )
        chiller = model.getChillerElectricEIRs()[0]
        assert chiller.condenserType() == 'WaterCooled'
        assert chiller.secondaryPlantLoop().get().nameString() == 'Condenser Water Loop'

    def test_unknown_pumping_type(self, model):
        assert add_chw_loop(model, '90.1-2013', 'var_pri', 'AirCooled', 'WithCondenser', 'Scroll', 100.0) is False
        assert len(model.getPlantLoops()) == 0


class TestCondenserWaterLoop:

    def test_towers(self, model):
        loop = add_cw_loop(model, number_cooling_towers=2)
        assert loop.sizingPlant().loopType() == 'Condenser'
        names = sorted(t.nameString() for t in model.getCoolingTowerVariableSpeeds())
        assert names == ['Condenser Water Loop Cooling Tower 0', 'Condenser Water Loop Cooling Tower 1']
        assert len(model.getPipeAdiabatics()) == 5


class TestHeatPumpLoop:

    def test_fluid_cooler(self, model):
        loop = add_hp_loop(model)
        assert loop.nameString() == 'Heat Pump Loop'
        assert len(model.getEvaporativeFluidCoolerSingleSpeeds()) == 1
        assert len(model.getCoolingTowerTwoSpeeds()) == 0
        assert model.getBoilerHotWaterByName('Heat Pump Loop Sup Boiler').is_initialized()
        assert len(model.getSetpointManagerScheduledDualSetpoints()) == 2
        assert model.getPumpConstantSpeedByName('Heat Pump Loop Pump').is_initialized()

    def test_large_office_cooling_tower(self, model):
        add_hp_loop(model, building_type='LargeOffice')
        assert len(model.getEvaporativeFluidCoolerSingleSpeeds()) == 0
        assert model.getCoolingTowerTwoSpeedByName('Heat Pump Loop Central Tower').is_initialized()
        assert len(model.getSetpointManagerScheduledDualSetpoints()) == 3
