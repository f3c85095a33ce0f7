"""Baseline fan power and required controls of zone level HVAC equipment
(four pipe fan coils, unit heaters, PTACs and PTHPs).
"""
import re

import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import Template, template_name, f_to_c
from .fan import fan_apply_prm_baseline_fan_power

logger = ModuleLogger.get_logger(__name__)

ZONE_HVAC_TYPES = (
    'ZoneHVACFourPipeFanCoil',
    'ZoneHVACUnitHeater',
    'ZoneHVACPackagedTerminalAirConditioner',
    'ZoneHVACPackagedTerminalHeatPump'
)
FAN_TYPES = ('FanConstantVolume', 'FanVariableVolume', 'FanOnOff')
HEATING_COIL_TYPES = (
    'CoilHeatingGas',
    'CoilHeatingElectric',
    'CoilHeatingWater',
    'CoilHeatingDXSingleSpeed'
)

BASELINE_FAN_EFFICACY_W_PER_CFM = 0.3

VESTIBULE_AVAIL_SCH_NAME = 'VestibuleHeaterAvailSch'
VESTIBULE_OAT_SENSOR_NAME = 'OATVestibule'
VESTIBULE_HEATING_LIMIT_F = 45.0


def _cast(model_object, type_names: tuple[str, ...]):
    # returns `model_object` as the first concrete type it converts to
    for type_name in type_names:
        converted = getattr(model_object, f"to_{type_name}")()
        if converted.is_initialized():
            return converted.get()
    return None


def zone_hvac_apply_prm_baseline_fan_power(
    zone_hvac: openstudio.model.ZoneHVACComponent,
    template: str | Template
) -> bool:
    """Sets the supply fan of the zone equipment to the baseline fan power of
    0.3 W/cfm: the impeller gets the baseline efficiency, the motor the
    minimum efficiency for its brake horsepower, and the pressure rise is set
    to hit the target efficacy.

    Returns False for zone equipment other than fan coils, unit heaters,
    PTACs and PTHPs.
    """
    logger.debug(f"Setting fan power for {zone_hvac.nameString()}.")
    zone_hvac = _cast(zone_hvac, ZONE_HVAC_TYPES)
    if zone_hvac is None:
        return False
    fan = _cast(zone_hvac.supplyAirFan(), FAN_TYPES)
    if fan is None:
        logger.warning(f"For {zone_hvac.nameString()}: supply fan type is not supported.")
        return False

    efficacy = fan_apply_prm_baseline_fan_power(fan, template, BASELINE_FAN_EFFICACY_W_PER_CFM)
    if efficacy is not None:
        logger.info(f"For {zone_hvac.nameString()}: fan efficacy set to {efficacy:.2f} W/cfm.")
    return True


def zone_is_vestibule(thermal_zone: openstudio.model.ThermalZone) -> bool:
    """A zone is a vestibule if one of its spaces has the standards space
    type 'Vestibule', or if the zone's name contains 'vestibule'.
    """
    for space in thermal_zone.spaces():
        space_type = space.spaceType()
        if not space_type.is_initialized():
            continue
        standards_space_type = space_type.get().standardsSpaceType()
        if standards_space_type.is_initialized() and standards_space_type.get() == 'Vestibule':
            return True
    return 'vestibule' in thermal_zone.nameString().lower()


def zone_hvac_vestibule_heating_control_required(
    zone_hvac: openstudio.model.ZoneHVACComponent,
    template: str | Template
) -> bool:
    """Vestibule heating must be locked out above 45 °F from 90.1-2013 on."""
    if template_name(template) != Template.ASHRAE_90_1_2013.value:
        return False
    if not zone_hvac.thermalZone().is_initialized():
        logger.warning(
            f"For {zone_hvac.nameString()}: equipment is not assigned to a thermal "
            f"zone, cannot apply vestibule heating control."
        )
        return False
    return zone_is_vestibule(zone_hvac.thermalZone().get())


def _clean_name(name: str) -> str:
    clean = re.sub(r'\W', '', name).replace('_', '')
    if clean and clean[0].isdigit():
        clean = f"EQUIP{clean}"
    return clean


def zone_hvac_apply_vestibule_heating_control(
    zone_hvac: openstudio.model.ZoneHVACComponent
) -> bool:
    """Makes the heating coil and the fan of the zone equipment available
    through a constant schedule that an EMS program sets to 0 when the
    outdoor air is warmer than 45 °F.
    """
    if not zone_hvac.thermalZone().is_initialized():
        logger.warning(
            f"For {zone_hvac.nameString()}: equipment is not assigned to a thermal "
            f"zone, cannot apply vestibule heating control."
        )
        return True
    zone_hvac = _cast(zone_hvac, ZONE_HVAC_TYPES)
    if zone_hvac is None:
        return True
    model = zone_hvac.model()

    htg_coil = _cast(zone_hvac.heatingCoil(), HEATING_COIL_TYPES)
    fan = _cast(zone_hvac.supplyAirFan(), ('FanOnOff', 'FanConstantVolume', 'FanVariableVolume'))

    existing = model.getScheduleConstantByName(VESTIBULE_AVAIL_SCH_NAME)
    if existing.is_initialized():
        avail_sch = existing.get()
    else:
        avail_sch = openstudio.model.ScheduleConstant(model)
        avail_sch.setName(VESTIBULE_AVAIL_SCH_NAME)
        avail_sch.setValue(1)

    # the EMS program switches this schedule
    if htg_coil is not None:
        htg_coil.setAvailabilitySchedule(avail_sch)
    if fan is not None:
        fan.setAvailabilitySchedule(avail_sch)

    equip_name_clean = _clean_name(zone_hvac.nameString())

    existing = model.getEnergyManagementSystemSensorByName(VESTIBULE_OAT_SENSOR_NAME)
    if existing.is_initialized():
        oat_db_c_sen = existing.get()
    else:
        oat_db_c_sen = openstudio.model.EnergyManagementSystemSensor(
            model, 'Site Outdoor Air Drybulb Temperature'
        )
        oat_db_c_sen.setName(VESTIBULE_OAT_SENSOR_NAME)
        oat_db_c_sen.setKeyName('Environment')

    avail_sch_act = openstudio.model.EnergyManagementSystemActuator(
        avail_sch, 'Schedule:Constant', 'Schedule Value'
    )
    avail_sch_act.setName(f"{equip_name_clean}VestHtgAvailSch")

    vestibule_htg_prg = openstudio.model.EnergyManagementSystemProgram(model)
    vestibule_htg_prg.setName(f"{equip_name_clean}VestHtgPrg")
    vestibule_htg_prg.setBody(
        f"IF {oat_db_c_sen.nameString()} > {f_to_c(VESTIBULE_HEATING_LIMIT_F)}\n"
        f"  SET {avail_sch_act.nameString()} = 0\n"
        f"ENDIF"
    )

    vestibule_htg_mgr = openstudio.model.EnergyManagementSystemProgramCallingManager(model)
    vestibule_htg_mgr.setName(f"{equip_name_clean}VestHtgMgr")
    vestibule_htg_mgr.setCallingPoint('BeginTimestepBeforePredictor')
    vestibule_htg_mgr.addProgram(vestibule_htg_prg)

    logger.info(
        f"For {zone_hvac.nameString()}: vestibule heating control applied, "
        f"heating disabled above {VESTIBULE_HEATING_LIMIT_F:g} F."
    )
    return True


def zone_hvac_apply_standard_controls(
    zone_hvac: openstudio.model.ZoneHVACComponent,
    template: str | Template
) -> bool:
    """Applies all controls the code requires for the zone equipment."""
    if zone_hvac_vestibule_heating_control_required(zone_hvac, template):
        zone_hvac_apply_vestibule_heating_control(zone_hvac)
    return True
