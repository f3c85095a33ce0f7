import openstudio

from hvac_templates.logging import ModuleLogger
from hvac_templates.core import add_schedule

logger = ModuleLogger.get_logger(__name__)


def add_exhaust_fan(
    model: openstudio.model.Model,
    availability_sch_name: str | None,
    flow_rate: float,
    flow_fraction_schedule_name: str | None,
    balanced_exhaust_fraction_schedule_name: str | None,
    thermal_zones: list[openstudio.model.ThermalZone]
) -> list[openstudio.model.FanZoneExhaust]:
    """Adds a zone exhaust fan with a maximum flow rate of `flow_rate`
    (m3/s) to each zone in `thermal_zones`. The fans run independently of
    the air loop availability.
    """
    fans = []
    for zone in thermal_zones:
        fan = openstudio.model.FanZoneExhaust(model)
        fan.setName(f"{zone.nameString()} Exhaust Fan")
        fan.setAvailabilitySchedule(add_schedule(model, availability_sch_name))
        fan.setMaximumFlowRate(flow_rate)
        if flow_fraction_schedule_name is not None:
            fan.setFlowFractionSchedule(add_schedule(model, flow_fraction_schedule_name))
        fan.setSystemAvailabilityManagerCouplingMode('Decoupled')
        if balanced_exhaust_fraction_schedule_name is not None:
            fan.setBalancedExhaustFractionSchedule(
                add_schedule(model, balanced_exhaust_fraction_schedule_name)
            )
        fan.addToThermalZone(zone)
        logger.info(f"Added exhaust fan {fan.nameString()}.")
        fans.append(fan)
    return fans
