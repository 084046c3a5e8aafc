"""
Conversation flows.

Menu order is the order of DEFAULT_FLOWS.
"""

from intake.flows.appointment import AppointmentStep, CreateAppointmentFlow
from intake.flows.baby import BabyStep, RegisterBabyFlow
from intake.flows.base import Flow, Transition
from intake.flows.guardian import GuardianStep, RegisterGuardianFlow
from intake.flows.menu import MainMenu
from intake.flows.reschedule import ChangeStep, ModifyAppointmentFlow


def default_flows():
    """Fresh flow instances in menu order (1-4)."""
    return [
        RegisterGuardianFlow(),
        RegisterBabyFlow(),
        CreateAppointmentFlow(),
        ModifyAppointmentFlow(),
    ]


__all__ = [
    "Flow",
    "Transition",
    "MainMenu",
    "RegisterGuardianFlow",
    "RegisterBabyFlow",
    "CreateAppointmentFlow",
    "ModifyAppointmentFlow",
    "GuardianStep",
    "BabyStep",
    "AppointmentStep",
    "ChangeStep",
    "default_flows",
]
