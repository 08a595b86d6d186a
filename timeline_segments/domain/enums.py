"""Controlled enumerations for samples and segments.

Every categorical field on a sample or segment MUST reference an enum
defined here.  Behavioural groupings of states are plain predicates over
the enumerations, never subclasses.
"""

from __future__ import annotations

from enum import Enum


class RecordingState(str, Enum):
    """State of the recording session when a sample was taken."""

    RECORDING = "recording"
    OFF = "off"
    SLEEPING = "sleeping"
    DEEP_SLEEPING = "deep_sleeping"
    WAKEUP = "wakeup"
    STANDBY = "standby"


SLEEP_STATES: frozenset[RecordingState] = frozenset({
    RecordingState.STANDBY,
    RecordingState.SLEEPING,
    RecordingState.DEEP_SLEEPING,
})


def is_sleep_state(state: RecordingState | None) -> bool:
    """True if *state* belongs to the sleep-like group."""
    return state in SLEEP_STATES


def is_off_state(state: RecordingState | None) -> bool:
    return state == RecordingState.OFF


class ActivityTypeName(str, Enum):
    """Motion classification labels a sample or segment may carry."""

    STATIONARY = "stationary"
    WALKING = "walking"
    RUNNING = "running"
    CYCLING = "cycling"
    CAR = "car"
    TRAIN = "train"
    BUS = "bus"
    MOTORCYCLE = "motorcycle"
    AIRPLANE = "airplane"
    BOAT = "boat"
    TRAM = "tram"
    TRACTOR = "tractor"
    TUKTUK = "tuktuk"
    SONGTHAEW = "songthaew"
    SCOOTER = "scooter"
    METRO = "metro"
    CABLE_CAR = "cable_car"
    FUNICULAR = "funicular"
    CHAIRLIFT = "chairlift"
    SKI_LIFT = "ski_lift"
    TAXI = "taxi"
    BOGUS = "bogus"
