"""
Constant tables for follow-up quantification.

This module is the SINGLE SOURCE OF TRUTH for time-unit conversion
factors and for the names of the seven follow-up definitions.
"""

# Days per time unit used to turn (cutoff - randomization) into the unit
# of the observed times. Months follow the 365.25 / 12 convention.
DAYS_PER_UNIT = {
    'days': 1.0,
    'weeks': 7.0,
    'months': 365.25 / 12.0,
    'years': 365.25,
}

# Short keys, in reporting order
DEFINITION_KEYS = (
    'observation',
    'observation_event_free',
    'time_to_censoring',
    'time_to_cutoff',
    'known_function',
    'korn',
    'potential_considering_events',
)

DEFINITION_LABELS = (
    "Observation time regardless of censoring",
    "Observation time for those event-free",
    "Time to censoring",
    "Time to CCOD",
    "Known function time",
    "Korn potential follow-up",
    "Potential follow-up considering events",
)

__all__ = [
    'DAYS_PER_UNIT',
    'DEFINITION_KEYS',
    'DEFINITION_LABELS',
]
