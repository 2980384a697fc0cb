from .frequency import Frequency, FrequencyRule, FrequencyVerdict, RuleSource, Weekday

__all__ = ["Frequency", "FrequencyRule", "FrequencyVerdict", "RuleSource", "Weekday"]
