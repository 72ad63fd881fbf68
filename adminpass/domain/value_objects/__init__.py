"""Domain value objects."""

from adminpass.domain.value_objects.period import PasswordPeriod, weekly_period

__all__ = ["PasswordPeriod", "weekly_period"]
