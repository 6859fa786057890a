from rest_framework import serializers

from .date_utils import normalize_to_utc_midnight


class UTCMidnightDateTimeField(serializers.DateTimeField):
    """Accepts a date or datetime and stores it as 00:00 UTC of that date"""

    def to_internal_value(self, value):
        try:
            return normalize_to_utc_midnight(value)
        except ValueError:
            self.fail('invalid', format='YYYY-MM-DD or ISO 8601 datetime')


class UTCDateField(serializers.DateField):
    """DateField that also accepts ISO datetimes (takes their UTC date)"""

    def to_internal_value(self, value):
        try:
            return normalize_to_utc_midnight(value).date()
        except ValueError:
            self.fail('invalid', format='YYYY-MM-DD or ISO 8601 datetime')


def money_field(source=None, **kwargs):
    """Two-decimal amount rendered as a JSON number"""
    kwargs.setdefault('max_digits', 12)
    kwargs.setdefault('decimal_places', 2)
    kwargs.setdefault('coerce_to_string', False)
    if source is not None:
        kwargs['source'] = source
    return serializers.DecimalField(**kwargs)
