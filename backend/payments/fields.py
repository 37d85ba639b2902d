from django import forms
from django.db import models

from .money import Money, currency_exponent, default_currency


class MoneyFormField(forms.DecimalField):
    """Major-unit decimal input ("120.00") that cleans to Money."""

    def __init__(self, **kwargs):
        kwargs.setdefault("decimal_places", currency_exponent(default_currency()))
        kwargs.setdefault("max_digits", 17)
        super().__init__(**kwargs)

    def prepare_value(self, value):
        if isinstance(value, Money):
            return value.to_decimal()
        return super().prepare_value(value)

    def clean(self, value):
        amount = super().clean(value)
        if amount is None:
            return None
        return Money.from_decimal(amount)


class MoneyField(models.BigIntegerField):
    """
    Stores a Money amount as integer minor units.

    The column is a plain BIGINT; values come back from the database as Money
    in the configured currency. Ints are accepted on assignment so queryset
    updates and F() expressions keep working.
    """

    description = "Money amount stored in minor units"

    def from_db_value(self, value, expression, connection):
        if value is None:
            return value
        return Money(int(value))

    def to_python(self, value):
        if value is None or isinstance(value, Money):
            return value
        return Money(int(value))

    def get_prep_value(self, value):
        if isinstance(value, Money):
            value = value.minor
        return super().get_prep_value(value)

    def run_validators(self, value):
        # Range validators compare against plain ints
        if isinstance(value, Money):
            value = value.minor
        super().run_validators(value)

    def value_to_string(self, obj):
        value = self.value_from_object(obj)
        return "" if value is None else str(value.minor)

    def formfield(self, **kwargs):
        return super().formfield(**{"form_class": MoneyFormField, **kwargs})
