"""Shared schema configuration."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Percentages go out with two decimals; valuation itself keeps them exact
PERCENT_PLACES = Decimal("0.01")


class CamelModel(BaseModel):
    """camelCase on the wire; snake_case field names accepted on input too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def display_percent(value: Decimal) -> float:
    return float(value.quantize(PERCENT_PLACES))
