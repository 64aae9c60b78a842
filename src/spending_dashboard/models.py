from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TransactionRecord(BaseModel):
    """One imported line of a spending export. Every field is kept as raw text."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    date: str = ""
    original_date: str = ""
    account_type: str = ""
    account_name: str = ""
    account_number: str = ""
    institution_name: str = ""
    name: str = ""
    custom_name: str = ""
    amount: str = ""
    description: str = ""
    category: str = ""
    note: str = ""
    ignored_from: str = ""
    tax_deductible: str = ""


class CategoryDatum(BaseModel):
    name: str
    value: float


class TimeDatum(BaseModel):
    date: str  # "{month}/{year}"
    value: float


class DashboardView(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    filtered_transactions: list[TransactionRecord] = Field(default_factory=list)
    category_data: list[CategoryDatum] = Field(default_factory=list)
    time_data: list[TimeDatum] = Field(default_factory=list)
    color_map: dict[str, str] = Field(default_factory=dict)
    total_amount: str = "$0.00"
    filtered_total_amount: str = "$0.00"
    all_categories: list[str] = Field(default_factory=list)
    ignored_categories: list[str] = Field(default_factory=list)
    transaction_count: int = 0
    hidden_count: int = 0
    hidden_percent: float = 0.0
