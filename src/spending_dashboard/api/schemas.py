from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from spending_dashboard.models import TransactionRecord


class IgnoreCategoryRequest(BaseModel):
    category: str


class IgnoredCategoriesResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ignored_categories: list[str]
    changed: bool = False


class ImportResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str
    filename: str | None = None
    imported: int
    total_amount: str


class TransactionsResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    transactions: list[TransactionRecord]
    filtered_total_amount: str
    transaction_count: int
    hidden_count: int
    hidden_percent: float
