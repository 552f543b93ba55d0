from datetime import datetime
from typing import Dict, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from salesdash.core.dates import normalize_datetime


class TransactionRecord(BaseModel):
    transaction_id: str = Field(validation_alias=AliasChoices("transaction_id", "id"))
    product_id: str = ""
    title: str = ""
    description: str = ""
    quantity: int = Field(0, ge=0)
    price: float = Field(ge=0)
    date_of_sale: datetime = Field(
        validation_alias=AliasChoices("dateOfSale", "date_of_sale"),
        serialization_alias="dateOfSale",
    )
    category: str = ""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _fill_feed_defaults(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("transaction_id") is None and data.get("id") is not None:
            data["transaction_id"] = str(data.pop("id"))
        if data.get("quantity") is None:
            if "sold" in data:
                data["quantity"] = 1 if data.get("sold") else 0
            else:
                data.pop("quantity", None)
        if not data.get("product_id") and data.get("transaction_id") is not None:
            data["product_id"] = data["transaction_id"]
        return data

    @field_validator("transaction_id", "product_id", mode="before")
    @classmethod
    def _stringify_identifier(cls, value):
        if value is None:
            return value
        return str(value)

    @field_validator("title", "description", "category", mode="before")
    @classmethod
    def _blank_for_missing_text(cls, value):
        if value is None:
            return ""
        return value

    @field_validator("date_of_sale", mode="before")
    @classmethod
    def _parse_date_of_sale(cls, value):
        if isinstance(value, (str, datetime)):
            normalized = normalize_datetime(value)
            if normalized is None:
                raise ValueError("dateOfSale is not a valid ISO-8601 date-time")
            return normalized
        return value

    @field_validator("date_of_sale")
    @classmethod
    def _as_utc(cls, value):
        return normalize_datetime(value)


class TransactionPage(BaseModel):
    transactions: List[TransactionRecord]
    total: int
    page: int
    per_page: int


class Statistics(BaseModel):
    totalSalesAmount: float
    totalSoldItems: int
    totalNotSoldItems: int


class CombinedData(BaseModel):
    statistics: Statistics
    barChart: Dict[str, int]
    pieChart: Dict[str, int]


class SeedResult(BaseModel):
    message: str
    inserted: int


__all__ = [
    "CombinedData",
    "SeedResult",
    "Statistics",
    "TransactionPage",
    "TransactionRecord",
]
