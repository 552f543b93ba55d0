from sqlalchemy import Column, DateTime, Float, Index, Integer, String, Text

from salesdash.database.base import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(String, nullable=False)
    product_id = Column(String, nullable=False, default="")

    title = Column(String, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    category = Column(String, nullable=False, default="")

    quantity = Column(Integer, nullable=False, default=0)
    price = Column(Float, nullable=False, default=0)
    # Rendered once in Python so SQL search matches the in-memory rendering.
    price_text = Column(String, nullable=False, default="")
    date_of_sale = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_transactions_date_of_sale", "date_of_sale"),
        Index("idx_transactions_category", "category"),
    )


__all__ = ["Transaction"]
