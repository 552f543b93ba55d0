from datetime import datetime, timezone

from salesdash.schemas.transaction import TransactionRecord


def make_record(
    transaction_id,
    price=10.0,
    quantity=1,
    date_of_sale=None,
    title="Item",
    description="",
    category="misc",
):
    if date_of_sale is None:
        date_of_sale = datetime(2022, 3, 15, 10, 0, tzinfo=timezone.utc)
    return TransactionRecord(
        transaction_id=str(transaction_id),
        product_id="P-{}".format(transaction_id),
        title=title,
        description=description,
        quantity=quantity,
        price=price,
        date_of_sale=date_of_sale,
        category=category,
    )
