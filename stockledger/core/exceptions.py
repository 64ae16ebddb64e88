# =========================================================
# DOMAIN ERRORS
#
# Every failure the service layer raises on purpose derives
# from StockLedgerError and carries a readable message.
# Database failures (SQLAlchemyError) are re-raised as is.
# =========================================================


class StockLedgerError(Exception):
    message = "Stock ledger error"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class InsufficientStockError(StockLedgerError):
    message = "Insufficient stock for update"

    def __init__(
        self,
        product_id: int | None = None,
        requested: int | None = None,
        available: int | None = None,
        message: str | None = None,
    ):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(message)


class InsufficientStockForSaleError(InsufficientStockError):
    message = "Insufficient stock for sale"


class ProductNotFoundError(StockLedgerError):
    message = "Product not found"


class SupplierNotFoundError(StockLedgerError):
    message = "Supplier not found"


class InvalidQuantityError(StockLedgerError):
    message = "Quantity must be greater than zero"


class DuplicateRecordError(StockLedgerError):
    message = "Record already exists"
