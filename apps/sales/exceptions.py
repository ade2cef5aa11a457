"""
Errors raised by the sale engine.

Every error carries the reason string shown to the cashier and renders as a
plain-text 400 through ``apps.core.exceptions.api_exception_handler``.
Validation runs before any write, so a raised error means nothing was stored.
"""

from apps.core.exceptions import PosError


class SaleError(PosError):
    """Base class for every rejected checkout."""

    default_message = "Sale rejected"


class SaleValidationError(SaleError):
    """The cart itself is malformed, independent of catalog state."""


class EmptyCartError(SaleValidationError):
    default_message = "Items required"


class MissingCreatorError(SaleValidationError):
    default_message = "CreatedByEmail required"


class InvalidPaymentMethodError(SaleValidationError):
    default_message = "PaymentMethod must be Cash or Card"


class InvalidQuantityError(SaleValidationError):
    default_message = "Qty must be > 0"


class InsufficientCashError(SaleValidationError):
    default_message = "CashReceived must be >= Total"


class AmountOutOfRangeError(SaleValidationError):
    """A total or cash amount does not fit the stored money columns."""

    default_message = "Total exceeds the maximum sale amount"


class ProductNotFoundError(SaleError):
    """A cart line references a product id that does not exist."""

    def __init__(self, product_id):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class SaleConflictError(SaleError):
    """The cart is well formed but conflicts with the current catalog state."""

    message_template = "{name}"

    def __init__(self, product_name):
        self.product_name = product_name
        super().__init__(self.message_template.format(name=product_name))


class ProductInactiveError(SaleConflictError):
    message_template = "Product inactive: {name}"


class InsufficientStockError(SaleConflictError):
    message_template = "Not enough stock for: {name}"
