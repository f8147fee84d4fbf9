"""Typed errors raised by the compliance engine."""


class LittleLadleError(Exception):
    """Base class for engine errors."""


class InvalidInputError(LittleLadleError):
    """Input rejected at the boundary."""


class InvalidDateError(InvalidInputError):
    """Birth date is unusable (e.g. in the future)."""


class InvalidServingError(InvalidInputError):
    """Serving grams outside the accepted range."""


class InvalidFeedingModeError(InvalidInputError):
    """Feeding mode is unknown or has an impossible target."""


class PreconditionError(LittleLadleError):
    """Engine invoked without the inputs it requires."""


class CatalogError(LittleLadleError):
    """Food catalog document or entry is malformed."""


class UnknownFoodError(CatalogError):
    """Food id is not present in the catalog."""


class ReferenceDataError(LittleLadleError):
    """Guideline document is malformed or missing a required table."""
