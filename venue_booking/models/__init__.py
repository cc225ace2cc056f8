"""Models package - Pydantic domain models."""

from .catalog import CatalogItem, CatalogKind, EventRoom, FoodService, PerGuestItem
from .errors import (
    DomainError,
    ErrorCode,
    PersistenceError,
    ReservationNotFoundError,
    ReservationValidationError,
)
from .reservation import (
    AdditionalServices,
    BuffetSelection,
    LineItem,
    LineItemKind,
    PricingBreakdown,
    Reservation,
    ReservationDraft,
    ReservationList,
    TableConfiguration,
    TableShape,
    TaxBreakdown,
    TipBreakdown,
)

__all__ = [
    "CatalogItem",
    "CatalogKind",
    "EventRoom",
    "FoodService",
    "PerGuestItem",
    "DomainError",
    "ErrorCode",
    "PersistenceError",
    "ReservationNotFoundError",
    "ReservationValidationError",
    "AdditionalServices",
    "BuffetSelection",
    "LineItem",
    "LineItemKind",
    "PricingBreakdown",
    "Reservation",
    "ReservationDraft",
    "ReservationList",
    "TableConfiguration",
    "TableShape",
    "TaxBreakdown",
    "TipBreakdown",
]
