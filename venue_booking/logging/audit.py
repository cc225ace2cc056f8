"""Structured audit logging for reservation lifecycle actions.

Every mutation of the reservation list leaves one ``audit_event`` record so
bookings can be traced independently of the stored document.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from venue_booking.logging import get_logger

logger = get_logger(__name__)


class AuditEventType(str, Enum):
    """Types of auditable events."""

    # Reservation lifecycle
    RESERVATION_CREATED = "reservation_created"
    RESERVATION_EDIT_STARTED = "reservation_edit_started"
    RESERVATION_EDITED = "reservation_edited"
    RESERVATION_DELETED = "reservation_deleted"
    DEPOSIT_TOGGLED = "deposit_toggled"
    VALIDATION_FAILED = "validation_failed"

    # Synchronization
    SYNC_FALLBACK = "sync_fallback"
    SYNC_REPLACED = "sync_replaced"


class AuditLogger:
    """Centralized audit logging service."""

    @staticmethod
    def log_event(
        event_type: AuditEventType,
        resource_type: str,
        resource_id: str,
        action: str,
        success: bool = True,
        metadata: Optional[dict[str, Any]] = None,
        error: Optional[str] = None,
    ) -> None:
        """
        Log an auditable event with structured context.

        Args:
            event_type: Type of audit event
            resource_type: Type of resource (reservation, store)
            resource_id: ID of the affected resource
            action: Human-readable action description
            success: Whether the action succeeded
            metadata: Additional context (totals, counts, backends)
            error: Error message if action failed
        """
        audit_entry = {
            "event_type": event_type.value,
            "resource_type": resource_type,
            "resource_id": str(resource_id),
            "action": action,
            "success": success,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "metadata": metadata or {},
        }

        if error:
            audit_entry["error"] = error

        logger.info(
            "audit_event",
            **audit_entry,
        )

    @staticmethod
    def log_reservation_created(
        reservation_id: str,
        client_name: str,
        event_date: str,
        total_cost: Decimal,
        replaced_id: Optional[str] = None,
    ) -> None:
        """Log a saved reservation; ``replaced_id`` marks an edit."""
        event_type = (
            AuditEventType.RESERVATION_EDITED
            if replaced_id
            else AuditEventType.RESERVATION_CREATED
        )
        metadata: dict[str, Any] = {
            "client_name": client_name,
            "event_date": event_date,
            "total_cost": str(total_cost),
        }
        if replaced_id:
            metadata["replaced_id"] = replaced_id

        AuditLogger.log_event(
            event_type=event_type,
            resource_type="reservation",
            resource_id=reservation_id,
            action=f"{'Edited' if replaced_id else 'Created'} reservation for {client_name}",
            metadata=metadata,
        )

    @staticmethod
    def log_edit_started(reservation_id: str, destructive: bool) -> None:
        """Log a reservation loaded back into the form."""
        AuditLogger.log_event(
            event_type=AuditEventType.RESERVATION_EDIT_STARTED,
            resource_type="reservation",
            resource_id=reservation_id,
            action="Reservation opened for editing",
            metadata={"destructive": destructive},
        )

    @staticmethod
    def log_reservation_deleted(reservation_id: str) -> None:
        """Log reservation removal."""
        AuditLogger.log_event(
            event_type=AuditEventType.RESERVATION_DELETED,
            resource_type="reservation",
            resource_id=reservation_id,
            action="Reservation deleted",
        )

    @staticmethod
    def log_deposit_toggled(reservation_id: str, deposit_paid: bool) -> None:
        """Log deposit status change."""
        AuditLogger.log_event(
            event_type=AuditEventType.DEPOSIT_TOGGLED,
            resource_type="reservation",
            resource_id=reservation_id,
            action=f"Deposit marked {'paid' if deposit_paid else 'pending'}",
            metadata={"deposit_paid": deposit_paid},
        )

    @staticmethod
    def log_validation_failed(missing_fields: list[str]) -> None:
        """Log a rejected save attempt."""
        AuditLogger.log_event(
            event_type=AuditEventType.VALIDATION_FAILED,
            resource_type="reservation",
            resource_id="draft",
            action="Reservation rejected by validation",
            success=False,
            metadata={"missing_fields": missing_fields},
        )

    @staticmethod
    def log_sync_fallback(
        remote_backend: str,
        local_backend: str,
        error: str,
    ) -> None:
        """Log a remote write that landed in the local store instead."""
        AuditLogger.log_event(
            event_type=AuditEventType.SYNC_FALLBACK,
            resource_type="store",
            resource_id=remote_backend,
            action=f"Remote save failed, stored in {local_backend}",
            success=False,
            metadata={"remote": remote_backend, "local": local_backend},
            error=error,
        )

    @staticmethod
    def log_sync_replaced(source: str, count: int) -> None:
        """Log the in-memory list replaced by a remote push."""
        AuditLogger.log_event(
            event_type=AuditEventType.SYNC_REPLACED,
            resource_type="store",
            resource_id=source,
            action="Reservation list replaced from remote",
            metadata={"count": count},
        )
