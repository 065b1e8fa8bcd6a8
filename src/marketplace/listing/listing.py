"""WasteListing aggregate (CQRS) — a company's offer of textile waste.

The remaining ``quantity`` is written only through the inventory ledger when
an exchange completes. Availability is derived from it at that moment: a
listing with nothing left becomes ``sold_out``; otherwise the status is left
as it was, including a ``limited`` or ``discontinued`` set by the owner.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String

from marketplace.domain import marketplace
from marketplace.errors import Conflict
from marketplace.listing.events import (
    ListingCreated,
    ListingSoldOut,
    ListingStatusChanged,
    WasteQuantityReleased,
)


class ListingStatus(Enum):
    AVAILABLE = "available"
    LIMITED = "limited"
    SOLD_OUT = "sold_out"
    DISCONTINUED = "discontinued"


# Statuses an owner may set by hand; sold_out is reserved to the ledger
_OWNER_SETTABLE = {
    ListingStatus.AVAILABLE,
    ListingStatus.LIMITED,
    ListingStatus.DISCONTINUED,
}


@marketplace.aggregate
class WasteListing:
    owner_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    waste_type = String(max_length=100)
    material_type = String(max_length=100)
    quantity = Float(required=True, min_value=0.0)
    unit = String(max_length=20, default="kg")
    availability_status = String(
        choices=ListingStatus,
        default=ListingStatus.AVAILABLE.value,
    )
    price_per_unit = Float(min_value=0.0)
    location = String(max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(
        cls,
        owner_id,
        title,
        quantity,
        unit="kg",
        waste_type=None,
        material_type=None,
        price_per_unit=None,
        location=None,
    ):
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        now = datetime.now(UTC)
        listing = cls(
            owner_id=owner_id,
            title=title,
            waste_type=waste_type,
            material_type=material_type,
            quantity=quantity,
            unit=unit or "kg",
            availability_status=ListingStatus.AVAILABLE.value,
            price_per_unit=price_per_unit,
            location=location,
            created_at=now,
            updated_at=now,
        )
        listing.raise_(
            ListingCreated(
                listing_id=str(listing.id),
                owner_id=str(owner_id),
                title=title,
                waste_type=waste_type,
                quantity=quantity,
                unit=listing.unit,
                created_at=now,
            )
        )
        return listing

    def is_owned_by(self, actor_id) -> bool:
        return str(self.owner_id) == str(actor_id)

    def is_available(self) -> bool:
        return ListingStatus(self.availability_status) == ListingStatus.AVAILABLE

    def release(self, amount, exchange_id=None):
        """Take ``amount`` off the remaining quantity.

        Re-validates against the quantity held right now rather than the one
        seen when the exchange was requested; asking for more than remains is
        a conflict, never a clamp.
        """
        if amount is None or amount <= 0:
            raise ValidationError({"amount": ["Amount must be positive"]})

        previous = self.quantity
        if amount > previous:
            raise Conflict(f"Requested quantity {amount} exceeds the remaining {previous} {self.unit} of this listing")

        remaining = round(previous - amount, 6)
        now = datetime.now(UTC)
        self.quantity = remaining
        self.updated_at = now

        self.raise_(
            WasteQuantityReleased(
                listing_id=str(self.id),
                exchange_id=str(exchange_id) if exchange_id else None,
                amount=amount,
                previous_quantity=previous,
                new_quantity=remaining,
                released_at=now,
            )
        )

        if remaining <= 0:
            self.availability_status = ListingStatus.SOLD_OUT.value
            self.raise_(ListingSoldOut(listing_id=str(self.id), sold_out_at=now))

    def change_status(self, new_status):
        """Set availability by hand (owner action)."""
        try:
            target = ListingStatus(new_status)
        except ValueError:
            raise ValidationError({"availability_status": [f"Unknown status: {new_status}"]}) from None

        if target not in _OWNER_SETTABLE:
            raise ValidationError({"availability_status": ["Listings are marked sold out only by completed exchanges"]})
        if target != ListingStatus.DISCONTINUED and self.quantity <= 0:
            raise ValidationError({"availability_status": ["A listing with no remaining quantity cannot be offered"]})

        previous = self.availability_status
        if previous == target.value:
            return

        now = datetime.now(UTC)
        self.availability_status = target.value
        self.updated_at = now

        self.raise_(
            ListingStatusChanged(
                listing_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )
