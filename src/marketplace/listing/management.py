"""Listing registration and availability — commands and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.errors import Forbidden
from marketplace.listing.listing import WasteListing

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="WasteListing")
class CreateListing:
    owner_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    waste_type = String(max_length=100)
    material_type = String(max_length=100)
    quantity = Float(required=True)
    unit = String(max_length=20, default="kg")
    price_per_unit = Float()
    location = String(max_length=255)


@marketplace.command(part_of="WasteListing")
class ChangeListingStatus:
    listing_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@marketplace.command_handler(part_of=WasteListing)
class ListingCommandHandler:
    @handle(CreateListing)
    def create_listing(self, command):
        listing = WasteListing.create(
            owner_id=command.owner_id,
            title=command.title,
            quantity=command.quantity,
            unit=command.unit,
            waste_type=command.waste_type,
            material_type=command.material_type,
            price_per_unit=command.price_per_unit,
            location=command.location,
        )
        current_domain.repository_for(WasteListing).add(listing)
        logger.info("Listing created", listing_id=str(listing.id), owner_id=str(command.owner_id))
        return listing

    @handle(ChangeListingStatus)
    def change_listing_status(self, command):
        repo = current_domain.repository_for(WasteListing)
        listing = repo.get(command.listing_id)
        if not listing.is_owned_by(command.actor_id):
            raise Forbidden("Only the listing owner can change its availability")

        listing.change_status(command.status)
        repo.add(listing)
        return listing
