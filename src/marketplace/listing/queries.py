"""Read side of listings."""

from protean.utils.globals import current_domain

from marketplace.listing.listing import WasteListing


def listing_record(listing) -> dict | None:
    if listing is None:
        return None
    return {
        "id": str(listing.id),
        "owner_id": str(listing.owner_id),
        "title": listing.title,
        "waste_type": listing.waste_type,
        "material_type": listing.material_type,
        "quantity": listing.quantity,
        "unit": listing.unit,
        "availability_status": listing.availability_status,
        "price_per_unit": listing.price_per_unit,
        "location": listing.location,
        "created_at": listing.created_at,
    }


def list_owned_listings(owner_id) -> list[dict]:
    return [listing_record(listing) for listing in current_domain.repository_for(WasteListing).owned_by(owner_id)]
