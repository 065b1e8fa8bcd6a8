"""Repository for the WasteListing aggregate."""

from marketplace.domain import marketplace
from marketplace.listing.listing import WasteListing


@marketplace.repository(part_of=WasteListing)
class WasteListingRepository:
    def owned_by(self, owner_id) -> list[WasteListing]:
        return self._dao.query.filter(owner_id=str(owner_id)).order_by("-created_at").all().items

    def by_ids(self, listing_ids) -> dict:
        """Listings keyed by id; unknown ids are left out."""
        ids = [str(listing_id) for listing_id in set(listing_ids)]
        if not ids:
            return {}
        return {str(listing.id): listing for listing in self._dao.query.filter(id__in=ids).all().items}
