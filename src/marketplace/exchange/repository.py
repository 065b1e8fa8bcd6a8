"""Repository for the ExchangeRequest aggregate."""

from marketplace.domain import marketplace
from marketplace.exchange.exchange import ExchangeRequest


@marketplace.repository(part_of=ExchangeRequest)
class ExchangeRequestRepository:
    def sent_by(self, requester_id, status=None) -> list[ExchangeRequest]:
        """Requests made by ``requester_id``, newest first."""
        criteria = {"requester_id": str(requester_id)}
        if status:
            criteria["status"] = status
        return self._dao.query.filter(**criteria).order_by("-created_at").all().items

    def for_listings(self, listing_ids, status=None) -> list[ExchangeRequest]:
        """Requests made against any of ``listing_ids``, newest first."""
        ids = [str(listing_id) for listing_id in listing_ids]
        if not ids:
            return []
        criteria = {"listing_id__in": ids}
        if status:
            criteria["status"] = status
        return self._dao.query.filter(**criteria).order_by("-created_at").all().items
