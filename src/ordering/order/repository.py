"""Repository for the Order aggregate."""

from ordering.domain import ordering
from ordering.order.order import Order


def _newest_first(orders):
    return sorted(orders, key=lambda o: o.created_at, reverse=True)


@ordering.repository(part_of=Order)
class OrderRepository:
    """Order lookups beyond get-by-id."""

    def find_by_provider_order_id(self, provider_order_id: str) -> Order | None:
        """The order a gateway intent was created for, or None."""
        if not provider_order_id:
            return None
        orders = self._dao.query.filter(provider_order_id=provider_order_id).all().items
        return orders[0] if orders else None

    def find_for_owner(self, owner_id: str) -> list[Order]:
        return _newest_first(self._dao.query.filter(owner_id=owner_id).all().items)

    def find_all(self) -> list[Order]:
        return _newest_first(self._dao.query.all().items)
