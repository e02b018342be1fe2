import enum

# Statuses are stored as free text; these are the values the API itself
# writes or aggregates on.


class OrderStatus(str, enum.Enum):
    pending = "pending"
    processing = "processing"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"


class ShipmentStatus(str, enum.Enum):
    pending = "pending"
    processing = "processing"
    in_transit = "in_transit"
    delivered = "delivered"
    cancelled = "cancelled"


# Counted as "pending shipments" on the dashboard
OPEN_SHIPMENT_STATUSES = {
    ShipmentStatus.pending.value,
    ShipmentStatus.processing.value,
}
