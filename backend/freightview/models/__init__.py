from freightview.models.user import User
from freightview.models.forwarder import Forwarder
from freightview.models.shipment import Quote, ShipmentRequest
from freightview.models.user_forwarder import UserForwarder

__all__ = [
    "Forwarder",
    "Quote",
    "ShipmentRequest",
    "User",
    "UserForwarder",
]
