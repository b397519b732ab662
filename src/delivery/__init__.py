"""Notification delivery to desktop popup daemons, status bars and shells."""

from delivery.delivery_command import CommandResult, CommandRunner, run_command
from delivery.delivery_exceptions import DeliveryFailure
from delivery.delivery_result import DeliveryResult
from delivery.delivery_revert_timer import DeliveryRevertTimer
from delivery.polybar_delivery import PolybarDelivery
from delivery.popup_delivery import PopupDelivery
from delivery.quickshell_delivery import OverlayRequest, QuickshellDelivery
from delivery.waybar_delivery import WaybarDelivery
from delivery.waybar_state import BarDisplayState


__all__ = [
    "BarDisplayState",
    "CommandResult",
    "CommandRunner",
    "DeliveryFailure",
    "DeliveryResult",
    "DeliveryRevertTimer",
    "OverlayRequest",
    "PolybarDelivery",
    "PopupDelivery",
    "QuickshellDelivery",
    "WaybarDelivery",
    "run_command",
]
