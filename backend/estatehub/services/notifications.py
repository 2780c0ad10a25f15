"""
Offer status-change notifications
"""

import asyncio
import enum
from typing import Optional, Set

from estatehub.clients.email import EmailClient
from estatehub.core.logging import get_logger
from estatehub.models import Offer, OfferStatus

logger = get_logger(__name__)


class DispatchMode(str, enum.Enum):
    INLINE = "inline"          # await the provider and report the outcome
    BACKGROUND = "background"  # schedule the send and report nothing


STATUS_STYLES = {
    OfferStatus.ACCEPTED: ("green", "&#10003;"),
    OfferStatus.REJECTED: ("red", "&#10007;"),
    OfferStatus.WITHDRAWN: ("orange", "&#9888;"),
}
DEFAULT_STATUS_STYLE = ("blue", "&#8226;")


def status_email_subject(offer: Offer) -> str:
    return f"Offer Status Update - {offer.offer_id}"


def render_status_email(offer: Offer, old_status: OfferStatus, new_status: OfferStatus) -> str:
    """Render the HTML body describing an offer's status change"""
    colour, symbol = STATUS_STYLES.get(new_status, DEFAULT_STATUS_STYLE)
    return (
        "<h2>Offer Status Update</h2>"
        f"<p><strong>Offer ID:</strong> {offer.offer_id}</p>"
        f"<p><strong>Property ID:</strong> {offer.property_id}</p>"
        f"<p><strong>Previous Status:</strong> {old_status.value}</p>"
        f"<p><strong>New Status:</strong> <span style='color: {colour}'>{symbol} {new_status.value}</span></p>"
        "<hr>"
        "<p><em>This is an automated notification from EstateHub</em></p>"
    )


class OfferNotifier:
    """Tells a buyer that one of their offers changed status.

    Delivery never raises: the caller's state change is already committed by
    the time `notify` runs, and a failed send is only reported.
    """

    def __init__(
        self,
        client: EmailClient,
        default_recipient: Optional[str] = None,
        mode: DispatchMode = DispatchMode.INLINE,
    ):
        self.client = client
        self.default_recipient = default_recipient
        self.mode = DispatchMode(mode)
        self._pending: Set[asyncio.Task] = set()

    async def notify(
        self,
        offer: Offer,
        old_status: OfferStatus,
        new_status: OfferStatus,
        recipient: Optional[str],
    ) -> Optional[bool]:
        """Send the notification.

        Returns the delivery outcome in inline mode and None once the send has
        been queued in background mode.
        """
        recipient = recipient or self.default_recipient
        if not recipient:
            logger.warning("No recipient for offer notification", offer_id=str(offer.offer_id))
            return False

        if self.mode is DispatchMode.BACKGROUND:
            task = asyncio.create_task(self._deliver(offer, old_status, new_status, recipient))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            return None

        return await self._deliver(offer, old_status, new_status, recipient)

    async def _deliver(
        self,
        offer: Offer,
        old_status: OfferStatus,
        new_status: OfferStatus,
        recipient: str,
    ) -> bool:
        try:
            sent = await self.client.send(
                recipient,
                status_email_subject(offer),
                render_status_email(offer, old_status, new_status),
            )
        except Exception as e:
            logger.error("Offer notification failed",
                         offer_id=str(offer.offer_id),
                         new_status=new_status.value,
                         error=str(e),
                         exc_info=e)
            return False

        if sent:
            logger.info("Offer notification sent",
                        offer_id=str(offer.offer_id),
                        old_status=old_status.value,
                        new_status=new_status.value)
        else:
            logger.warning("Offer notification failed",
                           offer_id=str(offer.offer_id),
                           old_status=old_status.value,
                           new_status=new_status.value)
        return sent

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for queued background sends to finish"""
        if self._pending:
            logger.info("Waiting for queued notifications", count=len(self._pending))
            await asyncio.gather(*self._pending, return_exceptions=True)
