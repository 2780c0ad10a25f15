"""
Configurable marketplace rules
"""

import enum
from dataclasses import dataclass
from typing import Optional

from estatehub.core.config import Settings
from estatehub.core.exceptions import ConfigurationError, ValidationError
from estatehub.models import PropertyStatus, parse_enum


class DeletePolicy(str, enum.Enum):
    """What happens to dependent records when a referenced record is deleted"""
    CASCADE = "cascade"    # remove dependents with it
    RESTRICT = "restrict"  # refuse while dependents exist
    ORPHAN = "orphan"      # leave dependents holding a dangling identifier


@dataclass(frozen=True)
class MarketplacePolicy:
    """Rules applied on offer acceptance, status changes and deletes.

    The defaults keep acceptance free of side effects: the property stays in
    its current status and competing offers are left pending.
    """
    accepted_offer_property_status: Optional[PropertyStatus] = None
    auto_reject_competing_offers: bool = False
    enforce_terminal_states: bool = False
    delete_policy: DeletePolicy = DeletePolicy.CASCADE

    @classmethod
    def from_settings(cls, settings: Settings) -> "MarketplacePolicy":
        property_status = None
        if settings.ACCEPTED_OFFER_PROPERTY_STATUS.strip():
            try:
                property_status = parse_enum(
                    PropertyStatus, settings.ACCEPTED_OFFER_PROPERTY_STATUS, "ACCEPTED_OFFER_PROPERTY_STATUS"
                )
            except ValidationError as e:
                raise ConfigurationError(e.message) from e

        try:
            delete_policy = DeletePolicy(settings.DELETE_POLICY.strip().lower())
        except ValueError as e:
            allowed = ", ".join(policy.value for policy in DeletePolicy)
            raise ConfigurationError(f"Invalid DELETE_POLICY. Use: {allowed}") from e

        return cls(
            accepted_offer_property_status=property_status,
            auto_reject_competing_offers=settings.AUTO_REJECT_COMPETING_OFFERS,
            enforce_terminal_states=settings.ENFORCE_TERMINAL_STATES,
            delete_policy=delete_policy,
        )
