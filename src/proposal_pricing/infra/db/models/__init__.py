from proposal_pricing.infra.db.models.addons import ProposalAddonRow
from proposal_pricing.infra.db.models.base import Base
from proposal_pricing.infra.db.models.offers import (
    BundleRuleRow,
    LifestyleUpsellRow,
    ProposalOfferRow,
    SpecialOfferRow,
)

__all__ = [
    "Base",
    "BundleRuleRow",
    "LifestyleUpsellRow",
    "ProposalAddonRow",
    "ProposalOfferRow",
    "SpecialOfferRow",
]
