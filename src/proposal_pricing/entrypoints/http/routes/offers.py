from fastapi import APIRouter, Depends, Path, Query

from proposal_pricing.entrypoints.http.dependencies import get_load_offer_catalog_use_case
from proposal_pricing.entrypoints.http.dtos.offers import OfferCatalogResponseDTO
from proposal_pricing.entrypoints.http.mappers.offers_mapper import OfferCatalogResponseMapper
from proposal_pricing.use_cases.load_offer_catalog import LoadOfferCatalog, LoadOfferCatalogRequest

router = APIRouter(tags=["Offers"])


@router.get(
    "/proposals/{proposal_id}/offers",
    response_model=OfferCatalogResponseDTO,
    summary="List offers for a proposal",
    description="""
    Special offers, bundle rules and lifestyle upsells available to a proposal.

    `services` (comma separated) names the proposal's services; it is used to
    word bundle bonus messages. Unreachable offer data yields empty lists
    rather than an error.
    """,
)
def get_proposal_offers(
    proposal_id: int = Path(ge=1, description="Proposal identifier"),
    services: str | None = Query(default=None, examples=["roofing,hvac"]),
    use_case: LoadOfferCatalog = Depends(get_load_offer_catalog_use_case),
) -> OfferCatalogResponseDTO:
    request = LoadOfferCatalogRequest(
        proposal_id=proposal_id,
        services=OfferCatalogResponseMapper.parse_services(services),
    )

    catalog = use_case.execute(request)

    return OfferCatalogResponseMapper.to_response(proposal_id, catalog)
