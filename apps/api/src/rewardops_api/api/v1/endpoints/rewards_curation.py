from datetime import datetime, timedelta, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from loguru import logger

from rewardops_api.api.dependencies.security import require_admin_api_key
from rewardops_api.core.settings import settings
from rewardops_api.db.session import get_session
from rewardops_api.domain.curation import (
    BulkActionKind,
    BulkOperation,
    BulkOperationResult,
    CatalogFilters,
    CatalogItem,
    CatalogItemNotFoundError,
    CatalogReadError,
    CatalogWriteError,
    CurationValidationError,
    OrderModeError,
    SortDirection,
    SortField,
    SortSpec,
    SponsorshipTerms,
    StatusTier,
)
from rewardops_api.domain.curation.sponsorship import (
    derive_status,
    is_expiring_soon,
    is_sponsorship_visible,
    status_badge,
    status_label,
)
from rewardops_api.schemas.rewards import (
    BulkActionRequest,
    BulkFailureResponse,
    BulkOperationResponse,
    CatalogItemResponse,
    CatalogViewResponse,
    OrderChangeResponse,
    OrderCommandRequest,
    OrderCommitResponse,
    SponsorshipStatusResponse,
    StockUpdateRequest,
    StockUpdateResponse,
)
from rewardops_api.services.curation import CurationSession, SqlRewardCatalogGateway

router = APIRouter(
    prefix="/admin/rewards",
    tags=["Reward Curation"],
    dependencies=[Depends(require_admin_api_key)],
)


# meta: route: admin/rewards


async def get_curation_session(session=Depends(get_session)) -> CurationSession:
    curation = CurationSession(
        SqlRewardCatalogGateway(session),
        max_selection=settings.bulk_action_max_selection,
        expiring_window=timedelta(days=settings.sponsorship_expiring_window_days),
    )
    try:
        await curation.load()
    except CatalogReadError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return curation


def _validation_error(exc: CurationValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"message": str(exc), "errors": exc.errors},
    )


def _item_response(item: CatalogItem, now: datetime, window: timedelta) -> CatalogItemResponse:
    sponsorship = derive_status(item, now)
    return CatalogItemResponse.model_validate(item).model_copy(
        update={
            "sponsorship_status": sponsorship,
            "sponsorship_label": status_label(sponsorship),
            "sponsorship_expiring_soon": is_expiring_soon(item, now, window),
        }
    )


def _result_response(result: BulkOperationResult) -> BulkOperationResponse:
    return BulkOperationResponse(
        operation=result.operation,
        requested=result.requested,
        succeeded=result.succeeded,
        failed=[BulkFailureResponse(id=failure.item_id, reason=failure.reason) for failure in result.failed],
        succeeded_count=result.succeeded_count,
        failed_count=result.failed_count,
        refreshed=result.refreshed,
    )


@router.get("/", summary="Curated reward catalog view", response_model=CatalogViewResponse)
async def list_rewards(
    search: str | None = Query(None),
    category: str | None = Query(None),
    bucket: list[str] | None = Query(None),
    tier: str | None = Query(None),
    preview_tier: StatusTier | None = Query(None, alias="previewTier"),
    sort: SortField = Query(SortField.CREATED_AT),
    direction: SortDirection = Query(SortDirection.DESC),
    order_mode: bool = Query(False, alias="orderMode"),
    curation: CurationSession = Depends(get_curation_session),
) -> CatalogViewResponse:
    curation.set_filters(
        CatalogFilters(
            search=search,
            category=category,
            buckets=frozenset(bucket or ()),
            tier=tier,
            preview_tier=preview_tier,
        )
    )
    curation.set_sort(SortSpec(field=sort, direction=direction))
    if order_mode:
        curation.enter_order_mode()

    now = datetime.now(timezone.utc)
    items = curation.view()
    return CatalogViewResponse(
        items=[_item_response(item, now, curation.expiring_window) for item in items],
        total=len(items),
        order_mode=curation.order_mode,
        pending_order_changes=len(curation.pending_order_changes()),
    )


@router.post(
    "/bulk",
    summary="Apply a bulk command to selected rewards",
    response_model=BulkOperationResponse,
    responses={status.HTTP_207_MULTI_STATUS: {"model": BulkOperationResponse}},
)
async def apply_bulk_action(
    payload: BulkActionRequest,
    response: Response,
    curation: CurationSession = Depends(get_curation_session),
) -> BulkOperationResponse:
    if payload.action is BulkActionKind.SPONSORSHIP_APPLY:
        terms = payload.sponsorship
        operation = BulkOperation.apply_sponsorship(
            SponsorshipTerms(
                name=terms.name if terms else None,
                logo=terms.logo if terms else None,
                start_date=terms.start_date if terms else None,
                end_date=terms.end_date if terms else None,
                link=terms.link if terms else None,
            )
        )
    elif payload.action is BulkActionKind.TIER_PRICING_APPLY:
        operation = BulkOperation.apply_tier_pricing(payload.tier_pricing or {})
    else:
        operation = BulkOperation.toggle(payload.action)

    curation.select(payload.ids)
    try:
        result = await curation.apply_bulk(operation)
    except CurationValidationError as exc:
        raise _validation_error(exc) from exc

    if result.failed:
        response.status_code = status.HTTP_207_MULTI_STATUS
    return _result_response(result)


@router.post(
    "/order",
    summary="Reorder rewards and commit the minimal order diff",
    response_model=OrderCommitResponse,
    responses={status.HTTP_207_MULTI_STATUS: {"model": OrderCommitResponse}},
)
async def commit_order(
    payload: OrderCommandRequest,
    response: Response,
    curation: CurationSession = Depends(get_curation_session),
) -> OrderCommitResponse:
    curation.enter_order_mode()
    try:
        if payload.operation == "reorder":
            curation.drag(payload.dragged_id, payload.target_id)
        elif payload.operation == "move_selected":
            curation.select(payload.ids)
            curation.move_selected(payload.position)
        else:
            curation.move(payload.item_id, payload.direction)
    except OrderModeError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    changes = curation.pending_order_changes()
    result = await curation.commit_order()
    if result.failed:
        response.status_code = status.HTTP_207_MULTI_STATUS

    logger.info(
        "Reward order committed",
        operation=payload.operation,
        changed=len(changes),
        failed=result.failed_count,
    )
    return OrderCommitResponse(
        changes=[
            OrderChangeResponse(
                id=change.item_id,
                new_order=change.new_order,
                previous_order=change.previous_order,
            )
            for change in changes
        ],
        result=_result_response(result),
    )


@router.post("/{reward_id}/stock", summary="Adjust reward stock", response_model=StockUpdateResponse)
async def update_stock(
    reward_id: UUID,
    payload: StockUpdateRequest,
    curation: CurationSession = Depends(get_curation_session),
) -> StockUpdateResponse:
    try:
        if payload.delta is not None:
            stock = await curation.adjust_stock(reward_id, payload.delta)
        else:
            stock = await curation.set_stock(reward_id, None if payload.unlimited else payload.value)
    except CatalogItemNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reward not found") from exc
    except CurationValidationError as exc:
        raise _validation_error(exc) from exc
    except CatalogWriteError as exc:
        code = status.HTTP_404_NOT_FOUND if exc.reason == "not_found" else status.HTTP_409_CONFLICT
        raise HTTPException(status_code=code, detail={"message": str(exc), "reason": exc.reason}) from exc

    return StockUpdateResponse(id=reward_id, stock_quantity=stock)


@router.get(
    "/{reward_id}/sponsorship",
    summary="Derived sponsorship status for a reward",
    response_model=SponsorshipStatusResponse,
)
async def get_sponsorship_status(
    reward_id: UUID,
    curation: CurationSession = Depends(get_curation_session),
) -> SponsorshipStatusResponse:
    item = curation.snapshot.find(reward_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reward not found")

    now = datetime.now(timezone.utc)
    sponsorship = derive_status(item, now)
    return SponsorshipStatusResponse(
        id=item.id,
        status=sponsorship,
        label=status_label(sponsorship),
        badge=status_badge(sponsorship),
        visible=is_sponsorship_visible(item, now),
        expiring_soon=is_expiring_soon(item, now, curation.expiring_window),
    )
