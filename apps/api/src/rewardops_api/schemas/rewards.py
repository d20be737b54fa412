from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rewardops_api.domain.curation.bulk import BulkActionKind
from rewardops_api.domain.curation.items import StatusTier
from rewardops_api.domain.curation.ordering import MoveDirection, MovePosition
from rewardops_api.domain.curation.sponsorship import SponsorshipStatus

# meta: schema: reward-curation


class CatalogItemResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    title: str
    category: str
    cost: int
    stock_quantity: int | None = Field(None, alias="stockQuantity")
    is_active: bool = Field(..., alias="isActive")
    is_featured: bool = Field(..., alias="isFeatured")
    display_order: int = Field(..., alias="displayOrder")
    sponsor_enabled: bool = Field(False, alias="sponsorEnabled")
    sponsor_name: str | None = Field(None, alias="sponsorName")
    sponsor_logo: str | None = Field(None, alias="sponsorLogo")
    sponsor_link: str | None = Field(None, alias="sponsorLink")
    sponsor_start_date: datetime | None = Field(None, alias="sponsorStartDate")
    sponsor_end_date: datetime | None = Field(None, alias="sponsorEndDate")
    min_status_tier: StatusTier | None = Field(None, alias="minStatusTier")
    status_tier_claims_cost: dict[str, int] | None = Field(None, alias="statusTierClaimsCost")
    claim_count: int = Field(0, alias="claimCount")
    wishlist_count: int = Field(0, alias="wishlistCount")
    created_at: datetime | None = Field(None, alias="createdAt")
    sponsorship_status: SponsorshipStatus = Field(SponsorshipStatus.NONE, alias="sponsorshipStatus")
    sponsorship_label: str = Field("None", alias="sponsorshipLabel")
    sponsorship_expiring_soon: bool = Field(False, alias="sponsorshipExpiringSoon")


class CatalogViewResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: list[CatalogItemResponse]
    total: int
    order_mode: bool = Field(..., alias="orderMode")
    pending_order_changes: int = Field(0, alias="pendingOrderChanges")


class SponsorshipTermsPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    logo: str | None = None
    link: str | None = None
    start_date: datetime | None = Field(None, alias="startDate")
    end_date: datetime | None = Field(None, alias="endDate")


class BulkActionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ids: list[UUID] = Field(default_factory=list)
    action: BulkActionKind
    sponsorship: SponsorshipTermsPayload | None = None
    tier_pricing: dict[str, int | None] | None = Field(None, alias="tierPricing")

    @model_validator(mode="after")
    def _reject_order_commit(self) -> "BulkActionRequest":
        if self.action is BulkActionKind.ORDER_COMMIT:
            raise ValueError("Use the order endpoint to commit display order changes")
        return self


class BulkFailureResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    reason: str


class BulkOperationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    operation: BulkActionKind
    requested: list[UUID]
    succeeded: list[UUID]
    failed: list[BulkFailureResponse]
    succeeded_count: int = Field(..., alias="succeededCount")
    failed_count: int = Field(..., alias="failedCount")
    refreshed: bool


class OrderCommandRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    operation: Literal["reorder", "move_selected", "move_item"]
    dragged_id: UUID | None = Field(None, alias="draggedId")
    target_id: UUID | None = Field(None, alias="targetId")
    ids: list[UUID] = Field(default_factory=list)
    position: MovePosition | None = None
    item_id: UUID | None = Field(None, alias="itemId")
    direction: MoveDirection | None = None

    @model_validator(mode="after")
    def _check_operands(self) -> "OrderCommandRequest":
        if self.operation == "reorder" and (self.dragged_id is None or self.target_id is None):
            raise ValueError("reorder requires draggedId and targetId")
        if self.operation == "move_selected" and self.position is None:
            raise ValueError("move_selected requires position")
        if self.operation == "move_item" and (self.item_id is None or self.direction is None):
            raise ValueError("move_item requires itemId and direction")
        return self


class OrderChangeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    new_order: int = Field(..., alias="newOrder")
    previous_order: int | None = Field(None, alias="previousOrder")


class OrderCommitResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    changes: list[OrderChangeResponse]
    result: BulkOperationResponse


class StockUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    delta: int | None = None
    value: int | None = Field(None, ge=0)
    unlimited: bool = False

    @model_validator(mode="after")
    def _one_mode(self) -> "StockUpdateRequest":
        modes = sum([self.delta is not None, self.value is not None, self.unlimited])
        if modes != 1:
            raise ValueError("Provide exactly one of delta, value or unlimited")
        return self


class StockUpdateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    stock_quantity: int | None = Field(None, alias="stockQuantity")


class SponsorshipStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    status: SponsorshipStatus
    label: str
    badge: str
    visible: bool
    expiring_soon: bool = Field(..., alias="expiringSoon")
