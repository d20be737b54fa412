from __future__ import annotations

import pytest

from rewardops_api.domain.curation import (
    CatalogFilters,
    CatalogItemNotFoundError,
    CatalogReadError,
    MoveDirection,
    MovePosition,
    OrderModeError,
    SortField,
    SortSpec,
    SponsorshipStatus,
)
from rewardops_api.services.curation import CurationSession


async def _session(gateway, observability, **kwargs) -> CurationSession:
    session = CurationSession(gateway, observability=observability, **kwargs)
    await session.load()
    return session


@pytest.mark.asyncio
async def test_order_edits_require_order_mode(gateway_factory, five_items, observability) -> None:
    session = await _session(gateway_factory(five_items), observability)

    with pytest.raises(OrderModeError):
        session.drag(five_items[0].id, five_items[3].id)
    with pytest.raises(OrderModeError):
        session.move(five_items[0].id, MoveDirection.DOWN)
    with pytest.raises(OrderModeError):
        session.move_selected(MovePosition.TOP)

    assert session.pending_order_changes() == []


@pytest.mark.asyncio
async def test_view_follows_display_order_in_order_mode(gateway_factory, five_items, observability) -> None:
    session = await _session(gateway_factory(five_items), observability)
    session.set_sort(SortSpec(SortField.COST))

    session.enter_order_mode()
    session.drag(five_items[4].id, five_items[0].id)

    assert session.visible_ids()[0] == five_items[4].id


@pytest.mark.asyncio
async def test_save_writes_minimal_diff_and_rebaselines(gateway_factory, five_items, observability) -> None:
    gateway = gateway_factory(five_items)
    session = await _session(gateway, observability)
    session.enter_order_mode()

    session.move(five_items[3].id, MoveDirection.UP)
    result = await session.save()

    assert {item_id for item_id, _ in gateway.update_calls} == {five_items[2].id, five_items[3].id}
    assert all(set(fields) == {"display_order"} for _, fields in gateway.update_calls)
    assert result.is_complete
    assert session.pending_order_changes() == []
    assert not session.has_pending_changes()


@pytest.mark.asyncio
async def test_save_without_changes_writes_nothing(gateway_factory, five_items, observability) -> None:
    gateway = gateway_factory(five_items)
    session = await _session(gateway, observability)

    result = await session.save()

    assert result.requested == []
    assert gateway.update_calls == []


@pytest.mark.asyncio
async def test_move_selected_scenario(gateway_factory, five_items, observability) -> None:
    gateway = gateway_factory(five_items)
    session = await _session(gateway, observability)
    session.enter_order_mode()
    session.select([five_items[2].id, five_items[4].id])

    session.move_selected(MovePosition.TOP)

    expected = [five_items[index].id for index in (2, 4, 0, 1, 3)]
    assert session.snapshot.ids() == expected
    assert [item.display_order for item in session.view()] == [1, 2, 3, 4, 5]
    assert len(session.selection) == 0

    await session.commit_order()
    assert [item.id for item in await gateway.list_items()] == expected


@pytest.mark.asyncio
async def test_staged_activation_is_saved_with_order(gateway_factory, five_items, observability) -> None:
    gateway = gateway_factory(five_items)
    session = await _session(gateway, observability)
    session.enter_order_mode()

    session.toggle_active(five_items[1].id)
    assert session.has_pending_changes()
    assert session.pending_order_changes() == []
    assert session.pending_changes() == [five_items[1].id]

    await session.save()

    assert gateway.update_calls == [(five_items[1].id, {"is_active": False})]
    assert session.snapshot.get(five_items[1].id).is_active is False


@pytest.mark.asyncio
async def test_discard_restores_baseline_and_clears_selection(gateway_factory, five_items, observability) -> None:
    session = await _session(gateway_factory(five_items), observability)
    session.enter_order_mode()
    session.move(five_items[0].id, MoveDirection.BOTTOM)
    session.toggle_active(five_items[1].id)
    session.select([five_items[2].id])

    session.discard()

    assert session.snapshot.ids() == [item.id for item in five_items]
    assert session.snapshot.get(five_items[1].id).is_active is True
    assert len(session.selection) == 0
    assert not session.has_pending_changes()


@pytest.mark.asyncio
async def test_gapped_persisted_orders_are_pending_until_saved(gateway_factory, make_item, observability) -> None:
    items = [make_item(order) for order in (1, 4, 9)]
    gateway = gateway_factory(items)
    session = await _session(gateway, observability)

    assert [item.display_order for item in session.snapshot.current] == [1, 2, 3]
    assert {change.item_id for change in session.pending_order_changes()} == {items[1].id, items[2].id}

    await session.save()

    assert sorted(row.display_order for row in gateway.rows.values()) == [1, 2, 3]


@pytest.mark.asyncio
async def test_filters_hide_but_never_deselect(gateway_factory, five_items, observability) -> None:
    session = await _session(gateway_factory(five_items), observability)
    session.select([five_items[0].id, five_items[1].id])

    session.set_filters(CatalogFilters(search="Reward 1"))

    assert session.visible_ids() == [five_items[0].id]
    assert len(session.selection) == 2


@pytest.mark.asyncio
async def test_toggle_select_all_uses_visible_rows(gateway_factory, five_items, observability) -> None:
    session = await _session(gateway_factory(five_items), observability)
    session.set_filters(CatalogFilters(search="Reward 2"))

    session.toggle_select_all()
    assert session.selection.ids == {five_items[1].id}

    session.toggle_select_all()
    assert len(session.selection) == 0


@pytest.mark.asyncio
async def test_purge_removes_item_everywhere(gateway_factory, five_items, observability) -> None:
    session = await _session(gateway_factory(five_items), observability)
    doomed = five_items[1].id
    session.select([doomed, five_items[3].id])

    session.purge(doomed)

    assert doomed not in session.snapshot.ids()
    assert all(item.id != doomed for item in session.snapshot.baseline)
    assert doomed not in session.selection
    assert [item.display_order for item in session.snapshot.current] == [1, 2, 3, 4]
    with pytest.raises(CatalogItemNotFoundError):
        session.snapshot.get(doomed)


@pytest.mark.asyncio
async def test_sponsorship_status_for_loaded_item(gateway_factory, make_item, observability) -> None:
    item = make_item(1, sponsor_enabled=True, sponsor_name="Acme", is_active=False)
    session = await _session(gateway_factory([item]), observability)

    assert session.sponsorship_status(item.id) is SponsorshipStatus.DISABLED
    assert session.sponsorship_expiring(item.id) is False


@pytest.mark.asyncio
async def test_initial_load_failure_propagates(gateway_factory, five_items, observability) -> None:
    gateway = gateway_factory(five_items)
    gateway.fail_reads = True

    with pytest.raises(CatalogReadError):
        await _session(gateway, observability)
