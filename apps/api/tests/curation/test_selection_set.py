from uuid import uuid4

from rewardops_api.domain.curation import SelectionSet


def test_toggle_flips_membership() -> None:
    selection = SelectionSet()
    item_id = uuid4()

    assert selection.toggle(item_id) is True
    assert item_id in selection
    assert selection.toggle(item_id) is False
    assert not selection


def test_toggle_all_selects_visible_then_clears_them() -> None:
    hidden = uuid4()
    visible = [uuid4(), uuid4()]
    selection = SelectionSet([hidden])

    selection.toggle_all(visible)
    assert selection.ids == {hidden, *visible}

    selection.toggle_all(visible)
    assert selection.ids == {hidden}


def test_toggle_all_with_partial_selection_selects_rest() -> None:
    visible = [uuid4(), uuid4(), uuid4()]
    selection = SelectionSet([visible[0]])

    selection.toggle_all(visible)

    assert len(selection) == 3


def test_hidden_selection_survives_filtering() -> None:
    kept, hidden = uuid4(), uuid4()
    selection = SelectionSet([kept, hidden])

    assert selection.visible([kept]) == [kept]
    assert selection.hidden_count([kept]) == 1
    assert hidden in selection


def test_retain_drops_ids_that_no_longer_exist() -> None:
    present, gone = uuid4(), uuid4()
    selection = SelectionSet([present, gone])

    selection.retain([present])

    assert selection.ids == frozenset({present})


def test_ids_is_a_snapshot() -> None:
    selection = SelectionSet([uuid4()])
    frozen = selection.ids

    selection.clear()

    assert len(frozen) == 1
    assert len(selection) == 0
