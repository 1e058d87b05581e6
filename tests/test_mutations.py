import copy

import pytest

from xbelsync.errors import AddressNotFound, NotAFolder, RootNotSupported
from xbelsync.model import Bookmark, Folder, IdAddress, PathAddress, Placement, Root
from xbelsync.xbel import ReservingIdMinter, Xbel, describe_item


def _ids(xbel):
    return [i.id for i in xbel]


def test_add_to_empty_tree_under_root_gets_id_1():
    xbel = Xbel()
    b = xbel.add_bookmark(Root(), "https://www.example_bank.com", "Example bank")
    assert b.id == "1"
    assert xbel.items == [Bookmark.new("1", "https://www.example_bank.com", "Example bank")]


def test_two_adds_against_same_snapshot_mint_the_same_id():
    snapshot = Xbel()
    first = snapshot.new_bookmark("https://a.example/", "A")
    second = snapshot.new_bookmark("https://b.example/", "B")
    assert first.id == "1"
    assert second.id == "1"

    snapshot.add(Root(), first)
    snapshot.add(Root(), second)
    assert _ids(snapshot) == ["1", "1"]


def test_reserving_minter_never_repeats_an_id():
    xbel = Xbel(minter=ReservingIdMinter())
    first = xbel.new_bookmark("https://a.example/", "A")
    second = xbel.new_bookmark("https://b.example/", "B")
    assert (first.id, second.id) == ("1", "2")


def test_new_id_is_highest_plus_one(bank_xbel):
    b = bank_xbel.add_bookmark(Root(), "https://new.example/", "New")
    assert b.id == "6"
    assert bank_xbel.items[-1] is b


def test_add_before_id(bank_xbel):
    b = bank_xbel.add_bookmark(IdAddress(3, Placement.BEFORE), "https://new/", "New")
    bank = bank_xbel.items[0].items[0]
    assert [i.id for i in bank.items] == [b.id, "3", "4"]
    assert _ids(bank_xbel) == ["1", "2", "6", "3", "4", "5"]


def test_add_after_id(bank_xbel):
    bank_xbel.add_bookmark(IdAddress(3, Placement.AFTER), "https://new/", "New")
    assert _ids(bank_xbel) == ["1", "2", "3", "6", "4", "5"]


def test_add_after_last_sibling(bank_xbel):
    bank_xbel.add_bookmark(IdAddress(5, Placement.AFTER), "https://new/", "New")
    assert [i.id for i in bank_xbel.items[0].items] == ["2", "5", "6"]


def test_add_append_into_folder(bank_xbel):
    bank_xbel.add_bookmark(IdAddress(2, Placement.APPEND), "https://new/", "New")
    assert [i.id for i in bank_xbel.items[0].items[0].items] == ["3", "4", "6"]


def test_add_prepend_into_folder(bank_xbel):
    bank_xbel.add_bookmark(IdAddress(2, Placement.PREPEND), "https://new/", "New")
    assert [i.id for i in bank_xbel.items[0].items[0].items] == ["6", "3", "4"]


def test_explicit_placement_overrides_address(bank_xbel):
    bank_xbel.add_bookmark(IdAddress(2), "https://new/", "New", placement=Placement.BEFORE)
    assert [i.id for i in bank_xbel.items[0].items] == ["6", "2", "5"]


@pytest.mark.parametrize("placement", [Placement.APPEND, Placement.PREPEND])
def test_add_into_bookmark_is_not_a_folder(bank_xbel, placement):
    before = copy.deepcopy(bank_xbel.items)
    with pytest.raises(NotAFolder) as e:
        bank_xbel.add_bookmark(IdAddress(3, placement), "https://new/", "New")
    assert e.value.item_id == "3"
    assert bank_xbel.items == before


def test_add_under_path_appends_to_folder(bank_xbel):
    bank_xbel.add_bookmark(PathAddress("admin/bank"), "https://new/", "New")
    assert [i.id for i in bank_xbel.items[0].items[0].items] == ["3", "4", "6"]


def test_add_under_path_to_bookmark_is_not_a_folder(bank_xbel):
    bank_xbel.items[0].items[1].title.text = "Bank 3"
    with pytest.raises(NotAFolder):
        bank_xbel.add_bookmark(PathAddress("admin/Bank 3"), "https://new/", "New")
    assert bank_xbel.count() == 5


def test_add_unknown_address_leaves_tree_untouched(bank_xbel):
    before = copy.deepcopy(bank_xbel.items)
    with pytest.raises(AddressNotFound):
        bank_xbel.add_bookmark(IdAddress(42, Placement.BEFORE), "https://new/", "New")
    assert bank_xbel.items == before


def test_add_folder_item(bank_xbel):
    bank_xbel.add(Root(), Folder.new("10", "news"))
    bank_xbel.add_bookmark(PathAddress("news"), "https://news.example/", "News")
    assert bank_xbel.items[-1].items[0].id == "11"


def test_remove_by_path_drops_whole_subtree(bank_xbel):
    removed = bank_xbel.remove(PathAddress("admin/bank"))
    assert removed.id == "2"
    assert _ids(bank_xbel) == ["1", "5"]


def test_remove_by_id(bank_xbel):
    removed = bank_xbel.remove(IdAddress(4))
    assert removed.href == "https://www.bank2.com"
    assert _ids(bank_xbel) == ["1", "2", "3", "5"]


def test_remove_root_is_not_supported(bank_xbel):
    with pytest.raises(RootNotSupported):
        bank_xbel.remove(Root())
    assert bank_xbel.count() == 5


def test_remove_unknown_address(bank_xbel):
    with pytest.raises(AddressNotFound):
        bank_xbel.remove(PathAddress("admin/nothing"))


@pytest.mark.parametrize("address", [IdAddress(2), PathAddress("admin/bank"), IdAddress(5)])
def test_dry_run_remove_is_a_no_op(bank_xbel, address):
    count, highest = bank_xbel.count(), bank_xbel.highest_id()
    before = copy.deepcopy(bank_xbel.items)

    item = bank_xbel.remove(address, dry_run=True)

    assert item is not None
    assert bank_xbel.count() == count
    assert bank_xbel.highest_id() == highest
    assert bank_xbel.items == before


def test_remove_highest_changes_next_id(bank_xbel):
    bank_xbel.remove(IdAddress(5))
    assert bank_xbel.new_bookmark("https://x/", "x").id == "5"


def test_describe_item(bank_xbel):
    assert describe_item(bank_xbel.items[0]) == "folder [1] 'admin' (4 nested items)"
    assert describe_item(bank_xbel.items[0].items[1]) == "bookmark [5] 'My current bank U+1F929' -> https://www.bank3.com"
