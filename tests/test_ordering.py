from __future__ import annotations

import pytest

from taskboard.errors import StaleOrder
from taskboard.ordering import reconcile_move


def test_same_container_move_forward() -> None:
  res = reconcile_move("a", "L1", 0, ["a", "b", "c"], "L1", 2, ["a", "b", "c"])
  assert res.same_container is True
  assert res.src_order == ["b", "c", "a"]
  assert res.des_order == res.src_order


def test_same_container_move_backward() -> None:
  res = reconcile_move("c", "L1", 2, ["a", "b", "c"], "L1", 0, ["a", "b", "c"])
  assert res.src_order == ["c", "a", "b"]


def test_same_position_is_a_noop() -> None:
  res = reconcile_move("b", "L1", 1, ["a", "b", "c"], "L1", 1, ["a", "b", "c"])
  assert res.src_order == ["a", "b", "c"]


def test_cross_container_move() -> None:
  res = reconcile_move("c1", "L1", 0, ["c1"], "L2", 0, [])
  assert res.same_container is False
  assert res.src_order == []
  assert res.des_order == ["c1"]


def test_cross_container_insert_in_middle() -> None:
  res = reconcile_move("x", "L1", 1, ["w", "x"], "L2", 1, ["a", "b"])
  assert res.src_order == ["w"]
  assert res.des_order == ["a", "x", "b"]


def test_cross_container_append_at_end() -> None:
  res = reconcile_move("x", "L1", 0, ["x"], "L2", 2, ["a", "b"])
  assert res.des_order == ["a", "b", "x"]


def test_inputs_are_not_mutated() -> None:
  src = ["a", "b"]
  des = ["c"]
  reconcile_move("a", "L1", 0, src, "L2", 0, des)
  assert src == ["a", "b"]
  assert des == ["c"]


def test_stale_source_index_is_rejected() -> None:
  with pytest.raises(StaleOrder):
    reconcile_move("a", "L1", 1, ["a", "b"], "L1", 0, ["a", "b"])


@pytest.mark.parametrize("src_index", [-1, 2, 10])
def test_source_index_out_of_bounds(src_index: int) -> None:
  with pytest.raises(StaleOrder):
    reconcile_move("a", "L1", src_index, ["a", "b"], "L2", 0, [])


def test_destination_index_out_of_bounds_same_container() -> None:
  # after removal only indices 0..1 are valid for a two-element remainder
  with pytest.raises(StaleOrder):
    reconcile_move("a", "L1", 0, ["a", "b", "c"], "L1", 3, ["a", "b", "c"])


def test_destination_index_out_of_bounds_cross_container() -> None:
  with pytest.raises(StaleOrder):
    reconcile_move("a", "L1", 0, ["a"], "L2", 2, ["x"])
  with pytest.raises(StaleOrder):
    reconcile_move("a", "L1", 0, ["a"], "L2", -1, ["x"])


def test_container_ids_compare_normalized() -> None:
  cid = "0f8fad5b-d9cb-469f-a165-70867728950e"
  res = reconcile_move("a", cid, 0, ["a", "b"], cid.upper(), 1, ["a", "b"])
  assert res.same_container is True
  assert res.src_order == ["b", "a"]
