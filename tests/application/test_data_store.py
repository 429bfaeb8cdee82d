"""Tests for the DataStore: hydration, mutations and persistence policy.

Uses the in-memory fake repository — no file I/O.
"""

import pytest

from swiftpos.application.data_store import DataStore
from swiftpos.domain.exceptions import ValidationError
from swiftpos.domain.model.catalog import default_products
from swiftpos.domain.model.sale import SoldItem
from swiftpos.domain.model.snapshot import PosSnapshot
from swiftpos.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeSnapshotRepository, FixedClock, SequentialIds


def _setup(
    stored: PosSnapshot | None = None, hydrate: bool = True
) -> tuple[DataStore, FakeSnapshotRepository, FixedClock]:
    repo = FakeSnapshotRepository(stored)
    clock = FixedClock()
    store = DataStore(repo, clock=clock, id_factory=SequentialIds("gen"))
    if hydrate:
        store.hydrate()
    return store, repo, clock


def _espresso_item(qty: int = 1) -> SoldItem:
    return SoldItem(
        product_id="sample-espresso",
        product_code="ESP-1001",
        name="Espresso Shot",
        quantity=Quantity(qty),
        price=Money.of("3.00"),
    )


def _record(store: DataStore, qty: int = 1) -> str:
    subtotal = Money.of("3.00") * qty
    return store.record_sale(
        sold_items=[_espresso_item(qty)],
        subtotal=subtotal,
        tax=Money.zero(),
        total_amount=subtotal,
    )


class TestHydration:

    def test_not_ready_before_hydrate(self):
        store, _, _ = _setup(hydrate=False)
        assert store.data_ready is False
        assert store.products == []
        assert store.sales == []

    def test_seeds_defaults_when_nothing_stored(self):
        store, _, _ = _setup()
        assert store.data_ready is True
        assert [p.id for p in store.products] == [p.id for p in default_products()]
        assert store.sales == []

    def test_seeds_defaults_when_document_is_corrupt(self, caplog):
        repo = FakeSnapshotRepository()
        repo.fail_loads = True
        store = DataStore(repo)
        store.hydrate()
        assert store.data_ready is True
        assert len(store.products) == 3
        assert "Failed to parse stored POS data" in caplog.text

    def test_uses_stored_products(self):
        seeded, _, _ = _setup()
        seeded.add_product("LAT-1", "Latte", Money.of("5.00"), 10)
        stored = PosSnapshot(products=seeded.products, sales=[])
        store, _, _ = _setup(stored)
        assert [p.code for p in store.products][-1] == "LAT-1"
        assert len(store.products) == 4

    def test_empty_stored_product_list_falls_back_to_defaults(self):
        store, _, _ = _setup(PosSnapshot(products=[], sales=[]))
        assert len(store.products) == 3

    def test_hydration_does_not_write(self):
        _, repo, _ = _setup()
        assert repo.saves == 0

    def test_second_hydrate_is_a_no_op(self):
        store, repo, _ = _setup()
        store.adjust_stock("sample-espresso", -1)
        store.hydrate()
        assert repo.loads == 1
        assert store.get_product("sample-espresso").stock_quantity == 29

    def test_round_trip_reproduces_products_and_sales(self):
        store, repo, clock = _setup()
        store.add_product("LAT-1", "Latte", Money.of("5.00"), 10)
        first = _record(store, 1)
        clock.advance(60)
        second = _record(store, 2)

        restored = DataStore(repo)
        restored.hydrate()

        assert restored.products == store.products
        assert restored.sales == store.sales
        assert [s.id for s in restored.sales] == [second, first]


class TestAddProduct:

    def test_assigns_fresh_id(self):
        store, _, _ = _setup()
        product_id = store.add_product("LAT-1", "Latte", Money.of("5.00"), 10)
        assert product_id == "gen-1"
        assert store.get_product(product_id).name == "Latte"

    def test_appends_to_end(self):
        store, _, _ = _setup()
        store.add_product("LAT-1", "Latte", Money.of("5.00"), 10)
        assert store.products[-1].code == "LAT-1"

    def test_persists_full_snapshot(self):
        store, repo, _ = _setup()
        store.add_product("LAT-1", "Latte", Money.of("5.00"), 10)
        assert len(repo.stored.products) == 4

    def test_generated_ids_are_unique_by_default(self):
        store = DataStore(FakeSnapshotRepository())
        store.hydrate()
        a = store.add_product("A-1", "A", Money.of("1"), 1)
        b = store.add_product("B-1", "B", Money.of("1"), 1)
        assert a != b

    # Product-code uniqueness is enforced by the store itself, not only
    # by the inventory form.
    def test_duplicate_code_rejected_by_store(self):
        store, repo, _ = _setup()
        with pytest.raises(ValidationError, match="already exists"):
            store.add_product(" esp-1001 ", "Another Espresso", Money.of("3.00"), 1)
        assert len(store.products) == 3
        assert repo.saves == 0


class TestUpdateProduct:

    def test_merges_partial_fields(self):
        store, repo, _ = _setup()
        store.update_product("sample-bagel", price=Money.of("2.50"))
        bagel = store.get_product("sample-bagel")
        assert bagel.price == Money.of("2.50")
        assert bagel.name == "Fresh Bagel"
        assert repo.stored.products[2].price == Money.of("2.50")

    def test_unknown_id_is_a_no_op(self):
        store, repo, _ = _setup()
        store.update_product("missing", name="Ghost")
        assert repo.saves == 0
        assert all(p.name != "Ghost" for p in store.products)

    def test_code_clash_with_other_product_rejected(self):
        store, _, _ = _setup()
        with pytest.raises(ValidationError, match="already exists"):
            store.update_product("sample-bagel", code="CAP-2002")

    def test_keeping_own_code_is_fine(self):
        store, _, _ = _setup()
        store.update_product("sample-bagel", code="bg-3003", name="Bagel")
        assert store.get_product("sample-bagel").code == "bg-3003"

    def test_negative_stock_rejected(self):
        store, _, _ = _setup()
        with pytest.raises(ValidationError):
            store.update_product("sample-bagel", stock_quantity=-1)
        assert store.get_product("sample-bagel").stock_quantity == 50


class TestDeleteProduct:

    def test_removes_product(self):
        store, repo, _ = _setup()
        store.delete_product("sample-bagel")
        assert store.get_product("sample-bagel") is None
        assert len(repo.stored.products) == 2

    def test_sales_keep_their_copy(self):
        store, _, _ = _setup()
        sale_id = _record(store)
        store.delete_product("sample-espresso")
        item = store.find_sale(sale_id).sold_items[0]
        assert item.name == "Espresso Shot"
        assert item.product_code == "ESP-1001"

    def test_unknown_id_is_a_no_op(self):
        store, repo, _ = _setup()
        store.delete_product("missing")
        assert len(store.products) == 3
        assert repo.saves == 0


class TestAdjustStock:

    def test_espresso_scenario(self):
        store, _, _ = _setup()
        for _ in range(3):
            store.adjust_stock("sample-espresso", -5)
        assert store.get_product("sample-espresso").stock_quantity == 15

        store.adjust_stock("sample-espresso", -20)
        assert store.get_product("sample-espresso").stock_quantity == 0

    @pytest.mark.parametrize("start", [0, 1, 5, 30])
    def test_clamps_at_exactly_zero(self, start):
        store, _, _ = _setup()
        product_id = store.add_product("X-1", "Thing", Money.of("1.00"), start)
        store.adjust_stock(product_id, -(start + 3))
        assert store.get_product(product_id).stock_quantity == 0

    def test_stock_never_negative_after_updates_and_adjustments(self):
        store, _, _ = _setup()
        product_id = store.add_product("X-1", "Thing", Money.of("1.00"), 4)
        for delta in (-3, 10, -20, 2, -1, -1, -1):
            store.adjust_stock(product_id, delta)
            assert store.get_product(product_id).stock_quantity >= 0
        store.update_product(product_id, stock_quantity=0)
        store.adjust_stock(product_id, -1)
        assert store.get_product(product_id).stock_quantity == 0

    def test_persists_result(self):
        store, repo, _ = _setup()
        store.adjust_stock("sample-espresso", 5)
        assert repo.stored.products[0].stock_quantity == 35

    def test_unknown_id_is_a_no_op(self):
        store, repo, _ = _setup()
        store.adjust_stock("missing", 5)
        assert repo.saves == 0


class TestRecordSale:

    def test_returns_id_and_prepends(self):
        store, _, clock = _setup()
        first = _record(store)
        clock.advance(1)
        second = _record(store)
        assert [s.id for s in store.sales] == [second, first]

    def test_identical_payloads_make_distinct_sales(self):
        store, _, _ = _setup()
        a = _record(store)
        b = _record(store)
        sale_a, sale_b = store.find_sale(a), store.find_sale(b)
        assert a != b
        assert sale_a.date != sale_b.date
        assert sale_b.date > sale_a.date
        assert len(store.sales) == 2

    def test_timestamp_comes_from_clock(self):
        store, _, clock = _setup()
        sale_id = _record(store)
        assert store.find_sale(sale_id).date == clock.now

    def test_persists_immediately(self):
        store, repo, _ = _setup()
        sale_id = _record(store)
        assert repo.stored.sales[0].id == sale_id

    def test_prefers_products_written_by_another_writer(self):
        store, repo, _ = _setup()
        store.adjust_stock("sample-espresso", -1)  # in-memory and stored: 29

        # Another process rewrites the product list in the meantime.
        other = DataStore(repo)
        other.hydrate()
        other.add_product("LAT-1", "Latte", Money.of("5.00"), 10)

        _record(store)

        assert [p.code for p in repo.stored.products][-1] == "LAT-1"
        assert len(repo.stored.sales) == 1
        # The in-memory product list is not replaced.
        assert len(store.products) == 3

    def test_falls_back_to_memory_when_re_read_fails(self):
        store, repo, _ = _setup()
        repo.fail_loads = True
        _record(store)
        assert len(repo.stored.products) == 3
        assert len(repo.stored.sales) == 1

    def test_before_hydration_nothing_is_written(self):
        store, repo, _ = _setup(hydrate=False)
        _record(store)
        assert repo.saves == 0
        assert repo.loads == 0


class TestStorageFailures:

    def test_write_failure_is_logged_and_state_kept(self, caplog):
        store, repo, _ = _setup()
        repo.fail_saves = True
        store.adjust_stock("sample-espresso", -10)
        assert store.get_product("sample-espresso").stock_quantity == 20
        assert "Failed to save POS data" in caplog.text

    def test_failed_write_is_not_retried(self):
        store, repo, _ = _setup()
        repo.fail_saves = True
        store.adjust_stock("sample-espresso", -10)
        repo.fail_saves = False
        assert repo.stored is None

        # The next mutation writes the whole state again.
        store.adjust_stock("sample-espresso", -1)
        assert repo.stored.products[0].stock_quantity == 19
