"""
Product Catalog Backend — Product Store Unit Tests
====================================================

Tests for ProductStore identity, ordering, filtering and pagination rules.
No HTTP involved.
"""

import threading

import pytest

from app.exceptions import NotFoundError
from app.schemas.product import ProductDraft
from app.services.product_store import ProductStore


def make_draft(name="Mouse", category="Electronics", price=19.99, **extra):
    return ProductDraft(
        name=name,
        description=f"{name} description",
        price=price,
        category=category,
        inStock=True,
        **extra,
    )


class TestSeed:

    def test_seeded_store_holds_laptop(self, store):
        page = store.list()

        assert page.total == 1
        laptop = page.data[0]
        assert laptop.name == "Laptop"
        assert laptop.price == 999.99
        assert laptop.category == "Electronics"
        assert laptop.inStock is True
        assert laptop.id

    def test_empty_store(self):
        page = ProductStore().list()
        assert page.total == 0
        assert page.data == []


class TestCreateAndGet:

    def test_create_assigns_unique_ids(self, store):
        ids = {store.create(make_draft(name=f"P{i}")).id for i in range(50)}
        ids.add(store.list().data[0].id)
        assert len(ids) == 51

    def test_created_product_retrievable_by_id(self, store):
        created = store.create(make_draft())

        fetched = store.get(created.id)
        assert fetched == created
        assert store.get(created.id).id == created.id

    def test_create_appends_at_end(self, store):
        created = store.create(make_draft())
        assert store.list().data[-1].id == created.id

    def test_create_keeps_extra_fields(self, store):
        created = store.create(make_draft(sku="M-1"))
        assert store.get(created.id).extra_fields == {"sku": "M-1"}

    def test_get_unknown_id_raises(self, store):
        with pytest.raises(NotFoundError, match="Product not found"):
            store.get("does-not-exist")

    def test_returned_products_are_copies(self, store):
        created = store.create(make_draft())
        created.name = "Changed outside"
        assert store.get(created.id).name == "Mouse"


class TestUpdate:

    def test_update_replaces_fields_keeps_id(self, store):
        created = store.create(make_draft())

        updated = store.update(created.id, make_draft(name="Mouse v2", price=24.99))

        assert updated.id == created.id
        assert updated.name == "Mouse v2"
        assert updated.price == 24.99
        assert store.get(created.id).price == 24.99

    def test_update_ignores_id_in_draft(self, store):
        created = store.create(make_draft())
        draft = make_draft()
        # A draft cannot normally carry an id; force one through the extras map
        draft.model_extra["id"] = "hijack"

        updated = store.update(created.id, draft)

        assert updated.id == created.id
        with pytest.raises(NotFoundError):
            store.get("hijack")

    def test_update_keeps_position(self, store):
        first = store.create(make_draft(name="A"))
        store.create(make_draft(name="B"))

        store.update(first.id, make_draft(name="A2"))

        names = [p.name for p in store.list().data]
        assert names == ["Laptop", "A2", "B"]

    def test_update_merges_extra_fields(self, store):
        created = store.create(make_draft(sku="M-1", color="black"))

        updated = store.update(created.id, make_draft(color="white"))

        assert updated.extra_fields == {"sku": "M-1", "color": "white"}

    def test_update_unknown_id_raises(self, store):
        with pytest.raises(NotFoundError):
            store.update("does-not-exist", make_draft())


class TestDelete:

    def test_delete_then_get_is_not_found(self, store):
        created = store.create(make_draft())

        store.delete(created.id)

        with pytest.raises(NotFoundError):
            store.get(created.id)
        assert all(p.id != created.id for p in store.list().data)

    def test_delete_unknown_id_raises(self, store):
        with pytest.raises(NotFoundError):
            store.delete("does-not-exist")

    def test_delete_twice_raises(self, store):
        created = store.create(make_draft())
        store.delete(created.id)
        with pytest.raises(NotFoundError):
            store.delete(created.id)


class TestList:

    def test_category_filter_is_case_insensitive(self, store):
        store.create(make_draft(name="Chair", category="Furniture"))

        page = store.list(category="electronics")

        assert page.total == 1
        assert [p.name for p in page.data] == ["Laptop"]
        assert store.list(category="FURNITURE").data[0].name == "Chair"

    def test_category_filter_is_exact_match(self, store):
        assert store.list(category="Electro").total == 0

    def test_empty_category_disables_filter(self, store):
        store.create(make_draft(category="Furniture"))
        assert store.list(category="").total == 2

    def test_total_counts_before_pagination(self, store):
        for i in range(11):
            store.create(make_draft(name=f"P{i}"))

        page = store.list(page=2, limit=5)

        assert page.total == 12
        assert page.page == 2
        assert page.limit == 5
        assert [p.name for p in page.data] == ["P4", "P5", "P6", "P7", "P8"]

    def test_page_past_end_is_empty(self, store):
        page = store.list(page=10, limit=5)
        assert page.total == 1
        assert page.data == []

    def test_defaults(self, store):
        page = store.list()
        assert page.page == 1
        assert page.limit == 10

    def test_configured_default_limit(self):
        small = ProductStore.seeded(default_page_limit=3)
        for i in range(5):
            small.create(make_draft(name=f"P{i}"))
        assert small.list().limit == 3
        assert len(small.list().data) == 3

    @pytest.mark.parametrize("page, limit", [(0, 0), (-1, -5), (None, None)])
    def test_non_positive_values_fall_back_to_defaults(self, store, page, limit):
        result = store.list(page=page, limit=limit)
        assert result.page == 1
        assert result.limit == 10
        assert len(result.data) == 1

    @pytest.mark.parametrize("limit", [1, 2, 3, 4, 7, 20])
    def test_pages_reconstruct_filtered_sequence(self, store, limit):
        for i in range(9):
            store.create(make_draft(name=f"E{i}", category="Electronics"))
            store.create(make_draft(name=f"F{i}", category="Furniture"))
        expected = [p.id for p in store.list(category="electronics", limit=100).data]

        collected = []
        page_number = 1
        while True:
            page = store.list(category="Electronics", page=page_number, limit=limit)
            assert len(page.data) <= limit
            if not page.data:
                break
            collected.extend(p.id for p in page.data)
            page_number += 1

        assert collected == expected
        assert len(expected) == 10


class TestConcurrency:

    def test_parallel_creates_keep_every_product(self, store):
        def worker(offset):
            for i in range(25):
                store.create(make_draft(name=f"T{offset}-{i}"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        page = store.list(limit=1000)
        assert page.total == 201
        assert len({p.id for p in page.data}) == 201
