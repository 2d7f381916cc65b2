"""Unit tests for CustomerMemoryRepository."""

from __future__ import annotations

import threading
from datetime import date

import pytest

from modules.customers.repositories import CustomerMemoryRepository

pytestmark = pytest.mark.unit

ADDRESS = {
    "street": "Main Street",
    "town": "Portadown",
    "county": "Armagh",
    "postcode": "BT359JK",
}


@pytest.fixture()
def repo():
    return CustomerMemoryRepository()


class TestCustomerMemoryRepository:
    def test_create_assigns_increasing_ids(self, repo):
        a = repo.create({"first_name": "Gary", "last_name": "Steale"})
        b = repo.create({"first_name": "Andy", "last_name": "Steale"})
        assert (a.pk, b.pk) == (1, 2)

    def test_address_is_attached(self, repo):
        customer = repo.create(
            {"first_name": "Gary", "last_name": "Steale", "address": ADDRESS}
        )
        assert customer.current_address.town == "Portadown"

    def test_missing_address_reads_as_none(self, repo):
        customer = repo.create({"first_name": "Andy", "last_name": "Steale"})
        assert customer.current_address is None

    def test_update_replaces_row(self, repo):
        customer = repo.create(
            {"first_name": "Gary", "last_name": "Steale", "address": ADDRESS}
        )
        updated = repo.update(
            customer.pk,
            {
                "first_name": "Gary",
                "last_name": "Steale",
                "date_of_birth": date(1984, 3, 8),
                "address": None,
            },
        )
        assert updated.date_of_birth == date(1984, 3, 8)
        assert updated.current_address is None
        assert repo.get_by_id(customer.pk) is updated

    def test_update_missing(self, repo):
        assert repo.update(3, {"first_name": "A", "last_name": "B"}) is None

    def test_get_by_id_malformed(self, repo):
        assert repo.get_by_id("null") is None

    def test_delete_and_delete_all(self, repo):
        a = repo.create({"first_name": "Gary", "last_name": "Steale"})
        repo.create({"first_name": "Andy", "last_name": "Steale"})

        assert repo.delete(a.pk) is True
        assert repo.delete(a.pk) is False
        assert repo.delete_all() == 1
        assert len(repo) == 0

    def test_ids_not_reused_after_delete(self, repo):
        a = repo.create({"first_name": "Gary", "last_name": "Steale"})
        repo.delete(a.pk)
        b = repo.create({"first_name": "Gary", "last_name": "Steale"})
        assert b.pk > a.pk

    def test_list_filters_and_name_lookups(self, repo):
        repo.create({"first_name": "Gary", "last_name": "Steale"})
        repo.create({"first_name": "Andy", "last_name": "Steale"})

        assert [c.first_name for c in repo.list({"last_name": "Steale"})] == [
            "Gary",
            "Andy",
        ]
        assert repo.get_by_name("Andy", "Steale").pk == 2
        assert repo.get_by_name("Andy", "Kolli") is None
        assert len(repo.find_by_first_name("Gary")) == 1


class TestLockName:
    def test_same_pair_blocks_until_released(self, repo):
        entered = threading.Event()

        def contend():
            with repo.lock_name(" gary", "STEALE "):
                entered.set()

        with repo.lock_name("Gary", "Steale"):
            worker = threading.Thread(target=contend)
            worker.start()
            assert not entered.wait(0.1)

        assert entered.wait(2)
        worker.join()

    def test_other_pairs_do_not_block(self, repo):
        with repo.lock_name("Gary", "Steale"):
            with repo.lock_name("Andy", "Steale"):
                repo.create({"first_name": "Andy", "last_name": "Steale"})
        assert len(repo) == 1
