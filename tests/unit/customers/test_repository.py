"""Unit tests for CustomerDjangoRepository (ORM-backed)."""

from __future__ import annotations

from datetime import date

import pytest
from django.db import connection

from modules.customers.models import Address, Customer, CustomerNameLock
from modules.customers.repositories import (
    CustomerDjangoRepository,
    CustomerMemoryRepository,
    ICustomerRepository,
)
from modules.posts.repositories import IPostRepository

pytestmark = pytest.mark.unit

ADDRESS = {
    "street": "High Street",
    "town": "Belfast",
    "county": "India",
    "postcode": "BT893PY",
}


@pytest.fixture()
def repo():
    return CustomerDjangoRepository()


@pytest.fixture()
def raja(repo):
    return repo.create(
        {
            "first_name": "Raja",
            "last_name": "Kolli",
            "date_of_birth": date(1982, 1, 10),
            "address": ADDRESS,
        }
    )


class TestCreate:
    def test_create_with_address(self, raja):
        assert raja.pk is not None
        assert raja.address.postcode == "BT893PY"
        assert Address.objects.filter(customer=raja).exists()

    def test_create_without_address(self, repo):
        customer = repo.create(
            {"first_name": "Andy", "last_name": "Steale", "address": None}
        )
        assert customer.current_address is None
        assert customer.date_of_birth is None
        assert not Address.objects.exists()


class TestLookups:
    def test_get_by_id(self, repo, raja):
        assert repo.get_by_id(raja.pk).first_name == "Raja"

    def test_get_by_id_missing(self, repo):
        assert repo.get_by_id(999) is None

    @pytest.mark.parametrize("bad_id", ["null", "abc", None])
    def test_get_by_id_malformed(self, repo, bad_id):
        assert repo.get_by_id(bad_id) is None

    def test_get_by_name_is_exact(self, repo, raja):
        assert repo.get_by_name("Raja", "Kolli") == raja
        assert repo.get_by_name("Raja", "Rooney") is None

    def test_find_by_first_name(self, repo, raja):
        repo.create({"first_name": "Raja", "last_name": "Steale"})
        assert len(repo.find_by_first_name("Raja")) == 2
        assert repo.find_by_first_name("Wayne") == []

    def test_list_with_filters(self, repo, raja):
        repo.create({"first_name": "Andy", "last_name": "Steale"})
        assert list(repo.list({"last_name": "Steale"}))[0].first_name == "Andy"
        assert repo.list().count() == 2


class TestUpdate:
    def test_update_fields_and_address(self, repo, raja):
        updated = repo.update(
            raja.pk,
            {
                "first_name": "Wayne",
                "last_name": "Rooney",
                "date_of_birth": date(1985, 10, 24),
                "address": {**ADDRESS, "town": "Liverpool"},
            },
        )
        assert updated.first_name == "Wayne"
        assert updated.address.town == "Liverpool"
        assert Address.objects.count() == 1

    def test_update_without_address_deletes_it(self, repo, raja):
        updated = repo.update(
            raja.pk, {"first_name": "Raja", "last_name": "Kolli", "address": None}
        )
        assert updated.current_address is None
        assert not Address.objects.exists()

    def test_update_adds_address(self, repo):
        andy = repo.create({"first_name": "Andy", "last_name": "Steale"})
        updated = repo.update(
            andy.pk, {"first_name": "Andy", "last_name": "Steale", "address": ADDRESS}
        )
        assert updated.address.street == "High Street"

    def test_update_missing_returns_none(self, repo):
        assert repo.update(999, {"first_name": "A", "last_name": "B"}) is None


class TestDelete:
    def test_delete_cascades_to_address(self, repo, raja):
        assert repo.delete(raja.pk) is True
        assert not Customer.objects.exists()
        assert not Address.objects.exists()

    def test_delete_missing(self, repo):
        assert repo.delete(999) is False

    def test_delete_all(self, repo, raja):
        repo.create({"first_name": "Andy", "last_name": "Steale"})
        assert repo.delete_all() == 2
        assert repo.list().count() == 0

    def test_ids_are_not_reused_within_a_run(self, repo, raja):
        repo.delete(raja.pk)
        andy = repo.create({"first_name": "Andy", "last_name": "Steale"})
        assert andy.pk > raja.pk


class TestLockName:
    def test_creates_one_row_per_pair(self, repo):
        for first, last in [("Gary", "Steale"), (" gary", "STEALE "), ("Andy", "Steale")]:
            with repo.lock_name(first, last):
                pass
        assert CustomerNameLock.objects.count() == 2

    def test_block_runs_inside_a_transaction(self, repo):
        with repo.lock_name("Gary", "Steale"):
            assert connection.in_atomic_block
            assert CustomerNameLock.objects.filter(
                name_key=CustomerNameLock.key_for("Gary", "Steale")
            ).exists()


class TestContract:
    def test_customer_repositories_expose_no_generic_save(self):
        assert "save" not in ICustomerRepository.__abstractmethods__
        assert not hasattr(CustomerDjangoRepository, "save")
        assert not hasattr(CustomerMemoryRepository, "save")

    def test_post_repository_keeps_save(self):
        assert "save" in IPostRepository.__abstractmethods__
