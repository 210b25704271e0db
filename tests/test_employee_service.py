"""
Tests for EmployeeService outcomes and hypermedia shaping.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import EmailNotFoundException
from app.schemas.employee import (
    EmployeeCreateRequest,
    EmployeeUpdateRequest,
    ServiceStatus,
)
from app.services.employee_service import EmployeeService
from app.services.hypermedia import NoLinkBuilder

BASE = "http://testserver/api/v1"


def create(service, name, email, role=None):
    return service.new_employee(EmployeeCreateRequest(name=name, email=email, role=role))


class TestFindAll:

    def test_empty_store_returns_empty_collection(self, service):
        """Test that an empty store is a well-formed, empty collection"""
        collection = service.find_all()

        assert collection.embedded.employees == []
        assert collection.links["self"].href == f"{BASE}/employees"

    def test_each_item_has_self_and_collection_links(self, service):
        first = create(service, "Ann", "ann@x.com")
        create(service, "Bob", "bob@x.com")

        collection = service.find_all()

        assert [e.name for e in collection.embedded.employees] == ["Ann", "Bob"]
        item = collection.embedded.employees[0]
        assert item.links["self"].href == f"{BASE}/employees/{first.body.id}"
        assert item.links["employees"].href == f"{BASE}/employees"


class TestNewEmployee:

    def test_created_with_location(self, service):
        result = create(service, "Ann", "ann@x.com", "Clerk")

        assert result.status == ServiceStatus.CREATED
        assert result.body.id is not None
        assert result.location == f"{BASE}/employees/{result.body.id}"

    def test_created_employee_found_unchanged(self, service):
        created = create(service, "Ann", "ann@x.com", "Clerk").body

        found = service.find_by_id(created.id)

        assert found.status == ServiceStatus.FOUND
        assert found.body == created

    def test_duplicate_email_propagates(self, service):
        create(service, "Ann", "ann@x.com")

        with pytest.raises(IntegrityError):
            create(service, "Annette", "ann@x.com")


class TestFindById:

    def test_missing_is_absent(self, service):
        result = service.find_by_id(99999)

        assert result.status == ServiceStatus.NOT_FOUND
        assert result.is_absent
        assert result.body is None

    def test_id_beyond_column_range_is_absent(self, service):
        assert service.find_by_id(2**63).is_absent
        assert service.save(EmployeeUpdateRequest(name="Ghost"), 2**31).is_absent
        assert service.delete_by_id(2**63).is_absent


class TestFindByEmail:

    def test_found(self, service):
        created = create(service, "Ann", "ann@x.com").body

        model = service.find_by_email("ann@x.com")

        assert model.id == created.id
        assert model.links["self"].href == f"{BASE}/employees/{created.id}"

    def test_missing_raises_email_not_found(self, service):
        with pytest.raises(EmailNotFoundException) as exc_info:
            service.find_by_email("nobody@x.com")

        assert exc_info.value.status_code == 404
        assert exc_info.value.details["email"] == "nobody@x.com"


class TestSave:

    def test_save_reflects_mutated_fields(self, service):
        created = create(service, "Ann", "ann@x.com", "Clerk").body

        result = service.save(
            EmployeeUpdateRequest(name="Annie", email="annie@x.com", role="Manager"),
            created.id,
        )

        assert result.status == ServiceStatus.UPDATED
        found = service.find_by_id(created.id).body
        assert found.id == created.id
        assert (found.name, found.email, found.role) == ("Annie", "annie@x.com", "Manager")

    def test_save_keeps_fields_not_sent(self, service):
        created = create(service, "Ann", "ann@x.com", "Clerk").body

        service.save(EmployeeUpdateRequest(name="Annie"), created.id)

        found = service.find_by_id(created.id).body
        assert found.name == "Annie"
        assert found.email == "ann@x.com"
        assert found.role == "Clerk"

    def test_save_unknown_id_is_absent_and_creates_nothing(self, service):
        result = service.save(EmployeeUpdateRequest(name="Ghost"), 99999)

        assert result.status == ServiceStatus.NOT_FOUND
        assert service.find_all().embedded.employees == []


class TestDelete:

    def test_delete_then_find_is_absent(self, service):
        created = create(service, "Ann", "ann@x.com").body

        assert service.delete_by_id(created.id).status == ServiceStatus.DELETED
        assert service.find_by_id(created.id).is_absent

    def test_delete_unknown_is_absent_without_side_effects(self, service):
        create(service, "Ann", "ann@x.com")

        assert service.delete_by_id(99999).status == ServiceStatus.NOT_FOUND
        assert len(service.find_all().embedded.employees) == 1


class TestFindByNameStartingWith:

    def test_prefix_case_insensitive(self, service):
        for i, name in enumerate(["John", "JOE", "joanna", "Bjorn"]):
            create(service, name, f"user{i}@x.com")

        collection = service.find_by_name_starting_with("jo")

        assert [e.name for e in collection.embedded.employees] == ["John", "JOE", "joanna"]
        assert collection.links["self"].href == f"{BASE}/employees/search/by-name?prefix=jo"

    def test_no_match_is_empty_collection(self, service):
        create(service, "Ann", "ann@x.com")

        assert service.find_by_name_starting_with("zz").embedded.employees == []


class TestScenario:

    def test_create_rename_delete(self, service):
        """Ann is created, renamed to Annie, then deleted"""
        created = create(service, "Ann", "ann@x.com")
        employee_id = created.body.id

        assert service.find_by_id(employee_id).body.name == "Ann"

        service.save(EmployeeUpdateRequest(name="Annie"), employee_id)
        found = service.find_by_id(employee_id).body
        assert found.name == "Annie"
        assert found.id == employee_id

        service.delete_by_id(employee_id)
        assert service.find_by_id(employee_id).status == ServiceStatus.NOT_FOUND


def test_plain_shaping_without_links(db_session):
    """Test that the link builder can be swapped for link-free output"""
    service = EmployeeService(db_session, NoLinkBuilder())

    result = create(service, "Ann", "ann@x.com")

    assert result.status == ServiceStatus.CREATED
    assert result.body.links == {}
    assert result.location is None
    assert service.find_all().links == {}
