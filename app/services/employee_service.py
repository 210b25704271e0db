"""
Employee service.

Mediates between the HTTP layer and the employee repository: existence
checks, entity to DTO mapping and not-found semantics. Link shaping is
delegated to an EmployeeLinkBuilder.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import EmailNotFoundException
from app.crud import employee as employee_crud
from app.models.employee import Employee
from app.schemas.employee import (
    EmployeeCollection,
    EmployeeCreateRequest,
    EmployeeDTO,
    EmployeeModel,
    EmployeeUpdateRequest,
    ServiceResponse,
    ServiceStatus,
)
from app.services.hypermedia import EmployeeLinkBuilder

logger = logging.getLogger(__name__)


def to_dto(employee: Employee) -> EmployeeDTO:
    return EmployeeDTO.model_validate(employee)


class EmployeeService:
    """
    Application-facing employee operations.

    One instance per request; no state is kept between calls. Storage
    errors from the repository propagate unchanged.
    """

    def __init__(self, db: Session, links: EmployeeLinkBuilder):
        self.db = db
        self.links = links

    def _model(self, employee: Employee) -> EmployeeModel:
        return self.links.to_model(to_dto(employee))

    def _collection(self, employees: List[Employee], **kwargs) -> EmployeeCollection:
        return self.links.to_collection([to_dto(e) for e in employees], **kwargs)

    def find_all(self) -> EmployeeCollection:
        """Every employee with links, wrapped in one collection."""
        return self._collection(employee_crud.get_all(self.db))

    def new_employee(self, request: EmployeeCreateRequest) -> ServiceResponse:
        """Store a new employee; the database assigns the id."""
        employee = employee_crud.create(self.db, request)
        logger.info(f"Created employee {employee.id}")

        body = self._model(employee)
        return ServiceResponse(
            status=ServiceStatus.CREATED,
            body=body,
            location=body.links["self"].href if "self" in body.links else None,
        )

    def find_by_id(self, employee_id: int) -> ServiceResponse:
        employee = employee_crud.get_by_id(self.db, employee_id)
        if not employee:
            logger.info(f"Employee {employee_id} not found")
            return ServiceResponse(status=ServiceStatus.NOT_FOUND)

        return ServiceResponse(status=ServiceStatus.FOUND, body=self._model(employee))

    def find_by_email(self, email: str) -> EmployeeModel:
        """
        Look up an employee by exact email.

        Raises:
            EmailNotFoundException: If no employee has this email
        """
        employee = employee_crud.get_by_email(self.db, email)
        if not employee:
            raise EmailNotFoundException(email)

        return self._model(employee)

    def save(self, request: EmployeeUpdateRequest, employee_id: int) -> ServiceResponse:
        """
        Overwrite the fields sent in `request` on an existing employee.

        An unknown id yields NOT_FOUND; rows are only ever created by
        new_employee so ids stay database-assigned.
        """
        employee = employee_crud.get_by_id(self.db, employee_id)
        if not employee:
            logger.info(f"Cannot update employee {employee_id}: not found")
            return ServiceResponse(status=ServiceStatus.NOT_FOUND)

        changes = request.model_dump(exclude_unset=True)
        employee = employee_crud.update(self.db, employee, changes)
        logger.info(f"Updated employee {employee_id}: {sorted(changes)}")

        return ServiceResponse(status=ServiceStatus.UPDATED, body=self._model(employee))

    def delete_by_id(self, employee_id: int) -> ServiceResponse:
        deleted = employee_crud.delete(self.db, employee_id)
        if not deleted:
            logger.info(f"Cannot delete employee {employee_id}: not found")
            return ServiceResponse(status=ServiceStatus.NOT_FOUND)

        logger.info(f"Deleted employee {employee_id}")
        return ServiceResponse(status=ServiceStatus.DELETED)

    def find_by_name_starting_with(self, prefix: str) -> EmployeeCollection:
        """Employees whose name starts with `prefix` (case-insensitive)."""
        employees = employee_crud.get_by_name_prefix(self.db, prefix)
        return self._collection(employees, self_href=self.links.search_by_name_href(prefix))
