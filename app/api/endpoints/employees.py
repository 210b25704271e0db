import logging
from fastapi import APIRouter, HTTPException, Depends, Query, Request, Response
from pydantic import EmailStr
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import EmployeeNotFoundException
from app.schemas.employee import (
    EmployeeCollection,
    EmployeeCreateRequest,
    EmployeeModel,
    EmployeeUpdateRequest,
    ServiceResponse,
)
from app.services.employee_service import EmployeeService
from app.services.hypermedia import EmployeeLinkBuilder

router = APIRouter(prefix="/employees", tags=["Employees"])
logger = logging.getLogger(__name__)


def get_employee_service(request: Request, db: Session = Depends(get_db)) -> EmployeeService:
    """Build a per-request service whose links point back at this API."""
    base_url = str(request.base_url).rstrip("/") + settings.API_V1_STR
    return EmployeeService(db, EmployeeLinkBuilder(base_url))


def _found_or_404(result: ServiceResponse, employee_id: int) -> ServiceResponse:
    if result.is_absent:
        raise EmployeeNotFoundException(employee_id)
    return result


def _storage_error(db: Session, e: SQLAlchemyError, action: str) -> HTTPException:
    db.rollback()
    if isinstance(e, IntegrityError):
        logger.warning(f"Integrity error while trying to {action}: {e.orig}")
        return HTTPException(status_code=409, detail="Employee with this email already exists")
    logger.error(f"Database error while trying to {action}: {e}")
    return HTTPException(status_code=500, detail=f"Failed to {action}")


@router.get("", response_model=EmployeeCollection)
def list_employees(service: EmployeeService = Depends(get_employee_service)):
    """List all employees with hypermedia links."""
    return service.find_all()


@router.post("", status_code=201, response_model=EmployeeModel)
def create_employee(
    request: EmployeeCreateRequest,
    response: Response,
    service: EmployeeService = Depends(get_employee_service),
):
    """
    Create a new employee.

    The id is assigned by the database; the Location header points at
    the new resource.
    """
    try:
        result = service.new_employee(request)
    except SQLAlchemyError as e:
        raise _storage_error(service.db, e, "create employee")

    if result.location:
        response.headers["Location"] = result.location
    return result.body


@router.get("/search/by-email", response_model=EmployeeModel)
def get_employee_by_email(
    email: EmailStr = Query(...),
    service: EmployeeService = Depends(get_employee_service),
):
    """
    Retrieve an employee by exact email. 404 if nobody uses it.

    The address is normalised like it was on creation, so the domain part
    matches case-insensitively.
    """
    return service.find_by_email(email)


@router.get("/search/by-name", response_model=EmployeeCollection)
def search_employees_by_name(
    prefix: str = Query(..., min_length=1),
    service: EmployeeService = Depends(get_employee_service),
):
    """List employees whose name starts with `prefix`, ignoring case."""
    return service.find_by_name_starting_with(prefix)


@router.get("/{employee_id}", response_model=EmployeeModel)
def get_employee(employee_id: int, service: EmployeeService = Depends(get_employee_service)):
    """Retrieve an employee by ID."""
    return _found_or_404(service.find_by_id(employee_id), employee_id).body


@router.put("/{employee_id}", response_model=EmployeeModel)
def replace_employee(
    employee_id: int,
    request: EmployeeUpdateRequest,
    service: EmployeeService = Depends(get_employee_service),
):
    """
    Overwrite the fields sent for an existing employee.

    Unknown ids return 404; this endpoint never creates employees.
    """
    try:
        result = service.save(request, employee_id)
    except SQLAlchemyError as e:
        raise _storage_error(service.db, e, "update employee")

    return _found_or_404(result, employee_id).body


@router.delete("/{employee_id}", status_code=204)
def delete_employee(employee_id: int, service: EmployeeService = Depends(get_employee_service)):
    """Delete an employee by ID."""
    try:
        result = service.delete_by_id(employee_id)
    except SQLAlchemyError as e:
        raise _storage_error(service.db, e, "delete employee")

    _found_or_404(result, employee_id)
    return Response(status_code=204)
