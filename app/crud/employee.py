"""
CRUD operations for Employee model.

Implements the Repository pattern: this module is the only place that
queries the employees table. Storage errors are rolled back and re-raised,
never swallowed.
"""

import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.models.employee import Employee, MAX_EMPLOYEE_ID, MIN_EMPLOYEE_ID
from app.schemas.employee import EmployeeCreateRequest

logger = logging.getLogger(__name__)

# Fields a caller may overwrite; id and timestamps are managed by the store
MUTABLE_FIELDS = ("name", "email", "role")


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database commit failed, session rolled back")
        raise


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def create(db: Session, employee_data: EmployeeCreateRequest) -> Employee:
    """
    Create a new employee in the database.

    Args:
        db: Database session
        employee_data: Validated employee creation data

    Returns:
        Created Employee instance with id assigned by the database
    """
    db_employee = Employee(
        name=employee_data.name,
        email=employee_data.email,
        role=employee_data.role,
    )

    db.add(db_employee)
    _commit(db)
    db.refresh(db_employee)

    return db_employee


def get_by_id(db: Session, employee_id: int) -> Optional[Employee]:
    """
    Retrieve an employee by its ID.

    Returns:
        Employee instance if found, None otherwise (also for ids outside
        the column range, which no row can hold)
    """
    if not MIN_EMPLOYEE_ID <= employee_id <= MAX_EMPLOYEE_ID:
        return None
    return db.query(Employee).filter(Employee.id == employee_id).first()


def get_all(db: Session) -> List[Employee]:
    """Retrieve every employee in insertion (id) order."""
    return db.query(Employee).order_by(Employee.id).all()


def get_by_email(db: Session, email: str) -> Optional[Employee]:
    """
    Retrieve an employee by exact email match.

    Returns:
        Employee instance if found, None otherwise
    """
    return db.query(Employee).filter(Employee.email == email).first()


def get_by_name_prefix(db: Session, prefix: str) -> List[Employee]:
    """
    Retrieve employees whose name starts with `prefix`, ignoring case.

    LIKE wildcards in the prefix match literally, so "a_" does not match "ab".

    Args:
        db: Database session
        prefix: Leading characters of the name

    Returns:
        List of matching Employee instances in id order (empty if none match)
    """
    pattern = f"{_escape_like(prefix)}%"
    return (
        db.query(Employee)
        .filter(Employee.name.ilike(pattern, escape="\\"))
        .order_by(Employee.id)
        .all()
    )


def update(db: Session, employee: Employee, changes: Dict[str, Any]) -> Employee:
    """
    Overwrite mutable fields of an existing employee.

    Args:
        db: Database session
        employee: Persisted Employee instance
        changes: Field name to new value; keys outside MUTABLE_FIELDS are ignored

    Returns:
        Updated Employee instance (same id)
    """
    for field, value in changes.items():
        if field in MUTABLE_FIELDS:
            setattr(employee, field, value)

    _commit(db)
    db.refresh(employee)

    return employee


def delete(db: Session, employee_id: int) -> bool:
    """
    Delete an employee by ID.

    Returns:
        True if deleted, False if not found
    """
    employee = get_by_id(db, employee_id)
    if not employee:
        return False

    db.delete(employee)
    _commit(db)

    return True


def count(db: Session) -> int:
    """Number of stored employees."""
    return db.query(Employee).count()
