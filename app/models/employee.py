from sqlalchemy import Column, Integer, String, DateTime, func
from app.core.database import Base

# Range of the `id` column (signed 32-bit INTEGER on Postgres)
MIN_EMPLOYEE_ID = 1
MAX_EMPLOYEE_ID = 2_147_483_647


class Employee(Base):
    """
    Employee record. The only persisted entity of the payroll service.

    `id` is assigned by the database and never changes afterwards.
    """
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    email = Column(String(320), unique=True, nullable=False, index=True)
    role = Column(String(200), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Employee(id={self.id}, name='{self.name}', email='{self.email}')>"
