from datetime import date

from sqlalchemy import Column, Date, Enum, Integer, String

from projectdb.db.base import Base
from projectdb.models.enums.employee_role import EmployeeRole


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True)
    username = Column(String(20), index=True, nullable=False, unique=True)
    password_hash = Column(String, nullable=False)
    role = Column(
        Enum(EmployeeRole, create_constraint=True, length=32, native_enum=False, validate_strings=True),
        nullable=False,
        default=EmployeeRole.staff,
    )
    creation_date = Column(Date, nullable=False, default=date.today)
    modification_date = Column(Date, nullable=False, default=date.today, onupdate=date.today)

    @property
    def roles(self) -> list[EmployeeRole]:
        return [self.role] if self.role is not None else []
