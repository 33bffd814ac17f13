"""Employee & Department Schemas — read-side response models.

Invariants:
    - Histories are returned oldest-first per category, current segment last
    - to_date 9999-01-01 is returned verbatim (clients treat it as "current")
"""

from datetime import date

from pydantic import BaseModel

from tenure.core.segments import EmployeeRecord, HistorySegment


class SegmentResponse(BaseModel):
    from_date: date
    to_date: date
    value: int | str
    current: bool

    @classmethod
    def from_segment(cls, segment: HistorySegment) -> "SegmentResponse":
        return cls(
            from_date=segment.from_date,
            to_date=segment.to_date,
            value=segment.value,
            current=segment.is_open,
        )


class EmployeeRecordResponse(BaseModel):
    """Full employee record with all four histories."""
    emp_no: int
    first_name: str
    last_name: str
    gender: str | None = None
    birth_date: date | None = None
    hire_date: date
    salaries: list[SegmentResponse]
    titles: list[SegmentResponse]
    departments: list[SegmentResponse]
    manager_assignments: list[SegmentResponse]

    @classmethod
    def from_record(cls, record: EmployeeRecord) -> "EmployeeRecordResponse":
        def segments(history):
            return [SegmentResponse.from_segment(s) for s in history]

        return cls(
            emp_no=record.emp_no,
            first_name=record.first_name,
            last_name=record.last_name,
            gender=record.gender,
            birth_date=record.birth_date,
            hire_date=record.hire_date,
            salaries=segments(record.salaries),
            titles=segments(record.titles),
            departments=segments(record.departments),
            manager_assignments=segments(record.manager_assignments),
        )


class DepartmentResponse(BaseModel):
    dept_no: str
    dept_name: str


class EmployeeSummary(BaseModel):
    """Streamlined employee row used in department listings."""
    emp_no: int
    hire_date: date
    first_name: str
    last_name: str


class DepartmentEmployeesPage(BaseModel):
    dept_no: str
    employees: list[EmployeeSummary]
    page: int
    page_size: int
