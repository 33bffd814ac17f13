"""Promotion Schemas — wire shape of the promote endpoint.

Invariants:
    - Body accepts camelCase (empNo, newTitle, ...) and snake_case field names
    - Every field is optional here: presence, salary and title-length rules
      belong to core/promotion_request.py so their rejection kinds stay stable
    - promotionDate stays a string until core parses it (MALFORMED_DATE)

Design Decisions:
    - Pydantic only enforces JSON types (int vs str); anything it rejects is
      reported by the RequestValidationError handler as VALIDATION_ERROR
"""

from pydantic import BaseModel, ConfigDict, Field


class PromotionBody(BaseModel):
    """POST /api/v1/employees/promote request body."""
    model_config = ConfigDict(populate_by_name=True)

    emp_no: int | None = Field(None, alias="empNo")
    new_title: str | None = Field(None, alias="newTitle")
    new_salary: int | None = Field(None, alias="newSalary")
    new_dept_no: str | None = Field(None, alias="newDeptNo")
    promotion_date: str | None = Field(None, alias="promotionDate")


class PromotionResponse(BaseModel):
    message: str
    emp_no: int
    effective_date: str
    changed: list[str]
