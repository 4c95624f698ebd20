"""Employee API endpoints (multipart forms with optional uploads)."""

from typing import List, Optional

import pydantic
from fastapi import APIRouter, Depends, File, Form, UploadFile

from .deps import get_employee_service
from .uploads import read_documents, read_optional_image
from ..core.auth import AuthContext, require_auth
from ..exceptions import ValidationError
from ..schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from ..services.employee_service import EmployeeService

router = APIRouter(prefix="/api/employees", tags=["employees"])


def _parse_form(model, **fields):
    """Validate form fields into *model*. Blank optional fields count as unset."""
    values = {k: v for k, v in fields.items() if v is not None and v != ""}
    try:
        return model(**values)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or None
        raise ValidationError(first.get("msg", "Invalid input"), field=field) from e


@router.post("", response_model=EmployeeResponse, status_code=201)
def create_employee(
    name: str = Form(...),
    email: str = Form(...),
    phone: Optional[str] = Form(None),
    position: Optional[str] = Form(None),
    department: Optional[str] = Form(None),
    hire_date: Optional[str] = Form(None, alias="hireDate"),
    profile_image: Optional[UploadFile] = File(None, alias="profileImage"),
    documents: Optional[List[UploadFile]] = File(None),
    service: EmployeeService = Depends(get_employee_service),
    auth: AuthContext = Depends(require_auth),
):
    """Create an employee. Uploaded documents are filed in a "Documents" folder."""
    data = _parse_form(
        EmployeeCreate,
        name=name,
        email=email,
        phone=phone,
        position=position,
        department=department,
        hire_date=hire_date,
    )
    image = read_optional_image(profile_image, field="profileImage")
    files = read_documents(documents)
    return service.create(data, image, files, uploaded_by=auth.user_id)


@router.get("", response_model=List[EmployeeResponse])
def list_employees(
    service: EmployeeService = Depends(get_employee_service),
    auth: AuthContext = Depends(require_auth),
):
    return service.list()


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
    auth: AuthContext = Depends(require_auth),
):
    return service.get(employee_id)


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: str,
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    position: Optional[str] = Form(None),
    department: Optional[str] = Form(None),
    hire_date: Optional[str] = Form(None, alias="hireDate"),
    status: Optional[str] = Form(None),
    profile_image: Optional[UploadFile] = File(None, alias="profileImage"),
    documents: Optional[List[UploadFile]] = File(None),
    service: EmployeeService = Depends(get_employee_service),
    auth: AuthContext = Depends(require_auth),
):
    """Update profile fields; a new profile image replaces the old one."""
    data = _parse_form(
        EmployeeUpdate,
        name=name,
        email=email,
        phone=phone,
        position=position,
        department=department,
        hire_date=hire_date,
        status=status,
    )
    image = read_optional_image(profile_image, field="profileImage")
    files = read_documents(documents)
    return service.update(employee_id, data, image, files, uploaded_by=auth.user_id)


@router.delete("/{employee_id}")
def delete_employee(
    employee_id: str,
    service: EmployeeService = Depends(get_employee_service),
    auth: AuthContext = Depends(require_auth),
):
    service.delete(employee_id)
    return {"success": True}
