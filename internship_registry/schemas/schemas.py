"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Field names match the table columns in db/tables.py.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional
from datetime import date

from internship_registry.utils.excel_dates import excel_date


# ============================================================
# COMMON
# ============================================================

class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str


# ============================================================
# CRUD SCHEMAS
# One body model per resource, used for both POST and PUT.
# ============================================================

class ContactIn(BaseModel):
    name: Optional[str] = Field(None, max_length=150)
    role_id: Optional[int] = None
    phone: Optional[str] = Field(None, max_length=50)
    mobile: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=255)


class CompanyIn(BaseModel):
    tax_id: str = Field(..., min_length=1, max_length=50)
    business_name: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=255)
    contact_id: Optional[int] = None


class SupervisorIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    position: Optional[str] = Field(None, max_length=150)


class ProgramIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)


class StudentIn(BaseModel):
    document: Optional[str] = Field(None, max_length=50)
    full_name: str = Field(..., min_length=1, max_length=150)
    age: Optional[int] = Field(None, ge=0, le=120)
    mobile: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    contact_id: Optional[int] = None


class InternshipIn(BaseModel):
    program_id: int
    student_id: int
    company_id: int
    supervisor_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_days: Optional[int] = None


# ============================================================
# SPREADSHEET IMPORT
# Aliases are the header cells of the "Datos" sheet.
# ============================================================

class InternshipImportRow(BaseModel):
    """One row of the import sheet. Key fields are required."""

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        str_strip_whitespace=True,
    )

    contact_role: str = Field(..., min_length=1, alias="CARGO DEL CONTACTO")
    contact_name: Optional[str] = Field(None, alias="CONTACTO")
    contact_phone: Optional[str] = Field(None, alias="TELEFONO CONTACTO")
    contact_mobile: Optional[str] = Field(None, alias="CELULAR CONTACTO")
    contact_email: str = Field(..., min_length=1, alias="E MAIL CONTACTO")

    tax_id: str = Field(..., min_length=1, alias="NIT")
    company_name: Optional[str] = Field(None, alias="EMPRESA DONDE REALIZA LA PRÁCTICA")
    company_address: Optional[str] = Field(None, alias="DIRECCION CONTACTO")

    program: str = Field(..., min_length=1, alias="PROGRAMA")

    student_name: Optional[str] = Field(None, alias="APELLIDOS Y NOMBRES")
    student_age: Optional[int] = Field(None, alias="EDAD")
    student_mobile: Optional[str] = Field(None, alias="CELULAR")
    student_address: Optional[str] = Field(None, alias="DIRECCION RESIDENCIA")
    student_phone: Optional[str] = Field(None, alias="TELÉFONO RESIDENCIA")
    student_email: str = Field(..., min_length=1, alias="CORREO JEFE INMEDIATO")

    start_date: date = Field(..., alias="FECHA INICIO")
    end_date: date = Field(..., alias="FECHA TERMINACIÓN")
    total_days: Optional[int] = Field(None, alias="TOTAL DIAS EN PRACTICA")

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_excel_date(cls, value):
        return excel_date(value)

    @field_validator("tax_id", mode="before")
    @classmethod
    def integral_tax_id(cls, value):
        # 900123.0 from a float cell is the NIT 900123
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value
