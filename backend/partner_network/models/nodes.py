"""Pydantic models for Neo4j node types."""

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def _to_native(value: Any) -> Any:
    """Convert neo4j temporal values to their Python counterparts."""
    if hasattr(value, "to_native"):
        return value.to_native()
    return value


# ============================================
# Company Models
# ============================================

class Company(BaseModel):
    """Company registered in the CRM, keyed by its CNPJ."""

    id: str = Field(..., description="Tax registration number (CNPJ)")
    legal_name: Optional[str] = Field(None, description="Razão social")
    trade_name: Optional[str] = Field(None, description="Nome fantasia")
    status: Optional[str] = Field(None, max_length=50, description="Situação cadastral")

    @property
    def display_name(self) -> str:
        """Trade name preferred, then legal name, then the raw identifier."""
        return self.trade_name or self.legal_name or self.id


# ============================================
# Person Models
# ============================================

class Person(BaseModel):
    """Partner (sócio) known by a partial tax identifier."""

    id: str = Field(..., description="Partial tax identifier (CPF parcial)")
    name: Optional[str] = None
    birth_date: Optional[date] = None

    @field_validator("birth_date", mode="before")
    @classmethod
    def _native_birth_date(cls, value: Any) -> Any:
        return _to_native(value)
