from pydantic import BaseModel, Field
from datetime import datetime

class UserIn(BaseModel):
    nome: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    telefone: str | None = None
    tipo: str = "sindico"
    limite_avisos: int = Field(10, ge=0)

class UserUpdateIn(BaseModel):
    nome: str | None = None
    email: str | None = None
    telefone: str | None = None
    tipo: str | None = None
    limite_avisos: int | None = Field(None, ge=0)

class UserOut(BaseModel):
    id: int
    nome: str
    email: str
    telefone: str | None = None
    tipo: str
    limite_avisos: int
    data_criacao: datetime | None = None
    data_update: datetime | None = None

    class Config:
        from_attributes = True
