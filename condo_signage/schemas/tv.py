from pydantic import BaseModel, Field
from datetime import datetime

class TVIn(BaseModel):
    nome: str = Field(..., min_length=1)
    codigo_conexao: str = Field(..., min_length=1)
    template: str = "Template 1"
    condominio_id: int
    proporcao_avisos: int | None = None
    proporcao_anuncios: int | None = None
    proporcao_noticias: int | None = None

class TVUpdateIn(BaseModel):
    nome: str | None = None
    codigo_conexao: str | None = None
    template: str | None = None
    condominio_id: int | None = None

class RotationIn(BaseModel):
    proporcao_avisos: int | None = None
    proporcao_anuncios: int | None = None
    proporcao_noticias: int | None = None

class TVOut(BaseModel):
    id: int
    nome: str
    codigo_conexao: str
    template: str | None = None
    condominio_id: int
    status: str
    last_seen: datetime | None = None
    proporcao_avisos: int
    proporcao_anuncios: int
    proporcao_noticias: int
    data_registro: datetime | None = None

    class Config:
        from_attributes = True
