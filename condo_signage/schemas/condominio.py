from pydantic import BaseModel, Field, computed_field
from datetime import datetime

from condo_signage.schemas.anuncio import AnuncioOut
from condo_signage.schemas.tv import TVOut
from condo_signage.schemas.user import UserOut
from condo_signage.services.cep import format_cep


class CondominioIn(BaseModel):
    nome: str = Field(..., min_length=1)
    sindico_id: int | None = None
    cep: str
    localizacao: str = ""


class CondominioUpdateIn(BaseModel):
    nome: str | None = None
    sindico_id: int | None = None
    cep: str | None = None
    localizacao: str | None = None


class CondominioOut(BaseModel):
    id: int
    nome: str
    sindico_id: int | None = None
    cep: str
    localizacao: str
    data_registro: datetime | None = None

    @computed_field
    @property
    def cep_formatado(self) -> str:
        return format_cep(self.cep)

    class Config:
        from_attributes = True


class CondominioDetalhadoOut(BaseModel):
    condominio: CondominioOut
    sindico: UserOut | None = None
    tvs: list[TVOut]
    anuncios: list[AnuncioOut]
