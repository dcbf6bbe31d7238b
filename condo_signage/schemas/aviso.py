from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from condo_signage.services.ids import parse_id_list


class AvisoIn(BaseModel):
    nome: str = Field(..., min_length=1)
    mensagem: str = ""
    condominios_ids: list[int] | str | None = None
    sindico_ids: list[int] | str | None = None
    sindico_id: int | None = None
    condominio_id: int | None = None
    nome_anunciante: str | None = None
    numero_anunciante: str | None = None
    data_expiracao: str | None = None
    image: str | None = None
    video: str | None = None


class AvisoUpdateIn(BaseModel):
    nome: str | None = None
    mensagem: str | None = None
    condominios_ids: list[int] | str | None = None
    sindico_ids: list[int] | str | None = None
    sindico_id: int | None = None
    condominio_id: int | None = None
    nome_anunciante: str | None = None
    numero_anunciante: str | None = None
    data_expiracao: str | None = None
    image: str | None = None
    video: str | None = None


class AvisoOut(BaseModel):
    id: int
    nome: str
    mensagem: str
    condominios_ids: list[int]
    sindico_ids: list[int]
    sindico_id: int | None = None
    condominio_id: int | None = None
    nome_anunciante: str | None = None
    numero_anunciante: str | None = None
    data_expiracao: date | None = None
    status: str
    image: str | None = None
    video: str | None = None
    data_criacao: datetime | None = None

    @field_validator("condominios_ids", "sindico_ids", mode="before")
    @classmethod
    def normalize_ids(cls, value):
        return parse_id_list(value)

    class Config:
        from_attributes = True
