from datetime import date

from pydantic import BaseModel, Field, field_validator

from condo_signage.services.ids import parse_id_list


class AnuncioIn(BaseModel):
    nome: str = Field(..., min_length=1)
    nome_anunciante: str = Field(..., min_length=1)
    numero_anunciante: str | None = None
    data_expiracao: str
    condominios_ids: list[int] | str | None = None
    archive_url: str | None = None
    tempo_exibicao: int = Field(10, ge=1)


class AnuncioUpdateIn(BaseModel):
    nome: str | None = None
    nome_anunciante: str | None = None
    numero_anunciante: str | None = None
    data_expiracao: str | None = None
    condominios_ids: list[int] | str | None = None
    archive_url: str | None = None
    tempo_exibicao: int | None = Field(None, ge=1)


class AnuncioOut(BaseModel):
    id: int
    nome: str
    nome_anunciante: str
    numero_anunciante: str | None = None
    data_expiracao: date
    condominios_ids: list[int]
    status: str
    archive_url: str | None = None
    tempo_exibicao: int | None = None

    @field_validator("condominios_ids", mode="before")
    @classmethod
    def normalize_ids(cls, value):
        return parse_id_list(value)

    class Config:
        from_attributes = True
