import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from condo_signage.db import get_db
from condo_signage.models.anuncio import Anuncio
from condo_signage.models.aviso import Aviso
from condo_signage.models.condominio import Condominio
from condo_signage.models.tv import TV
from condo_signage.models.user import User
from condo_signage.schemas.condominio import (
    CondominioDetalhadoOut,
    CondominioIn,
    CondominioOut,
    CondominioUpdateIn,
)
from condo_signage.services.cep import normalize_cep
from condo_signage.services.ids import contains_id, ids_to_csv, parse_id_list
from condo_signage.services.status import sync_status

router = APIRouter(prefix="/condominios", tags=["condominios"])
logger = logging.getLogger(__name__)


def _validated_cep(value: str) -> str:
    try:
        return normalize_cep(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _ensure_sindico(db: Session, sindico_id: int | None) -> None:
    if sindico_id is None:
        return
    if not db.get(User, sindico_id):
        raise HTTPException(status_code=404, detail="Sindico not found")


def _get_condominio(db: Session, condominio_id: int) -> Condominio:
    condominio = db.get(Condominio, condominio_id)
    if not condominio:
        raise HTTPException(status_code=404, detail="Condominio not found")
    return condominio


@router.post("", response_model=CondominioOut)
def create_condominio(payload: CondominioIn, db: Session = Depends(get_db)):
    _ensure_sindico(db, payload.sindico_id)
    condominio = Condominio(
        nome=payload.nome.strip(),
        sindico_id=payload.sindico_id,
        cep=_validated_cep(payload.cep),
        localizacao=(payload.localizacao or "").strip(),
    )
    db.add(condominio)
    db.commit()
    db.refresh(condominio)
    logger.info("created condominio id=%s", condominio.id)
    return condominio


@router.get("", response_model=list[CondominioOut])
def list_condominios(sindico_id: int | None = None, db: Session = Depends(get_db)):
    query = db.query(Condominio)
    if sindico_id is not None:
        query = query.filter(Condominio.sindico_id == sindico_id)
    return query.order_by(Condominio.id.asc()).all()


@router.get("/{condominio_id}", response_model=CondominioDetalhadoOut)
def get_condominio(condominio_id: int, db: Session = Depends(get_db)):
    condominio = _get_condominio(db, condominio_id)
    sindico = db.get(User, condominio.sindico_id) if condominio.sindico_id else None
    tvs = db.query(TV).filter(TV.condominio_id == condominio_id).order_by(TV.id.asc()).all()
    anuncios = [
        item
        for item in db.query(Anuncio).order_by(Anuncio.id.asc()).all()
        if contains_id(item.condominios_ids, condominio_id)
    ]
    if any([sync_status(item) for item in anuncios]):
        db.commit()
    return {
        "condominio": condominio,
        "sindico": sindico,
        "tvs": tvs,
        "anuncios": anuncios,
    }


@router.put("/{condominio_id}", response_model=CondominioOut)
def update_condominio(condominio_id: int, payload: CondominioUpdateIn, db: Session = Depends(get_db)):
    condominio = _get_condominio(db, condominio_id)
    if payload.nome is not None:
        cleaned = payload.nome.strip()
        if not cleaned:
            raise HTTPException(status_code=400, detail="Nome não pode ser vazio")
        condominio.nome = cleaned
    if payload.sindico_id is not None:
        _ensure_sindico(db, payload.sindico_id)
        condominio.sindico_id = payload.sindico_id
    if payload.cep is not None:
        condominio.cep = _validated_cep(payload.cep)
    if payload.localizacao is not None:
        condominio.localizacao = payload.localizacao.strip()
    db.commit()
    db.refresh(condominio)
    return condominio


@router.delete("/{condominio_id}")
def delete_condominio(condominio_id: int, db: Session = Depends(get_db)):
    condominio = _get_condominio(db, condominio_id)
    db.query(TV).filter(TV.condominio_id == condominio_id).delete(synchronize_session=False)
    for model in (Anuncio, Aviso):
        for item in db.query(model).all():
            ids = parse_id_list(item.condominios_ids)
            if condominio_id in ids:
                item.condominios_ids = ids_to_csv([value for value in ids if value != condominio_id])
    db.query(Aviso).filter(Aviso.condominio_id == condominio_id).update(
        {"condominio_id": None},
        synchronize_session=False,
    )
    db.delete(condominio)
    db.commit()
    logger.info("deleted condominio id=%s", condominio_id)
    return {"ok": True}
