import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from condo_signage.db import get_db
from condo_signage.models.anuncio import Anuncio
from condo_signage.schemas.anuncio import AnuncioIn, AnuncioOut, AnuncioUpdateIn
from condo_signage.services.ids import contains_id, ids_to_csv, parse_id_list
from condo_signage.services.status import Status, parse_date, sync_status

router = APIRouter(prefix="/anuncios", tags=["anuncios"])
logger = logging.getLogger(__name__)


def _parse_expiration(value: str) -> date:
    expires_on = parse_date(value)
    if expires_on is None:
        raise HTTPException(status_code=400, detail="data_expiracao inválida. Use AAAA-MM-DD.")
    if expires_on < date.today():
        raise HTTPException(status_code=400, detail="A data de expiração não pode ser anterior à data atual")
    return expires_on


def _get_anuncio(db: Session, anuncio_id: int) -> Anuncio:
    anuncio = db.get(Anuncio, anuncio_id)
    if not anuncio:
        raise HTTPException(status_code=404, detail="Anuncio not found")
    return anuncio


@router.post("", response_model=AnuncioOut)
def create_anuncio(payload: AnuncioIn, db: Session = Depends(get_db)):
    anuncio = Anuncio(
        nome=payload.nome.strip(),
        nome_anunciante=payload.nome_anunciante.strip(),
        numero_anunciante=(payload.numero_anunciante or "").strip() or None,
        data_expiracao=_parse_expiration(payload.data_expiracao),
        condominios_ids=ids_to_csv(parse_id_list(payload.condominios_ids)),
        archive_url=(payload.archive_url or "").strip() or None,
        tempo_exibicao=payload.tempo_exibicao,
    )
    sync_status(anuncio)
    db.add(anuncio)
    db.commit()
    db.refresh(anuncio)
    logger.info("created anuncio id=%s status=%s", anuncio.id, anuncio.status)
    return anuncio


@router.get("", response_model=list[AnuncioOut])
def list_anuncios(condominio_id: int | None = None, status: str | None = None, db: Session = Depends(get_db)):
    items = db.query(Anuncio).order_by(Anuncio.id.asc()).all()
    today = date.today()
    if any([sync_status(item, today) for item in items]):
        db.commit()
    if condominio_id is not None:
        items = [item for item in items if contains_id(item.condominios_ids, condominio_id)]
    if status:
        wanted = status.strip().lower()
        if wanted not in {Status.ACTIVE.value, Status.INACTIVE.value}:
            raise HTTPException(status_code=400, detail="status deve ser ativo ou inativo")
        items = [item for item in items if item.status == wanted]
    return items


@router.get("/{anuncio_id}", response_model=AnuncioOut)
def get_anuncio(anuncio_id: int, db: Session = Depends(get_db)):
    anuncio = _get_anuncio(db, anuncio_id)
    if sync_status(anuncio):
        db.commit()
        db.refresh(anuncio)
    return anuncio


@router.put("/{anuncio_id}", response_model=AnuncioOut)
def update_anuncio(anuncio_id: int, payload: AnuncioUpdateIn, db: Session = Depends(get_db)):
    anuncio = _get_anuncio(db, anuncio_id)
    if payload.nome is not None:
        cleaned = payload.nome.strip()
        if not cleaned:
            raise HTTPException(status_code=400, detail="Nome não pode ser vazio")
        anuncio.nome = cleaned
    if payload.nome_anunciante is not None:
        anuncio.nome_anunciante = payload.nome_anunciante.strip()
    if payload.numero_anunciante is not None:
        anuncio.numero_anunciante = payload.numero_anunciante.strip() or None
    if payload.data_expiracao is not None:
        anuncio.data_expiracao = _parse_expiration(payload.data_expiracao)
    if payload.condominios_ids is not None:
        anuncio.condominios_ids = ids_to_csv(parse_id_list(payload.condominios_ids))
    if payload.archive_url is not None:
        anuncio.archive_url = payload.archive_url.strip() or None
    if payload.tempo_exibicao is not None:
        anuncio.tempo_exibicao = payload.tempo_exibicao
    sync_status(anuncio)
    db.commit()
    db.refresh(anuncio)
    return anuncio


@router.delete("/{anuncio_id}")
def delete_anuncio(anuncio_id: int, db: Session = Depends(get_db)):
    anuncio = _get_anuncio(db, anuncio_id)
    db.delete(anuncio)
    db.commit()
    logger.info("deleted anuncio id=%s", anuncio_id)
    return {"ok": True}
