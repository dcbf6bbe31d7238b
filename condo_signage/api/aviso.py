import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from condo_signage.db import get_db
from condo_signage.models.aviso import Aviso
from condo_signage.models.condominio import Condominio
from condo_signage.models.user import User
from condo_signage.schemas.aviso import AvisoIn, AvisoOut, AvisoUpdateIn
from condo_signage.services.ids import contains_id, ids_to_csv, parse_id_list
from condo_signage.services.status import Status, parse_date, sync_status

router = APIRouter(prefix="/avisos", tags=["avisos"])
logger = logging.getLogger(__name__)


def _parse_expiration(value: str | None) -> date | None:
    # Avisos may run without an end date; unreadable dates count as none.
    expires_on = parse_date(value)
    if expires_on is not None and expires_on < date.today():
        raise HTTPException(status_code=400, detail="A data de expiração não pode ser anterior à data atual")
    return expires_on


def _get_aviso(db: Session, aviso_id: int) -> Aviso:
    aviso = db.get(Aviso, aviso_id)
    if not aviso:
        raise HTTPException(status_code=404, detail="Aviso not found")
    return aviso


def _ensure_condominio(db: Session, condominio_id: int | None) -> None:
    if condominio_id is not None and not db.get(Condominio, condominio_id):
        raise HTTPException(status_code=404, detail="Condominio not found")


def _enforce_notice_limit(db: Session, sindico_id: int | None, exclude_id: int | None = None) -> None:
    if sindico_id is None:
        return
    sindico = db.get(User, sindico_id)
    if not sindico:
        raise HTTPException(status_code=404, detail="Sindico not found")
    query = db.query(Aviso).filter(Aviso.sindico_id == sindico_id)
    if exclude_id is not None:
        query = query.filter(Aviso.id != exclude_id)
    today = date.today()
    active = 0
    for item in query.all():
        sync_status(item, today)
        if item.status == Status.ACTIVE.value:
            active += 1
    if active >= (sindico.limite_avisos or 0):
        raise HTTPException(
            status_code=400,
            detail=f"Limite de {sindico.limite_avisos} avisos ativos atingido para este síndico",
        )


@router.post("", response_model=AvisoOut)
def create_aviso(payload: AvisoIn, db: Session = Depends(get_db)):
    _ensure_condominio(db, payload.condominio_id)
    expires_on = _parse_expiration(payload.data_expiracao)
    _enforce_notice_limit(db, payload.sindico_id)
    condominios_ids = parse_id_list(payload.condominios_ids)
    if payload.condominio_id is not None and payload.condominio_id not in condominios_ids:
        condominios_ids.append(payload.condominio_id)
    sindico_ids = parse_id_list(payload.sindico_ids)
    if payload.sindico_id is not None and payload.sindico_id not in sindico_ids:
        sindico_ids.append(payload.sindico_id)
    aviso = Aviso(
        nome=payload.nome.strip(),
        mensagem=payload.mensagem or "",
        condominios_ids=ids_to_csv(condominios_ids),
        sindico_ids=ids_to_csv(sindico_ids),
        sindico_id=payload.sindico_id,
        condominio_id=payload.condominio_id,
        nome_anunciante=(payload.nome_anunciante or "").strip() or None,
        numero_anunciante=(payload.numero_anunciante or "").strip() or None,
        data_expiracao=expires_on,
        image=(payload.image or "").strip() or None,
        video=(payload.video or "").strip() or None,
    )
    sync_status(aviso)
    db.add(aviso)
    db.commit()
    db.refresh(aviso)
    logger.info("created aviso id=%s sindico_id=%s", aviso.id, aviso.sindico_id)
    return aviso


@router.get("", response_model=list[AvisoOut])
def list_avisos(condominio_id: int | None = None, db: Session = Depends(get_db)):
    items = db.query(Aviso).order_by(Aviso.id.asc()).all()
    today = date.today()
    if any([sync_status(item, today) for item in items]):
        db.commit()
    if condominio_id is not None:
        items = [
            item
            for item in items
            if contains_id(item.condominios_ids, condominio_id) or item.condominio_id == condominio_id
        ]
    return items


@router.get("/sindico/{sindico_id}", response_model=list[AvisoOut])
def list_avisos_by_sindico(sindico_id: int, db: Session = Depends(get_db)):
    items = db.query(Aviso).order_by(Aviso.id.asc()).all()
    matches = [
        item
        for item in items
        if item.sindico_id == sindico_id or contains_id(item.sindico_ids, sindico_id)
    ]
    if any([sync_status(item) for item in matches]):
        db.commit()
    return matches


@router.get("/{aviso_id}", response_model=AvisoOut)
def get_aviso(aviso_id: int, db: Session = Depends(get_db)):
    aviso = _get_aviso(db, aviso_id)
    if sync_status(aviso):
        db.commit()
        db.refresh(aviso)
    return aviso


@router.put("/{aviso_id}", response_model=AvisoOut)
def update_aviso(aviso_id: int, payload: AvisoUpdateIn, db: Session = Depends(get_db)):
    aviso = _get_aviso(db, aviso_id)
    if payload.nome is not None:
        cleaned = payload.nome.strip()
        if not cleaned:
            raise HTTPException(status_code=400, detail="Nome não pode ser vazio")
        aviso.nome = cleaned
    if payload.mensagem is not None:
        aviso.mensagem = payload.mensagem
    if payload.condominios_ids is not None:
        aviso.condominios_ids = ids_to_csv(parse_id_list(payload.condominios_ids))
    if payload.sindico_ids is not None:
        aviso.sindico_ids = ids_to_csv(parse_id_list(payload.sindico_ids))
    if payload.sindico_id is not None and payload.sindico_id != aviso.sindico_id:
        _enforce_notice_limit(db, payload.sindico_id, exclude_id=aviso.id)
        aviso.sindico_id = payload.sindico_id
    if payload.condominio_id is not None:
        _ensure_condominio(db, payload.condominio_id)
        aviso.condominio_id = payload.condominio_id
    if payload.nome_anunciante is not None:
        aviso.nome_anunciante = payload.nome_anunciante.strip() or None
    if payload.numero_anunciante is not None:
        aviso.numero_anunciante = payload.numero_anunciante.strip() or None
    if payload.data_expiracao is not None:
        aviso.data_expiracao = _parse_expiration(payload.data_expiracao)
    if payload.image is not None:
        aviso.image = payload.image.strip() or None
    if payload.video is not None:
        aviso.video = payload.video.strip() or None
    sync_status(aviso)
    db.commit()
    db.refresh(aviso)
    return aviso


@router.delete("/{aviso_id}")
def delete_aviso(aviso_id: int, db: Session = Depends(get_db)):
    aviso = _get_aviso(db, aviso_id)
    db.delete(aviso)
    db.commit()
    logger.info("deleted aviso id=%s", aviso_id)
    return {"ok": True}
