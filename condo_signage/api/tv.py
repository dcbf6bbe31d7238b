import logging
import os
from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from condo_signage.db import get_db
from condo_signage.models.anuncio import Anuncio
from condo_signage.models.aviso import Aviso
from condo_signage.models.condominio import Condominio
from condo_signage.models.tv import TV
from condo_signage.schemas.anuncio import AnuncioOut
from condo_signage.schemas.aviso import AvisoOut
from condo_signage.schemas.tv import RotationIn, TVIn, TVOut, TVUpdateIn
from condo_signage.services.ids import contains_id
from condo_signage.services.rotation import (
    DEFAULT_AD_QUOTA,
    DEFAULT_NEWS_QUOTA,
    DEFAULT_NOTICE_QUOTA,
    DEFAULT_PREVIEW_MAX_ITEMS,
    RotationConfig,
    clamp_preview_length,
    rotation_payload,
)
from condo_signage.services.status import Status, sync_status

router = APIRouter(prefix="/tvs", tags=["tvs"])
logger = logging.getLogger(__name__)
TV_OFFLINE_AFTER_SEC = int(os.getenv("SIGNAGE_TV_OFFLINE_AFTER_SEC", "70"))
DEFAULT_TEMPLATE = "Template 1"


def derive_tv_status(last_seen: datetime | None, now_utc: datetime) -> str:
    if last_seen is None:
        return "offline"
    age = (now_utc - last_seen).total_seconds()
    return "online" if age <= TV_OFFLINE_AFTER_SEC else "offline"


def sync_runtime_status(tv: TV, now: datetime | None = None) -> bool:
    next_status = derive_tv_status(tv.last_seen, now or datetime.utcnow())
    if tv.status != next_status:
        tv.status = next_status
        return True
    return False


def _clamp_quota(value: int | None, fallback: int) -> int:
    if value is None:
        return fallback
    return max(0, value)


def _normalize_code(db: Session, value: str, exclude_id: int | None = None) -> str:
    code = (value or "").strip()
    if not code:
        raise HTTPException(status_code=400, detail="codigo_conexao is required")
    query = db.query(TV).filter(TV.codigo_conexao == code)
    if exclude_id is not None:
        query = query.filter(TV.id != exclude_id)
    if query.first():
        raise HTTPException(status_code=400, detail="Código de conexão já está em uso")
    return code


def _ensure_condominio(db: Session, condominio_id: int) -> None:
    if not db.get(Condominio, condominio_id):
        raise HTTPException(status_code=404, detail="Condominio not found")


def _get_tv(db: Session, tv_id: int) -> TV:
    tv = db.get(TV, tv_id)
    if not tv:
        raise HTTPException(status_code=404, detail="TV not found")
    return tv


@router.post("", response_model=TVOut)
def create_tv(payload: TVIn, db: Session = Depends(get_db)):
    _ensure_condominio(db, payload.condominio_id)
    tv = TV(
        nome=payload.nome.strip(),
        codigo_conexao=_normalize_code(db, payload.codigo_conexao),
        template=(payload.template or "").strip() or DEFAULT_TEMPLATE,
        condominio_id=payload.condominio_id,
        status="offline",
        proporcao_avisos=_clamp_quota(payload.proporcao_avisos, DEFAULT_NOTICE_QUOTA),
        proporcao_anuncios=_clamp_quota(payload.proporcao_anuncios, DEFAULT_AD_QUOTA),
        proporcao_noticias=_clamp_quota(payload.proporcao_noticias, DEFAULT_NEWS_QUOTA),
    )
    db.add(tv)
    db.commit()
    db.refresh(tv)
    logger.info("created tv id=%s condominio_id=%s", tv.id, tv.condominio_id)
    return tv


@router.get("", response_model=list[TVOut])
def list_tvs(condominio_id: int | None = None, db: Session = Depends(get_db)):
    query = db.query(TV)
    if condominio_id is not None:
        query = query.filter(TV.condominio_id == condominio_id)
    tvs = query.order_by(TV.id.asc()).all()
    now = datetime.utcnow()
    if any([sync_runtime_status(tv, now) for tv in tvs]):
        db.commit()
    return tvs


@router.post("/heartbeat", response_model=TVOut)
def heartbeat(codigo_conexao: str, db: Session = Depends(get_db)):
    code = (codigo_conexao or "").strip()
    tv = db.query(TV).filter(TV.codigo_conexao == code).first()
    if not tv:
        raise HTTPException(status_code=404, detail="TV not found")
    tv.last_seen = datetime.utcnow()
    tv.status = "online"
    db.commit()
    db.refresh(tv)
    return tv


@router.get("/{tv_id}", response_model=TVOut)
def get_tv(tv_id: int, db: Session = Depends(get_db)):
    tv = _get_tv(db, tv_id)
    if sync_runtime_status(tv):
        db.commit()
        db.refresh(tv)
    return tv


@router.put("/{tv_id}", response_model=TVOut)
def update_tv(tv_id: int, payload: TVUpdateIn, db: Session = Depends(get_db)):
    tv = _get_tv(db, tv_id)
    if payload.nome is not None:
        cleaned = payload.nome.strip()
        if not cleaned:
            raise HTTPException(status_code=400, detail="Nome não pode ser vazio")
        tv.nome = cleaned
    if payload.codigo_conexao is not None:
        tv.codigo_conexao = _normalize_code(db, payload.codigo_conexao, exclude_id=tv.id)
    if payload.template is not None:
        tv.template = payload.template.strip() or DEFAULT_TEMPLATE
    if payload.condominio_id is not None:
        _ensure_condominio(db, payload.condominio_id)
        tv.condominio_id = payload.condominio_id
    db.commit()
    db.refresh(tv)
    return tv


@router.delete("/{tv_id}")
def delete_tv(tv_id: int, db: Session = Depends(get_db)):
    tv = _get_tv(db, tv_id)
    db.delete(tv)
    db.commit()
    logger.info("deleted tv id=%s", tv_id)
    return {"ok": True}


@router.get("/{tv_id}/rotacao")
def get_rotation(tv_id: int, max_items: int = DEFAULT_PREVIEW_MAX_ITEMS, db: Session = Depends(get_db)):
    tv = _get_tv(db, tv_id)
    payload = rotation_payload(RotationConfig.from_tv(tv), tv.template, clamp_preview_length(max_items))
    payload["tv_id"] = tv.id
    return payload


@router.put("/{tv_id}/rotacao")
def update_rotation(tv_id: int, payload: RotationIn, db: Session = Depends(get_db)):
    tv = _get_tv(db, tv_id)
    current = RotationConfig.from_tv(tv)
    config = RotationConfig(
        notice_quota=_clamp_quota(payload.proporcao_avisos, current.notice_quota),
        ad_quota=_clamp_quota(payload.proporcao_anuncios, current.ad_quota),
        news_quota=_clamp_quota(payload.proporcao_noticias, current.news_quota),
    )
    tv.proporcao_avisos = config.notice_quota
    tv.proporcao_anuncios = config.ad_quota
    tv.proporcao_noticias = config.news_quota
    db.commit()
    db.refresh(tv)
    logger.info(
        "tv id=%s rotation set to %s:%s:%s",
        tv.id,
        config.notice_quota,
        config.ad_quota,
        config.news_quota,
    )
    response = rotation_payload(config, tv.template)
    response["tv_id"] = tv.id
    return response


@router.get("/{tv_id}/conteudo")
def get_content_feed(tv_id: int, db: Session = Depends(get_db)):
    """Eligible ads and notices for the TV's condominium, with the planned sequence."""
    tv = _get_tv(db, tv_id)
    today = date.today()
    changed = False
    anuncios: list[Anuncio] = []
    for item in db.query(Anuncio).order_by(Anuncio.id.asc()).all():
        changed = sync_status(item, today) or changed
        if item.status == Status.ACTIVE.value and contains_id(item.condominios_ids, tv.condominio_id):
            anuncios.append(item)
    avisos: list[Aviso] = []
    for item in db.query(Aviso).order_by(Aviso.id.asc()).all():
        changed = sync_status(item, today) or changed
        in_condominio = contains_id(item.condominios_ids, tv.condominio_id) or item.condominio_id == tv.condominio_id
        if item.status == Status.ACTIVE.value and in_condominio:
            avisos.append(item)
    if changed:
        db.commit()
    return {
        "tv_id": tv.id,
        "condominio_id": tv.condominio_id,
        "rotacao": rotation_payload(RotationConfig.from_tv(tv), tv.template),
        "anuncios": [AnuncioOut.model_validate(item).model_dump(mode="json") for item in anuncios],
        "avisos": [AvisoOut.model_validate(item).model_dump(mode="json") for item in avisos],
    }
