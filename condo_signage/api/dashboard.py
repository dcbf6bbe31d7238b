from datetime import date, datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from condo_signage.db import get_db
from condo_signage.models.anuncio import Anuncio
from condo_signage.models.aviso import Aviso
from condo_signage.models.condominio import Condominio
from condo_signage.models.tv import TV
from condo_signage.api.tv import derive_tv_status
from condo_signage.services.status import Status, compute_status

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _active_rate(active: int, total: int) -> float:
    if total <= 0:
        return 0
    return round(active / total * 100, 1)


def _average_per_condominio(total_anuncios: int, total_condominios: int) -> float:
    if total_condominios <= 0:
        return 0
    return round(total_anuncios / total_condominios, 1)


def _overall_status(active: int, expired: int) -> str:
    if active > expired:
        return "Excelente"
    if active == expired:
        return "Regular"
    return "Atenção Necessária"


@router.get("")
def dashboard_stats(db: Session = Depends(get_db)):
    today = date.today()
    now = datetime.utcnow()
    anuncios = db.query(Anuncio).all()
    anuncios_ativos = sum(
        1 for item in anuncios if compute_status(item.data_expiracao, today) is Status.ACTIVE
    )
    anuncios_vencidos = len(anuncios) - anuncios_ativos
    avisos_ativos = sum(
        1 for item in db.query(Aviso).all() if compute_status(item.data_expiracao, today) is Status.ACTIVE
    )
    total_condominios = db.query(Condominio).count()
    tvs = db.query(TV).all()
    return {
        "anuncios_ativos": anuncios_ativos,
        "anuncios_vencidos": anuncios_vencidos,
        "total_anuncios": len(anuncios),
        "total_condominios": total_condominios,
        "total_tvs": len(tvs),
        "tvs_online": sum(1 for tv in tvs if derive_tv_status(tv.last_seen, now) == "online"),
        "avisos_ativos": avisos_ativos,
        "taxa_anuncios_ativos": _active_rate(anuncios_ativos, len(anuncios)),
        "media_anuncios_por_condominio": _average_per_condominio(len(anuncios), total_condominios),
        "status_geral": _overall_status(anuncios_ativos, anuncios_vencidos),
    }
