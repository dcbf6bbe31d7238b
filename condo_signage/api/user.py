import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session
from condo_signage.db import get_db
from condo_signage.models.aviso import Aviso
from condo_signage.models.condominio import Condominio
from condo_signage.models.user import User
from condo_signage.schemas.user import UserIn, UserOut, UserUpdateIn
from condo_signage.services.ids import ids_to_csv, parse_id_list

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)

USER_TYPES = {"ADM", "sindico"}


def _normalize_tipo(value: str | None) -> str:
    raw = (value or "").strip()
    for candidate in USER_TYPES:
        if raw.lower() == candidate.lower():
            return candidate
    raise HTTPException(status_code=400, detail="tipo deve ser ADM ou sindico")


def _normalize_email(db: Session, value: str, exclude_id: int | None = None) -> str:
    email = (value or "").strip().lower()
    if "@" not in email:
        raise HTTPException(status_code=400, detail="Email inválido")
    query = db.query(User).filter(func.lower(User.email) == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first():
        raise HTTPException(status_code=400, detail="Email já cadastrado")
    return email


@router.post("", response_model=UserOut)
def create_user(payload: UserIn, db: Session = Depends(get_db)):
    user = User(
        nome=payload.nome.strip(),
        email=_normalize_email(db, payload.email),
        telefone=(payload.telefone or "").strip() or None,
        tipo=_normalize_tipo(payload.tipo),
        limite_avisos=payload.limite_avisos,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("created user id=%s tipo=%s", user.id, user.tipo)
    return user


@router.get("", response_model=list[UserOut])
def list_users(tipo: str | None = None, db: Session = Depends(get_db)):
    query = db.query(User)
    if tipo:
        query = query.filter(User.tipo == _normalize_tipo(tipo))
    return query.order_by(User.id.asc()).all()


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{user_id}", response_model=UserOut)
def update_user(user_id: int, payload: UserUpdateIn, db: Session = Depends(get_db)):
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if payload.nome is not None:
        cleaned = payload.nome.strip()
        if not cleaned:
            raise HTTPException(status_code=400, detail="Nome não pode ser vazio")
        user.nome = cleaned
    if payload.email is not None:
        user.email = _normalize_email(db, payload.email, exclude_id=user.id)
    if payload.telefone is not None:
        user.telefone = payload.telefone.strip() or None
    if payload.tipo is not None:
        user.tipo = _normalize_tipo(payload.tipo)
    if payload.limite_avisos is not None:
        user.limite_avisos = payload.limite_avisos
    db.commit()
    db.refresh(user)
    return user


@router.delete("/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db)):
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    db.query(Condominio).filter(Condominio.sindico_id == user_id).update(
        {"sindico_id": None},
        synchronize_session=False,
    )
    for item in db.query(Aviso).all():
        ids = parse_id_list(item.sindico_ids)
        if user_id in ids:
            item.sindico_ids = ids_to_csv([value for value in ids if value != user_id])
    db.query(Aviso).filter(Aviso.sindico_id == user_id).update(
        {"sindico_id": None},
        synchronize_session=False,
    )
    db.delete(user)
    db.commit()
    logger.info("deleted user id=%s", user_id)
    return {"ok": True}
