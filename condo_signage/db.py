from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy import text
import logging
import os

DATABASE_URL = os.getenv("SIGNAGE_DATABASE_URL", "sqlite:///./signage.db")

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()

logger = logging.getLogger(__name__)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_sqlite_schema():
    """
    Lightweight runtime schema patching for SQLite.

    `Base.metadata.create_all()` won't add new columns to existing tables.
    This keeps local installs created before the rotation settings existed
    working without requiring Alembic.
    """
    if not DATABASE_URL.startswith("sqlite"):
        return

    # Imported here so the id normalizer stays free of db imports.
    from condo_signage.services.ids import ids_to_csv, parse_id_list

    with engine.begin() as conn:
        tv_cols = conn.execute(text("PRAGMA table_info(tv)")).fetchall()
        tv_col_names = {row[1] for row in tv_cols}  # (cid, name, type, notnull, dflt_value, pk)
        if tv_cols:
            if "proporcao_avisos" not in tv_col_names:
                conn.execute(text("ALTER TABLE tv ADD COLUMN proporcao_avisos INTEGER DEFAULT 1"))
            if "proporcao_anuncios" not in tv_col_names:
                conn.execute(text("ALTER TABLE tv ADD COLUMN proporcao_anuncios INTEGER DEFAULT 5"))
            if "proporcao_noticias" not in tv_col_names:
                conn.execute(text("ALTER TABLE tv ADD COLUMN proporcao_noticias INTEGER DEFAULT 3"))
            if "last_seen" not in tv_col_names:
                conn.execute(text("ALTER TABLE tv ADD COLUMN last_seen DATETIME"))
            conn.execute(text("UPDATE tv SET proporcao_avisos=1 WHERE proporcao_avisos IS NULL"))
            conn.execute(text("UPDATE tv SET proporcao_anuncios=5 WHERE proporcao_anuncios IS NULL"))
            conn.execute(text("UPDATE tv SET proporcao_noticias=3 WHERE proporcao_noticias IS NULL"))
            for column in ("proporcao_avisos", "proporcao_anuncios", "proporcao_noticias"):
                conn.execute(text(f"UPDATE tv SET {column}=0 WHERE {column} < 0"))
            conn.execute(
                text(
                    "UPDATE tv SET template='Template 1' "
                    "WHERE template IS NULL OR trim(template)=''"
                )
            )

        # Older consoles stored id lists as JSON arrays; keep one canonical CSV form.
        for table, columns in (("anuncio", ("condominios_ids",)), ("aviso", ("condominios_ids", "sindico_ids"))):
            cols = conn.execute(text(f"PRAGMA table_info({table})")).fetchall()
            col_names = {row[1] for row in cols}
            for column in columns:
                if column not in col_names:
                    continue
                rows = conn.execute(
                    text(f"SELECT id, {column} FROM {table} WHERE {column} LIKE '[%'")
                ).fetchall()
                for row_id, raw in rows:
                    normalized = ids_to_csv(parse_id_list(raw))
                    conn.execute(
                        text(f"UPDATE {table} SET {column}=:value WHERE id=:id"),
                        {"value": normalized, "id": row_id},
                    )
                if rows:
                    logger.info("normalized %d legacy %s.%s rows", len(rows), table, column)
