from datetime import datetime
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from condo_signage.db import Base


class TV(Base):
    __tablename__ = "tv"
    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String, nullable=False)
    codigo_conexao = Column(String, nullable=False, unique=True)
    template = Column(String, default="Template 1")
    condominio_id = Column(Integer, ForeignKey("condominio.id"), nullable=False)
    status = Column(String(16), default="offline")
    last_seen = Column(DateTime, nullable=True)
    proporcao_avisos = Column(Integer, nullable=False, default=1)
    proporcao_anuncios = Column(Integer, nullable=False, default=5)
    proporcao_noticias = Column(Integer, nullable=False, default=3)
    data_registro = Column(DateTime, default=datetime.utcnow)
