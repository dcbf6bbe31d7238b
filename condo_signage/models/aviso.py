from datetime import datetime
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from condo_signage.db import Base


class Aviso(Base):
    __tablename__ = "aviso"
    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String, nullable=False)
    mensagem = Column(Text, nullable=False, default="")
    condominios_ids = Column(Text, nullable=False, default="")  # CSV
    sindico_ids = Column(Text, nullable=False, default="")  # CSV
    sindico_id = Column(Integer, ForeignKey("user.id"), nullable=True)
    condominio_id = Column(Integer, ForeignKey("condominio.id"), nullable=True)
    nome_anunciante = Column(String, nullable=True)
    numero_anunciante = Column(String, nullable=True)
    data_expiracao = Column(Date, nullable=True)
    status = Column(String(16), nullable=False, default="ativo")
    image = Column(String, nullable=True)
    video = Column(String, nullable=True)
    data_criacao = Column(DateTime, default=datetime.utcnow)
